"""Filesystem-backed document store for tutorials.

Each tutorial lives in its own ``documents/<id>.json`` file under the data root.
``index.json`` keeps the ids in insertion order so listings come back oldest
first without reading timestamps from every file. Both are replaced atomically
so readers never see a partly written file; a missing or unreadable index is
rebuilt from the documents ordered by ``createdAt``.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional

from app.models.tutorial import Tutorial

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = {"id", "created_at", "updated_at", "createdAt", "updatedAt"}


class TutorialRepository:
    """JSON document store keyed by tutorial id."""

    def __init__(self, root: Path) -> None:
        self._root = root
        self._lock = Lock()
        self._documents = root / "documents"
        self._documents.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def insert(self, tutorial: Tutorial) -> Tutorial:
        with self._lock:
            # read first so a rebuilt index does not already hold the new id
            index = self._load_index()
            self._write_document(tutorial)
            index.append(tutorial.id)
            self._write_index(index)
        return tutorial

    def find_by_id(self, tutorial_id: str) -> Optional[Tutorial]:
        return self._load_document(tutorial_id)

    def find(
        self,
        *,
        title_contains: Optional[str] = None,
        published: Optional[bool] = None,
        case_sensitive: bool = False,
    ) -> List[Tutorial]:
        needle = title_contains or ""
        if not case_sensitive:
            needle = needle.casefold()
        collected: List[Tutorial] = []
        for tutorial_id in self._load_index():
            tutorial = self._load_document(tutorial_id)
            if tutorial is None:
                continue
            if published is not None and tutorial.published is not published:
                continue
            if needle:
                haystack = tutorial.title if case_sensitive else tutorial.title.casefold()
                if needle not in haystack:
                    continue
            collected.append(tutorial)
        return collected

    def update_by_id(self, tutorial_id: str, changes: Dict[str, Any]) -> int:
        fields = {key: value for key, value in changes.items() if key not in _IMMUTABLE_FIELDS}
        with self._lock:
            current = self._load_document(tutorial_id)
            if current is None:
                return 0
            fields["updated_at"] = datetime.now(timezone.utc)
            updated = current.model_copy(update=fields)
            self._write_document(updated)
        return 1

    def delete_by_id(self, tutorial_id: str) -> int:
        with self._lock:
            index = self._load_index()
            if tutorial_id not in index:
                return 0
            self._path_for(tutorial_id).unlink(missing_ok=True)
            self._write_index([entry for entry in index if entry != tutorial_id])
        return 1

    def delete_all(self) -> int:
        with self._lock:
            removed = 0
            for tutorial_id in self._load_index():
                path = self._path_for(tutorial_id)
                if path.exists():
                    path.unlink()
                    removed += 1
            self._write_index([])
        return removed

    def count(self) -> int:
        return len(self._load_index())

    def _path_for(self, tutorial_id: str) -> Path:
        return self._documents / f"{_sanitize(tutorial_id)}.json"

    def _write_document(self, tutorial: Tutorial) -> None:
        _atomic_write(self._path_for(tutorial.id), tutorial.to_document())

    def _load_document(self, tutorial_id: Optional[str]) -> Optional[Tutorial]:
        if not tutorial_id:
            return None
        path = self._path_for(tutorial_id)
        if not path.exists():
            return None
        tutorial = self._read_document(path)
        if tutorial is None or tutorial.id != tutorial_id:
            return None
        return tutorial

    def _read_document(self, path: Path) -> Optional[Tutorial]:
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
            return Tutorial.model_validate(payload)
        except (OSError, ValueError) as exc:
            logger.warning("Skipping unreadable tutorial document %s: %s", path, exc)
            return None

    def _load_index(self) -> List[str]:
        index_path = self._root / "index.json"
        if not index_path.exists():
            return self._rebuild_index()
        try:
            with index_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, ValueError) as exc:
            logger.warning("Tutorial index %s unreadable, rebuilding: %s", index_path, exc)
            return self._rebuild_index()
        entries = payload.get("tutorials") if isinstance(payload, dict) else None
        if not isinstance(entries, list):
            logger.warning("Tutorial index %s malformed, rebuilding", index_path)
            return self._rebuild_index()
        return [str(item) for item in entries if item]

    def _write_index(self, index: List[str]) -> None:
        _atomic_write(self._root / "index.json", {"tutorials": index})

    def _rebuild_index(self) -> List[str]:
        found: List[Tutorial] = []
        for path in self._documents.glob("*.json"):
            tutorial = self._read_document(path)
            if tutorial is not None:
                found.append(tutorial)
        found.sort(key=lambda item: item.created_at)
        return [item.id for item in found]


def _atomic_write(path: Path, payload: Dict[str, Any]) -> None:
    temp_path = path.with_suffix(path.suffix + ".tmp")
    with temp_path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, indent=2)
        handle.flush()
        os.fsync(handle.fileno())
    os.replace(temp_path, path)


def _sanitize(segment: str) -> str:
    return "".join(ch for ch in segment if ch.isalnum() or ch in {"-", "_"}) or "_"
