"""Tutorial catalogue operations on top of the document store."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from app.models.tutorial import Tutorial, TutorialCreate, TutorialUpdate

from .repository import TutorialRepository
from .settings import TutorialSettings, load_settings

logger = logging.getLogger(__name__)


class TutorialValidationError(ValueError):
    """Request data is missing or unusable (HTTP 400)."""


class TutorialNotFound(LookupError):
    """No tutorial exists for the given id (HTTP 404)."""

    def __init__(self, tutorial_id: str, message: Optional[str] = None) -> None:
        self.tutorial_id = tutorial_id
        super().__init__(message or f"Not found Tutorial with id {tutorial_id}")


class TutorialService:
    def __init__(self, repository: TutorialRepository, *, title_case_sensitive: bool = False) -> None:
        self._repository = repository
        self._case_sensitive = title_case_sensitive

    @property
    def repository(self) -> TutorialRepository:
        return self._repository

    def create(self, payload: TutorialCreate) -> Tutorial:
        title = (payload.title or "").strip()
        if not title:
            raise TutorialValidationError("Content can not be empty!")
        tutorial = Tutorial(
            title=title,
            description=payload.description,
            published=bool(payload.published),
        )
        self._repository.insert(tutorial)
        logger.info("Created tutorial %s (%r)", tutorial.id, tutorial.title)
        return tutorial

    def get_one(self, tutorial_id: str) -> Tutorial:
        tutorial = self._repository.find_by_id(tutorial_id)
        if tutorial is None:
            raise TutorialNotFound(tutorial_id)
        return tutorial

    def get_all(self, title: Optional[str] = None) -> List[Tutorial]:
        return self._repository.find(title_contains=title, case_sensitive=self._case_sensitive)

    def get_published(self) -> List[Tutorial]:
        return self._repository.find(published=True)

    def update(self, tutorial_id: str, payload: TutorialUpdate) -> int:
        changes = _clean_changes(payload.changes())
        if not changes:
            raise TutorialValidationError("Data to update can not be empty!")
        count = self._repository.update_by_id(tutorial_id, changes)
        if count == 0:
            raise TutorialNotFound(
                tutorial_id,
                f"Cannot update Tutorial with id={tutorial_id}. Maybe Tutorial was not found!",
            )
        logger.info("Updated tutorial %s fields=%s", tutorial_id, sorted(changes))
        return count

    def delete(self, tutorial_id: str) -> int:
        count = self._repository.delete_by_id(tutorial_id)
        if count == 0:
            raise TutorialNotFound(
                tutorial_id,
                f"Cannot delete Tutorial with id={tutorial_id}. Maybe Tutorial was not found!",
            )
        logger.info("Deleted tutorial %s", tutorial_id)
        return count

    def delete_all(self) -> int:
        count = self._repository.delete_all()
        logger.info("Deleted %s tutorials", count)
        return count


def _clean_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    cleaned: Dict[str, Any] = {}
    if "title" in changes:
        title = (changes["title"] or "").strip()
        if not title:
            raise TutorialValidationError("Title can not be empty!")
        cleaned["title"] = title
    if "description" in changes:
        cleaned["description"] = changes["description"]
    # explicit null keeps the current flag
    if changes.get("published") is not None:
        cleaned["published"] = bool(changes["published"])
    return cleaned


def build_service(settings: Optional[TutorialSettings] = None) -> TutorialService:
    settings = settings or load_settings()
    repository = TutorialRepository(settings.data_root)
    return TutorialService(repository, title_case_sensitive=settings.title_case_sensitive)
