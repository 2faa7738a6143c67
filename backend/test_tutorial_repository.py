import json
import threading
from pathlib import Path

from app.core.tutorial.repository import TutorialRepository
from app.models.tutorial import Tutorial


def test_insert_and_find_by_id(tmp_path: Path) -> None:
    repo = TutorialRepository(tmp_path / "tutorials")
    tutorial = Tutorial(title="Angular forms", description="template driven", published=True)

    repo.insert(tutorial)

    stored = repo.find_by_id(tutorial.id)
    assert stored is not None
    assert stored.title == "Angular forms"
    assert stored.description == "template driven"
    assert stored.published is True
    assert stored.created_at == tutorial.created_at

    document = tmp_path / "tutorials" / "documents" / f"{tutorial.id}.json"
    payload = json.loads(document.read_text(encoding="utf-8"))
    assert payload["id"] == tutorial.id
    assert "createdAt" in payload and "updatedAt" in payload


def test_find_keeps_insertion_order_and_filters(tmp_path: Path) -> None:
    repo = TutorialRepository(tmp_path)
    first = repo.insert(Tutorial(title="Node Express"))
    second = repo.insert(Tutorial(title="MongoDB aggregation", published=True))
    third = repo.insert(Tutorial(title="express middleware", published=True))

    assert [item.id for item in repo.find()] == [first.id, second.id, third.id]
    assert [item.id for item in repo.find(title_contains="EXPRESS")] == [first.id, third.id]
    assert [item.id for item in repo.find(title_contains="Express", case_sensitive=True)] == [first.id]
    assert [item.id for item in repo.find(published=True)] == [second.id, third.id]


def test_title_filter_is_literal(tmp_path: Path) -> None:
    repo = TutorialRepository(tmp_path)
    repo.insert(Tutorial(title="Regex a.b"))
    repo.insert(Tutorial(title="Regex axb"))

    matches = repo.find(title_contains="a.b")
    assert [item.title for item in matches] == ["Regex a.b"]


def test_update_ignores_immutable_fields(tmp_path: Path) -> None:
    repo = TutorialRepository(tmp_path)
    tutorial = repo.insert(Tutorial(title="Draft"))

    count = repo.update_by_id(tutorial.id, {"title": "Final", "id": "other", "createdAt": "2000-01-01T00:00:00Z"})

    assert count == 1
    stored = repo.find_by_id(tutorial.id)
    assert stored is not None
    assert stored.title == "Final"
    assert stored.created_at == tutorial.created_at
    assert stored.updated_at >= tutorial.updated_at
    assert repo.find_by_id("other") is None


def test_update_and_delete_missing_id_report_zero(tmp_path: Path) -> None:
    repo = TutorialRepository(tmp_path)

    assert repo.update_by_id("missing", {"title": "x"}) == 0
    assert repo.delete_by_id("missing") == 0


def test_delete_by_id_and_delete_all(tmp_path: Path) -> None:
    repo = TutorialRepository(tmp_path)
    keep = repo.insert(Tutorial(title="keep"))
    drop = repo.insert(Tutorial(title="drop"))

    assert repo.delete_by_id(drop.id) == 1
    assert repo.find_by_id(drop.id) is None
    assert [item.id for item in repo.find()] == [keep.id]

    repo.insert(Tutorial(title="another"))
    assert repo.delete_all() == 2
    assert repo.find() == []
    assert repo.count() == 0


def test_documents_survive_new_repository(tmp_path: Path) -> None:
    first = TutorialRepository(tmp_path)
    tutorial = first.insert(Tutorial(title="Persistent"))

    second = TutorialRepository(tmp_path)
    assert [item.id for item in second.find()] == [tutorial.id]


def test_corrupt_document_is_skipped(tmp_path: Path) -> None:
    repo = TutorialRepository(tmp_path)
    good = repo.insert(Tutorial(title="good"))
    bad = repo.insert(Tutorial(title="bad"))
    (tmp_path / "documents" / f"{bad.id}.json").write_text("{not json", encoding="utf-8")
    garbled = repo.insert(Tutorial(title="garbled"))
    (tmp_path / "documents" / f"{garbled.id}.json").write_bytes(b"\xff\xfe{")

    assert [item.id for item in repo.find()] == [good.id]
    assert repo.find_by_id(bad.id) is None
    assert repo.find_by_id(garbled.id) is None


def test_reads_during_updates_always_see_a_document(tmp_path: Path) -> None:
    repo = TutorialRepository(tmp_path)
    tutorial = repo.insert(Tutorial(title="Large", description="x" * 200_000))
    misses = []
    done = threading.Event()

    def writer() -> None:
        try:
            for step in range(100):
                repo.update_by_id(tutorial.id, {"published": step % 2 == 0})
        finally:
            done.set()

    thread = threading.Thread(target=writer)
    thread.start()
    while not done.is_set():
        if repo.find_by_id(tutorial.id) is None:
            misses.append(1)
        if tutorial.id not in [item.id for item in repo.find()]:
            misses.append(1)
    thread.join()

    assert misses == []
    assert not list(tmp_path.rglob("*.tmp"))


def test_unreadable_index_is_rebuilt_from_documents(tmp_path: Path) -> None:
    repo = TutorialRepository(tmp_path)
    old = repo.insert(Tutorial(title="old"))
    (tmp_path / "index.json").write_text('{"tutorials": ["', encoding="utf-8")

    new = repo.insert(Tutorial(title="new"))

    assert [item.id for item in repo.find()] == [old.id, new.id]
    assert repo.count() == 2
    assert repo.delete_all() == 2
    assert not list((tmp_path / "documents").glob("*.json"))


def test_missing_index_is_rebuilt_in_creation_order(tmp_path: Path) -> None:
    repo = TutorialRepository(tmp_path)
    first = repo.insert(Tutorial(title="first"))
    second = repo.insert(Tutorial(title="second"))
    (tmp_path / "index.json").unlink()

    assert [item.id for item in TutorialRepository(tmp_path).find()] == [first.id, second.id]


def test_count_reads_only_the_index(tmp_path: Path, monkeypatch) -> None:
    repo = TutorialRepository(tmp_path)
    repo.insert(Tutorial(title="a"))
    repo.insert(Tutorial(title="b"))

    def fail(path):
        raise AssertionError(f"document {path} loaded")

    monkeypatch.setattr(repo, "_read_document", fail)
    assert repo.count() == 2
