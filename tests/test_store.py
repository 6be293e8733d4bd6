from __future__ import annotations

from schemas import Category, Status, Story
from store import StoryStore


def _story(story_id: str) -> Story:
    return Story(id=story_id, title=f"T{story_id}", author="A", category=Category.HEALTH, status=Status.DRAFT)


def test_insert_front_puts_newest_first() -> None:
    store = StoryStore([_story("1")])
    store.insert_front(_story("2"))

    assert [s.id for s in store.all()] == ["2", "1"]
    assert len(store) == 2


def test_lookup_by_id() -> None:
    store = StoryStore([_story("1"), _story("2")])

    assert store.find_by_id("2").id == "2"
    assert store.find_by_id("missing") is None
    assert store.index_of("2") == 1
    assert store.index_of("missing") == -1


def test_remove_and_replace_at_index() -> None:
    store = StoryStore([_story("1"), _story("2"), _story("3")])

    removed = store.remove_at(1)
    store.replace_at(0, _story("9"))

    assert removed.id == "2"
    assert [s.id for s in store.all()] == ["9", "3"]


def test_all_returns_snapshot() -> None:
    store = StoryStore([_story("1")])
    snapshot = store.all()
    store.insert_front(_story("2"))

    assert [s.id for s in snapshot] == ["1"]
