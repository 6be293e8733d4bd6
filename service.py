"""
Story CRUD service.

Every mutating call validates its payload first, then runs as one step
against the store under a single lock. Update is a total replacement:
fields missing from the payload fall back to their defaults instead of
keeping the previous values.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Set, Tuple, Union

from loguru import logger

from errors import StoryNotFoundError, StoryValidationError
from query import FilterResult, filter_stories
from schemas import (
    Category,
    Chapter,
    ChapterPayload,
    Status,
    Story,
    StoryCriteria,
    StoryDraft,
    StoryPayload,
    new_id,
    utcnow,
)
from store import StoryStore

REQUIRED_FIELDS: Tuple[str, ...] = ("title", "author", "category", "status")


class InvalidReason(str, Enum):
    MISSING_REQUIRED_FIELDS = "missing_required_fields"
    INVALID_CATEGORY = "invalid_category"
    INVALID_STATUS = "invalid_status"


@dataclass(frozen=True)
class Invalid:
    reason: InvalidReason
    fields: Tuple[str, ...]
    value: Optional[str] = None

    @property
    def message(self) -> str:
        if self.reason is InvalidReason.MISSING_REQUIRED_FIELDS:
            return "Missing required fields: " + ", ".join(REQUIRED_FIELDS)
        if self.reason is InvalidReason.INVALID_CATEGORY:
            allowed = ", ".join(c.value for c in Category)
            return f"Invalid category '{self.value}', expected one of: {allowed}"
        allowed = ", ".join(s.value for s in Status)
        return f"Invalid status '{self.value}', expected one of: {allowed}"


ValidationResult = Union[StoryDraft, Invalid]


def _build_chapters(payloads: List[ChapterPayload]) -> List[Chapter]:
    chapters: List[Chapter] = []
    seen: Set[str] = set()
    for item in payloads:
        chapter_id = item.id if item.id and item.id not in seen else new_id()
        seen.add(chapter_id)
        chapters.append(
            Chapter(
                id=chapter_id,
                title=item.title,
                content=item.content,
                last_updated=item.last_updated or utcnow(),
            )
        )
    return chapters


def validate_payload(payload: StoryPayload) -> ValidationResult:
    """Check presence of required fields and enum membership, apply defaults."""
    missing = tuple(name for name in REQUIRED_FIELDS if not getattr(payload, name))
    if missing:
        return Invalid(InvalidReason.MISSING_REQUIRED_FIELDS, missing)

    try:
        category = Category(payload.category)
    except ValueError:
        return Invalid(InvalidReason.INVALID_CATEGORY, ("category",), payload.category)

    try:
        status = Status(payload.status)
    except ValueError:
        return Invalid(InvalidReason.INVALID_STATUS, ("status",), payload.status)

    return StoryDraft(
        title=payload.title,
        author=payload.author,
        synopsis=payload.synopsis or "",
        category=category,
        keywords=list(payload.keywords or []),
        status=status,
        chapters=_build_chapters(payload.chapters or []),
    )


def _require_valid(payload: StoryPayload) -> StoryDraft:
    result = validate_payload(payload)
    if isinstance(result, Invalid):
        raise StoryValidationError(result)
    return result


class StoryService:
    def __init__(self, store: StoryStore):
        self._store = store
        self._lock = threading.Lock()

    def list(self, criteria: Optional[StoryCriteria] = None) -> FilterResult:
        return filter_stories(self._store.all(), criteria or StoryCriteria())

    def get(self, story_id: str) -> Story:
        story = self._store.find_by_id(story_id)
        if story is None:
            raise StoryNotFoundError(story_id)
        return story

    def create(self, payload: StoryPayload) -> Story:
        draft = _require_valid(payload)
        story = draft.to_story(new_id())
        with self._lock:
            self._store.insert_front(story)
        logger.info("Created story {} ({!r})", story.id, story.title)
        return story

    def update(self, story_id: str, payload: StoryPayload) -> Story:
        with self._lock:
            index = self._store.index_of(story_id)
            if index == -1:
                raise StoryNotFoundError(story_id)
            draft = _require_valid(payload)
            story = draft.to_story(story_id)
            self._store.replace_at(index, story)
        logger.info("Updated story {}", story_id)
        return story

    def delete(self, story_id: str) -> Story:
        with self._lock:
            index = self._store.index_of(story_id)
            if index == -1:
                raise StoryNotFoundError(story_id)
            story = self._store.remove_at(index)
        logger.info("Deleted story {}", story_id)
        return story
