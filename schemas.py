"""
Data models for the Story App API

Stories are the top-level records held by the store; chapters live inside
their parent story and are never stored on their own. Request payloads are
modelled separately from stored records so that presence checks happen in
the service layer instead of producing framework validation errors.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Generic, List, Optional, TypeVar

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


def new_id() -> str:
    """Fresh opaque identifier, unique within the process."""
    return str(ObjectId())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(str, Enum):
    FINANCIAL = "Financial"
    TECHNOLOGY = "Technology"
    HEALTH = "Health"


class Status(str, Enum):
    PUBLISH = "Publish"
    DRAFT = "Draft"


class Chapter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id, description="Chapter id, unique within its story")
    title: str = Field("", description="Chapter title")
    content: str = Field("", description="Chapter body as plain text or markdown")
    last_updated: datetime = Field(default_factory=utcnow, alias="lastUpdated")


class Story(BaseModel):
    id: str = Field(..., description="Opaque story id")
    title: str = Field(..., description="Story title")
    author: str = Field(..., description="Author name")
    synopsis: str = Field("", description="Short synopsis")
    category: Category
    keywords: List[str] = Field(default_factory=list, description="Ordered keyword tags")
    status: Status
    chapters: List[Chapter] = Field(default_factory=list)


# -------------------- Requests --------------------

class ChapterPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    title: str = ""
    content: str = ""
    last_updated: Optional[datetime] = Field(None, alias="lastUpdated")


class StoryPayload(BaseModel):
    """Body of POST and PUT /stories. Every field may be absent here."""

    title: Optional[str] = None
    author: Optional[str] = None
    synopsis: Optional[str] = None
    category: Optional[str] = None
    keywords: Optional[List[str]] = None
    status: Optional[str] = None
    chapters: Optional[List[ChapterPayload]] = None


class StoryDraft(BaseModel):
    """A payload that passed validation, with defaults applied."""

    title: str
    author: str
    synopsis: str = ""
    category: Category
    keywords: List[str] = Field(default_factory=list)
    status: Status
    chapters: List[Chapter] = Field(default_factory=list)

    def to_story(self, story_id: str) -> Story:
        return Story(id=story_id, **self.model_dump())


class StoryCriteria(BaseModel):
    search: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None


# -------------------- Responses --------------------

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    total: Optional[int] = None
    error: Optional[str] = None

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class HealthInfo(BaseModel):
    status: str = "ok"
    timestamp: datetime = Field(default_factory=utcnow)
