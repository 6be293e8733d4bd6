"""Exceptions raised by the story service and the API client."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from service import Invalid


class StoryAppError(Exception):
    """Base class for expected, locally detected failures."""


class StoryValidationError(StoryAppError):
    def __init__(self, invalid: "Invalid"):
        self.invalid = invalid
        super().__init__(invalid.message)


class StoryNotFoundError(StoryAppError):
    def __init__(self, story_id: str):
        self.story_id = story_id
        super().__init__("Story not found")


class StoryApiError(StoryAppError):
    """Non-2xx response received by StoryClient."""

    def __init__(self, status_code: int, message: str, error: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.error = error
        super().__init__(message)
