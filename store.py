"""
In-memory story store.

Holds the ordered story sequence for the lifetime of the process, newest
first. Records are swapped wholesale on update so readers holding a snapshot
never see a half-written story. The store does no locking of its own;
StoryService serializes mutations.
"""

from typing import Iterable, List, Optional

from schemas import Story


class StoryStore:
    def __init__(self, stories: Optional[Iterable[Story]] = None):
        self._stories: List[Story] = list(stories or [])

    def __len__(self) -> int:
        return len(self._stories)

    def all(self) -> List[Story]:
        return list(self._stories)

    def insert_front(self, story: Story) -> None:
        self._stories.insert(0, story)

    def find_by_id(self, story_id: str) -> Optional[Story]:
        for story in self._stories:
            if story.id == story_id:
                return story
        return None

    def index_of(self, story_id: str) -> int:
        for index, story in enumerate(self._stories):
            if story.id == story_id:
                return index
        return -1

    def replace_at(self, index: int, story: Story) -> None:
        self._stories[index] = story

    def remove_at(self, index: int) -> Story:
        return self._stories.pop(index)
