"""Demo stories loaded into a fresh store when seeding is enabled."""

from datetime import datetime, timezone
from typing import List

from schemas import Category, Chapter, Status, Story


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def demo_stories() -> List[Story]:
    return [
        Story(
            id="1",
            title="The Moon that Can't be Seen",
            author="Rara",
            synopsis="A mysterious story about a moon that cannot be seen by anyone.",
            category=Category.TECHNOLOGY,
            keywords=["school", "fiction"],
            status=Status.DRAFT,
            chapters=[
                Chapter(
                    id="1",
                    title="Chapter 1: The Beginning",
                    content="This is the content of chapter 1...",
                    last_updated=_day(2024, 1, 15),
                ),
                Chapter(
                    id="2",
                    title="Chapter 2: The Journey",
                    content="This is the content of chapter 2...",
                    last_updated=_day(2024, 1, 20),
                ),
            ],
        ),
        Story(
            id="2",
            title="Given",
            author="Sansa S.",
            synopsis="A story about music and its healing power.",
            category=Category.HEALTH,
            keywords=["music"],
            status=Status.DRAFT,
            chapters=[
                Chapter(
                    id="3",
                    title="Chapter 1: Introduction",
                    content="This is the content of chapter 1...",
                    last_updated=_day(2024, 1, 10),
                ),
            ],
        ),
    ]
