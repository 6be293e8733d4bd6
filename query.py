"""Story filtering used by GET /stories."""

from typing import List, NamedTuple, Sequence

from schemas import Story, StoryCriteria


class FilterResult(NamedTuple):
    stories: List[Story]
    total: int


def _matches_search(story: Story, needle: str) -> bool:
    return needle in story.title.lower() or needle in story.author.lower()


def filter_stories(stories: Sequence[Story], criteria: StoryCriteria) -> FilterResult:
    """
    Return the stories passing every supplied criterion, in input order.

    search matches title or author as a case-insensitive substring; category
    and status are exact, case-sensitive matches. Empty criteria are ignored.
    """
    result = list(stories)

    if criteria.search:
        needle = criteria.search.lower()
        result = [s for s in result if _matches_search(s, needle)]

    if criteria.category:
        result = [s for s in result if s.category.value == criteria.category]

    if criteria.status:
        result = [s for s in result if s.status.value == criteria.status]

    return FilterResult(stories=result, total=len(result))
