"""
Resource library filtering.
"""

from collections.abc import Iterable

from pmos.models import Resource

ALL = "all"


def matches_search(resource: Resource, search: str) -> bool:
    """Case-insensitive match against the title or any topic."""
    needle = search.lower()
    if needle in resource.title.lower():
        return True
    return any(needle in topic.lower() for topic in resource.topics)


def filter_resources(
    resources: Iterable[Resource],
    search: str = "",
    content_type: str = ALL,
    status: str = ALL,
) -> list[Resource]:
    """
    Filter the library the way the resource list does.

    Args:
        resources: Resource collection snapshot
        search: Substring to look for in title/topics ("" matches everything)
        content_type: Content type to keep, or "all"
        status: Status to keep, or "all"

    Returns:
        Matching resources in input order
    """
    return [
        r
        for r in resources
        if matches_search(r, search or "")
        and (content_type == ALL or r.content_type == content_type)
        and (status == ALL or r.status == status)
    ]
