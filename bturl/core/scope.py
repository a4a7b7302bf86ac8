"""Scope filtering over collections of URLs."""

from __future__ import annotations

from collections.abc import Iterable

from bturl.core.url import URL


def descendants_of(scope: URL, urls: Iterable[URL]) -> list[URL]:
    return [url for url in urls if url.is_descendant_of(scope)]


def nearest_ancestor(url: URL, candidates: Iterable[URL]) -> URL | None:
    """Return the most specific candidate that ``url`` descends from."""
    best: URL | None = None
    for candidate in candidates:
        if not url.is_descendant_of(candidate):
            continue
        if best is None or candidate.level > best.level:
            best = candidate
    return best


def group_by_parent(urls: Iterable[URL]) -> dict[URL | None, list[URL]]:
    groups: dict[URL | None, list[URL]] = {}
    for url in urls:
        groups.setdefault(url.parent(), []).append(url)
    return groups
