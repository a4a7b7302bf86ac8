"""Stable public API for building tooling on top of bturl.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from bturl.core.alias_loader import LoadedAliases, load_aliases
from bturl.core.errors import (
    AliasLoadError,
    AliasResolutionError,
    AliasValidationError,
    BturlError,
    MalformedURLError,
)
from bturl.core.model import Alias, URLDescription
from bturl.core.scope import descendants_of, group_by_parent, nearest_ancestor
from bturl.core.service import URLService
from bturl.core.url import ROOT, URL, URLLevel

__all__ = [
    "BturlError",
    "MalformedURLError",
    "AliasLoadError",
    "AliasValidationError",
    "AliasResolutionError",
    "URL",
    "ROOT",
    "URLLevel",
    "Alias",
    "URLDescription",
    "LoadedAliases",
    "load_aliases",
    "descendants_of",
    "nearest_ancestor",
    "group_by_parent",
    "Client",
]


class Client:
    """Public client for resolving and organizing Bluetooth URLs.

    A `Client` instance wraps alias loading and URL resolution behind a stable
    API intended for third-party tools (GUI/TUI/services/scripts).
    """

    def __init__(self, *, aliases: dict[str, Alias] | None = None) -> None:
        self._service = URLService(aliases=aliases)

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self._service.load_warnings

    def list_aliases(self) -> list[Alias]:
        return self._service.list_aliases()

    def resolve(self, text: str) -> URL:
        return self._service.resolve(text)

    def resolve_many(self, texts: Sequence[str]) -> list[URL]:
        return self._service.resolve_many(texts)

    def describe(self, text: str) -> URLDescription:
        return self._service.describe(self._service.resolve(text))

    def sort(self, texts: Sequence[str]) -> list[URL]:
        return self._service.sort(self._service.resolve_many(texts))

    def descendants(self, scope: str, urls: Iterable[URL]) -> list[URL]:
        return self._service.descendants(self._service.resolve(scope), urls)
