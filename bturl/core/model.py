"""Core data models used across alias loader, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass

from bturl.core.url import URL


@dataclass(frozen=True)
class Alias:
    name: str
    url: URL
    description: str | None
    source: str


@dataclass(frozen=True)
class URLDescription:
    url: URL
    level: str
    components: tuple[tuple[str, str], ...]
