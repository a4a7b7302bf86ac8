"""Service layer used by CLI and API frontends."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from bturl.core.alias_loader import LoadedAliases, load_aliases
from bturl.core.errors import AliasResolutionError
from bturl.core.model import Alias, URLDescription
from bturl.core.scope import descendants_of
from bturl.core.url import URL

ALIAS_PREFIX = "@"


class URLService:
    def __init__(self, *, aliases: dict[str, Alias] | None = None) -> None:
        loaded = load_aliases() if aliases is None else LoadedAliases(aliases=dict(aliases), warnings=())
        self.aliases = loaded.aliases
        self.load_warnings = loaded.warnings

    def list_aliases(self) -> list[Alias]:
        return sorted(self.aliases.values(), key=lambda a: a.name)

    def resolve(self, text: str) -> URL:
        """Resolve ``@alias`` references or parse ``text`` as a URL."""
        text = text.strip()
        if not text.startswith(ALIAS_PREFIX):
            return URL.parse(text)

        name = text[len(ALIAS_PREFIX):]
        alias = self.aliases.get(name)
        if alias is None:
            available = ", ".join(sorted(self.aliases)) or "<none>"
            raise AliasResolutionError(f"Unknown alias '{name}'. Available: {available}")
        return alias.url

    def resolve_many(self, texts: Sequence[str]) -> list[URL]:
        return [self.resolve(text) for text in texts]

    def describe(self, url: URL) -> URLDescription:
        components = (
            ("protocol", url.protocol),
            ("adapter", url.adapter_address),
            ("device", url.device_address),
            ("service", url.service_uuid),
            ("characteristic", url.characteristic_uuid),
            ("field", url.field_name),
        )
        level = "protocol" if url.is_protocol_only() else url.level.name.lower()
        return URLDescription(
            url=url,
            level=level,
            components=tuple((name, value) for name, value in components if value is not None),
        )

    def sort(self, urls: Iterable[URL]) -> list[URL]:
        return sorted(urls)

    def descendants(self, scope: URL, urls: Iterable[URL]) -> list[URL]:
        return descendants_of(scope, urls)
