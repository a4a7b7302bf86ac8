"""Bluetooth resource URLs.

A URL addresses an adapter, a device, a GATT service, a GATT characteristic or
a field of a characteristic, optionally qualified by the protocol used to reach
it::

    /B8:27:EB:60:0C:43/54:60:09:95:86:01/0000180f-0000-1000-8000-00805f9b34fb/00002a19-0000-1000-8000-00805f9b34fb/Level
    tinyb://B8:27:EB:60:0C:43/54:60:09:95:86:01/180f/2a19/Level
    /B8:27:EB:60:0C:43
    tinyb://
    /

Each component may only be present when every enclosing component is present.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, replace

from bturl.core.errors import MalformedURLError

_PROTOCOL = r"\w+"
_ADDRESS = r"[0-9A-Fa-f]{2}(?::[0-9A-Fa-f]{2}){5}"
_UUID = r"[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}|[0-9A-Fa-f]{4,8}"
_FIELD = r"\w+"

_URL_RE = re.compile(
    rf"(?:(?P<protocol>{_PROTOCOL}):/)?/"
    rf"(?:(?P<adapter>{_ADDRESS})"
    rf"(?:/(?P<device>{_ADDRESS})"
    rf"(?:/(?P<service>{_UUID})"
    rf"(?:/(?P<characteristic>{_UUID})"
    rf"(?:/(?P<field>{_FIELD}))?)?)?)?)?",
    re.ASCII,
)

_COMPONENT_RES = {
    "protocol": re.compile(_PROTOCOL, re.ASCII),
    "adapter_address": re.compile(_ADDRESS),
    "device_address": re.compile(_ADDRESS),
    "service_uuid": re.compile(_UUID),
    "characteristic_uuid": re.compile(_UUID),
    "field_name": re.compile(_FIELD, re.ASCII),
}


class URLLevel(enum.IntEnum):
    ROOT = 0
    ADAPTER = 1
    DEVICE = 2
    SERVICE = 3
    CHARACTERISTIC = 4
    FIELD = 5


def _lower(value: str | None) -> str | None:
    return value.lower() if value is not None else None


def _upper(value: str | None) -> str | None:
    return value.upper() if value is not None else None


@dataclass(frozen=True, eq=False)
class URL:
    """Immutable Bluetooth resource URL.

    Protocol and UUIDs are stored lowercase, addresses uppercase. The field name
    keeps its case but is compared case-insensitively.
    """

    protocol: str | None = None
    adapter_address: str | None = None
    device_address: str | None = None
    service_uuid: str | None = None
    characteristic_uuid: str | None = None
    field_name: str | None = None

    def __post_init__(self) -> None:
        # Formats are checked before case folding; non-ASCII letters can fold into valid hex.
        self._validate_components()
        object.__setattr__(self, "protocol", _lower(self.protocol))
        object.__setattr__(self, "adapter_address", _upper(self.adapter_address))
        object.__setattr__(self, "device_address", _upper(self.device_address))
        object.__setattr__(self, "service_uuid", _lower(self.service_uuid))
        object.__setattr__(self, "characteristic_uuid", _lower(self.characteristic_uuid))
        self._validate_prefix()

    def _validate_components(self) -> None:
        for name, pattern in _COMPONENT_RES.items():
            value = getattr(self, name)
            if value is not None and not pattern.fullmatch(value):
                raise MalformedURLError(self._describe(), reason=f"invalid {name.replace('_', ' ')} '{value}'")

    def _validate_prefix(self) -> None:
        if (
            self.field_name is not None and self.characteristic_uuid is None
            or self.characteristic_uuid is not None and self.service_uuid is None
            or self.service_uuid is not None and self.device_address is None
            or self.device_address is not None and self.adapter_address is None
        ):
            raise MalformedURLError(self._describe(), reason="component set without its enclosing component")

    def _describe(self) -> str:
        # Unlike __str__, keeps gaps visible so the broken component shows up in errors.
        parts = [
            self.adapter_address,
            self.device_address,
            self.service_uuid,
            self.characteristic_uuid,
            self.field_name,
        ]
        while parts and parts[-1] is None:
            parts.pop()
        prefix = f"{self.protocol}:/" if self.protocol is not None else ""
        return prefix + "/" + "/".join(p or "" for p in parts)

    # Construction

    @classmethod
    def parse(cls, text: str) -> URL:
        """Parse the text form of a URL.

        Raises MalformedURLError if ``text`` does not match the URL grammar.
        """
        match = _URL_RE.fullmatch(text)
        if match is None:
            raise MalformedURLError(text)
        try:
            return cls(
                protocol=match.group("protocol"),
                adapter_address=match.group("adapter"),
                device_address=match.group("device"),
                service_uuid=match.group("service"),
                characteristic_uuid=match.group("characteristic"),
                field_name=match.group("field"),
            )
        except MalformedURLError as exc:
            raise MalformedURLError(text, reason=exc.reason) from exc

    @classmethod
    def root(cls) -> URL:
        return ROOT

    @classmethod
    def for_protocol(cls, protocol: str) -> URL:
        return cls(protocol=protocol)

    @classmethod
    def for_device(cls, adapter_address: str, device_address: str, protocol: str | None = None) -> URL:
        return cls(protocol=protocol, adapter_address=adapter_address, device_address=device_address)

    @classmethod
    def for_characteristic(
        cls,
        adapter_address: str,
        device_address: str,
        service_uuid: str,
        characteristic_uuid: str,
        protocol: str | None = None,
    ) -> URL:
        return cls(
            protocol=protocol,
            adapter_address=adapter_address,
            device_address=device_address,
            service_uuid=service_uuid,
            characteristic_uuid=characteristic_uuid,
        )

    @classmethod
    def for_field(
        cls,
        adapter_address: str,
        device_address: str,
        service_uuid: str,
        characteristic_uuid: str,
        field_name: str,
        protocol: str | None = None,
    ) -> URL:
        return cls(
            protocol=protocol,
            adapter_address=adapter_address,
            device_address=device_address,
            service_uuid=service_uuid,
            characteristic_uuid=characteristic_uuid,
            field_name=field_name,
        )

    # Copies

    def with_protocol(self, protocol: str | None) -> URL:
        return replace(self, protocol=protocol)

    def with_adapter(self, adapter_address: str | None) -> URL:
        return replace(self, adapter_address=adapter_address)

    def with_device(self, device_address: str | None) -> URL:
        return replace(self, device_address=device_address)

    def with_service(self, service_uuid: str | None) -> URL:
        """Copy with a new service; characteristic and field are dropped."""
        return replace(self, service_uuid=service_uuid, characteristic_uuid=None, field_name=None)

    def with_characteristic(self, characteristic_uuid: str | None) -> URL:
        """Copy with a new characteristic; the field is dropped."""
        return replace(self, characteristic_uuid=characteristic_uuid, field_name=None)

    def with_service_and_characteristic(self, service_uuid: str, characteristic_uuid: str) -> URL:
        return replace(
            self,
            service_uuid=service_uuid,
            characteristic_uuid=characteristic_uuid,
            field_name=None,
        )

    def with_service_characteristic_and_field(
        self,
        service_uuid: str,
        characteristic_uuid: str,
        field_name: str,
    ) -> URL:
        return replace(
            self,
            service_uuid=service_uuid,
            characteristic_uuid=characteristic_uuid,
            field_name=field_name,
        )

    def with_field(self, field_name: str | None) -> URL:
        return replace(self, field_name=field_name)

    # Projections

    def to_protocol_url(self) -> URL:
        return URL(protocol=self.protocol)

    def to_adapter_url(self) -> URL:
        return URL(protocol=self.protocol, adapter_address=self.adapter_address)

    def to_device_url(self) -> URL:
        return URL(
            protocol=self.protocol,
            adapter_address=self.adapter_address,
            device_address=self.device_address,
        )

    def to_service_url(self) -> URL:
        return replace(self, characteristic_uuid=None, field_name=None)

    def to_characteristic_url(self) -> URL:
        return replace(self, field_name=None)

    def parent(self) -> URL | None:
        """Return the URL one level up, or None for root and protocol-only URLs."""
        if self.is_field():
            return self.to_characteristic_url()
        if self.is_characteristic():
            return self.to_service_url()
        if self.is_service():
            return self.to_device_url()
        if self.is_device():
            return self.to_adapter_url()
        if self.is_adapter():
            return self.to_protocol_url()
        return None

    # Classification

    def is_root(self) -> bool:
        return self.adapter_address is None

    def is_protocol_only(self) -> bool:
        return self.protocol is not None and self.adapter_address is None

    def is_adapter(self) -> bool:
        return self.adapter_address is not None and self.device_address is None

    def is_device(self) -> bool:
        return self.device_address is not None and self.service_uuid is None

    def is_service(self) -> bool:
        return self.service_uuid is not None and self.characteristic_uuid is None

    def is_characteristic(self) -> bool:
        return self.characteristic_uuid is not None and self.field_name is None

    def is_field(self) -> bool:
        return self.field_name is not None

    @property
    def level(self) -> URLLevel:
        return URLLevel(sum(value is not None for value in self._path_key()))

    def is_descendant_of(self, other: URL) -> bool:
        """Check whether this URL is strictly more specific than ``other``.

        A URL without a protocol on either side matches any protocol.
        """
        if self.protocol is not None and other.protocol is not None and self.protocol != other.protocol:
            return False
        for mine, theirs in zip(self._path_key(), other._path_key()):
            if mine is None:
                return False
            if theirs is None:
                return True
            if mine != theirs:
                return False
        return False

    # Comparison

    def _path_key(self) -> tuple[str | None, ...]:
        return (
            self.adapter_address,
            self.device_address,
            self.service_uuid,
            self.characteristic_uuid,
            _lower(self.field_name),
        )

    def _sort_key(self) -> tuple[tuple[bool, str], ...]:
        # Unset components sort after any value at the same position. The field
        # name is keyed lowercase so ordering agrees with case-insensitive equality.
        return tuple((value is None, value or "") for value in self._path_key())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, URL):
            return NotImplemented
        return self.protocol == other.protocol and self._path_key() == other._path_key()

    def __hash__(self) -> int:
        return hash((self.protocol, *self._path_key()))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, URL):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, URL):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, URL):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, URL):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    def __str__(self) -> str:
        parts = [
            value
            for value in (
                self.adapter_address,
                self.device_address,
                self.service_uuid,
                self.characteristic_uuid,
                self.field_name,
            )
            if value is not None
        ]
        prefix = f"{self.protocol}:/" if self.protocol is not None else ""
        return prefix + "/" + "/".join(parts)

    def __repr__(self) -> str:
        return f"URL({str(self)!r})"


ROOT = URL()
