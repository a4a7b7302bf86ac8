"""Alias loading and validation for YAML-based bturl alias files."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from bturl.core.errors import AliasLoadError, AliasValidationError, MalformedURLError
from bturl.core.model import Alias
from bturl.core.url import URL

LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


UniqueKeyLoader.yaml_implicit_resolvers = {
    key: list(value) for key, value in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

for first_char, mappings in list(UniqueKeyLoader.yaml_implicit_resolvers.items()):
    UniqueKeyLoader.yaml_implicit_resolvers[first_char] = [
        (tag, regexp)
        for tag, regexp in mappings
        if tag != "tag:yaml.org,2002:bool"
    ]


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise AliasValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class LoadedAliases:
    aliases: dict[str, Alias]
    warnings: tuple[str, ...]


def _load_schema_validator() -> Any:
    schema_text = resources.files("bturl.schemas").joinpath("aliases.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def alias_dirs() -> tuple[Path, Path]:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    xdg_data = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local/share"))
    return xdg_config / "bturl/aliases", xdg_data / "bturl/aliases"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AliasLoadError(f"Could not read alias file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise AliasValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise AliasValidationError(f"Alias file {path} must contain a mapping at root")
    return loaded


def _build_aliases(doc: dict[str, Any], source: Path, validator: Any) -> list[Alias]:
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise AliasValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    aliases: list[Alias] = []
    for name, spec in doc["aliases"].items():
        if not isinstance(name, str):
            raise AliasValidationError(f"Alias name {name!r} in {source} must be a string")
        if isinstance(spec, str):
            text, description = spec, None
        else:
            text, description = spec["url"], spec.get("description")
        try:
            url = URL.parse(text.strip())
        except MalformedURLError as exc:
            raise AliasValidationError(f"Alias '{name}' in {source} has an invalid URL: {exc}") from exc
        aliases.append(Alias(name=name, url=url, description=description, source=str(source)))
    return aliases


def _iter_alias_paths() -> list[Path]:
    paths: list[Path] = []
    for directory in alias_dirs():
        if not directory.exists() or not directory.is_dir():
            continue
        paths.extend(sorted(p for p in directory.iterdir() if p.suffix in {".yml", ".yaml"}))
    return paths


def load_aliases() -> LoadedAliases:
    aliases: dict[str, Alias] = {}
    warnings: list[str] = []

    paths = _iter_alias_paths()
    if not paths:
        return LoadedAliases(aliases=aliases, warnings=())

    validator = _load_schema_validator()
    for path in paths:
        LOGGER.debug("Loading aliases from %s", path)
        doc = _read_yaml(path)
        for alias in _build_aliases(doc, path, validator):
            previous = aliases.get(alias.name)
            if previous is not None:
                warning = f"Alias '{alias.name}' from {alias.source} overrides {previous.source}"
                LOGGER.warning(warning)
                warnings.append(warning)
            aliases[alias.name] = alias

    return LoadedAliases(aliases=aliases, warnings=tuple(warnings))
