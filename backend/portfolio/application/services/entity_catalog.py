"""Entity catalog — parses the YAML entity descriptors into domain objects.

Loaded once per process; the default file ships inside the package.
"""

import logging
from collections.abc import Iterator
from functools import lru_cache
from pathlib import Path

import yaml

from portfolio.domain.entities import (
    AssetRule,
    EntityDescriptor,
    FieldKind,
    FieldSpec,
    OrderClause,
    PublishRule,
)
from portfolio.domain.exceptions import UnknownEntityTypeError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_FILE = Path(__file__).resolve().parents[2] / "domain" / "catalog" / "entities.yaml"


class EntityCatalog:
    """Lookup of descriptors by entity name, in file order."""

    def __init__(self, descriptors: list[EntityDescriptor]):
        self._descriptors = {d.name: d for d in descriptors}

    def get(self, name: str) -> EntityDescriptor:
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownEntityTypeError(name) from None

    def admin_entities(self) -> list[EntityDescriptor]:
        return [d for d in self._descriptors.values() if d.admin]

    def __iter__(self) -> Iterator[EntityDescriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors


def load_entity_catalog(path: str | Path | None = None) -> EntityCatalog:
    """Parse a catalog file. Raises ``ValueError`` on malformed entries."""
    catalog_path = Path(path) if path else DEFAULT_CATALOG_FILE
    with open(catalog_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    entries = data.get("entities", [])
    descriptors = [_build_descriptor(entry) for entry in entries]
    logger.info("Loaded %d entity descriptors from %s", len(descriptors), catalog_path)
    return EntityCatalog(descriptors)


@lru_cache
def get_entity_catalog(path: str | None = None) -> EntityCatalog:
    """Cached catalog instance — reads the YAML once."""
    return load_entity_catalog(path or None)


def _build_descriptor(entry: dict) -> EntityDescriptor:
    try:
        name = entry["name"]
        fields = tuple(_build_field(f) for f in entry["fields"])
    except KeyError as exc:
        raise ValueError(f"Entity descriptor is missing {exc}: {entry!r}") from exc

    descriptor = EntityDescriptor(
        name=name,
        table=entry.get("table", name),
        label=entry.get("label", name.replace("_", " ").title()),
        plural=entry.get("plural", name.replace("_", " ")),
        fields=fields,
        order=tuple(
            OrderClause(column=o["column"], ascending=o.get("ascending", True))
            for o in entry.get("order", [])
        ),
        search_fields=tuple(entry.get("search_fields", [])),
        publish=PublishRule(**entry["publish"]) if entry.get("publish") else None,
        assets=AssetRule(**entry["assets"]) if entry.get("assets") else None,
        confirm_prompt=entry.get("confirm_prompt", ""),
        admin=entry.get("admin", True),
    )
    _check_references(descriptor)
    return descriptor


def _build_field(entry: dict) -> FieldSpec:
    return FieldSpec(
        name=entry["name"],
        kind=FieldKind(entry.get("kind", FieldKind.TEXT.value)),
        required=entry.get("required", False),
        default=entry.get("default"),
        nullable=entry.get("nullable", False),
    )


def _check_references(descriptor: EntityDescriptor) -> None:
    """Every field named by a rule must exist on the descriptor."""
    referenced = list(descriptor.search_fields)
    if descriptor.publish:
        referenced.append(descriptor.publish.flag)
    if descriptor.assets:
        referenced.append(descriptor.assets.primary_field)
        if descriptor.assets.list_field:
            referenced.append(descriptor.assets.list_field)
    for name in referenced:
        if not descriptor.has_field(name):
            raise ValueError(f"{descriptor.name}: rule references unknown field '{name}'")
