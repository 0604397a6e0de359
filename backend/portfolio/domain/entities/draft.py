"""Domain entity — the in-progress editable copy of a record held by an open form."""

from collections.abc import Mapping
from typing import Any

from portfolio.domain.entities.entity_descriptor import EntityDescriptor, FieldKind


class Draft:
    """Mutable staging copy of an entity's editable fields.

    Every field always holds a value (never missing), so form inputs bound
    to a draft stay controlled. Server-assigned columns such as ``id`` and
    the timestamps are never part of a draft.
    """

    def __init__(self, descriptor: EntityDescriptor, values: dict[str, Any]):
        self._descriptor = descriptor
        self._values = values

    @classmethod
    def empty(cls, descriptor: EntityDescriptor) -> "Draft":
        values = {f.name: _copy(f.initial_value()) for f in descriptor.fields}
        return cls(descriptor, values)

    @classmethod
    def seeded(cls, descriptor: EntityDescriptor, entity: Mapping[str, Any]) -> "Draft":
        """Copy an existing entity's editable fields into a new draft."""
        values: dict[str, Any] = {}
        for spec in descriptor.fields:
            raw = entity.get(spec.name)
            if raw is None:
                values[spec.name] = _copy(spec.initial_value())
            elif spec.kind is FieldKind.TAGS:
                values[spec.name] = ", ".join(raw) if isinstance(raw, list) else str(raw)
            elif spec.kind is FieldKind.IMAGE_LIST:
                values[spec.name] = list(raw)
            elif spec.kind.is_text and hasattr(raw, "isoformat"):
                values[spec.name] = raw.isoformat()
            else:
                values[spec.name] = raw
        return cls(descriptor, values)

    @property
    def descriptor(self) -> EntityDescriptor:
        return self._descriptor

    def get(self, name: str) -> Any:
        self._descriptor.field(name)
        return self._values[name]

    def set(self, name: str, value: Any) -> None:
        spec = self._descriptor.field(name)
        if value is None:
            value = spec.kind.empty_value()
        self._values[name] = _copy(value)

    def update(self, values: Mapping[str, Any]) -> None:
        # Validate every name first so a bad key leaves the draft untouched
        for name in values:
            self._descriptor.field(name)
        for name, value in values.items():
            self.set(name, value)

    def images(self, name: str) -> list[str]:
        return list(self.get(name))

    def append_images(self, name: str, urls: list[str]) -> None:
        self._values[name] = [*self.get(name), *urls]

    def remove_image(self, name: str, url: str) -> bool:
        current = self.get(name)
        remaining = [u for u in current if u != url]
        self._values[name] = remaining
        return len(remaining) != len(current)

    def as_dict(self) -> dict[str, Any]:
        return {k: _copy(v) for k, v in self._values.items()}

    def __repr__(self) -> str:
        return f"<Draft({self._descriptor.name}, {self._values!r})>"


def _copy(value: Any) -> Any:
    return list(value) if isinstance(value, list) else value
