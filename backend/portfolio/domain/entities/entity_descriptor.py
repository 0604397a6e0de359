"""Domain entity — declarative description of one managed content table.

Every admin form (blog posts, works, skills, …) is the same controller
configured by one of these descriptors; per-entity differences live here as
data instead of as eight copies of the same form code.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from portfolio.domain.exceptions import UnknownFieldError


class FieldKind(str, Enum):
    """Editable field types understood by drafts and payload transforms."""

    TEXT = "text"
    LONG_TEXT = "long_text"
    URL = "url"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    TIMESTAMP = "timestamp"
    TAGS = "tags"
    IMAGE_LIST = "image_list"

    @property
    def is_text(self) -> bool:
        return self in _TEXT_KINDS

    @property
    def is_numeric(self) -> bool:
        return self in (FieldKind.INTEGER, FieldKind.NUMBER)

    def empty_value(self) -> Any:
        """Value a form input holds when nothing has been entered yet."""
        if self.is_numeric:
            return 0
        if self is FieldKind.BOOLEAN:
            return False
        if self is FieldKind.IMAGE_LIST:
            return []
        # TAGS are edited as a comma-separated string
        return ""


_TEXT_KINDS = frozenset({
    FieldKind.TEXT,
    FieldKind.LONG_TEXT,
    FieldKind.URL,
    FieldKind.DATE,
    FieldKind.TIMESTAMP,
})


@dataclass(frozen=True)
class FieldSpec:
    """One editable column of a managed table."""

    name: str
    kind: FieldKind = FieldKind.TEXT
    required: bool = False
    default: Any = None
    nullable: bool = False  # empty string is written as NULL

    def initial_value(self) -> Any:
        if self.default is not None:
            return self.default
        return self.kind.empty_value()


@dataclass(frozen=True)
class OrderClause:
    """Ordering applied by the gateway when reading a whole table."""

    column: str
    ascending: bool = True


@dataclass(frozen=True)
class PublishRule:
    """A boolean flag that stamps a timestamp column when set."""

    flag: str
    stamp: str


@dataclass(frozen=True)
class AssetRule:
    """Where uploaded images go and which draft fields receive their URLs.

    With ``list_field`` set, uploads accumulate into that list and its first
    entry becomes ``primary_field`` on submit. Without it, each upload
    replaces ``primary_field`` directly (single-image mode).
    """

    bucket: str
    path_prefix: str
    primary_field: str
    list_field: str | None = None


@dataclass(frozen=True)
class EntityDescriptor:
    """Static configuration of one managed entity type."""

    name: str
    table: str
    label: str
    plural: str
    fields: tuple[FieldSpec, ...]
    order: tuple[OrderClause, ...] = ()
    search_fields: tuple[str, ...] = ()
    publish: PublishRule | None = None
    assets: AssetRule | None = None
    confirm_prompt: str = ""
    admin: bool = True
    _index: dict[str, FieldSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {f.name: f for f in self.fields})

    def field(self, name: str) -> FieldSpec:
        try:
            return self._index[name]
        except KeyError:
            raise UnknownFieldError(self.name, name) from None

    def has_field(self, name: str) -> bool:
        return name in self._index

    @property
    def required_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if f.required)

    @property
    def delete_prompt(self) -> str:
        return self.confirm_prompt or f"Are you sure you want to delete this {self.label.lower()}?"
