"""Domain entity — explicit states of an admin form.

    Closed ──open_create──▶ Creating ──submit──▶ Submitting(Creating)
    Closed ──open_edit────▶ Editing(id) ─submit─▶ Submitting(Editing(id))

Submitting returns to Closed on success or to its origin on failure.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Closed:
    """No dialog open, no draft."""

    @property
    def name(self) -> str:
        return "closed"


@dataclass(frozen=True)
class Creating:
    """Composing a new record."""

    @property
    def name(self) -> str:
        return "creating"


@dataclass(frozen=True)
class Editing:
    """Editing the record with ``entity_id``."""

    entity_id: str

    @property
    def name(self) -> str:
        return "editing"


@dataclass(frozen=True)
class Submitting:
    """Write in flight; ``origin`` is the state to fall back to on failure."""

    origin: Union[Creating, Editing]

    @property
    def name(self) -> str:
        return "submitting"

    @property
    def entity_id(self) -> str | None:
        return self.origin.entity_id if isinstance(self.origin, Editing) else None


FormState = Union[Closed, Creating, Editing, Submitting]
