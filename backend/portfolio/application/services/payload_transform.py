"""Draft → write payload conversion applied immediately before submit."""

from datetime import datetime, timezone
from typing import Any

from portfolio.domain.entities import Draft, FieldKind, FieldSpec
from portfolio.domain.exceptions import InvalidFieldValueError


def split_csv(value: str | list[str] | None) -> list[str]:
    """``"react, design ,  "`` → ``["react", "design"]``."""
    if value is None:
        return []
    parts = value if isinstance(value, list) else str(value).split(",")
    return [p.strip() for p in parts if p and p.strip()]


def missing_required(draft: Draft) -> list[str]:
    """Names of required fields whose draft value is blank."""
    missing = []
    for spec in draft.descriptor.required_fields:
        value = draft.get(spec.name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(spec.name)
        elif isinstance(value, list) and not value:
            missing.append(spec.name)
    return missing


def build_write_payload(draft: Draft, *, now: datetime | None = None) -> dict[str, Any]:
    """Convert every draft field into its stored representation.

    Raises:
        InvalidFieldValueError: When a numeric field holds unparseable text.
    """
    descriptor = draft.descriptor
    payload = {
        spec.name: _convert(spec, draft.get(spec.name)) for spec in descriptor.fields
    }

    assets = descriptor.assets
    if assets is not None and assets.list_field:
        images = payload[assets.list_field]
        # First uploaded image is the cover; fall back to whatever URL was typed
        payload[assets.primary_field] = images[0] if images else payload[assets.primary_field] or None

    publish = descriptor.publish
    if publish is not None:
        stamp = now or datetime.now(timezone.utc)
        payload[publish.stamp] = stamp.isoformat() if payload[publish.flag] else None

    return payload


def _convert(spec: FieldSpec, value: Any) -> Any:
    kind = spec.kind
    if kind is FieldKind.TAGS:
        return split_csv(value)
    if kind is FieldKind.IMAGE_LIST:
        return list(value or [])
    if kind is FieldKind.BOOLEAN:
        return bool(value)
    if kind.is_numeric:
        return _parse_number(spec, value)
    if spec.nullable and (value is None or value == ""):
        return None
    return value


def _parse_number(spec: FieldSpec, value: Any) -> int | float | None:
    if isinstance(value, bool):
        raise InvalidFieldValueError(spec.name, value, "a number")
    if value is None or (isinstance(value, str) and not value.strip()):
        return None

    if spec.kind is FieldKind.INTEGER:
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        try:
            return int(str(value).strip())
        except ValueError:
            raise InvalidFieldValueError(spec.name, value, "an integer") from None

    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidFieldValueError(spec.name, value, "a number") from None
    if number != number:  # NaN
        raise InvalidFieldValueError(spec.name, value, "a number")
    return number
