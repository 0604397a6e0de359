"""Search/filter views derived from a list cache.

Pure functions: same inputs, same output, input order preserved.
"""

from collections.abc import Iterable, Sequence
from typing import Any

Row = dict[str, Any]

ALL_CATEGORIES = "all"


def matches(row: Row, needle: str, fields: Sequence[str]) -> bool:
    """True when any text field, or any element of an array field, contains ``needle``.

    ``needle`` must already be lower-cased.
    """
    for name in fields:
        value = row.get(name)
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            if any(needle in str(item).lower() for item in value if item is not None):
                return True
        elif needle in str(value).lower():
            return True
    return False


def filter_entities(items: Iterable[Row], search: str | None, fields: Sequence[str]) -> list[Row]:
    """Admin view: case-insensitive substring match over ``fields``."""
    rows = list(items)
    if not search:
        return rows
    needle = search.lower()
    return [row for row in rows if matches(row, needle, fields)]


def filter_public(
    items: Iterable[Row],
    search: str | None,
    category: str | None,
    fields: Sequence[str],
    category_field: str = "category",
) -> list[Row]:
    """Public-site view: search plus an exact category selector."""
    rows = filter_entities(items, search, fields)
    if category and category != ALL_CATEGORIES:
        rows = [row for row in rows if row.get(category_field) == category]
    return rows


def unique_categories(items: Iterable[Row], category_field: str = "category") -> list[str]:
    """Distinct non-empty categories in first-seen order."""
    seen: dict[str, None] = {}
    for row in items:
        value = row.get(category_field)
        if value:
            seen.setdefault(value, None)
    return list(seen)


def group_by(items: Iterable[Row], field: str) -> dict[str, list[Row]]:
    """Group rows by ``field`` keeping both group and row order."""
    groups: dict[str, list[Row]] = {}
    for row in items:
        groups.setdefault(row.get(field) or "", []).append(row)
    return groups
