"""Allow/block filtering for calendars, reminder lists, and contact groups.

Three match strategies, applied identically to allowlists and blocklists:
- Exact display name (case-insensitive)
- Stable identifier (case-insensitive, never normalized)
- Decorative-prefix-stripped name ("Travel" matches "✈️ Travel" and "✈️ - Travel")

INVARIANT: The evaluator never looks at ``DomainAccess.enabled``.
Callers check it first (see :mod:`pimctl.domain.access`).
"""

from __future__ import annotations

import string
import unicodedata
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from pimctl.config.models import DomainAccess, FilterMode

T = TypeVar("T")

# Symbols, emoji modifiers, combining marks (variation selectors, keycaps)
# and format controls (zero-width joiner, emoji tag sequences).
DECORATIVE_CATEGORIES = frozenset({"So", "Sk", "Sm", "Mn", "Me", "Cf"})

# Separators written between a glyph and the name, as in "✈️ - Travel".
_SEPARATORS = frozenset(string.punctuation)


def _is_decorative(char: str) -> bool:
    if char.isspace():
        return True
    if char.isascii():
        return False
    return unicodedata.category(char) in DECORATIVE_CATEGORIES


def strip_decorative_prefix(text: str) -> str:
    """Strip leading emoji/symbol glyphs and whitespace, then lowercase.

    Handles names like ``"✈️ Travel"``, ``"🏦 Budget & Finances"`` or
    ``"✈️ - Travel"``: ASCII punctuation is dropped only when it directly
    follows a glyph, so ``"#1 Team"`` is unchanged apart from case.
    """
    index = 0
    saw_glyph = False
    while index < len(text) and _is_decorative(text[index]):
        saw_glyph = saw_glyph or not text[index].isspace()
        index += 1
    if saw_glyph:
        while index < len(text) and (text[index].isspace() or text[index] in _SEPARATORS):
            index += 1
    return text[index:].casefold()


def matches_any(name: str, item_id: str | None, items: Iterable[str]) -> bool:
    """Return True if *name* or *item_id* matches any configured entry."""
    name_key = name.casefold()
    id_key = item_id.casefold() if item_id is not None else None
    stripped_name = strip_decorative_prefix(name)

    for entry in items:
        entry_key = entry.casefold()
        if entry_key == name_key:
            return True
        if id_key is not None and entry_key == id_key:
            return True
        stripped_entry = strip_decorative_prefix(entry)
        if stripped_entry and stripped_entry == stripped_name:
            return True
    return False


def is_allowed(name: str, item_id: str | None = None, *, access: DomainAccess) -> bool:
    """Check whether a single item is accessible under *access*.

    Args:
        name: Display name (e.g. a calendar title).
        item_id: Stable identifier, if the caller has one.
        access: The domain's filter section.
    """
    if access.mode is FilterMode.ALL:
        return True
    matched = matches_any(name, item_id, access.items)
    if access.mode is FilterMode.ALLOWLIST:
        return matched
    return not matched


def filter_items(
    items: Sequence[T],
    access: DomainAccess,
    name_of: Callable[[T], str],
    id_of: Callable[[T], str | None] | None = None,
) -> list[T]:
    """Keep only the allowed items, preserving input order."""
    if access.mode is FilterMode.ALL:
        return list(items)
    return [
        item
        for item in items
        if is_allowed(name_of(item), id_of(item) if id_of else None, access=access)
    ]
