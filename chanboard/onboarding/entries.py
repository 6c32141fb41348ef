"""Allowlist entry helpers — split, merge, normalize."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

from chanboard.core.config.schema import WILDCARD

_ENTRY_SEPARATORS = re.compile(r"[\n,;]+")


def _clean(values: Iterable[str | int] | None) -> list[str]:
    """Stringify + trim, dropping empty values."""
    cleaned = (str(v).strip() for v in (values or []))
    return [v for v in cleaned if v]


def _dedupe(values: Iterable[str]) -> list[str]:
    # dict keeps insertion order → first occurrence wins
    return list(dict.fromkeys(values))


def split_onboarding_entries(raw: str) -> list[str]:
    """Split free-form input on newlines, commas and semicolons.

    >>> split_onboarding_entries(" a, b \\nc;  ;\\n")
    ['a', 'b', 'c']
    """
    return _clean(_ENTRY_SEPARATORS.split(raw))


def merge_allow_from_entries(
    current: Iterable[str | int] | None, additions: Iterable[str | int]
) -> list[str]:
    """Union of ``current`` and ``additions``, existing entries first, no duplicates."""
    return _dedupe([*_clean(current), *_clean(additions)])


def add_wildcard_allow_from(allow_from: Iterable[str | int] | None) -> list[str]:
    """Return a copy of ``allow_from`` that contains the ``*`` wildcard."""
    entries = _clean(allow_from)
    if WILDCARD not in entries:
        entries.append(WILDCARD)
    return entries


def normalize_allow_from_entries(
    entries: Iterable[str | int],
    normalize_entry: Callable[[str], str | None] | None = None,
) -> list[str]:
    """Trim, normalize and dedupe entries.

    The wildcard is never passed to ``normalize_entry``. Entries for which the
    normalizer returns ``None``/blank are dropped.
    """
    normalized: list[str] = []
    for entry in _clean(entries):
        if entry == WILDCARD or normalize_entry is None:
            normalized.append(entry)
            continue
        value = normalize_entry(entry)
        if isinstance(value, str) and value.strip():
            normalized.append(value.strip())
    return _dedupe(normalized)
