"""Account id routing helpers — default account sentinel + normalization."""

from __future__ import annotations

import re

DEFAULT_ACCOUNT_ID = "default"

_VALID_ID_RE = re.compile(r"^[a-z0-9][a-z0-9_-]{0,63}$", re.IGNORECASE)
_INVALID_CHARS_RE = re.compile(r"[^a-z0-9_-]+")
_EDGE_DASHES_RE = re.compile(r"^-+|-+$")
_MAX_ACCOUNT_ID_LEN = 64


def normalize_account_id(value: str | None) -> str:
    """Normalize a free-form account id into a config key.

    ``" Work Account "`` → ``"work-account"``. Blank input (or input with no
    usable characters) maps to :data:`DEFAULT_ACCOUNT_ID`.
    """
    trimmed = (value or "").strip()
    if not trimmed:
        return DEFAULT_ACCOUNT_ID
    if _VALID_ID_RE.match(trimmed):
        return trimmed.lower()

    cleaned = _INVALID_CHARS_RE.sub("-", trimmed.lower())
    cleaned = _EDGE_DASHES_RE.sub("", cleaned)[:_MAX_ACCOUNT_ID_LEN]
    return cleaned or DEFAULT_ACCOUNT_ID
