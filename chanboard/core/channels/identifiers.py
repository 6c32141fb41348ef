"""Channel identifier parsers — turn typed handles into canonical allowlist ids.

Every parser returns ``None`` for input it does not recognise.
"""

from __future__ import annotations

import re

_PHONE_PUNCT_RE = re.compile(r"[\s\-().]")
_E164_RE = re.compile(r"^\+[1-9]\d{6,14}$")
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_CHAT_ID_RE = re.compile(r"^chat_id:(\d+)$", re.IGNORECASE)
_SLACK_ID_RE = re.compile(r"^[UW](?=[A-Z0-9]*\d)[A-Z0-9]{6,}$", re.IGNORECASE)
_SLACK_MENTION_RE = re.compile(r"^<@([UW][A-Z0-9]{6,})(?:\|[^>]*)?>$", re.IGNORECASE)
_TELEGRAM_ID_RE = re.compile(r"^-?\d+$")


def _strip_prefix(raw: str, *prefixes: str) -> str:
    value = raw.strip()
    lowered = value.lower()
    for prefix in prefixes:
        if lowered.startswith(prefix):
            return value[len(prefix):].strip()
    return value


def normalize_e164(raw: str) -> str | None:
    """Normalize a phone number to E.164 (``+15555550123``)."""
    value = _PHONE_PUNCT_RE.sub("", raw.strip())
    if value.startswith("00"):
        value = "+" + value[2:]
    return value if _E164_RE.match(value) else None


def parse_signal_id(raw: str) -> str | None:
    """Signal sender: E.164 number or ``uuid:<uuid>``."""
    value = _strip_prefix(raw, "signal:")
    if value.lower().startswith("uuid:"):
        uuid = value[5:].strip()
        return f"uuid:{uuid.lower()}" if _UUID_RE.match(uuid) else None
    if _UUID_RE.match(value):
        return f"uuid:{value.lower()}"
    return normalize_e164(value)


def parse_imessage_handle(raw: str) -> str | None:
    """iMessage sender: E.164 number, e-mail address or ``chat_id:<n>``."""
    value = _strip_prefix(raw, "imessage:")
    chat = _CHAT_ID_RE.match(value)
    if chat:
        return f"chat_id:{chat.group(1)}"
    if _EMAIL_RE.match(value):
        return value.lower()
    return normalize_e164(value)


def parse_slack_user_id(raw: str) -> str | None:
    """Slack user id (``U…``/``W…``), ``<@U…>`` mention or ``slack:U…``."""
    value = _strip_prefix(raw, "slack:", "user:")
    mention = _SLACK_MENTION_RE.match(value)
    if mention:
        return mention.group(1).upper()
    return value.upper() if _SLACK_ID_RE.match(value) else None


def parse_telegram_user_id(raw: str) -> str | None:
    """Numeric Telegram user id, optionally ``telegram:``/``tg:`` prefixed."""
    value = _strip_prefix(raw, "telegram:", "tg:")
    return value if _TELEGRAM_ID_RE.match(value) else None
