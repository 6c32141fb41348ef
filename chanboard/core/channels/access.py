"""Channel access control — check a sender against the effective allowlist."""

from __future__ import annotations

from chanboard.core.config.schema import WILDCARD, ChannelsConfig
from chanboard.core.routing import DEFAULT_ACCOUNT_ID


def effective_allow_from(
    channels_config: ChannelsConfig, channel: str, account_id: str = DEFAULT_ACCOUNT_ID
) -> list[str]:
    """Allowlist that applies to ``account_id``.

    A named account with its own (non-empty) list uses it; otherwise the
    channel top-level list applies.
    """
    section = channels_config.get(channel)
    account = section.accounts.get(account_id) if account_id != DEFAULT_ACCOUNT_ID else None
    if account and account.allow_from:
        return list(account.allow_from)
    return list(section.allow_from)


def check_allowlist(
    channels_config: ChannelsConfig,
    channel: str,
    sender_id: str,
    account_id: str = DEFAULT_ACCOUNT_ID,
) -> bool:
    """Check if a direct message from ``sender_id`` is allowed.

    ``disabled`` denies everyone, ``open`` allows everyone; other policies
    require the sender (or ``*``) in the effective allowlist.
    Unknown channel → denied.
    """
    try:
        section = channels_config.get(channel)
    except ValueError:
        return False

    if section.dm_policy == "disabled":
        return False
    if section.dm_policy == "open":
        return True

    allow_from = effective_allow_from(channels_config, channel, account_id)
    return WILDCARD in allow_from or sender_id.strip() in allow_from
