"""Channel identifiers and directory lookups."""

from chanboard.core.channels.access import check_allowlist, effective_allow_from
from chanboard.core.channels.slack_directory import SlackDirectory
from chanboard.core.channels.telegram_directory import TelegramDirectory
from chanboard.core.channels.types import AllowFromResolution

__all__ = [
    "AllowFromResolution",
    "SlackDirectory",
    "TelegramDirectory",
    "check_allowlist",
    "effective_allow_from",
]
