"""Per-channel onboarding adapters — wire account selection, the allowlist loop and patchers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from chanboard.core.channels.identifiers import (
    parse_imessage_handle,
    parse_signal_id,
    parse_slack_user_id,
    parse_telegram_user_id,
)
from chanboard.core.channels.slack_directory import SlackDirectory
from chanboard.core.channels.telegram_directory import TelegramDirectory
from chanboard.core.config.schema import Config
from chanboard.core.routing import DEFAULT_ACCOUNT_ID
from chanboard.onboarding.accounts import resolve_account_id_for_configure
from chanboard.onboarding.entries import split_onboarding_entries
from chanboard.onboarding.patch import set_account_allow_from_for_channel
from chanboard.onboarding.prompter import WizardPrompter
from chanboard.onboarding.resolution import ResolveEntries, prompt_resolved_allow_from


@dataclass(frozen=True)
class ChannelOnboarding:
    """Everything the allowlist wizard needs to know about one channel."""

    channel: str
    label: str
    message: str
    placeholder: str
    parse_id: Callable[[str], str | None]
    invalid_without_token_note: str
    parse_inputs: Callable[[str], list[str]] = split_onboarding_entries
    resolver: Callable[[], ResolveEntries] | None = None
    token_field: str | None = None

    def list_account_ids(self, cfg: Config) -> list[str]:
        return cfg.channels.get(self.channel).list_account_ids()


CHANNEL_ONBOARDING: dict[str, ChannelOnboarding] = {
    "imessage": ChannelOnboarding(
        channel="imessage",
        label="iMessage allowlist",
        message="Who may message this iMessage account?",
        placeholder="+15555550123, user@example.com, chat_id:42",
        parse_id=parse_imessage_handle,
        invalid_without_token_note=(
            "Use phone numbers in E.164 format (+15555550123), "
            "e-mail addresses or chat_id:<n>."
        ),
    ),
    "signal": ChannelOnboarding(
        channel="signal",
        label="Signal allowlist",
        message="Who may message this Signal account?",
        placeholder="+15555550123, uuid:…",
        parse_id=parse_signal_id,
        invalid_without_token_note=(
            "Use phone numbers in E.164 format (+15555550123) or uuid:<signal uuid>."
        ),
    ),
    "slack": ChannelOnboarding(
        channel="slack",
        label="Slack allowlist",
        message="Slack users allowed to DM the bot (usernames or ids)",
        placeholder="@alice, U0123ABCD",
        parse_id=parse_slack_user_id,
        invalid_without_token_note=(
            "Without a bot token only Slack user ids (U0123ABCD) can be used."
        ),
        resolver=lambda: SlackDirectory().resolve_users,
        token_field="bot_token",
    ),
    "telegram": ChannelOnboarding(
        channel="telegram",
        label="Telegram allowlist",
        message="Telegram users allowed to DM the bot (@usernames or numeric ids)",
        placeholder="@alice, 123456789",
        parse_id=parse_telegram_user_id,
        invalid_without_token_note=(
            "Without a bot token only numeric Telegram user ids can be used."
        ),
        resolver=lambda: TelegramDirectory().resolve_users,
        token_field="bot_token",
    ),
}


def get_channel_onboarding(channel: str) -> ChannelOnboarding:
    """Look up a channel adapter. Raises ``KeyError`` for unknown channels."""
    try:
        return CHANNEL_ONBOARDING[channel]
    except KeyError:
        known = ", ".join(sorted(CHANNEL_ONBOARDING))
        raise KeyError(f"Unknown channel '{channel}' (expected one of: {known})") from None


async def configure_allow_from(
    cfg: Config,
    prompter: WizardPrompter,
    channel: str,
    account_override: str | None = None,
    should_prompt_account_ids: bool = False,
    token: str | None = None,
) -> Config:
    """Run the allowlist wizard for one channel account and return the patched config."""
    adapter = get_channel_onboarding(channel)
    account_id = await resolve_account_id_for_configure(
        cfg=cfg,
        prompter=prompter,
        label=adapter.label,
        account_override=account_override,
        should_prompt_account_ids=should_prompt_account_ids,
        list_account_ids=adapter.list_account_ids,
        default_account_id=DEFAULT_ACCOUNT_ID,
    )

    section = cfg.channels.get(channel)
    if account_id == DEFAULT_ACCOUNT_ID:
        existing = list(section.allow_from)
    else:
        account = section.accounts.get(account_id)
        existing = list(account.allow_from) if account else []

    if not token and adapter.token_field:
        token = section.account_extra(account_id, adapter.token_field)
    resolve_entries = adapter.resolver() if adapter.resolver and token else None
    logger.debug(
        f"{channel}[{account_id}]: {len(existing)} existing entries, "
        f"directory lookup {'on' if resolve_entries else 'off'}"
    )

    allow_from = await prompt_resolved_allow_from(
        prompter=prompter,
        existing=existing,
        token=token,
        message=adapter.message,
        placeholder=adapter.placeholder,
        label=adapter.label,
        parse_inputs=adapter.parse_inputs,
        parse_id=adapter.parse_id,
        invalid_without_token_note=adapter.invalid_without_token_note,
        resolve_entries=resolve_entries,
    )
    return set_account_allow_from_for_channel(cfg, channel, account_id, allow_from)
