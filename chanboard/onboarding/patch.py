"""Config patchers — derive a new snapshot, never mutate the input.

Only nodes on the modified path are copied; sibling channels, accounts and
fields are shared with the original snapshot.
"""

from __future__ import annotations

from typing import get_args

from loguru import logger

from chanboard.core.config.schema import AccountConfig, ChannelConfig, Config, DmPolicy
from chanboard.core.routing import DEFAULT_ACCOUNT_ID
from chanboard.onboarding.entries import add_wildcard_allow_from


def _replace_channel(cfg: Config, channel: str, section: ChannelConfig) -> Config:
    channels = cfg.channels.model_copy(update={channel: section})
    return cfg.model_copy(update={"channels": channels})


def set_account_allow_from_for_channel(
    cfg: Config, channel: str, account_id: str, allow_from: list[str]
) -> Config:
    """Write ``allow_from`` for one account of ``channel``.

    The default account lives at the channel top level; named accounts live
    under ``accounts.<id>`` (created if missing).
    """
    current = cfg.channels.get(channel)
    if account_id == DEFAULT_ACCOUNT_ID:
        section = current.model_copy(update={"allow_from": list(allow_from)})
    else:
        account = current.accounts.get(account_id) or AccountConfig()
        accounts = {
            **current.accounts,
            account_id: account.model_copy(update={"allow_from": list(allow_from)}),
        }
        section = current.model_copy(update={"accounts": accounts})

    logger.info(f"{channel}[{account_id}]: allow_from set ({len(allow_from)} entries)")
    return _replace_channel(cfg, channel, section)


def set_channel_dm_policy_with_allow_from(
    cfg: Config, channel: str, dm_policy: DmPolicy
) -> Config:
    """Set ``dm_policy``; ``"open"`` also adds the ``*`` wildcard to ``allow_from``.

    Switching away from ``"open"`` leaves ``allow_from`` as it is.
    """
    if dm_policy not in get_args(DmPolicy):
        raise ValueError(f"Unknown dm policy: {dm_policy!r}")
    current = cfg.channels.get(channel)
    update: dict[str, object] = {"dm_policy": dm_policy}
    if dm_policy == "open":
        update["allow_from"] = add_wildcard_allow_from(current.allow_from)

    logger.info(f"{channel}: dm_policy → {dm_policy}")
    return _replace_channel(cfg, channel, current.model_copy(update=update))
