"""Tests for chanboard.onboarding.patch (immutable config patchers)."""

from __future__ import annotations

import pytest

from chanboard.core.config import Config
from chanboard.core.routing import DEFAULT_ACCOUNT_ID
from chanboard.onboarding.patch import (
    set_account_allow_from_for_channel,
    set_channel_dm_policy_with_allow_from,
)


@pytest.fixture
def cfg():
    return Config(
        channels={
            "imessage": {
                "enabled": True,
                "allow_from": ["old"],
                "accounts": {"work": {"allow_from": ["work-old"]}},
            },
            "signal": {
                "enabled": True,
                "allow_from": ["default-old"],
                "accounts": {
                    "alt": {"enabled": True, "account": "+15555550123", "allow_from": ["alt-old"]},
                    "other": {"allow_from": ["other-old"]},
                },
            },
        }
    )


# ── set_account_allow_from_for_channel ────────────────────


def test_default_account_writes_top_level(cfg):
    nxt = set_account_allow_from_for_channel(cfg, "imessage", DEFAULT_ACCOUNT_ID, ["new-default"])

    assert nxt.channels.imessage.allow_from == ["new-default"]
    assert nxt.channels.imessage.accounts["work"].allow_from == ["work-old"]
    assert nxt.channels.imessage.enabled is True
    # input untouched
    assert cfg.channels.imessage.allow_from == ["old"]


def test_named_account_writes_nested(cfg):
    nxt = set_account_allow_from_for_channel(cfg, "signal", "alt", ["alt-new"])

    assert nxt.channels.signal.allow_from == ["default-old"]
    assert nxt.channels.signal.accounts["alt"].allow_from == ["alt-new"]
    assert nxt.channels.signal.accounts["alt"].model_extra["account"] == "+15555550123"
    assert nxt.channels.signal.accounts["other"].allow_from == ["other-old"]
    assert cfg.channels.signal.accounts["alt"].allow_from == ["alt-old"]


def test_named_account_shares_siblings(cfg):
    nxt = set_account_allow_from_for_channel(cfg, "signal", "alt", ["alt-new"])

    assert nxt is not cfg
    assert nxt.channels.imessage is cfg.channels.imessage
    assert nxt.channels.signal.accounts["other"] is cfg.channels.signal.accounts["other"]


def test_new_account_created(cfg):
    nxt = set_account_allow_from_for_channel(cfg, "imessage", "home", ["+15550001111"])

    assert nxt.channels.imessage.accounts["home"].allow_from == ["+15550001111"]
    assert "home" not in cfg.channels.imessage.accounts


def test_unknown_channel_rejected(cfg):
    with pytest.raises(ValueError, match="Unknown channel"):
        set_account_allow_from_for_channel(cfg, "fax", DEFAULT_ACCOUNT_ID, [])


# ── set_channel_dm_policy_with_allow_from ─────────────────


def test_open_policy_adds_wildcard():
    cfg = Config(channels={"signal": {"dm_policy": "pairing", "allow_from": ["+1555"]}})
    nxt = set_channel_dm_policy_with_allow_from(cfg, "signal", "open")

    assert nxt.channels.signal.dm_policy == "open"
    assert nxt.channels.signal.allow_from == ["+1555", "*"]
    assert cfg.channels.signal.allow_from == ["+1555"]


def test_open_policy_keeps_single_wildcard():
    cfg = Config(channels={"signal": {"allow_from": ["*"]}})
    nxt = set_channel_dm_policy_with_allow_from(cfg, "signal", "open")
    assert nxt.channels.signal.allow_from == ["*"]


def test_non_open_policy_leaves_allow_from():
    cfg = Config(channels={"signal": {"dm_policy": "pairing", "allow_from": ["+1555"]}})
    nxt = set_channel_dm_policy_with_allow_from(cfg, "signal", "pairing")

    assert nxt.channels.signal.dm_policy == "pairing"
    assert nxt.channels.signal.allow_from == ["+1555"]


def test_switching_away_from_open_keeps_wildcard():
    cfg = Config(channels={"imessage": {"dm_policy": "open", "allow_from": ["*"]}})
    nxt = set_channel_dm_policy_with_allow_from(cfg, "imessage", "pairing")

    assert nxt.channels.imessage.dm_policy == "pairing"
    assert nxt.channels.imessage.allow_from == ["*"]


def test_invalid_policy_rejected():
    with pytest.raises(ValueError, match="Unknown dm policy"):
        set_channel_dm_policy_with_allow_from(Config(), "signal", "everyone")
