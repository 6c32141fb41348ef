"""Tests for chanboard.core.channels.identifiers."""

from chanboard.core.channels.identifiers import (
    normalize_e164,
    parse_imessage_handle,
    parse_signal_id,
    parse_slack_user_id,
    parse_telegram_user_id,
)


def test_normalize_e164():
    assert normalize_e164("+1 (555) 555-0123") == "+15555550123"
    assert normalize_e164("0015555550123") == "+15555550123"
    assert normalize_e164("5555550123") is None
    assert normalize_e164("+0123456789") is None
    assert normalize_e164("+12") is None


def test_parse_signal_id():
    assert parse_signal_id("signal:+15555550123") == "+15555550123"
    uuid = "123E4567-E89B-12D3-A456-426614174000"
    assert parse_signal_id(f"uuid:{uuid}") == f"uuid:{uuid.lower()}"
    assert parse_signal_id(uuid) == f"uuid:{uuid.lower()}"
    assert parse_signal_id("uuid:nope") is None
    assert parse_signal_id("@alice") is None


def test_parse_imessage_handle():
    assert parse_imessage_handle("+15555550123") == "+15555550123"
    assert parse_imessage_handle("imessage:User@Example.com") == "user@example.com"
    assert parse_imessage_handle("chat_id:42") == "chat_id:42"
    assert parse_imessage_handle("alice") is None


def test_parse_slack_user_id():
    assert parse_slack_user_id("U0123ABCD") == "U0123ABCD"
    assert parse_slack_user_id("<@u0123abcd|alice>") == "U0123ABCD"
    assert parse_slack_user_id("slack:W0123ABCD") == "W0123ABCD"
    assert parse_slack_user_id("william") is None
    assert parse_slack_user_id("@alice") is None


def test_parse_telegram_user_id():
    assert parse_telegram_user_id("123456789") == "123456789"
    assert parse_telegram_user_id("tg:42") == "42"
    assert parse_telegram_user_id("telegram:42") == "42"
    assert parse_telegram_user_id("@alice") is None
