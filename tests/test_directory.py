"""Tests for the Slack / Telegram directory resolvers (httpx.MockTransport)."""

from __future__ import annotations

import httpx
import pytest

from chanboard.core.channels import AllowFromResolution, SlackDirectory, TelegramDirectory
from chanboard.errors import DirectoryError

_MEMBERS_PAGE_1 = {
    "ok": True,
    "members": [
        {"id": "U0000ALICE1", "name": "alice", "profile": {"display_name": "Alice"}},
        {"id": "U0000GONE01", "name": "gone", "deleted": True, "profile": {}},
    ],
    "response_metadata": {"next_cursor": "page2"},
}
_MEMBERS_PAGE_2 = {
    "ok": True,
    "members": [
        {
            "id": "U0000BOB001",
            "name": "bobby",
            "profile": {"real_name": "Bob Builder", "email": "bob@example.com"},
        },
    ],
    "response_metadata": {"next_cursor": ""},
}


def _slack_transport(calls: list[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.url.params.get("cursor") == "page2":
            return httpx.Response(200, json=_MEMBERS_PAGE_2)
        return httpx.Response(200, json=_MEMBERS_PAGE_1)

    return httpx.MockTransport(handler)


# ── Slack ──────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_slack_resolves_names_ids_and_emails():
    calls: list[httpx.Request] = []
    directory = SlackDirectory(transport=_slack_transport(calls))

    results = await directory.resolve_users(
        "xoxb-test", ["@Alice", "U0123ABCD", "bob@example.com", "Bob Builder", "gone", "zed"]
    )

    assert results == [
        AllowFromResolution(input="@Alice", resolved=True, id="U0000ALICE1"),
        AllowFromResolution(input="U0123ABCD", resolved=True, id="U0123ABCD"),
        AllowFromResolution(input="bob@example.com", resolved=True, id="U0000BOB001"),
        AllowFromResolution(input="Bob Builder", resolved=True, id="U0000BOB001"),
        AllowFromResolution(input="gone", resolved=False, id=None),
        AllowFromResolution(input="zed", resolved=False, id=None),
    ]
    assert len(calls) == 2
    assert calls[0].headers["Authorization"] == "Bearer xoxb-test"
    assert calls[0].url.path == "/api/users.list"


@pytest.mark.asyncio
async def test_slack_ids_only_skips_lookup():
    calls: list[httpx.Request] = []
    directory = SlackDirectory(transport=_slack_transport(calls))

    results = await directory.resolve_users("xoxb-test", ["<@U0123ABCD>"])

    assert results == [AllowFromResolution(input="<@U0123ABCD>", resolved=True, id="U0123ABCD")]
    assert calls == []


@pytest.mark.asyncio
async def test_slack_api_error_raises():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"ok": False, "error": "invalid_auth"})
    )
    directory = SlackDirectory(transport=transport)

    with pytest.raises(DirectoryError, match="invalid_auth"):
        await directory.resolve_users("bad", ["alice"])


@pytest.mark.asyncio
async def test_slack_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    directory = SlackDirectory(transport=httpx.MockTransport(handler))

    with pytest.raises(DirectoryError):
        await directory.resolve_users("tok", ["alice"])


# ── Telegram ───────────────────────────────────────────────


def _telegram_handler(request: httpx.Request) -> httpx.Response:
    chat_id = request.url.params.get("chat_id")
    if chat_id == "@alice":
        return httpx.Response(200, json={"ok": True, "result": {"id": 4242, "type": "private"}})
    if chat_id == "@broken":
        return httpx.Response(500, text="internal")
    return httpx.Response(
        400, json={"ok": False, "error_code": 400, "description": "Bad Request: chat not found"}
    )


@pytest.mark.asyncio
async def test_telegram_resolves_usernames():
    directory = TelegramDirectory(transport=httpx.MockTransport(_telegram_handler))

    results = await directory.resolve_users("123:abc", ["alice", "777", "@nobody"])

    assert results == [
        AllowFromResolution(input="alice", resolved=True, id="4242"),
        AllowFromResolution(input="777", resolved=True, id="777"),
        AllowFromResolution(input="@nobody", resolved=False, id=None),
    ]


@pytest.mark.asyncio
async def test_telegram_uses_bot_token_in_path():
    seen: list[str] = []

    def handler(request):
        seen.append(request.url.path)
        return _telegram_handler(request)

    directory = TelegramDirectory(transport=httpx.MockTransport(handler))
    await directory.resolve_users("123:abc", ["@alice"])

    assert seen == ["/bot123:abc/getChat"]


@pytest.mark.asyncio
async def test_telegram_server_error_raises():
    directory = TelegramDirectory(transport=httpx.MockTransport(_telegram_handler))

    with pytest.raises(DirectoryError) as exc:
        await directory.resolve_users("123:abc", ["@broken"])
    assert exc.value.status_code == 500
