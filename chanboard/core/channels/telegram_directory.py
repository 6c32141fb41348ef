"""Telegram directory — resolve @usernames via the Bot API."""

from __future__ import annotations

import httpx
from loguru import logger

from chanboard.core.channels.identifiers import parse_telegram_user_id
from chanboard.core.channels.types import AllowFromResolution
from chanboard.errors import DirectoryError

TELEGRAM_API = "https://api.telegram.org"


class TelegramDirectory:
    """Resolve Telegram usernames with ``getChat``.

    Numeric ids pass through; ``@name`` / ``name`` are looked up one by one.
    A "chat not found" answer marks the entry unresolved; any other failure
    raises :class:`DirectoryError`.
    """

    def __init__(
        self,
        base_url: str = TELEGRAM_API,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 15.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    async def resolve_users(
        self, token: str, entries: list[str]
    ) -> list[AllowFromResolution]:
        results: list[AllowFromResolution] = []
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout), transport=self.transport
        ) as client:
            for entry in entries:
                user_id = parse_telegram_user_id(entry)
                if user_id is None:
                    user_id = await self._lookup(client, token, entry)
                results.append(
                    AllowFromResolution(input=entry, resolved=user_id is not None, id=user_id)
                )
        return results

    async def _lookup(self, client: httpx.AsyncClient, token: str, entry: str) -> str | None:
        username = "@" + entry.strip().lstrip("@")
        url = f"{self.base_url}/bot{token}/getChat"
        try:
            resp = await client.get(url, params={"chat_id": username})
        except httpx.HTTPError as e:
            logger.warning(f"Telegram getChat request failed: {e}")
            raise DirectoryError(f"Telegram getChat request failed: {e}") from e

        if resp.status_code == 400 and "not found" in resp.text.lower():
            logger.debug(f"Telegram: {username} not found")
            return None
        if resp.status_code != 200:
            logger.warning(f"Telegram getChat failed ({resp.status_code}): {resp.text[:200]}")
            raise DirectoryError("Telegram getChat failed", status_code=resp.status_code)

        chat = resp.json().get("result") or {}
        chat_id = chat.get("id")
        return str(chat_id) if chat_id is not None else None
