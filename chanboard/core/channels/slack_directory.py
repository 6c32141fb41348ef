"""Slack directory — resolve typed usernames to Slack user ids."""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from chanboard.core.channels.identifiers import parse_slack_user_id
from chanboard.core.channels.types import AllowFromResolution
from chanboard.errors import DirectoryError

SLACK_API = "https://slack.com/api"


class SlackDirectory:
    """Async lookup against the Slack Web API (``users.list``).

    Parameters
    ----------
    base_url : str
        Slack Web API base URL.
    transport : httpx.AsyncBaseTransport | None
        Optional transport override (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str = SLACK_API,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 15.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    async def resolve_users(
        self, token: str, entries: list[str]
    ) -> list[AllowFromResolution]:
        """Resolve each entry to a user id.

        Entries that already are user ids (or ``<@U…>`` mentions) are accepted
        without a lookup. Everything else is matched case-insensitively against
        username, display name, real name and e-mail.

        Raises
        ------
        DirectoryError
            Transport failure or ``ok: false`` from Slack.
        """
        results: dict[str, AllowFromResolution] = {}
        pending: list[str] = []
        for entry in entries:
            user_id = parse_slack_user_id(entry)
            if user_id:
                results[entry] = AllowFromResolution(input=entry, resolved=True, id=user_id)
            else:
                pending.append(entry)

        if pending:
            index = _index_users(await self.list_users(token))
            for entry in pending:
                user_id = index.get(entry.strip().lstrip("@").lower())
                results[entry] = AllowFromResolution(
                    input=entry, resolved=user_id is not None, id=user_id
                )

        return [results[entry] for entry in entries]

    async def list_users(self, token: str) -> list[dict[str, Any]]:
        """Fetch all active members, following cursor pagination."""
        members: list[dict[str, Any]] = []
        cursor = ""
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={"Authorization": f"Bearer {token}"},
            transport=self.transport,
        ) as client:
            while True:
                params = {"limit": 200}
                if cursor:
                    params["cursor"] = cursor
                data = await self._get(client, "users.list", params)
                members.extend(m for m in data.get("members", []) if not m.get("deleted"))
                cursor = (data.get("response_metadata") or {}).get("next_cursor") or ""
                if not cursor:
                    break
        logger.debug(f"Slack users.list returned {len(members)} members")
        return members

    async def _get(
        self, client: httpx.AsyncClient, method: str, params: dict[str, Any]
    ) -> dict[str, Any]:
        url = f"{self.base_url}/{method}"
        try:
            resp = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.warning(f"Slack {method} request failed: {e}")
            raise DirectoryError(f"Slack {method} request failed: {e}") from e

        if resp.status_code != 200:
            logger.warning(f"Slack {method} failed ({resp.status_code}): {resp.text[:200]}")
            raise DirectoryError(f"Slack {method} failed", status_code=resp.status_code)

        data = resp.json()
        if not data.get("ok"):
            error = data.get("error", "unknown_error")
            logger.warning(f"Slack {method} rejected: {error}")
            raise DirectoryError(f"Slack {method} rejected: {error}")
        return data


def _index_users(members: list[dict[str, Any]]) -> dict[str, str]:
    """Map lowercased names/e-mails → user id (first member wins)."""
    index: dict[str, str] = {}
    for member in members:
        user_id = member.get("id")
        if not user_id:
            continue
        profile = member.get("profile") or {}
        keys = (
            member.get("name"),
            profile.get("display_name"),
            profile.get("real_name"),
            profile.get("email"),
        )
        for key in keys:
            if key:
                index.setdefault(str(key).strip().lower(), user_id)
    return index
