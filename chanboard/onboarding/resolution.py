"""Allowlist resolution loop — prompt, parse, resolve, validate, merge.

One *round* is a single prompt → parse → resolve → validate cycle. A round
either accepts every candidate or none of them; rejected rounds show a note
and prompt again. Nothing is carried over between rounds.

How candidates become ids is a strategy picked per round:

- :class:`LocalParseStrategy` when no directory token is available: each
  candidate must already be a valid id for the channel.
- :class:`DirectoryStrategy` when a token is present: candidates are looked
  up in the channel's directory (handles → stable ids).

:class:`~chanboard.errors.WizardCancelledError` raised by the prompter is never
caught here.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from loguru import logger

from chanboard.core.channels.types import AllowFromResolution
from chanboard.onboarding.entries import merge_allow_from_entries
from chanboard.onboarding.prompter import WizardPrompter, required

RESOLVE_FAILED_NOTE = "Failed to resolve usernames. Try again."

ResolveEntries = Callable[..., Awaitable[Sequence[AllowFromResolution]]]


# ── Round outcomes ────────────────────────────────────────


@dataclass(frozen=True)
class RoundAccepted:
    ids: list[str]


@dataclass(frozen=True)
class RoundRejected:
    note: str


RoundOutcome = RoundAccepted | RoundRejected


# ── Strategies ────────────────────────────────────────────


class ResolutionStrategy(Protocol):
    async def resolve_round(self, parts: list[str]) -> RoundOutcome: ...


@dataclass(frozen=True)
class LocalParseStrategy:
    """Offline mode: every candidate must parse as an id on its own."""

    parse_id: Callable[[str], str | None]
    invalid_note: str

    async def resolve_round(self, parts: list[str]) -> RoundOutcome:
        ids = [parsed for parsed in map(self.parse_id, parts) if parsed]
        if len(ids) != len(parts):
            return RoundRejected(self.invalid_note)
        return RoundAccepted(ids)


@dataclass(frozen=True)
class DirectoryStrategy:
    """Token mode: candidates are looked up through ``resolve_entries``."""

    token: str
    resolve_entries: ResolveEntries

    async def resolve_round(self, parts: list[str]) -> RoundOutcome:
        try:
            results = await self.resolve_entries(token=self.token, entries=parts)
        except Exception as e:
            logger.debug(f"Directory resolution failed: {e!r}")
            return RoundRejected(RESOLVE_FAILED_NOTE)

        unresolved = [res for res in results if not res.acceptable]
        if unresolved:
            names = ", ".join(res.input for res in unresolved)
            return RoundRejected(f"Could not resolve: {names}")
        return RoundAccepted([str(res.id) for res in results])


def select_strategy(
    token: str | None,
    parse_id: Callable[[str], str | None],
    invalid_without_token_note: str,
    resolve_entries: ResolveEntries | None,
) -> ResolutionStrategy:
    """Directory lookup when a token (and a resolver) is present, local parsing otherwise."""
    if token and resolve_entries is not None:
        return DirectoryStrategy(token=token, resolve_entries=resolve_entries)
    return LocalParseStrategy(parse_id=parse_id, invalid_note=invalid_without_token_note)


# ── Loop ──────────────────────────────────────────────────


async def prompt_resolved_allow_from(
    prompter: WizardPrompter,
    existing: Sequence[str | int],
    token: str | None,
    message: str,
    placeholder: str,
    label: str,
    parse_inputs: Callable[[str], list[str]],
    parse_id: Callable[[str], str | None],
    invalid_without_token_note: str,
    resolve_entries: ResolveEntries | None = None,
) -> list[str]:
    """Prompt until every entry of one round resolves, then merge into ``existing``.

    Returns
    -------
    list[str]
        ``existing`` followed by the newly accepted ids, deduplicated.
    """
    strategy = select_strategy(token, parse_id, invalid_without_token_note, resolve_entries)
    initial = str(existing[0]) if existing and existing[0] else None

    while True:
        entry = await prompter.text(
            message=message,
            placeholder=placeholder,
            initial_value=initial,
            validate=required,
        )
        parts = parse_inputs(str(entry))
        outcome = await strategy.resolve_round(parts)

        if isinstance(outcome, RoundRejected):
            logger.debug(f"{label}: round rejected ({outcome.note})")
            await prompter.note(outcome.note, label)
            continue

        logger.debug(f"{label}: accepted {len(outcome.ids)} entr(ies)")
        return merge_allow_from_entries(existing, outcome.ids)
