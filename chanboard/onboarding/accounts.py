"""Account id selection for channel onboarding."""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from chanboard.core.config.schema import Config
from chanboard.core.routing import normalize_account_id
from chanboard.onboarding.prompter import WizardPrompter

ListAccountIds = Callable[[Config], list[str]]


async def prompt_account_id(
    cfg: Config,
    prompter: WizardPrompter,
    label: str,
    current_id: str,
    list_account_ids: ListAccountIds,
    default_account_id: str,
) -> str:
    """Ask which account to configure, offering the existing ones as completions.

    Unknown answers are accepted and create a new account entry.
    """
    existing = list_account_ids(cfg) or [default_account_id]
    await prompter.note(f"Existing accounts: {', '.join(existing)}", f"{label} accounts")

    answer = await prompter.text(
        message=f"{label} account id",
        placeholder=default_account_id,
        initial_value=current_id,
        completions=existing,
    )
    account_id = normalize_account_id(answer)
    if account_id not in existing:
        await prompter.note(f"Creating new {label} account: {account_id}", f"{label} accounts")
    logger.debug(f"{label}: configuring account '{account_id}'")
    return account_id


def resolve_onboarding_account_id(account_id: str | None, default_account_id: str) -> str:
    """Normalized ``account_id`` if given, else ``default_account_id`` unchanged."""
    if account_id and account_id.strip():
        return normalize_account_id(account_id)
    return default_account_id


async def resolve_account_id_for_configure(
    cfg: Config,
    prompter: WizardPrompter,
    label: str,
    account_override: str | None,
    should_prompt_account_ids: bool,
    list_account_ids: ListAccountIds,
    default_account_id: str,
) -> str:
    """Pick the account to configure.

    An explicit override always wins (no prompt). Otherwise the operator is
    asked when prompting is enabled, else ``default_account_id`` is used.
    """
    override = (account_override or "").strip()
    if override:
        return normalize_account_id(override)
    if not should_prompt_account_ids:
        return default_account_id
    return await prompt_account_id(
        cfg=cfg,
        prompter=prompter,
        label=label,
        current_id=default_account_id,
        list_account_ids=list_account_ids,
        default_account_id=default_account_id,
    )
