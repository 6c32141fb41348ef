"""chanboard CLI — Typer-based command-line interface."""

from __future__ import annotations

import asyncio
import sys

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from chanboard import __version__

app = typer.Typer(
    name="chanboard",
    help="chanboard - messaging channel onboarding",
    no_args_is_help=True,
)

console = Console()

_CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Config YAML path")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"chanboard v{__version__}")
        raise typer.Exit()


def _print_yaml(text: str) -> None:
    console.print(text, end="", markup=False, highlight=False, soft_wrap=True)


def _setup_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=_version_callback, is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging on stderr"),
) -> None:
    """chanboard - messaging channel onboarding."""
    _setup_logging(verbose)


# ════════════════════════════════════════════════════════════
# allowlist — interactive allow_from wizard
# ════════════════════════════════════════════════════════════


@app.command()
def allowlist(
    channel: str = typer.Argument(help="Channel name (imessage, signal, slack, telegram)"),
    account: str | None = typer.Option(None, "--account", "-a", help="Account id"),
    prompt_account: bool = typer.Option(
        False, "--prompt-account", help="Ask which account to configure"
    ),
    token: str | None = typer.Option(None, "--token", "-t", help="Directory lookup token"),
    config_path: str | None = _CONFIG_OPTION,
) -> None:
    """Ask who may message an account and print the resulting channel config."""
    from chanboard.core.config.loader import dump_config, load_config
    from chanboard.errors import WizardCancelledError
    from chanboard.onboarding.channels import configure_allow_from, get_channel_onboarding
    from chanboard.onboarding.prompter import ConsolePrompter

    try:
        get_channel_onboarding(channel)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        raise typer.Exit(code=2)

    cfg = load_config(config_path)
    prompter = ConsolePrompter(console=console)
    try:
        updated = asyncio.run(
            configure_allow_from(
                cfg,
                prompter,
                channel,
                account_override=account,
                should_prompt_account_ids=prompt_account,
                token=token,
            )
        )
    except WizardCancelledError:
        console.print("[yellow]Setup cancelled.[/yellow]")
        raise typer.Exit(code=130)

    _print_yaml(dump_config(updated, channel))


# ════════════════════════════════════════════════════════════
# dm-policy — set dm policy (open adds "*")
# ════════════════════════════════════════════════════════════


@app.command("dm-policy")
def dm_policy(
    channel: str = typer.Argument(help="Channel name"),
    policy: str = typer.Argument(help="pairing | allowlist | open | disabled"),
    config_path: str | None = _CONFIG_OPTION,
) -> None:
    """Set a channel's DM policy and print the resulting channel config."""
    from chanboard.core.config.loader import dump_config, load_config
    from chanboard.onboarding.patch import set_channel_dm_policy_with_allow_from

    cfg = load_config(config_path)
    try:
        updated = set_channel_dm_policy_with_allow_from(cfg, channel, policy)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    _print_yaml(dump_config(updated, channel))


# ════════════════════════════════════════════════════════════
# accounts — list configured accounts
# ════════════════════════════════════════════════════════════


@app.command()
def accounts(
    channel: str = typer.Argument(help="Channel name"),
    config_path: str | None = _CONFIG_OPTION,
) -> None:
    """List the accounts configured for a channel."""
    from chanboard.core.config.loader import load_config
    from chanboard.core.routing import DEFAULT_ACCOUNT_ID

    cfg = load_config(config_path)
    try:
        section = cfg.channels.get(channel)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    table = Table(title=f"{channel} accounts")
    table.add_column("Account", style="cyan")
    table.add_column("Enabled", style="green")
    table.add_column("Allow from", style="yellow")

    table.add_row(
        DEFAULT_ACCOUNT_ID,
        str(section.enabled),
        ", ".join(section.allow_from) or "-",
    )
    for account_id, account in sorted(section.accounts.items()):
        table.add_row(account_id, str(account.enabled), ", ".join(account.allow_from) or "-")

    console.print(table)
