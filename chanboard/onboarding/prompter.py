"""Wizard prompting — protocol + prompt_toolkit/rich console implementation."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.validation import ValidationError, Validator
from rich.console import Console
from rich.panel import Panel

from chanboard.errors import WizardCancelledError

TextValidator = Callable[[str], str | None]


class WizardPrompter(Protocol):
    """What onboarding needs from the wizard UI."""

    async def text(
        self,
        message: str,
        placeholder: str | None = None,
        initial_value: str | None = None,
        validate: TextValidator | None = None,
        completions: Sequence[str] | None = None,
    ) -> str: ...

    async def note(self, message: str, title: str | None = None) -> None: ...


def required(value: str | None) -> str | None:
    """Validator rejecting blank input."""
    return None if str(value or "").strip() else "Required"


class _CallbackValidator(Validator):
    """Adapt a ``value -> error | None`` callback to prompt_toolkit."""

    def __init__(self, validate: TextValidator) -> None:
        self._validate = validate

    def validate(self, document) -> None:
        error = self._validate(document.text)
        if error:
            raise ValidationError(message=error, cursor_position=len(document.text))


class ConsolePrompter:
    """Interactive prompter: prompt_toolkit for input, rich panels for notes.

    Ctrl-C / Ctrl-D raise :class:`WizardCancelledError` so the whole wizard
    unwinds instead of re-prompting.
    """

    def __init__(
        self,
        console: Console | None = None,
        session: PromptSession | None = None,
    ) -> None:
        self.console = console or Console()
        self._session = session

    @property
    def session(self) -> PromptSession:
        if self._session is None:
            self._session = PromptSession()
        return self._session

    async def text(
        self,
        message: str,
        placeholder: str | None = None,
        initial_value: str | None = None,
        validate: TextValidator | None = None,
        completions: Sequence[str] | None = None,
    ) -> str:
        try:
            return await self.session.prompt_async(
                HTML("<b><ansiblue>?</ansiblue></b> {}: ").format(message),
                default=initial_value or "",
                placeholder=HTML("<ansigray>{}</ansigray>").format(placeholder)
                if placeholder
                else None,
                validator=_CallbackValidator(validate) if validate else None,
                validate_while_typing=False,
                completer=WordCompleter(list(completions)) if completions else None,
            )
        except (KeyboardInterrupt, EOFError) as e:
            raise WizardCancelledError("Setup cancelled.") from e

    async def note(self, message: str, title: str | None = None) -> None:
        self.console.print(Panel(message, title=title, border_style="yellow", padding=(0, 1)))
