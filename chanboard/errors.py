"""Exception hierarchy."""

from __future__ import annotations


class ChanboardError(Exception):
    """Base class for chanboard errors."""


class WizardCancelledError(ChanboardError):
    """Raised by a prompter when the operator aborts the wizard (Ctrl-C / Ctrl-D)."""


class DirectoryError(ChanboardError):
    """Directory lookup failed (transport error or API-level rejection)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
