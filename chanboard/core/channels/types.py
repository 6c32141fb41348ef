"""Directory lookup types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AllowFromResolution:
    """Directory lookup result for one input entry."""

    input: str
    resolved: bool
    id: str | None = None

    @property
    def acceptable(self) -> bool:
        """Resolved *and* carrying a non-empty id."""
        return self.resolved and bool(self.id)
