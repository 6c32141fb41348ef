"""chanboard configuration schema — YAML + Pydantic + env override.

Channel and account models are frozen: onboarding never mutates a snapshot,
it derives a new one with ``model_copy(update=...)`` (see
:mod:`chanboard.onboarding.patch`).
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from chanboard.core.routing import DEFAULT_ACCOUNT_ID

DmPolicy = Literal["pairing", "allowlist", "open", "disabled"]

WILDCARD = "*"


def _coerce_entries(value: Any) -> Any:
    """Allowlist entries may be written as numbers in YAML (telegram ids)."""
    if not isinstance(value, list | tuple):
        return value
    cleaned = (str(v).strip() for v in value if v is not None)
    return [v for v in cleaned if v]


AllowFromList = Annotated[list[str], BeforeValidator(_coerce_entries)]


# ════════════════════════════════════════════════════════════
# ACCOUNTS
# ════════════════════════════════════════════════════════════


class AccountConfig(BaseModel):
    """One named account inside a channel (channels.<name>.accounts.<id>).

    Channel-specific keys (``account``, ``bot_token`` ...) are kept as extras.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    enabled: bool = True
    name: str | None = None
    allow_from: AllowFromList = Field(default_factory=list)


# ════════════════════════════════════════════════════════════
# CHANNELS
# ════════════════════════════════════════════════════════════


class ChannelConfig(BaseModel):
    """Common shape of every channel section."""

    model_config = ConfigDict(frozen=True, extra="allow")

    enabled: bool = False
    dm_policy: DmPolicy = "pairing"
    allow_from: AllowFromList = Field(default_factory=list)
    accounts: dict[str, AccountConfig] = Field(default_factory=dict)

    def list_account_ids(self) -> list[str]:
        """Configured account ids, or ``[DEFAULT_ACCOUNT_ID]`` when none exist."""
        if not self.accounts:
            return [DEFAULT_ACCOUNT_ID]
        return sorted(self.accounts)

    def account_extra(self, account_id: str, key: str) -> str | None:
        """Read an extra string field from an account, falling back to the channel."""
        account = self.accounts.get(account_id)
        value = (account.model_extra or {}).get(key) if account else None
        if not value:
            value = (self.model_extra or {}).get(key)
        return str(value) if value else None


class IMessageChannelConfig(ChannelConfig):
    pass


class SignalChannelConfig(ChannelConfig):
    pass


class SlackChannelConfig(ChannelConfig):
    pass


class TelegramChannelConfig(ChannelConfig):
    pass


class ChannelsConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    imessage: IMessageChannelConfig = Field(default_factory=IMessageChannelConfig)
    signal: SignalChannelConfig = Field(default_factory=SignalChannelConfig)
    slack: SlackChannelConfig = Field(default_factory=SlackChannelConfig)
    telegram: TelegramChannelConfig = Field(default_factory=TelegramChannelConfig)

    def get(self, channel: str) -> ChannelConfig:
        """Return a channel section by name. Raises ``ValueError`` if unknown."""
        if channel not in type(self).model_fields:
            raise ValueError(f"Unknown channel: {channel!r}")
        return getattr(self, channel)


# ════════════════════════════════════════════════════════════
# ROOT CONFIG (BaseSettings — env + .env support)
# ════════════════════════════════════════════════════════════


class Config(BaseSettings):
    """
    Root configuration.

    Priority: env vars > .env > YAML (init kwargs) > defaults
    (see ``settings_customise_sources``)

    Env override examples:
        CHANBOARD_CHANNELS__SIGNAL__DM_POLICY=open
        CHANBOARD_CHANNELS__SLACK__BOT_TOKEN=xoxb-...
    """

    model_config = SettingsConfigDict(
        env_prefix="CHANBOARD_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    channels: ChannelsConfig = Field(default_factory=ChannelsConfig)

    @property
    def channel_names(self) -> list[str]:
        return list(ChannelsConfig.model_fields)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # YAML arrives as init kwargs; env must still override it
        return env_settings, dotenv_settings, init_settings, file_secret_settings
