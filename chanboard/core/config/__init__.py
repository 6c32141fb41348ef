"""Configuration module."""

from chanboard.core.config.loader import dump_config, load_config
from chanboard.core.config.schema import (
    AccountConfig,
    ChannelConfig,
    ChannelsConfig,
    Config,
    DmPolicy,
)

__all__ = [
    "AccountConfig",
    "ChannelConfig",
    "ChannelsConfig",
    "Config",
    "DmPolicy",
    "dump_config",
    "load_config",
]
