"""Channel onboarding — allowlist wizard, account selection and config patchers."""

from chanboard.onboarding.accounts import (
    prompt_account_id,
    resolve_account_id_for_configure,
    resolve_onboarding_account_id,
)
from chanboard.onboarding.channels import configure_allow_from, get_channel_onboarding
from chanboard.onboarding.entries import (
    add_wildcard_allow_from,
    merge_allow_from_entries,
    normalize_allow_from_entries,
    split_onboarding_entries,
)
from chanboard.onboarding.patch import (
    set_account_allow_from_for_channel,
    set_channel_dm_policy_with_allow_from,
)
from chanboard.onboarding.resolution import prompt_resolved_allow_from

__all__ = [
    "add_wildcard_allow_from",
    "configure_allow_from",
    "get_channel_onboarding",
    "merge_allow_from_entries",
    "normalize_allow_from_entries",
    "prompt_account_id",
    "prompt_resolved_allow_from",
    "resolve_account_id_for_configure",
    "resolve_onboarding_account_id",
    "set_account_allow_from_for_channel",
    "set_channel_dm_policy_with_allow_from",
    "split_onboarding_entries",
]
