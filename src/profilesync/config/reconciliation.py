"""Reconciliation behaviour configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from profilesync.domain.reconciliation.names import SingleTokenNamePolicy

from .env import env_flag, optional_env_var
from .errors import InvalidConfigurationError


class ProvisioningMode(StrEnum):
    """Which provisioning path runs after a profile has been validated."""

    CREATE = "create"
    CHECK = "check"


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    mode: ProvisioningMode = ProvisioningMode.CREATE
    create_missing: bool = False
    single_token_names: SingleTokenNamePolicy = SingleTokenNamePolicy.IGNORE


def _parse_choice[E: StrEnum](name: str, enum_type: type[E], default: E) -> E:
    value = optional_env_var(name)
    if value is None:
        return default
    try:
        return enum_type(value.lower())
    except ValueError:
        choices = ", ".join(member.value for member in enum_type)
        raise InvalidConfigurationError(name, value, expected=f"one of: {choices}") from None


def get_reconciliation_config() -> ReconciliationConfig:
    return ReconciliationConfig(
        mode=_parse_choice(
            "PROFILESYNC_PROVISIONING_POLICY", ProvisioningMode, ProvisioningMode.CREATE
        ),
        create_missing=env_flag("PROFILESYNC_CREATE_MISSING"),
        single_token_names=_parse_choice(
            "PROFILESYNC_SINGLE_TOKEN_NAMES",
            SingleTokenNamePolicy,
            SingleTokenNamePolicy.IGNORE,
        ),
    )
