"""Translate identity-provider account payloads into domain accounts."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import cast

from pydantic import ValidationError

from profilesync.domain.profile import Account

from .schema import AccountPayload


def parse_account_model(payload: AccountPayload) -> Account:
    return Account(
        local_account_id=payload.local_account_id,
        home_account_id=payload.home_account_id,
        username=payload.username,
        name=payload.name,
        display_name=payload.display_name,
        claims=MappingProxyType(dict(payload.id_token_claims)),
    )


def parse_account(payload: Mapping[str, object] | AccountPayload) -> Account:
    """Parse one account payload; raises ``ValueError`` if it is not an account object."""

    if isinstance(payload, AccountPayload):
        return parse_account_model(payload)
    try:
        model = AccountPayload.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Invalid account payload: {exc}") from exc
    return parse_account_model(model)


def parse_accounts(payload: object) -> list[Account]:
    """Parse a notification body: a list of accounts or a single account object."""

    if isinstance(payload, Mapping):
        return [parse_account(cast(Mapping[str, object], payload))]
    if isinstance(payload, list):
        items = cast(list[object], payload)
        return [parse_account(cast(Mapping[str, object], item)) for item in items]
    raise ValueError("Accounts payload must be a JSON object or list")
