"""Pydantic models describing identity-provider account payloads.

The shape follows MSAL's ``AccountInfo`` JSON: camelCase keys, an optional
``idTokenClaims`` bag whose contents vary per tenant and user flow.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _none_to_blank(value: object) -> object:
    if value is None:
        return ""
    return value


def _none_to_empty_mapping(value: object) -> object:
    if value is None:
        return {}
    return value


class MsalBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AccountPayload(MsalBaseModel):
    home_account_id: str = Field(default="", alias="homeAccountId")
    local_account_id: str = Field(default="", alias="localAccountId")
    environment: str = ""
    tenant_id: str = Field(default="", alias="tenantId")
    username: str = ""
    name: str = ""
    display_name: str = Field(default="", alias="displayName")
    id_token_claims: dict[str, Any] = Field(default_factory=dict, alias="idTokenClaims")

    _normalize_strings = field_validator(
        "home_account_id",
        "local_account_id",
        "environment",
        "tenant_id",
        "username",
        "name",
        "display_name",
        mode="before",
    )(_none_to_blank)
    _normalize_claims = field_validator("id_token_claims", mode="before")(_none_to_empty_mapping)
