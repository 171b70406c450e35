"""Claim extraction for authenticated accounts.

Identity providers surface the same attribute under different names
depending on whether a standard OIDC claim, a provider-specific user-flow
attribute, or an account-level property is present. Extraction walks an
ordered alias table per profile field and takes the first non-empty value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final, Literal

from profilesync.domain.profile import ProfileDraft

if TYPE_CHECKING:
    from profilesync.domain.profile import Account


class ProfileField(StrEnum):
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    DISPLAY_NAME = "display_name"


@dataclass(slots=True, frozen=True)
class ClaimAlias:
    """One place a profile field may be found.

    ``source="claims"`` looks ``key`` up in the account's claim mapping,
    ``source="account"`` reads the attribute of the same name on ``Account``.
    """

    key: str
    source: Literal["claims", "account"] = "claims"

    def lookup(self, account: Account) -> str:
        if self.source == "account":
            value: object = getattr(account, self.key, None)
        else:
            value = account.claims.get(self.key)
        if isinstance(value, str) and value.strip():
            return value
        return ""


CLAIM_ALIASES: Final[dict[ProfileField, tuple[ClaimAlias, ...]]] = {
    ProfileField.FIRST_NAME: (
        ClaimAlias("given_name"),
        ClaimAlias("firstName"),
        ClaimAlias("given-name"),
        ClaimAlias("givenName"),
    ),
    ProfileField.LAST_NAME: (
        ClaimAlias("family_name"),
        ClaimAlias("lastName"),
        ClaimAlias("family-name"),
        ClaimAlias("familyName"),
        ClaimAlias("surname"),
    ),
    ProfileField.DISPLAY_NAME: (
        ClaimAlias("name"),
        ClaimAlias("displayName"),
        ClaimAlias("display_name"),
        ClaimAlias("name", source="account"),
        ClaimAlias("display_name", source="account"),
    ),
}


def lookup_field(account: Account, profile_field: ProfileField) -> str:
    """Return the first non-empty value among the aliases for ``profile_field``."""

    for alias in CLAIM_ALIASES[profile_field]:
        value = alias.lookup(account)
        if value:
            return value
    return ""


def extract_profile_draft(account: Account) -> ProfileDraft:
    """Map ``account`` to a profile draft. Never raises; missing values are empty."""

    username = account.username.strip() if account.username else ""
    return ProfileDraft(
        id=account.local_account_id or account.home_account_id or "",
        email=username,
        display_name=lookup_field(account, ProfileField.DISPLAY_NAME),
        first_name=lookup_field(account, ProfileField.FIRST_NAME),
        last_name=lookup_field(account, ProfileField.LAST_NAME),
        username=username,
    )
