"""Name repair for profile drafts.

Two stages run in order:

1. ``resolve_name_fallback`` fills missing first/last names from a multi-word
   display name. It only fills empty fields.
2. ``complete_profile`` synthesizes whatever is still missing from the email
   address and fixed placeholders, producing a ``ValidatedProfile``.
"""

from __future__ import annotations

from dataclasses import replace
from enum import StrEnum
from typing import TYPE_CHECKING, Final

from profilesync.domain.profile import ValidatedProfile

if TYPE_CHECKING:
    from profilesync.domain.profile import ProfileDraft

PLACEHOLDER_NAME: Final[str] = "User"


class MissingEmailError(ValueError):
    """Raised when a draft carries no email; the backend keys profiles by email."""

    def __init__(self, draft: ProfileDraft) -> None:
        super().__init__("Profile draft has no email address")
        self.draft = draft


class SingleTokenNamePolicy(StrEnum):
    """What a one-word display name contributes to the name fallback."""

    IGNORE = "ignore"
    FIRST_NAME = "first-name"


def resolve_name_fallback(
    draft: ProfileDraft,
    *,
    single_token: SingleTokenNamePolicy = SingleTokenNamePolicy.IGNORE,
) -> ProfileDraft:
    if draft.first_name and draft.last_name:
        return draft
    tokens = draft.display_name.split()
    if len(tokens) >= 2:
        return replace(
            draft,
            first_name=draft.first_name or tokens[0],
            last_name=draft.last_name or " ".join(tokens[1:]),
        )
    if len(tokens) == 1 and single_token is SingleTokenNamePolicy.FIRST_NAME:
        return replace(draft, first_name=draft.first_name or tokens[0])
    return draft


def email_local_part(email: str) -> str:
    return email.split("@", 1)[0]


def complete_profile(draft: ProfileDraft) -> ValidatedProfile:
    """Return a ``ValidatedProfile`` for ``draft``, synthesizing missing names.

    Raises ``MissingEmailError`` if the draft has no email.
    """

    if not draft.email:
        raise MissingEmailError(draft)

    first_name = draft.first_name or email_local_part(draft.email) or PLACEHOLDER_NAME
    last_name = draft.last_name or PLACEHOLDER_NAME
    display_name = draft.display_name or f"{first_name} {last_name}"
    return ValidatedProfile(
        email=draft.email,
        first_name=first_name,
        last_name=last_name,
        display_name=display_name,
    )
