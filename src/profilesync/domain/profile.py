"""Profile values flowing from an authenticated account to the backend.

``Account`` is the read-only view of what the identity provider handed back.
``ProfileDraft`` is built fresh for each reconciliation attempt and may have
any field empty. ``ValidatedProfile`` is the only shape allowed to reach the
backend; its constructor enforces that every field the backend requires is
non-empty.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


def _empty_claims() -> Mapping[str, object]:
    return MappingProxyType({})


@dataclass(slots=True, frozen=True, kw_only=True)
class Account:
    """An authenticated account as reported by the identity provider."""

    local_account_id: str = ""
    home_account_id: str = ""
    username: str = ""
    name: str = ""
    display_name: str = ""
    claims: Mapping[str, object] = field(default_factory=_empty_claims)


@dataclass(slots=True, frozen=True, kw_only=True)
class ProfileDraft:
    id: str = ""
    email: str = ""
    display_name: str = ""
    first_name: str = ""
    last_name: str = ""
    username: str = ""

    @property
    def missing_names(self) -> bool:
        return not (self.first_name and self.last_name and self.display_name)


@dataclass(slots=True, frozen=True, kw_only=True)
class ValidatedProfile:
    email: str
    first_name: str
    last_name: str
    display_name: str

    def __post_init__(self) -> None:
        empty = [
            name
            for name in ("email", "first_name", "last_name", "display_name")
            if not getattr(self, name)
        ]
        if empty:
            raise ValueError(f"Validated profile requires non-empty fields: {', '.join(empty)}")


@dataclass(slots=True, frozen=True, kw_only=True)
class ProfileRecord:
    """A profile as persisted by the backend, keyed by email."""

    email: str
    id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    display_name: str | None = None
    raw: Mapping[str, object] = field(default_factory=_empty_claims)
