"""Reusable fakes for profile backend ports."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from profilesync.domain.profile import Account, ProfileRecord
from profilesync.domain.reconciliation import ExistenceResult, ProvisionResult

if TYPE_CHECKING:
    from collections.abc import Mapping

    from profilesync.domain.profile import ValidatedProfile


def make_account(
    *,
    username: str = "a@b.com",
    local_account_id: str = "local-1",
    home_account_id: str = "home-1",
    name: str = "",
    claims: Mapping[str, object] | None = None,
) -> Account:
    return Account(
        local_account_id=local_account_id,
        home_account_id=home_account_id,
        username=username,
        name=name,
        claims=dict(claims or {}),
    )


@dataclass
class FakeProfileBackend:
    """In-memory backend recording every call it receives."""

    existing: dict[str, ProfileRecord] = field(default_factory=dict[str, ProfileRecord])
    check_result: ExistenceResult | None = None
    create_result: ProvisionResult | None = None
    release: asyncio.Event | None = None
    checked: list[str] = field(default_factory=list[str])
    created: list[ValidatedProfile] = field(default_factory=list["ValidatedProfile"])

    async def check_exists(self, email: str) -> ExistenceResult:
        self.checked.append(email)
        if self.check_result is not None:
            return self.check_result
        record = self.existing.get(email.casefold())
        if record is None:
            return ExistenceResult.not_found()
        return ExistenceResult.found(record)

    async def create(self, profile: ValidatedProfile) -> ProvisionResult:
        self.created.append(profile)
        if self.release is not None:
            await self.release.wait()
        if self.create_result is not None:
            return self.create_result
        record = ProfileRecord(
            email=profile.email,
            id=f"user-{len(self.created)}",
            first_name=profile.first_name,
            last_name=profile.last_name,
            display_name=profile.display_name,
        )
        self.existing[profile.email.casefold()] = record
        return ProvisionResult.created(record)
