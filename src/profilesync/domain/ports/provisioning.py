"""Ports for the profile backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from profilesync.domain.profile import ValidatedProfile
    from profilesync.domain.reconciliation.contracts import ExistenceResult, ProvisionResult


@runtime_checkable
class ProfileExistenceChecker(Protocol):
    """Ask the backend whether a profile exists for an email address."""

    async def check_exists(self, email: str) -> ExistenceResult: ...


@runtime_checkable
class ProfileProvisioner(Protocol):
    """Create a profile in the backend."""

    async def create(self, profile: ValidatedProfile) -> ProvisionResult: ...


@runtime_checkable
class ProfileBackend(ProfileExistenceChecker, ProfileProvisioner, Protocol):
    """A backend offering both profile operations."""


__all__ = ["ProfileBackend", "ProfileExistenceChecker", "ProfileProvisioner"]
