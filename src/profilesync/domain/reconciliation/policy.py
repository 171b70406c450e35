"""Provisioning policies run once a profile has been validated.

Both policies consume the same ``ValidatedProfile``; they differ only in
whether the backend is consulted before creating.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from .contracts import ExistenceStatus, ReconciliationStatus

if TYPE_CHECKING:
    from profilesync.domain.ports import ProfileExistenceChecker, ProfileProvisioner
    from profilesync.domain.profile import ValidatedProfile

    from .contracts import PolicyOutcome, ProvisionResult

log = getLogger(__name__)


class ProvisioningPolicy(Protocol):
    async def __call__(self, profile: ValidatedProfile) -> PolicyOutcome: ...


async def _create(provisioner: ProfileProvisioner, profile: ValidatedProfile) -> ProvisionResult:
    result = await provisioner.create(profile)
    if result.ok:
        log.info("Created profile for %s", profile.email)
    else:
        log.warning("Profile for %s was not created: %s", profile.email, result.status)
    return result


@dataclass(slots=True)
class UnconditionalCreatePolicy:
    """Send the validated profile straight to the provisioner."""

    provisioner: ProfileProvisioner

    async def __call__(self, profile: ValidatedProfile) -> PolicyOutcome:
        result = await _create(self.provisioner, profile)
        status = ReconciliationStatus.CREATED if result.ok else ReconciliationStatus.CREATE_FAILED
        return status, None, result


@dataclass(slots=True)
class CheckThenCreatePolicy:
    """Look the profile up by email first.

    A found record means the account is already provisioned. Lookup transport
    failures are folded into "not found" unless
    ``treat_check_errors_as_missing`` is disabled, in which case the attempt
    ends with ``CHECK_FAILED``. With ``create_missing`` the policy goes on to
    create the profile when no record exists; otherwise it only reports
    ``NO_RECORD`` to the caller.
    """

    checker: ProfileExistenceChecker
    provisioner: ProfileProvisioner | None = None
    create_missing: bool = False
    treat_check_errors_as_missing: bool = True

    def __post_init__(self) -> None:
        if self.create_missing and self.provisioner is None:
            raise ValueError("create_missing requires a provisioner")

    async def __call__(self, profile: ValidatedProfile) -> PolicyOutcome:
        existence = await self.checker.check_exists(profile.email)

        if existence.status is ExistenceStatus.FOUND:
            log.info("Profile for %s already exists", profile.email)
            return ReconciliationStatus.ALREADY_PROVISIONED, existence, None

        if existence.status is ExistenceStatus.TRANSPORT_ERROR:
            if not self.treat_check_errors_as_missing:
                log.warning("Existence check for %s failed: %s", profile.email, existence.error)
                return ReconciliationStatus.CHECK_FAILED, existence, None
            log.warning(
                "Existence check for %s failed (%s); treating as no record",
                profile.email,
                existence.error,
            )

        if not self.create_missing or self.provisioner is None:
            log.info("No profile recorded for %s yet", profile.email)
            return ReconciliationStatus.NO_RECORD, existence, None

        result = await _create(self.provisioner, profile)
        status = ReconciliationStatus.CREATED if result.ok else ReconciliationStatus.CREATE_FAILED
        return status, existence, result
