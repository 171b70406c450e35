"""Result types exchanged between the controller, policies and backend ports.

Backend ports never raise for expected failures. They return one of these
results and leave user-visible behaviour to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from profilesync.domain.profile import ProfileDraft, ProfileRecord, ValidatedProfile


class ExistenceStatus(StrEnum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"


@dataclass(slots=True, frozen=True, kw_only=True)
class ExistenceResult:
    status: ExistenceStatus
    record: ProfileRecord | None = None
    error: str | None = None

    @classmethod
    def found(cls, record: ProfileRecord) -> ExistenceResult:
        return cls(status=ExistenceStatus.FOUND, record=record)

    @classmethod
    def not_found(cls) -> ExistenceResult:
        return cls(status=ExistenceStatus.NOT_FOUND)

    @classmethod
    def transport_error(cls, error: str) -> ExistenceResult:
        return cls(status=ExistenceStatus.TRANSPORT_ERROR, error=error)


class ProvisionStatus(StrEnum):
    CREATED = "created"
    REJECTED = "rejected"
    TRANSPORT_ERROR = "transport_error"
    INVALID_RESPONSE = "invalid_response"


@dataclass(slots=True, frozen=True, kw_only=True)
class ProvisionResult:
    status: ProvisionStatus
    record: ProfileRecord | None = None
    status_code: int | None = None
    body: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is ProvisionStatus.CREATED

    @classmethod
    def created(cls, record: ProfileRecord) -> ProvisionResult:
        return cls(status=ProvisionStatus.CREATED, record=record)

    @classmethod
    def rejected(cls, status_code: int, body: str) -> ProvisionResult:
        return cls(status=ProvisionStatus.REJECTED, status_code=status_code, body=body)

    @classmethod
    def transport_error(cls, error: str) -> ProvisionResult:
        return cls(status=ProvisionStatus.TRANSPORT_ERROR, error=error)

    @classmethod
    def invalid_response(cls, status_code: int, body: str) -> ProvisionResult:
        return cls(status=ProvisionStatus.INVALID_RESPONSE, status_code=status_code, body=body)


class ReconciliationStatus(StrEnum):
    """Outcome of one authentication-state notification."""

    SIGNED_OUT = "signed_out"
    DEFERRED = "deferred"
    SKIPPED = "skipped"
    MISSING_EMAIL = "missing_email"
    CREATED = "created"
    CREATE_FAILED = "create_failed"
    ALREADY_PROVISIONED = "already_provisioned"
    NO_RECORD = "no_record"
    CHECK_FAILED = "check_failed"


@dataclass(slots=True, frozen=True, kw_only=True)
class ReconciliationOutcome:
    status: ReconciliationStatus
    identity_key: str | None = None
    draft: ProfileDraft | None = None
    profile: ValidatedProfile | None = None
    existence: ExistenceResult | None = None
    provision: ProvisionResult | None = None

    @property
    def should_enter_authenticated_area(self) -> bool:
        return self.status is ReconciliationStatus.ALREADY_PROVISIONED

    @property
    def record(self) -> ProfileRecord | None:
        if self.provision is not None and self.provision.record is not None:
            return self.provision.record
        if self.existence is not None:
            return self.existence.record
        return None


type PolicyOutcome = tuple[ReconciliationStatus, ExistenceResult | None, ProvisionResult | None]
