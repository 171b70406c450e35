"""Identity-to-profile reconciliation.

Flow for each authentication-state notification:
1) extract a profile draft from the account's claims
2) repair missing names from the display name
3) synthesize remaining names and validate the email is present
4) skip identities already processed in this session
5) run the configured provisioning policy against the backend
"""

from __future__ import annotations

from .claims import CLAIM_ALIASES, ClaimAlias, ProfileField, extract_profile_draft
from .contracts import (
    ExistenceResult,
    ExistenceStatus,
    ProvisionResult,
    ProvisionStatus,
    ReconciliationOutcome,
    ReconciliationStatus,
)
from .controller import ReconciliationController
from .names import (
    PLACEHOLDER_NAME,
    MissingEmailError,
    SingleTokenNamePolicy,
    complete_profile,
    resolve_name_fallback,
)
from .policy import CheckThenCreatePolicy, ProvisioningPolicy, UnconditionalCreatePolicy
from .tracker import ProcessedIdentityTracker, identity_key

__all__ = [
    "CLAIM_ALIASES",
    "PLACEHOLDER_NAME",
    "CheckThenCreatePolicy",
    "ClaimAlias",
    "ExistenceResult",
    "ExistenceStatus",
    "MissingEmailError",
    "ProcessedIdentityTracker",
    "ProfileField",
    "ProvisionResult",
    "ProvisionStatus",
    "ProvisioningPolicy",
    "ReconciliationController",
    "ReconciliationOutcome",
    "ReconciliationStatus",
    "SingleTokenNamePolicy",
    "UnconditionalCreatePolicy",
    "complete_profile",
    "extract_profile_draft",
    "identity_key",
    "resolve_name_fallback",
]
