"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from profilesync.adapters.profile_api import ProfileApiClient
from profilesync.config import ProvisioningMode, ReconciliationConfig, get_reconciliation_config
from profilesync.domain.reconciliation import (
    CheckThenCreatePolicy,
    ReconciliationController,
    UnconditionalCreatePolicy,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from profilesync.domain.ports import ProfileBackend, ProfileExistenceChecker
    from profilesync.domain.profile import Account
    from profilesync.domain.reconciliation import (
        ExistenceResult,
        ProvisioningPolicy,
        ReconciliationOutcome,
    )

log = getLogger(__name__)


def build_policy(config: ReconciliationConfig, backend: ProfileBackend) -> ProvisioningPolicy:
    if config.mode is ProvisioningMode.CHECK:
        return CheckThenCreatePolicy(
            checker=backend,
            provisioner=backend,
            create_missing=config.create_missing,
        )
    return UnconditionalCreatePolicy(provisioner=backend)


def build_controller(
    *,
    config: ReconciliationConfig | None = None,
    backend: ProfileBackend | None = None,
) -> ReconciliationController:
    """Wire a controller from configuration and the HTTP backend adapter."""

    effective_config = config or get_reconciliation_config()
    effective_backend = backend or ProfileApiClient()
    log.debug(
        "Building reconciliation controller: mode=%s, create_missing=%s, single_token_names=%s",
        effective_config.mode,
        effective_config.create_missing,
        effective_config.single_token_names,
    )
    return ReconciliationController(
        policy=build_policy(effective_config, effective_backend),
        single_token_names=effective_config.single_token_names,
    )


def reconcile_accounts(
    accounts: Sequence[Account],
    *,
    controller: ReconciliationController | None = None,
    in_progress: bool = False,
) -> ReconciliationOutcome:
    """Feed one authentication-state notification to ``controller`` and wait for it."""

    effective_controller = controller or build_controller()
    log.info("Reconciling %s authenticated account(s)", len(accounts))
    outcome = asyncio.run(
        effective_controller.on_accounts_changed(accounts, in_progress=in_progress)
    )
    log.info(f"Finished reconciliation: status={outcome.status}, identity={outcome.identity_key}")
    return outcome


def lookup_profile(
    email: str,
    *,
    backend: ProfileExistenceChecker | None = None,
) -> ExistenceResult:
    effective_backend = backend or ProfileApiClient()
    return asyncio.run(effective_backend.check_exists(email))
