"""Reconcile authenticated accounts into backend profiles.

The controller is driven by "authenticated accounts changed" notifications.
Each notification runs extract -> fallback -> validate -> dedupe -> provision
for the first account. The identity is marked as processed before the first
network call is awaited, so a second notification for the same identity that
arrives while the first attempt is still in flight is a no-op.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .claims import extract_profile_draft
from .contracts import ReconciliationOutcome, ReconciliationStatus
from .names import MissingEmailError, SingleTokenNamePolicy, complete_profile, resolve_name_fallback
from .tracker import ProcessedIdentityTracker, identity_key

if TYPE_CHECKING:
    from collections.abc import Sequence

    from profilesync.domain.profile import Account

    from .policy import ProvisioningPolicy

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationController:
    policy: ProvisioningPolicy
    single_token_names: SingleTokenNamePolicy = SingleTokenNamePolicy.IGNORE
    tracker: ProcessedIdentityTracker = field(default_factory=ProcessedIdentityTracker)
    _pending: set[asyncio.Task[ReconciliationOutcome]] = field(
        default_factory=set, init=False, repr=False
    )

    @property
    def has_processed(self) -> bool:
        return len(self.tracker) > 0

    async def on_accounts_changed(
        self,
        accounts: Sequence[Account],
        *,
        in_progress: bool = False,
    ) -> ReconciliationOutcome:
        """Handle one notification carrying the currently authenticated accounts.

        ``in_progress`` signals that the identity provider is still starting up
        or completing a redirect; the notification is deferred untouched.
        """

        if in_progress:
            log.debug("Identity provider interaction in progress; deferring")
            return ReconciliationOutcome(status=ReconciliationStatus.DEFERRED)

        if not accounts:
            if self.has_processed:
                log.info("No authenticated accounts; clearing processed identities")
            self.tracker.clear()
            return ReconciliationOutcome(status=ReconciliationStatus.SIGNED_OUT)

        account = accounts[0]
        key = identity_key(account)
        if key in self.tracker:
            log.debug("Identity %s already processed; skipping", key)
            return ReconciliationOutcome(status=ReconciliationStatus.SKIPPED, identity_key=key)

        draft = resolve_name_fallback(
            extract_profile_draft(account),
            single_token=self.single_token_names,
        )
        try:
            profile = complete_profile(draft)
        except MissingEmailError:
            log.error(
                "Account %s has no email; cannot provision (claims present: %s)",
                key or "<unknown>",
                sorted(account.claims),
            )
            return ReconciliationOutcome(
                status=ReconciliationStatus.MISSING_EMAIL,
                identity_key=key,
                draft=draft,
            )

        if draft.missing_names:
            log.warning(
                "Synthesized names for %s: first=%r last=%r display=%r",
                profile.email,
                profile.first_name,
                profile.last_name,
                profile.display_name,
            )

        # Must happen before the first await below.
        self.tracker.mark(key)
        log.info("Provisioning profile for identity %s", key)

        status, existence, provision = await self.policy(profile)
        return ReconciliationOutcome(
            status=status,
            identity_key=key,
            draft=draft,
            profile=profile,
            existence=existence,
            provision=provision,
        )

    def schedule(
        self,
        accounts: Sequence[Account],
        *,
        in_progress: bool = False,
    ) -> asyncio.Task[ReconciliationOutcome]:
        """Run ``on_accounts_changed`` in the background on the running loop."""

        task = asyncio.get_running_loop().create_task(
            self.on_accounts_changed(accounts, in_progress=in_progress)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task
