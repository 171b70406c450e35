from __future__ import annotations

import asyncio

from profilesync.domain.profile import Account, ValidatedProfile
from profilesync.domain.reconciliation import (
    CheckThenCreatePolicy,
    ExistenceResult,
    ProvisionResult,
    ReconciliationController,
    ReconciliationOutcome,
    ReconciliationStatus,
    SingleTokenNamePolicy,
    UnconditionalCreatePolicy,
)
from tests.support.backend import FakeProfileBackend, make_account


def _controller(backend: FakeProfileBackend) -> ReconciliationController:
    return ReconciliationController(policy=UnconditionalCreatePolicy(backend))


def test_given_and_family_name_claims(backend: FakeProfileBackend) -> None:
    account = make_account(
        username="a@b.com", claims={"given_name": "Ann", "family_name": "Lee"}
    )

    outcome = asyncio.run(_controller(backend).on_accounts_changed([account]))

    assert outcome.status is ReconciliationStatus.CREATED
    assert backend.created == [
        ValidatedProfile(email="a@b.com", first_name="Ann", last_name="Lee", display_name="Ann Lee")
    ]


def test_names_recovered_from_display_name_claim(backend: FakeProfileBackend) -> None:
    account = make_account(username="c@d.com", claims={"name": "Sam Oak"})

    asyncio.run(_controller(backend).on_accounts_changed([account]))

    assert backend.created == [
        ValidatedProfile(email="c@d.com", first_name="Sam", last_name="Oak", display_name="Sam Oak")
    ]


def test_names_synthesized_from_email(backend: FakeProfileBackend) -> None:
    account = make_account(username="e@f.com", claims={})

    outcome = asyncio.run(_controller(backend).on_accounts_changed([account]))

    assert outcome.profile == ValidatedProfile(
        email="e@f.com", first_name="e", last_name="User", display_name="e User"
    )
    assert backend.created == [outcome.profile]


def test_missing_email_aborts_without_marking(backend: FakeProfileBackend) -> None:
    controller = _controller(backend)
    account = make_account(username="", claims={"given_name": "Ann"})

    outcome = asyncio.run(controller.on_accounts_changed([account]))

    assert outcome.status is ReconciliationStatus.MISSING_EMAIL
    assert outcome.identity_key == "local-1"
    assert "local-1" not in controller.tracker
    assert backend.created == []
    assert backend.checked == []


def test_missing_email_can_be_retried_after_claims_refresh(backend: FakeProfileBackend) -> None:
    controller = _controller(backend)
    asyncio.run(controller.on_accounts_changed([make_account(username="")]))

    outcome = asyncio.run(controller.on_accounts_changed([make_account(username="a@b.com")]))

    assert outcome.status is ReconciliationStatus.CREATED
    assert len(backend.created) == 1


def test_repeated_notification_is_idempotent(backend: FakeProfileBackend) -> None:
    controller = _controller(backend)
    accounts = [make_account()]

    first = asyncio.run(controller.on_accounts_changed(accounts))
    second = asyncio.run(controller.on_accounts_changed(accounts))

    assert first.status is ReconciliationStatus.CREATED
    assert second.status is ReconciliationStatus.SKIPPED
    assert len(backend.created) == 1


def test_failed_create_is_not_retried_within_session(backend: FakeProfileBackend) -> None:
    backend.create_result = ProvisionResult.transport_error("ConnectError")
    controller = _controller(backend)
    accounts = [make_account()]

    first = asyncio.run(controller.on_accounts_changed(accounts))
    second = asyncio.run(controller.on_accounts_changed(accounts))

    assert first.status is ReconciliationStatus.CREATE_FAILED
    assert second.status is ReconciliationStatus.SKIPPED
    assert len(backend.created) == 1


def test_concurrent_notifications_make_one_create_call(backend: FakeProfileBackend) -> None:
    controller = _controller(backend)
    accounts = [make_account()]

    async def scenario() -> list[ReconciliationOutcome]:
        backend.release = asyncio.Event()
        first = controller.schedule(accounts)
        second = controller.schedule(accounts)
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        backend.release.set()
        return list(await asyncio.gather(first, second))

    outcomes = asyncio.run(scenario())

    assert [outcome.status for outcome in outcomes] == [
        ReconciliationStatus.CREATED,
        ReconciliationStatus.SKIPPED,
    ]
    assert len(backend.created) == 1


def test_empty_account_list_clears_tracker(backend: FakeProfileBackend) -> None:
    controller = _controller(backend)
    accounts = [make_account()]
    asyncio.run(controller.on_accounts_changed(accounts))
    assert controller.has_processed

    signed_out = asyncio.run(controller.on_accounts_changed([]))
    again = asyncio.run(controller.on_accounts_changed(accounts))

    assert signed_out.status is ReconciliationStatus.SIGNED_OUT
    assert again.status is ReconciliationStatus.CREATED
    assert len(backend.created) == 2


def test_in_progress_notification_is_deferred(backend: FakeProfileBackend) -> None:
    controller = _controller(backend)

    outcome = asyncio.run(controller.on_accounts_changed([make_account()], in_progress=True))

    assert outcome.status is ReconciliationStatus.DEFERRED
    assert not controller.has_processed
    assert backend.created == []


def test_only_first_account_is_reconciled(backend: FakeProfileBackend) -> None:
    first = make_account(username="first@x.com", local_account_id="1")
    second = make_account(username="second@x.com", local_account_id="2")

    asyncio.run(_controller(backend).on_accounts_changed([first, second]))

    assert [profile.email for profile in backend.created] == ["first@x.com"]


def test_identity_key_falls_back_to_username(backend: FakeProfileBackend) -> None:
    controller = _controller(backend)
    account = Account(username="only@user.name")

    outcome = asyncio.run(controller.on_accounts_changed([account]))

    assert outcome.identity_key == "only@user.name"
    assert "only@user.name" in controller.tracker


def test_check_policy_network_error_takes_no_record_branch(backend: FakeProfileBackend) -> None:
    backend.check_result = ExistenceResult.transport_error("ConnectError")
    controller = ReconciliationController(policy=CheckThenCreatePolicy(checker=backend))

    outcome = asyncio.run(controller.on_accounts_changed([make_account()]))

    assert outcome.status is ReconciliationStatus.NO_RECORD
    assert not outcome.should_enter_authenticated_area
    assert backend.created == []


def test_check_policy_found_enters_authenticated_area(backend: FakeProfileBackend) -> None:
    controller = ReconciliationController(
        policy=CheckThenCreatePolicy(checker=backend, provisioner=backend, create_missing=True)
    )
    asyncio.run(controller.on_accounts_changed([make_account()]))
    asyncio.run(controller.on_accounts_changed([]))

    outcome = asyncio.run(controller.on_accounts_changed([make_account()]))

    assert outcome.should_enter_authenticated_area
    assert outcome.record is not None
    assert outcome.record.email == "a@b.com"
    assert len(backend.created) == 1


def test_single_token_policy_is_applied(backend: FakeProfileBackend) -> None:
    controller = ReconciliationController(
        policy=UnconditionalCreatePolicy(backend),
        single_token_names=SingleTokenNamePolicy.FIRST_NAME,
    )
    account = make_account(username="cher@x.com", claims={"name": "Cher"})

    outcome = asyncio.run(controller.on_accounts_changed([account]))

    assert outcome.profile == ValidatedProfile(
        email="cher@x.com", first_name="Cher", last_name="User", display_name="Cher"
    )


def test_every_validated_profile_has_all_fields(backend: FakeProfileBackend) -> None:
    claim_shapes: list[dict[str, object]] = [
        {},
        {"name": "Solo"},
        {"given_name": "Ann"},
        {"surname": "Lee"},
        {"displayName": "  "},
        {"given-name": "A", "familyName": "B", "display_name": "C D"},
    ]
    controller = _controller(backend)
    for index, claims in enumerate(claim_shapes):
        account = make_account(
            username=f"user{index}@x.com", local_account_id=str(index), claims=claims
        )
        asyncio.run(controller.on_accounts_changed([account]))

    assert len(backend.created) == len(claim_shapes)
    for profile in backend.created:
        assert profile.email
        assert profile.first_name
        assert profile.last_name
        assert profile.display_name
