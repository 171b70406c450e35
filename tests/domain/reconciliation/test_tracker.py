from __future__ import annotations

from profilesync.domain.profile import Account
from profilesync.domain.reconciliation import ProcessedIdentityTracker, identity_key


def test_identity_key_prefers_local_then_home_then_username() -> None:
    assert identity_key(Account(local_account_id="l", home_account_id="h", username="u")) == "l"
    assert identity_key(Account(home_account_id="h", username="u")) == "h"
    assert identity_key(Account(username="u")) == "u"
    assert identity_key(Account()) == ""


def test_tracker_marks_and_clears() -> None:
    tracker = ProcessedIdentityTracker()

    tracker.mark("one")
    tracker.mark("one")
    tracker.mark("two")

    assert "one" in tracker
    assert len(tracker) == 2
    assert set(tracker) == {"one", "two"}

    tracker.clear()

    assert "one" not in tracker
    assert len(tracker) == 0
