"""Per-session record of identities whose provisioning has been started."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from profilesync.domain.profile import Account


def identity_key(account: Account) -> str:
    """Stable key for ``account``: local id, then home id, then username."""

    return account.local_account_id or account.home_account_id or account.username


@dataclass(slots=True)
class ProcessedIdentityTracker:
    """Set of identity keys for which a provisioning attempt was initiated.

    Keys are never removed on failure; the whole set is cleared on sign-out.
    """

    _keys: set[str] = field(default_factory=set[str])

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def mark(self, key: str) -> None:
        self._keys.add(key)

    def clear(self) -> None:
        self._keys.clear()
