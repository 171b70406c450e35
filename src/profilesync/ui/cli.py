from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from profilesync.adapters.msal import parse_accounts
from profilesync.app import build_controller, lookup_profile, reconcile_accounts
from profilesync.config import (
    ProvisioningMode,
    configure_logging,
    get_reconciliation_config,
)
from profilesync.domain.reconciliation import ExistenceStatus, ReconciliationStatus

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from profilesync.domain.profile import Account

log = logging.getLogger(__name__)

EXIT_MISSING_EMAIL = 3


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile identity-provider accounts into profiles"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser(
        "reconcile",
        help="Provision a profile for the first account in an accounts notification",
    )
    reconcile.add_argument(
        "accounts",
        type=str,
        help="Path to a JSON file with a list of accounts (or one account); '-' reads stdin",
    )
    reconcile.add_argument(
        "--policy",
        choices=[mode.value for mode in ProvisioningMode],
        help="Provisioning policy (defaults to config)",
    )
    reconcile.add_argument(
        "--create-missing",
        action="store_true",
        default=None,
        help="With the check policy, create the profile when none exists",
    )

    lookup = subparsers.add_parser("lookup", help="Check whether a profile exists for an email")
    lookup.add_argument("email", type=str, help="Email address to look up")

    return parser.parse_args(list(argv))


def _load_accounts(source: str) -> list[Account]:
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Cannot read accounts from {source}: {exc}") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Accounts file is not valid JSON: {exc}") from exc
    return parse_accounts(payload)


def _run_reconcile(args: argparse.Namespace, accounts: list[Account]) -> int:
    config = get_reconciliation_config()
    if args.policy is not None:
        config = replace(config, mode=ProvisioningMode(args.policy))
    if args.create_missing is not None:
        config = replace(config, create_missing=args.create_missing)

    outcome = reconcile_accounts(accounts, controller=build_controller(config=config))
    if outcome.status is ReconciliationStatus.MISSING_EMAIL:
        return EXIT_MISSING_EMAIL
    if outcome.status is ReconciliationStatus.ALREADY_PROVISIONED:
        log.info("Profile already provisioned; continue to the authenticated area")
    elif outcome.status is ReconciliationStatus.NO_RECORD:
        log.info("No profile recorded yet for %s", outcome.profile.email if outcome.profile else "")
    return 0


def _run_lookup(args: argparse.Namespace) -> int:
    result = lookup_profile(args.email)
    if result.status is ExistenceStatus.FOUND and result.record is not None:
        log.info("Profile found for %s (id=%s)", result.record.email, result.record.id)
    elif result.status is ExistenceStatus.TRANSPORT_ERROR:
        log.warning("Could not reach the profile backend: %s", result.error)
    else:
        log.info("No profile found for %s", args.email)
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    accounts: list[Account] = []
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "reconcile":
            accounts = _load_accounts(parsed_args.accounts)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "reconcile":
            code = _run_reconcile(parsed_args, accounts)
        elif parsed_args.command == "lookup":
            code = _run_lookup(parsed_args)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)

    if code:
        sys.exit(code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
