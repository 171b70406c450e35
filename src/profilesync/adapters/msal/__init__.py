"""Public interface for the MSAL account adapter."""

from __future__ import annotations

from .schema import AccountPayload
from .translator import parse_account, parse_account_model, parse_accounts

__all__ = ["AccountPayload", "parse_account", "parse_account_model", "parse_accounts"]
