"""Domain port definitions for adapters."""

from __future__ import annotations

from .provisioning import ProfileBackend, ProfileExistenceChecker, ProfileProvisioner

__all__ = ["ProfileBackend", "ProfileExistenceChecker", "ProfileProvisioner"]
