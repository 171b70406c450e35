"""Public interface for the profile backend adapter."""

from __future__ import annotations

from .client import ProfileApiClient
from .schema import CreateProfileRequest, ProfilePayload

__all__ = ["CreateProfileRequest", "ProfileApiClient", "ProfilePayload"]
