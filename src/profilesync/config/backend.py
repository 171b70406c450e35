"""Profile backend configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import env_positive_float, optional_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_API_BASE_URL: Final[str] = "http://localhost:7071"
USERS_ENDPOINT: Final[str] = "/api/users"
USERS_BY_EMAIL_ENDPOINT: Final[str] = "/api/users/by-email"

JSON_HEADERS: Final[dict[str, str]] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass(frozen=True)
class BackendConfig:
    """Holds the profile backend location and HTTP behaviour."""

    base_url: str
    resilience: ResilienceConfig

    @property
    def users_url(self) -> str:
        return f"{self.base_url}{USERS_ENDPOINT}"

    @property
    def users_by_email_url(self) -> str:
        return f"{self.base_url}{USERS_BY_EMAIL_ENDPOINT}"


def normalize_base_url(value: str | None) -> str:
    """Strip trailing slashes and a trailing ``/api`` segment from ``value``.

    Endpoint paths already start with ``/api`` so a base URL configured as
    ``http://host/api/`` must not produce ``/api/api/users``.
    """

    if not value or not value.strip():
        return DEFAULT_API_BASE_URL
    trimmed = value.strip().rstrip("/")
    if trimmed.endswith("/api"):
        trimmed = trimmed[: -len("/api")]
    return trimmed or DEFAULT_API_BASE_URL


def get_backend_config(*, resilience: ResilienceConfig | None = None) -> BackendConfig:
    base_url = normalize_base_url(optional_env_var("PROFILESYNC_API_BASE_URL"))
    return BackendConfig(
        base_url=base_url,
        resilience=resilience
        or ResilienceConfig(
            name="profile-backend",
            base_url=base_url,
            timeout_seconds=env_positive_float("PROFILESYNC_HTTP_TIMEOUT"),
            retry=RetryPolicy(),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers=JSON_HEADERS,
        ),
    )
