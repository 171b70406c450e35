"""HTTP client for the profile backend."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final, cast

import httpx
from pydantic import ValidationError

from profilesync.adapters.http_resilience import ResilienceConfig, ResilientClient, build_limiter
from profilesync.config.backend import BackendConfig, get_backend_config
from profilesync.domain.ports import ProfileExistenceChecker, ProfileProvisioner
from profilesync.domain.profile import ProfileRecord
from profilesync.domain.reconciliation.contracts import ExistenceResult, ProvisionResult

from .schema import CreateProfileRequest, ProfilePayload

if TYPE_CHECKING:
    from collections.abc import Callable

    from aiolimiter import AsyncLimiter

    from profilesync.domain.profile import ValidatedProfile

log = getLogger(__name__)

# JSON ``null`` decodes to None, so undecodable bodies need their own marker.
NOT_JSON: Final = object()


def _default_client_factory(
    config: ResilienceConfig, limiter: AsyncLimiter | None
) -> ResilientClient:
    return ResilientClient(config, limiter=limiter)


def _parse_json(text: str) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return NOT_JSON


def _select_record(payload: object, email: str) -> dict[str, object] | None:
    """Pick the profile object for ``email`` out of a lookup response.

    Accepts a single object or a list of objects; ``null``, an empty object
    or an empty list means no profile exists.
    """

    if isinstance(payload, dict):
        mapping = cast(dict[str, object], payload)
        return mapping or None
    if isinstance(payload, list):
        for item in cast(list[object], payload):
            if not isinstance(item, dict):
                continue
            candidate = cast(dict[str, object], item)
            candidate_email = candidate.get("email")
            if isinstance(candidate_email, str) and candidate_email.casefold() == email.casefold():
                return candidate
    return None


def _to_record(raw: dict[str, object], *, email: str) -> ProfileRecord:
    payload = ProfilePayload.model_validate({"email": email, **raw})
    return payload.to_record(raw)


def _log_rejected_create(
    response: httpx.Response,
    *,
    url: str,
    payload: dict[str, str],
) -> None:
    parsed = _parse_json(response.text)
    log.error(
        "Failed to create profile: status=%s (%s) url=%s\n"
        "response body: %s\n"
        "parsed error: %s\n"
        "request payload: %s",
        response.status_code,
        response.reason_phrase,
        url,
        response.text,
        parsed if parsed is not NOT_JSON else "<not JSON>",
        json.dumps(payload, indent=2),
    )


@dataclass(slots=True)
class ProfileApiClient:
    """Backend adapter implementing both the existence check and creation ports."""

    config: BackendConfig = field(default_factory=get_backend_config)
    client_factory: Callable[[ResilienceConfig, AsyncLimiter | None], ResilientClient] = field(
        default=_default_client_factory
    )
    _limiter: AsyncLimiter | None = field(init=False, repr=False)

    def __post_init__(self) -> None:
        # One budget for every request this client makes.
        self._limiter = build_limiter(self.config.resilience.ratelimit)

    async def check_exists(self, email: str) -> ExistenceResult:
        async with self.client_factory(self.config.resilience, self._limiter) as client:
            try:
                response = await client.get(
                    self.config.users_by_email_url,
                    params=httpx.QueryParams({"email": email}),
                )
            except httpx.HTTPError as exc:
                log.warning("Existence check for %s failed: %r", email, exc)
                return ExistenceResult.transport_error(repr(exc))

        if not response.is_success:
            log.info(
                "Existence check for %s returned %s; treating as not found",
                email,
                response.status_code,
            )
            return ExistenceResult.not_found()
        if not response.text.strip():
            return ExistenceResult.not_found()

        payload = _parse_json(response.text)
        if payload is NOT_JSON:
            log.warning("Existence check for %s returned a non-JSON body", email)
            return ExistenceResult.transport_error("non-JSON response body")

        raw = _select_record(payload, email)
        if raw is None:
            return ExistenceResult.not_found()
        try:
            record = _to_record(raw, email=email)
        except ValidationError as exc:
            log.warning("Existence check for %s returned an unexpected payload: %s", email, exc)
            return ExistenceResult.transport_error("unexpected profile payload")
        return ExistenceResult.found(record)

    async def create(self, profile: ValidatedProfile) -> ProvisionResult:
        payload = CreateProfileRequest.from_profile(profile).to_payload()
        url = self.config.users_url

        async with self.client_factory(self.config.resilience, self._limiter) as client:
            try:
                response = await client.post(url, json=payload)
            except httpx.HTTPError as exc:
                log.exception(
                    "Error creating profile for %s at %s\nrequest payload: %s",
                    profile.email,
                    url,
                    json.dumps(payload, indent=2),
                )
                return ProvisionResult.transport_error(repr(exc))

        if not response.is_success:
            _log_rejected_create(response, url=url, payload=payload)
            return ProvisionResult.rejected(response.status_code, response.text)

        body = _parse_json(response.text)
        if body is NOT_JSON:
            log.error(
                "Profile created for %s but response was not JSON: status=%s body=%r",
                profile.email,
                response.status_code,
                response.text,
            )
            return ProvisionResult.invalid_response(response.status_code, response.text)

        raw = cast(dict[str, object], body) if isinstance(body, dict) else {}
        try:
            record = _to_record(raw, email=profile.email)
        except ValidationError:
            log.exception("Profile created for %s but response was malformed", profile.email)
            return ProvisionResult.invalid_response(response.status_code, response.text)
        log.debug("Profile saved: %s", raw)
        return ProvisionResult.created(record)


if TYPE_CHECKING:
    _checker_check: ProfileExistenceChecker = ProfileApiClient()
    _provisioner_check: ProfileProvisioner = ProfileApiClient()

__all__ = ["ProfileApiClient"]
