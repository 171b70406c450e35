"""Pydantic models describing the profile backend payloads."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

from profilesync.domain.profile import ProfileRecord

if TYPE_CHECKING:
    from profilesync.domain.profile import ValidatedProfile


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _id_to_str(value: object) -> object:
    if isinstance(value, int):
        return str(value)
    return _blank_to_none(value)


class ProfileApiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CreateProfileRequest(ProfileApiBaseModel):
    email: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    display_name: str = Field(alias="displayName")

    @classmethod
    def from_profile(cls, profile: ValidatedProfile) -> CreateProfileRequest:
        return cls(
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            display_name=profile.display_name,
        )

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class ProfilePayload(ProfileApiBaseModel):
    email: str
    id: str | None = None
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    display_name: str | None = Field(default=None, alias="displayName")

    _normalize_id = field_validator("id", mode="before")(_id_to_str)
    _normalize_names = field_validator(
        "first_name", "last_name", "display_name", mode="before"
    )(_blank_to_none)

    def to_record(self, raw: dict[str, object]) -> ProfileRecord:
        return ProfileRecord(
            email=self.email,
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            display_name=self.display_name,
            raw=MappingProxyType(raw),
        )
