from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints, field_validator

from parceltrack.core.entities.parcel import RFC3339_FORMAT, ParcelStatus

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ParcelCreate(BaseModel):
    client: int
    address: NonBlankStr
    status: NonBlankStr = ParcelStatus.REGISTERED.value
    created_at: str | None = None

    @field_validator("created_at")
    @classmethod
    def _rfc3339_utc(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            datetime.strptime(value, RFC3339_FORMAT)
        except ValueError:
            raise ValueError(f"created_at must be an RFC 3339 UTC timestamp like {RFC3339_FORMAT!r}")
        return value


class ParcelRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    number: int
    client: int
    status: str
    address: str
    created_at: str


class StatusUpdate(BaseModel):
    status: NonBlankStr


class AddressUpdate(BaseModel):
    address: NonBlankStr


class MutationResult(BaseModel):
    number: int
    applied: bool
