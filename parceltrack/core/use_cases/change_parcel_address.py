from __future__ import annotations

from parceltrack.core.repositories.parcel_repository import ParcelRepository


class ValidationError(Exception):
    """Raised for invalid use case input."""


class ChangeParcelAddressUseCase:
    def __init__(self, *, parcel_repo: ParcelRepository) -> None:
        self._parcel_repo = parcel_repo

    def execute(self, *, number: int, address: str) -> bool:
        """Returns False when the parcel is missing or no longer registered."""
        if not address or not address.strip():
            raise ValidationError("address must be a non-empty string")
        return self._parcel_repo.set_address(number, address)
