from __future__ import annotations

from parceltrack.core.repositories.parcel_repository import ParcelRepository


class DeleteParcelUseCase:
    def __init__(self, *, parcel_repo: ParcelRepository) -> None:
        self._parcel_repo = parcel_repo

    def execute(self, *, number: int) -> bool:
        """Only registered parcels are removed; returns whether a row was deleted."""
        return self._parcel_repo.delete(number)
