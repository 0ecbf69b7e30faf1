from __future__ import annotations

from parceltrack.core.entities.parcel import Parcel
from parceltrack.core.repositories.parcel_repository import ParcelNotFoundError, ParcelRepository


class NotFoundError(Exception):
    """Raised when the requested parcel does not exist."""


class GetParcelUseCase:
    def __init__(self, *, parcel_repo: ParcelRepository) -> None:
        self._parcel_repo = parcel_repo

    def execute(self, *, number: int) -> Parcel:
        try:
            return self._parcel_repo.get(number)
        except ParcelNotFoundError as e:
            raise NotFoundError(f"Parcel {number} not found") from e


class ListClientParcelsUseCase:
    def __init__(self, *, parcel_repo: ParcelRepository) -> None:
        self._parcel_repo = parcel_repo

    def execute(self, *, client: int) -> list[Parcel]:
        return self._parcel_repo.get_by_client(client)
