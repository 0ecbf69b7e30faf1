from __future__ import annotations

from parceltrack.core.entities.parcel import Parcel, ParcelStatus, rfc3339_now
from parceltrack.core.repositories.parcel_repository import ParcelRepository


class RegisterParcelUseCase:
    """
    Register a new parcel. Status defaults to `registered` and the creation
    timestamp to the current UTC time.
    """

    def __init__(self, *, parcel_repo: ParcelRepository) -> None:
        self._parcel_repo = parcel_repo

    def execute(
        self,
        *,
        client: int,
        address: str,
        status: str = ParcelStatus.REGISTERED.value,
        created_at: str | None = None,
    ) -> Parcel:
        parcel = Parcel(
            client=client,
            status=status,
            address=address,
            created_at=created_at or rfc3339_now(),
        )
        parcel.number = self._parcel_repo.add(parcel)
        return parcel
