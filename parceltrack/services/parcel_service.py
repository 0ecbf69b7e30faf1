from __future__ import annotations

from sqlalchemy.orm import Session

from parceltrack.core.use_cases.change_parcel_address import ChangeParcelAddressUseCase
from parceltrack.core.use_cases.change_parcel_status import ChangeParcelStatusUseCase
from parceltrack.core.use_cases.delete_parcel import DeleteParcelUseCase
from parceltrack.core.use_cases.get_parcel import GetParcelUseCase, ListClientParcelsUseCase
from parceltrack.core.use_cases.register_parcel import RegisterParcelUseCase
from parceltrack.infrastructure.repositories.parcel_repository_impl import ParcelRepositoryImpl
from parceltrack.schemas.models import (
    AddressUpdate,
    MutationResult,
    ParcelCreate,
    ParcelRead,
    StatusUpdate,
)


def _enforce_transitions_default() -> bool:
    from parceltrack.infrastructure.config import settings
    return settings.enforce_status_transitions


def register_parcel_service(body: ParcelCreate, db: Session) -> ParcelRead:
    use_case = RegisterParcelUseCase(parcel_repo=ParcelRepositoryImpl(db))
    parcel = use_case.execute(
        client=body.client,
        address=body.address,
        status=body.status,
        created_at=body.created_at,
    )
    return ParcelRead.model_validate(parcel)


def get_parcel_service(number: int, db: Session) -> ParcelRead:
    use_case = GetParcelUseCase(parcel_repo=ParcelRepositoryImpl(db))
    return ParcelRead.model_validate(use_case.execute(number=number))


def list_client_parcels_service(client: int, db: Session) -> list[ParcelRead]:
    use_case = ListClientParcelsUseCase(parcel_repo=ParcelRepositoryImpl(db))
    return [ParcelRead.model_validate(p) for p in use_case.execute(client=client)]


def change_status_service(
    number: int,
    body: StatusUpdate,
    db: Session,
    *,
    enforce_transitions: bool | None = None,
) -> MutationResult:
    if enforce_transitions is None:
        enforce_transitions = _enforce_transitions_default()

    use_case = ChangeParcelStatusUseCase(
        parcel_repo=ParcelRepositoryImpl(db),
        enforce_transitions=enforce_transitions,
    )
    applied = use_case.execute(number=number, status=body.status)
    return MutationResult(number=number, applied=applied)


def change_address_service(number: int, body: AddressUpdate, db: Session) -> MutationResult:
    use_case = ChangeParcelAddressUseCase(parcel_repo=ParcelRepositoryImpl(db))
    applied = use_case.execute(number=number, address=body.address)
    return MutationResult(number=number, applied=applied)


def delete_parcel_service(number: int, db: Session) -> MutationResult:
    use_case = DeleteParcelUseCase(parcel_repo=ParcelRepositoryImpl(db))
    return MutationResult(number=number, applied=use_case.execute(number=number))
