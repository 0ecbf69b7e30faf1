from __future__ import annotations

import re

import pytest
from sqlalchemy import Engine

from parceltrack.core.entities.parcel import Parcel, ParcelStatus
from parceltrack.core.use_cases.change_parcel_address import ChangeParcelAddressUseCase, ValidationError
from parceltrack.core.use_cases.change_parcel_status import ChangeParcelStatusUseCase, DomainRuleViolation
from parceltrack.core.use_cases.delete_parcel import DeleteParcelUseCase
from parceltrack.core.use_cases.get_parcel import GetParcelUseCase, ListClientParcelsUseCase, NotFoundError
from parceltrack.core.use_cases.register_parcel import RegisterParcelUseCase
from parceltrack.infrastructure.database import build_session_factory
from parceltrack.infrastructure.repositories.parcel_repository_impl import ParcelRepositoryImpl

RFC3339_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")


def test_register_defaults_to_registered_with_utc_timestamp(store: ParcelRepositoryImpl) -> None:
    parcel = RegisterParcelUseCase(parcel_repo=store).execute(client=7, address="Main st. 1")

    assert parcel.number is not None
    assert parcel.status == "registered"
    assert RFC3339_UTC.match(parcel.created_at)
    assert store.get(parcel.number) == parcel


def test_register_keeps_given_timestamp(store: ParcelRepositoryImpl) -> None:
    parcel = RegisterParcelUseCase(parcel_repo=store).execute(
        client=7, address="Main st. 1", created_at="2024-03-01T10:00:00Z"
    )

    assert store.get(parcel.number).created_at == "2024-03-01T10:00:00Z"


def test_get_missing_parcel_raises_not_found(store: ParcelRepositoryImpl) -> None:
    with pytest.raises(NotFoundError):
        GetParcelUseCase(parcel_repo=store).execute(number=12345)


def test_list_client_parcels(store: ParcelRepositoryImpl) -> None:
    register = RegisterParcelUseCase(parcel_repo=store)
    numbers = {register.execute(client=5, address=f"a{i}").number for i in range(2)}
    register.execute(client=6, address="elsewhere")

    parcels = ListClientParcelsUseCase(parcel_repo=store).execute(client=5)

    assert {p.number for p in parcels} == numbers


def test_status_change_without_enforcement_accepts_any_move(store: ParcelRepositoryImpl) -> None:
    parcel = RegisterParcelUseCase(parcel_repo=store).execute(client=1, address="x")
    use_case = ChangeParcelStatusUseCase(parcel_repo=store)

    assert use_case.execute(number=parcel.number, status=ParcelStatus.DELIVERED.value) is True
    assert use_case.execute(number=parcel.number, status=ParcelStatus.REGISTERED.value) is True
    assert store.get(parcel.number).status == "registered"


def test_enforced_status_change_follows_lifecycle(store: ParcelRepositoryImpl) -> None:
    parcel = RegisterParcelUseCase(parcel_repo=store).execute(client=1, address="x")
    use_case = ChangeParcelStatusUseCase(parcel_repo=store, enforce_transitions=True)

    with pytest.raises(DomainRuleViolation):
        use_case.execute(number=parcel.number, status=ParcelStatus.DELIVERED.value)

    assert use_case.execute(number=parcel.number, status=ParcelStatus.SENT.value) is True
    assert use_case.execute(number=parcel.number, status=ParcelStatus.DELIVERED.value) is True

    with pytest.raises(DomainRuleViolation):
        use_case.execute(number=parcel.number, status=ParcelStatus.REGISTERED.value)
    assert store.get(parcel.number).status == "delivered"


def test_enforced_status_change_on_missing_parcel(store: ParcelRepositoryImpl) -> None:
    use_case = ChangeParcelStatusUseCase(parcel_repo=store, enforce_transitions=True)

    with pytest.raises(NotFoundError):
        use_case.execute(number=777, status=ParcelStatus.SENT.value)


def test_enforced_status_change_from_unknown_status(store: ParcelRepositoryImpl) -> None:
    parcel = RegisterParcelUseCase(parcel_repo=store).execute(client=1, address="x", status="lost")
    use_case = ChangeParcelStatusUseCase(parcel_repo=store, enforce_transitions=True)

    with pytest.raises(DomainRuleViolation):
        use_case.execute(number=parcel.number, status=ParcelStatus.SENT.value)


def test_address_change_rejects_blank_address(store: ParcelRepositoryImpl) -> None:
    parcel = RegisterParcelUseCase(parcel_repo=store).execute(client=1, address="x")

    with pytest.raises(ValidationError):
        ChangeParcelAddressUseCase(parcel_repo=store).execute(number=parcel.number, address="   ")
    assert store.get(parcel.number).address == "x"


def test_address_change_and_delete_report_guard_result(store: ParcelRepositoryImpl) -> None:
    register = RegisterParcelUseCase(parcel_repo=store)
    registered = register.execute(client=1, address="x")
    sent = register.execute(client=1, address="y", status=ParcelStatus.SENT.value)

    change_address = ChangeParcelAddressUseCase(parcel_repo=store)
    delete = DeleteParcelUseCase(parcel_repo=store)

    assert change_address.execute(number=registered.number, address="z") is True
    assert change_address.execute(number=sent.number, address="z") is False
    assert delete.execute(number=sent.number) is False
    assert delete.execute(number=registered.number) is True

    assert [p.number for p in store.get_by_client(1)] == [sent.number]


def test_enforced_status_change_loses_to_concurrent_writer(
    store: ParcelRepositoryImpl, engine: Engine, monkeypatch: pytest.MonkeyPatch
) -> None:
    parcel = RegisterParcelUseCase(parcel_repo=store).execute(client=1, address="x")
    other_session = build_session_factory(engine)()
    other_writer = ParcelRepositoryImpl(other_session)
    read = store.get

    def read_then_interleave(number: int) -> Parcel:
        loaded = read(number)
        other_writer.set_status(number, ParcelStatus.DELIVERED.value)
        return loaded

    monkeypatch.setattr(store, "get", read_then_interleave)
    use_case = ChangeParcelStatusUseCase(parcel_repo=store, enforce_transitions=True)

    try:
        with pytest.raises(DomainRuleViolation):
            use_case.execute(number=parcel.number, status=ParcelStatus.SENT.value)
    finally:
        other_session.close()

    assert read(parcel.number).status == "delivered"
