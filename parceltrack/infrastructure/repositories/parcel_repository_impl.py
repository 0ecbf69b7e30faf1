from __future__ import annotations

import logging
from typing import NoReturn

from sqlalchemy import delete, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import NoResultFound, SQLAlchemyError
from sqlalchemy.orm import Session

from parceltrack.core.entities.parcel import Parcel, ParcelStatus
from parceltrack.core.repositories.parcel_repository import (
    ParcelNotFoundError,
    ParcelRepository,
    StorageError,
)
from parceltrack.infrastructure.models.models import ParcelModel

logger = logging.getLogger(__name__)

_COLUMNS = (
    ParcelModel.number,
    ParcelModel.client,
    ParcelModel.status,
    ParcelModel.address,
    ParcelModel.created_at,
)


class ParcelRepositoryImpl(ParcelRepository):
    """
    SQLAlchemy implementation of the parcel store.

    Every operation is a single statement committed on its own. Reads select plain
    columns instead of ORM instances so results never come from a stale identity map.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def add(self, parcel: Parcel) -> int:
        row = ParcelModel(
            client=parcel.client,
            status=parcel.status,
            address=parcel.address,
            created_at=parcel.created_at,
        )
        try:
            self._db.add(row)
            self._db.flush()
            number = row.number
            if number is None:
                raise StorageError("Database did not return a parcel number")
            self._db.commit()
        except SQLAlchemyError as exc:
            self._fail("add", exc)
        except StorageError:
            self._db.rollback()
            raise

        logger.debug("Added parcel %s for client %s", number, parcel.client)
        return number

    def get(self, number: int) -> Parcel:
        stmt = select(*_COLUMNS).where(ParcelModel.number == number)
        try:
            row = self._db.execute(stmt).one()
        except NoResultFound as exc:
            raise ParcelNotFoundError(f"Parcel {number} not found") from exc
        except SQLAlchemyError as exc:
            self._fail("get", exc)

        return self._to_entity(row)

    def get_by_client(self, client: int) -> list[Parcel]:
        stmt = select(*_COLUMNS).where(ParcelModel.client == client)
        try:
            rows = self._db.execute(stmt).all()
        except SQLAlchemyError as exc:
            self._fail("get_by_client", exc)

        return [self._to_entity(row) for row in rows]

    def set_status(self, number: int, status: str) -> bool:
        stmt = (
            update(ParcelModel)
            .where(ParcelModel.number == number)
            .values(status=status)
        )
        return self._execute_mutation("set_status", number, stmt)

    def set_status_if(self, number: int, expected: str, status: str) -> bool:
        stmt = (
            update(ParcelModel)
            .where(ParcelModel.number == number)
            .where(ParcelModel.status == expected)
            .values(status=status)
        )
        return self._execute_mutation("set_status_if", number, stmt)

    def set_address(self, number: int, address: str) -> bool:
        stmt = (
            update(ParcelModel)
            .where(ParcelModel.number == number)
            .where(ParcelModel.status == ParcelStatus.REGISTERED.value)
            .values(address=address)
        )
        return self._execute_mutation("set_address", number, stmt)

    def delete(self, number: int) -> bool:
        stmt = (
            delete(ParcelModel)
            .where(ParcelModel.number == number)
            .where(ParcelModel.status == ParcelStatus.REGISTERED.value)
        )
        return self._execute_mutation("delete", number, stmt)

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _execute_mutation(self, operation: str, number: int, stmt) -> bool:
        try:
            result = self._db.execute(stmt, execution_options={"synchronize_session": False})
            self._db.commit()
        except SQLAlchemyError as exc:
            self._fail(operation, exc)

        affected = result.rowcount > 0
        if not affected:
            logger.debug("%s on parcel %s matched no rows", operation, number)
        return affected

    def _fail(self, operation: str, exc: SQLAlchemyError) -> NoReturn:
        self._db.rollback()
        logger.exception("Parcel store %s failed", operation)
        raise StorageError(f"Parcel store {operation} failed: {exc}") from exc

    @staticmethod
    def _to_entity(row: Row) -> Parcel:
        return Parcel(
            number=row.number,
            client=row.client,
            status=row.status,
            address=row.address,
            created_at=row.created_at,
        )
