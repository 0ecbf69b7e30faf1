from __future__ import annotations

from abc import ABC, abstractmethod

from parceltrack.core.entities.parcel import Parcel


class StorageError(Exception):
    """Failure raised by the underlying database or statement execution."""


class ParcelNotFoundError(StorageError):
    """No parcel row matched the requested number."""


class ParcelRepository(ABC):
    """
    Repository interface for the single `parcel` table.

    Guarded mutations (set_address/delete) only touch parcels whose status is
    `registered`. Matching zero rows is never an error: the boolean result tells
    whether a row was affected.
    """

    @abstractmethod
    def add(self, parcel: Parcel) -> int:
        """Insert a parcel and return the number assigned by the database."""
        raise NotImplementedError

    @abstractmethod
    def get(self, number: int) -> Parcel:
        """Raises ParcelNotFoundError if no row has this number."""
        raise NotImplementedError

    @abstractmethod
    def get_by_client(self, client: int) -> list[Parcel]:
        raise NotImplementedError

    @abstractmethod
    def set_status(self, number: int, status: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def set_status_if(self, number: int, expected: str, status: str) -> bool:
        """Overwrite the status only while it still equals `expected`."""
        raise NotImplementedError

    @abstractmethod
    def set_address(self, number: int, address: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def delete(self, number: int) -> bool:
        raise NotImplementedError
