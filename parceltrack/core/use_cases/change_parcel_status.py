from __future__ import annotations

from parceltrack.core.entities.parcel import ParcelStatus
from parceltrack.core.repositories.parcel_repository import ParcelNotFoundError, ParcelRepository
from parceltrack.core.use_cases.get_parcel import NotFoundError


class DomainRuleViolation(Exception):
    """Raised when a status change breaks the parcel lifecycle."""


class ChangeParcelStatusUseCase:
    """
    Write a new parcel status.

    The store accepts any status string. With `enforce_transitions` the current
    status is loaded first and only moves along registered -> sent -> delivered
    are allowed. The write then only matches the status that was checked, so a
    concurrent change in between is reported instead of overwritten.
    """

    def __init__(self, *, parcel_repo: ParcelRepository, enforce_transitions: bool = False) -> None:
        self._parcel_repo = parcel_repo
        self._enforce_transitions = enforce_transitions

    def execute(self, *, number: int, status: str) -> bool:
        if not self._enforce_transitions:
            return self._parcel_repo.set_status(number, status)

        current = self._check_transition(number, status)
        if not self._parcel_repo.set_status_if(number, current.value, status):
            raise DomainRuleViolation(
                f"Parcel {number} changed status while moving from {current.value!r} to {status!r}"
            )
        return True

    def _check_transition(self, number: int, status: str) -> ParcelStatus:
        try:
            parcel = self._parcel_repo.get(number)
        except ParcelNotFoundError as e:
            raise NotFoundError(f"Parcel {number} not found") from e

        try:
            current = ParcelStatus(parcel.status)
        except ValueError:
            raise DomainRuleViolation(f"Parcel {number} has unknown status {parcel.status!r}")

        if not current.can_transition_to(status):
            raise DomainRuleViolation(
                f"Parcel {number} cannot move from {current.value!r} to {status!r}"
            )
        return current
