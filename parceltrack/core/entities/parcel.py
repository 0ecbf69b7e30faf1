from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class ParcelStatus(str, Enum):
    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"

    def can_transition_to(self, target: str) -> bool:
        """Lifecycle order: registered -> sent -> delivered."""
        return target in _TRANSITIONS.get(self, ())


_TRANSITIONS: dict[ParcelStatus, tuple[ParcelStatus, ...]] = {
    ParcelStatus.REGISTERED: (ParcelStatus.SENT,),
    ParcelStatus.SENT: (ParcelStatus.DELIVERED,),
    ParcelStatus.DELIVERED: (),
}


def rfc3339_now() -> str:
    return datetime.now(timezone.utc).strftime(RFC3339_FORMAT)


@dataclass(slots=True)
class Parcel:
    """
    A shipment record. `number` stays None until the store assigns one.
    """
    client: int
    status: str
    address: str
    created_at: str
    number: int | None = None
