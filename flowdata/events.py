"""Events and their participants."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flowdata.firs import FlightInformationRegion

__all__ = ["EventParticipant", "Event"]


@dataclass(frozen=True)
class EventParticipant:
    """A member booked onto an event; airports are empty strings if unknown."""

    cid: int
    origin_airport: str = ""
    destination_airport: str = ""


@dataclass(frozen=True, eq=False)
class Event:
    """An event in a flight information region. Events compare equal by id."""

    id: int
    name: str
    start: datetime
    end: datetime
    flight_information_region: FlightInformationRegion
    vatcan_code: str = ""
    participants: tuple[EventParticipant, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.flight_information_region is None:
            raise ValueError("flight information region not set in event")
        object.__setattr__(self, "participants", tuple(self.participants))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)