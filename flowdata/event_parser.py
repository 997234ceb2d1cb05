"""Parser for the events section of the API data."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable

from flowdata.dates import date_string_valid, time_point_from_date_string
from flowdata.elements import ElementCollection
from flowdata.events import Event, EventParticipant
from flowdata.firs import FlightInformationRegion

__all__ = ["EventsUpdatedEvent", "EventDataParser"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventsUpdatedEvent:
    """Published when a fresh set of events has been parsed."""

    events: ElementCollection[Event]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _string_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""


class EventDataParser:
    """Parses events out of the API's JSON data and publishes the result."""

    def __init__(self, publish: Callable[[Any], None]) -> None:
        self._publish = publish

    def parse_events(
        self, data: Any, firs: ElementCollection[FlightInformationRegion]
    ) -> ElementCollection[Event] | None:
        """Return the parsed events, or None if the data holds no event list.

        Individual malformed events, or events in unknown FIRs, are skipped.
        """
        logger.debug("Updating event data")
        if not self._data_is_valid(data):
            logger.error("Invalid event data from API")
            return None

        events: ElementCollection[Event] = ElementCollection()
        for event_data in data["events"]:
            if not self._event_data_is_valid(event_data, firs):
                logger.error("Invalid event in event data from API")
                logger.debug("Failed updating event: %s", json.dumps(event_data, default=str))
                continue

            participants = tuple(
                EventParticipant(
                    participant["cid"],
                    _string_or_empty(participant["origin"]),
                    _string_or_empty(participant["destination"]),
                )
                for participant in event_data["participants"]
            )
            vatcan_code = event_data["vatcan_code"]
            events.add(
                Event(
                    id=event_data["id"],
                    name=event_data["name"],
                    start=time_point_from_date_string(event_data["date_start"]),
                    end=time_point_from_date_string(event_data["date_end"]),
                    flight_information_region=firs.get(
                        event_data["flight_information_region_id"]
                    ),
                    vatcan_code="" if vatcan_code is None else vatcan_code,
                    participants=participants,
                )
            )

        logger.debug("Finished updating events")
        self._publish(EventsUpdatedEvent(events))
        return events

    @staticmethod
    def _data_is_valid(data: Any) -> bool:
        return isinstance(data, dict) and isinstance(data.get("events"), list)

    @classmethod
    def _event_data_is_valid(
        cls, data: Any, firs: ElementCollection[FlightInformationRegion]
    ) -> bool:
        return (
            isinstance(data, dict)
            and _is_int(data.get("id"))
            and isinstance(data.get("name"), str)
            and cls._date_valid(data, "date_start")
            and cls._date_valid(data, "date_end")
            and _is_int(data.get("flight_information_region_id"))
            and firs.get(data["flight_information_region_id"]) is not None
            and "vatcan_code" in data
            and (data["vatcan_code"] is None or isinstance(data["vatcan_code"], str))
            and "participants" in data
            and cls._participants_valid(data["participants"])
        )

    @staticmethod
    def _participants_valid(data: Any) -> bool:
        if not isinstance(data, list):
            return False
        return all(
            isinstance(participant, dict)
            and _is_int(participant.get("cid"))
            and "origin" in participant
            and (participant["origin"] is None or isinstance(participant["origin"], str))
            and "destination" in participant
            and (
                participant["destination"] is None
                or isinstance(participant["destination"], str)
            )
            for participant in data
        )

    @staticmethod
    def _date_valid(data: dict, key: str) -> bool:
        value = data.get(key)
        return isinstance(value, str) and date_string_valid(value)