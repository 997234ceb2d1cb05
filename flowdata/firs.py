"""Flight information regions and the parser for their API data."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable

from flowdata.elements import ElementCollection

__all__ = [
    "FlightInformationRegion",
    "FlightInformationRegionsUpdatedEvent",
    "FlightInformationRegionDataParser",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlightInformationRegion:
    """A flight information region, e.g. EGTT London."""

    id: int
    identifier: str
    name: str


@dataclass(frozen=True)
class FlightInformationRegionsUpdatedEvent:
    """Published when a fresh set of FIRs has been parsed."""

    firs: ElementCollection[FlightInformationRegion]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class FlightInformationRegionDataParser:
    """Parses FIRs out of the API's JSON data and publishes the result."""

    def __init__(self, publish: Callable[[Any], None]) -> None:
        self._publish = publish

    def parse_firs(self, data: Any) -> ElementCollection[FlightInformationRegion] | None:
        """Return the parsed FIRs, or None if the data holds no FIR list.

        Individual malformed FIRs are skipped.
        """
        logger.debug("Updating FIRs")
        if not self._data_is_valid(data):
            logger.error("Invalid FIR data from API")
            return None

        firs: ElementCollection[FlightInformationRegion] = ElementCollection()
        for fir in data["flight_information_regions"]:
            if not self._fir_data_is_valid(fir):
                logger.error("Invalid FIR in FIR data from API")
                logger.debug("Failed updating FIR: %s", json.dumps(fir, default=str))
                continue
            firs.add(FlightInformationRegion(fir["id"], fir["identifier"], fir["name"]))

        logger.debug("Finished updating FIRs")
        self._publish(FlightInformationRegionsUpdatedEvent(firs))
        return firs

    @staticmethod
    def _data_is_valid(data: Any) -> bool:
        return isinstance(data, dict) and isinstance(
            data.get("flight_information_regions"), list
        )

    @staticmethod
    def _fir_data_is_valid(data: Any) -> bool:
        return (
            isinstance(data, dict)
            and _is_int(data.get("id"))
            and isinstance(data.get("identifier"), str)
            and isinstance(data.get("name"), str)
        )