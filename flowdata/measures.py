"""Flow measure types and the parser for a flow measure's measure data."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Union

__all__ = [
    "MeasureType",
    "Measure",
    "FlowMeasureMeasureParser",
    "measure_type_from_string",
]

logger = logging.getLogger(__name__)


class MeasureType(enum.Enum):
    """The kinds of measure, valued by their name in the API."""

    MILES_IN_TRAIL = "miles_in_trail"
    MINIMUM_DEPARTURE_INTERVAL = "minimum_departure_interval"
    AVERAGE_DEPARTURE_INTERVAL = "average_departure_interval"
    PER_HOUR = "per_hour"
    MAX_INDICATED_AIRSPEED = "max_ias"
    MAX_MACH = "max_mach"
    INDICATED_AIRSPEED_REDUCTION = "ias_reduction"
    MACH_REDUCTION = "mach_reduction"
    PROHIBIT = "prohibit"
    MANDATORY_ROUTE = "mandatory_route"
    GROUND_STOP = "ground_stop"


_INTEGER_TYPES = frozenset(
    {
        MeasureType.MILES_IN_TRAIL,
        MeasureType.MINIMUM_DEPARTURE_INTERVAL,
        MeasureType.AVERAGE_DEPARTURE_INTERVAL,
        MeasureType.PER_HOUR,
        MeasureType.MAX_INDICATED_AIRSPEED,
        MeasureType.INDICATED_AIRSPEED_REDUCTION,
    }
)

_MACH_TYPES = frozenset({MeasureType.MAX_MACH, MeasureType.MACH_REDUCTION})

MeasureValue = Union[int, float, frozenset, None]


@dataclass(frozen=True)
class Measure:
    """A measure: its type and, depending on the type, a value.

    Integer types carry an int, mach types a float, mandatory routes a
    frozenset of route strings, and prohibit or ground stop carry None.
    """

    type: MeasureType
    value: MeasureValue = None


def measure_type_from_string(value: str) -> MeasureType:
    """Return the measure type for its API name; raise ValueError if unknown."""
    try:
        return MeasureType(value)
    except ValueError:
        raise ValueError(f"Unknown measure type: {value}") from None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class FlowMeasureMeasureParser:
    """Parses the "measure" object of a flow measure."""

    def parse(self, data: Any) -> Measure | None:
        """Return the parsed measure, or None if the data is invalid."""
        if not isinstance(data, dict):
            logger.warning("FlowMeasureMeasureParser.parse: data is not an object")
            return None

        if not isinstance(data.get("type"), str) or "value" not in data:
            logger.warning("FlowMeasureMeasureParser.parse: data is missing fields")
            return None

        try:
            measure_type = measure_type_from_string(data["type"])
        except ValueError as error:
            logger.warning("FlowMeasureMeasureParser.parse: %s", error)
            return None

        value = data["value"]

        if measure_type in _INTEGER_TYPES:
            return Measure(measure_type, value) if _is_int(value) else None

        if measure_type in _MACH_TYPES:
            # The API stores machs as integers in hundredths.
            return Measure(measure_type, value / 100) if _is_int(value) else None

        if measure_type is MeasureType.MANDATORY_ROUTE:
            if not isinstance(value, list) or not all(isinstance(route, str) for route in value):
                return None
            return Measure(measure_type, frozenset(value))

        return Measure(measure_type)