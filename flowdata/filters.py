"""Flow measure filters and the parser for a flow measure's filter data."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any

from flowdata.elements import ElementCollection
from flowdata.events import Event

__all__ = [
    "AirportFilterType",
    "AirportFilter",
    "LevelRangeFilterType",
    "LevelRangeFilter",
    "MultipleLevelFilter",
    "EventParticipation",
    "EventFilter",
    "RouteFilter",
    "RangeToDestinationFilter",
    "FlowMeasureFilters",
    "FlowMeasureFilterParser",
]

logger = logging.getLogger(__name__)


class AirportFilterType(enum.Enum):
    DEPARTURE = "ADEP"
    DESTINATION = "ADES"


@dataclass(frozen=True)
class AirportFilter:
    """Restricts a measure to flights departing from or arriving at airports."""

    airports: frozenset[str]
    type: AirportFilterType


class LevelRangeFilterType(enum.Enum):
    AT_OR_ABOVE = "level_above"
    AT_OR_BELOW = "level_below"


@dataclass(frozen=True)
class LevelRangeFilter:
    """Restricts a measure to flights at or above, or at or below, a level."""

    type: LevelRangeFilterType
    level: int


@dataclass(frozen=True)
class MultipleLevelFilter:
    """Restricts a measure to flights at one of several levels."""

    levels: tuple[int, ...]


class EventParticipation(enum.Enum):
    PARTICIPATING = "member_event"
    NOT_PARTICIPATING = "member_not_event"


@dataclass(frozen=True)
class EventFilter:
    """Restricts a measure to members taking part, or not, in an event."""

    event: Event
    participation: EventParticipation


@dataclass(frozen=True)
class RouteFilter:
    """Restricts a measure to flights routing via any of some waypoints."""

    route_strings: frozenset[str]


@dataclass(frozen=True)
class RangeToDestinationFilter:
    """Restricts a measure to flights within a range of their destination."""

    range: int


@dataclass(frozen=True)
class FlowMeasureFilters:
    """All the filters of one flow measure, grouped by kind."""

    airport_filters: tuple[AirportFilter, ...] = field(default_factory=tuple)
    event_filters: tuple[EventFilter, ...] = field(default_factory=tuple)
    route_filters: tuple[RouteFilter, ...] = field(default_factory=tuple)
    level_range_filters: tuple[LevelRangeFilter, ...] = field(default_factory=tuple)
    multiple_level_filters: tuple[MultipleLevelFilter, ...] = field(default_factory=tuple)
    range_to_destination_filters: tuple[RangeToDestinationFilter, ...] = field(
        default_factory=tuple
    )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _string_set(value: Any) -> frozenset[str] | None:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        return None
    return frozenset(value)


class FlowMeasureFilterParser:
    """Parses the "filters" array of a flow measure."""

    def parse(self, data: Any, events: ElementCollection[Event]) -> FlowMeasureFilters | None:
        """Return the parsed filters, or None if any known filter is invalid.

        Filters of unknown type are skipped.
        """
        if not isinstance(data, list):
            logger.warning("FlowMeasureFilterParser.parse: json is not an array")
            return None

        airport_filters: list[AirportFilter] = []
        level_range_filters: list[LevelRangeFilter] = []
        multiple_level_filters: list[MultipleLevelFilter] = []
        event_filters: list[EventFilter] = []
        route_filters: list[RouteFilter] = []
        range_filters: list[RangeToDestinationFilter] = []

        for filter_data in data:
            if not isinstance(filter_data, dict) or "value" not in filter_data:
                logger.warning("FlowMeasureFilterParser.parse: json does not contain a value field")
                return None

            filter_type = filter_data.get("type")
            if not isinstance(filter_type, str):
                logger.warning(
                    "FlowMeasureFilterParser.parse: json does not contain a type field "
                    "or the type field is not a string"
                )
                return None

            value = filter_data["value"]

            if filter_type in ("ADEP", "ADES"):
                airports = _string_set(value)
                if airports is None:
                    logger.warning("FlowMeasureFilterParser.parse: could not create airport filter")
                    return None
                airport_filters.append(AirportFilter(airports, AirportFilterType(filter_type)))

            elif filter_type in ("level_above", "level_below"):
                if not _is_int(value):
                    logger.warning("FlowMeasureFilterParser.parse: could not create level filter")
                    return None
                level_range_filters.append(
                    LevelRangeFilter(LevelRangeFilterType(filter_type), value)
                )

            elif filter_type == "level":
                if not isinstance(value, list) or not all(_is_int(level) for level in value):
                    logger.warning(
                        "FlowMeasureFilterParser.parse: could not create multiple level filter"
                    )
                    return None
                multiple_level_filters.append(MultipleLevelFilter(tuple(value)))

            elif filter_type in ("member_event", "member_not_event"):
                event = events.get(value) if _is_int(value) else None
                if event is None:
                    logger.warning("FlowMeasureFilterParser.parse: could not create event filter")
                    return None
                event_filters.append(EventFilter(event, EventParticipation(filter_type)))

            elif filter_type == "waypoint":
                routes = _string_set(value)
                if routes is None:
                    logger.warning("FlowMeasureFilterParser.parse: could not create route filter")
                    return None
                route_filters.append(RouteFilter(routes))

            elif filter_type == "range_to_destination":
                if not _is_int(value):
                    logger.warning(
                        "FlowMeasureFilterParser.parse: could not create range to destination filter"
                    )
                    return None
                range_filters.append(RangeToDestinationFilter(value))

            else:
                logger.warning("FlowMeasureFilterParser.parse: unknown filter type %s", filter_type)

        return FlowMeasureFilters(
            airport_filters=tuple(airport_filters),
            event_filters=tuple(event_filters),
            route_filters=tuple(route_filters),
            level_range_filters=tuple(level_range_filters),
            multiple_level_filters=tuple(multiple_level_filters),
            range_to_destination_filters=tuple(range_filters),
        )