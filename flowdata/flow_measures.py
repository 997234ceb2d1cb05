"""Flow measures and the parser for the flow measures section of the API data."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Sequence

from flowdata.dates import date_string_valid, time_point_from_date_string
from flowdata.elements import ElementCollection
from flowdata.events import Event
from flowdata.filters import FlowMeasureFilterParser, FlowMeasureFilters
from flowdata.firs import FlightInformationRegion
from flowdata.measures import FlowMeasureMeasureParser, Measure

__all__ = [
    "MeasureStatus",
    "FlowMeasure",
    "FlowMeasuresUpdatedEvent",
    "FlowMeasureDataParser",
    "measure_status",
]

logger = logging.getLogger(__name__)


class MeasureStatus(enum.Enum):
    """Where a flow measure is in its lifetime."""

    NOTIFIED = "notified"
    ACTIVE = "active"
    EXPIRED = "expired"
    WITHDRAWN = "withdrawn"


def measure_status(
    start: datetime,
    end: datetime,
    withdrawn_at: datetime | None,
    now: datetime | None = None,
) -> MeasureStatus:
    """Return the status of a measure with the given times, as of ``now``.

    A measure with a withdrawal time is withdrawn whatever the other times.
    ``now`` defaults to the current UTC time.
    """
    if withdrawn_at is not None:
        return MeasureStatus.WITHDRAWN

    if now is None:
        now = datetime.now(timezone.utc)
    if now < start:
        return MeasureStatus.NOTIFIED
    if now > end:
        return MeasureStatus.EXPIRED
    return MeasureStatus.ACTIVE


@dataclass(frozen=True)
class FlowMeasure:
    """A flow measure, as issued by the flow management service."""

    id: int
    event: Event | None
    identifier: str
    reason: str
    start: datetime
    end: datetime
    withdrawn_at: datetime | None
    status: MeasureStatus
    notified_flight_information_regions: tuple[FlightInformationRegion, ...]
    measure: Measure
    filters: FlowMeasureFilters
    custom_filters: Sequence[Any] = field(
        default_factory=list, compare=False, hash=False, repr=False
    )


@dataclass(frozen=True)
class FlowMeasuresUpdatedEvent:
    """Published when a fresh set of flow measures has been parsed."""

    flow_measures: ElementCollection[FlowMeasure]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _valid_date(value: Any) -> bool:
    return isinstance(value, str) and date_string_valid(value)


class FlowMeasureDataParser:
    """Parses flow measures out of the API's JSON data and publishes the result."""

    def __init__(
        self,
        filter_parser: FlowMeasureFilterParser,
        measure_parser: FlowMeasureMeasureParser,
        publish: Callable[[Any], None],
        custom_filters: Sequence[Any] | None = None,
    ) -> None:
        self._filter_parser = filter_parser
        self._measure_parser = measure_parser
        self._publish = publish
        self._custom_filters = custom_filters if custom_filters is not None else []

    def parse_flow_measures(
        self,
        data: Any,
        events: ElementCollection[Event],
        firs: ElementCollection[FlightInformationRegion],
    ) -> ElementCollection[FlowMeasure] | None:
        """Return the parsed flow measures, or None if the data holds no list of them.

        Individual malformed flow measures are skipped.
        """
        if not self._data_is_valid(data):
            logger.error("FlowMeasureDataParser: data is invalid")
            return None

        flow_measures: ElementCollection[FlowMeasure] = ElementCollection()
        for measure_data in data["flow_measures"]:
            flow_measure = self._parse_flow_measure(measure_data, events, firs)
            if flow_measure is not None:
                flow_measures.add(flow_measure)

        logger.debug("FlowMeasureDataParser: parsed flow measures")
        self._publish(FlowMeasuresUpdatedEvent(flow_measures))
        return flow_measures

    def _parse_flow_measure(
        self,
        data: Any,
        events: ElementCollection[Event],
        firs: ElementCollection[FlightInformationRegion],
    ) -> FlowMeasure | None:
        if not self._properties_valid(data):
            logger.error("FlowMeasureDataParser: flow measure properties are invalid")
            return None

        notified_firs = self._notified_firs(data, firs)
        if not notified_firs:
            logger.error("FlowMeasureDataParser: notified firs are empty")
            return None

        measure = self._measure_parser.parse(data["measure"])
        if measure is None:
            logger.error("FlowMeasureDataParser: measure is invalid")
            return None

        filters = self._filter_parser.parse(data["filters"], events)
        if filters is None:
            logger.error("FlowMeasureDataParser: filters are invalid")
            return None

        event: Event | None = None
        if _is_int(data["event_id"]):
            event = events.get(data["event_id"])
            if event is None:
                logger.error("FlowMeasureDataParser: event is invalid")
                return None

        start = time_point_from_date_string(data["starttime"])
        end = time_point_from_date_string(data["endtime"])
        withdrawn_at = (
            None
            if data["withdrawn_at"] is None
            else time_point_from_date_string(data["withdrawn_at"])
        )

        return FlowMeasure(
            id=data["id"],
            event=event,
            identifier=data["ident"],
            reason=data["reason"],
            start=start,
            end=end,
            withdrawn_at=withdrawn_at,
            status=measure_status(start, end, withdrawn_at),
            notified_flight_information_regions=notified_firs,
            measure=measure,
            filters=filters,
            custom_filters=self._custom_filters,
        )

    @staticmethod
    def _data_is_valid(data: Any) -> bool:
        return isinstance(data, dict) and isinstance(data.get("flow_measures"), list)

    @staticmethod
    def _properties_valid(data: Any) -> bool:
        return (
            isinstance(data, dict)
            and _is_int(data.get("id"))
            and isinstance(data.get("ident"), str)
            and "event_id" in data
            and (data["event_id"] is None or _is_int(data["event_id"]))
            and isinstance(data.get("reason"), str)
            and _valid_date(data.get("starttime"))
            and _valid_date(data.get("endtime"))
            and "withdrawn_at" in data
            and (data["withdrawn_at"] is None or _valid_date(data["withdrawn_at"]))
            and "measure" in data
            and "filters" in data
        )

    @staticmethod
    def _notified_firs(
        data: dict, firs: ElementCollection[FlightInformationRegion]
    ) -> tuple[FlightInformationRegion, ...]:
        fir_ids = data.get("notified_flight_information_regions")
        if not isinstance(fir_ids, list):
            logger.error("FlowMeasureDataParser: notified firs data is invalid")
            return ()

        notified: list[FlightInformationRegion] = []
        for fir_id in fir_ids:
            if not _is_int(fir_id):
                logger.error("FlowMeasureDataParser: fir is not an integer")
                return ()
            fir = firs.get(fir_id)
            if fir is None:
                logger.error("FlowMeasureDataParser: fir is unknown")
                return ()
            notified.append(fir)
        return tuple(notified)