"""Runs the individual parsers over freshly downloaded API data."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from flowdata.downloader import ApiDataDownloadedEvent
from flowdata.elements import ElementCollection

__all__ = [
    "FirParser",
    "EventParser",
    "FlowMeasureParser",
    "ApiDataParser",
]

logger = logging.getLogger(__name__)


class FirParser(Protocol):
    def parse_firs(self, data: Any) -> ElementCollection | None: ...


class EventParser(Protocol):
    def parse_events(self, data: Any, firs: ElementCollection) -> ElementCollection | None: ...


class FlowMeasureParser(Protocol):
    def parse_flow_measures(
        self, data: Any, events: ElementCollection, firs: ElementCollection
    ) -> ElementCollection | None: ...


class ApiDataParser:
    """Parses FIRs, then events, then flow measures, stopping at the first failure."""

    def __init__(
        self,
        event_parser: EventParser,
        fir_parser: FirParser,
        flow_measure_parser: FlowMeasureParser,
    ) -> None:
        self._event_parser = event_parser
        self._fir_parser = fir_parser
        self._flow_measure_parser = flow_measure_parser

    def on_event(self, event: ApiDataDownloadedEvent) -> None:
        """Parse the data carried by a download event."""
        firs = self._fir_parser.parse_firs(event.data)
        if firs is None:
            logger.warning("Could not parse FIRs. Events and flow measures will not be parsed.")
            return

        events = self._event_parser.parse_events(event.data, firs)
        if events is None:
            logger.warning("Could not parse events. Flow measures will not be parsed.")
            return

        flow_measures = self._flow_measure_parser.parse_flow_measures(event.data, events, firs)
        if flow_measures is None:
            logger.warning("Could not parse flow measures.")