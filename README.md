# flowdata

A small library that turns the JSON document from a flow-management service
into Python objects. It checks and parses flight information regions (FIRs),
events with their participants, and flow measures with their measure and
filters. Each parser hands the collection it built to a `publish` callable
that you supply.

The library has no dependencies outside the standard library.

## Installation

```
pip install flowdata
```

To run the tests:

```
pip install "flowdata[test]"
pytest
```

## Modules

- `flowdata.dates`
  - `date_string_valid(date)` returns `True` when a string is a UTC
    timestamp such as `2022-04-16T13:16:00Z`. Fractional seconds are
    accepted.
  - `time_point_from_date_string(date)` returns a timezone-aware UTC
    `datetime`. If the string cannot be parsed it returns `MAX_TIME`.
  - `date_string_from_time_point(time_point)` formats a `datetime` as
    `YYYY-MM-DDTHH:MM:SSZ`. A naive datetime is taken to be UTC.
- `flowdata.elements.ElementCollection` is a thread-safe collection of
  elements keyed by their `id`. It supports `add`, `get` (which returns
  `None` for an unknown id), `len()`, `in` on an id, and iteration in
  insertion order. Adding an element whose id is already present replaces
  the old one.
- `flowdata.firs`
  - `FlightInformationRegion` has the fields `id`, `identifier` and `name`.
  - `FlightInformationRegionDataParser(publish).parse_firs(data)` reads
    `data["flight_information_regions"]`. It publishes a
    `FlightInformationRegionsUpdatedEvent`.
- `flowdata.events`
  - `Event` has the fields `id`, `name`, `start`, `end`,
    `flight_information_region`, `vatcan_code` and `participants`. Two
    events compare equal when their ids are equal.
  - `EventParticipant` has the fields `cid`, `origin_airport` and
    `destination_airport`.
- `flowdata.event_parser.EventDataParser(publish).parse_events(data, firs)`
  reads `data["events"]` and publishes an `EventsUpdatedEvent`.
  - An event whose FIR is not in `firs` is skipped.
  - A `null` VATCAN code becomes `""`.
  - A `null` participant origin or destination becomes `""`.
- `flowdata.measures`
  - `MeasureType` is an enum valued by the API's names, for example
    `"miles_in_trail"` or `"max_mach"`.
  - `measure_type_from_string(value)` returns the `MeasureType` for an API
    name. It raises `ValueError` for an unknown name.
  - `Measure` holds a `type` and a `value`. The value depends on the type:
    - an `int` for the interval, rate, airspeed and miles-in-trail types;
    - a `float` for the mach types, which the API sends in hundredths;
    - a `frozenset` of routes for `MANDATORY_ROUTE`;
    - `None` for `PROHIBIT` and `GROUND_STOP`.
  - `FlowMeasureMeasureParser().parse(data)` parses one measure object.
- `flowdata.filters`
  - The filter types are `AirportFilter`, `LevelRangeFilter`,
    `MultipleLevelFilter`, `EventFilter`, `RouteFilter` and
    `RangeToDestinationFilter`. `FlowMeasureFilters` groups them.
  - `FlowMeasureFilterParser().parse(data, events)` parses a filter array.
    Filters of an unknown type are skipped. Any other invalid filter makes
    the whole array invalid.
- `flowdata.flow_measures`
  - `FlowMeasure` is the parsed flow measure. `MeasureStatus` is one of
    `NOTIFIED`, `ACTIVE`, `EXPIRED` or `WITHDRAWN`.
  - `measure_status(start, end, withdrawn_at, now=None)` gives the status
    of a measure at `now`, which defaults to the current UTC time.
  - `FlowMeasureDataParser(filter_parser, measure_parser, publish,
    custom_filters=None).parse_flow_measures(data, events, firs)` reads
    `data["flow_measures"]` and publishes a `FlowMeasuresUpdatedEvent`.
- `flowdata.downloader`
  - `ApiDataDownloader(http_get, publish).on_event(event)` fetches
    `PLUGIN_API_DATA_URL`. When the response is a 200 whose body is a JSON
    object, it publishes an `ApiDataDownloadedEvent`. Otherwise it logs an
    error and publishes nothing.
  - `http_get(url)` is a ready-made `urllib` implementation that returns an
    `HttpResponse`. Its status is `0` when no response was received.
- `flowdata.api_parser.ApiDataParser(event_parser, fir_parser,
  flow_measure_parser).on_event(event)` runs the FIR, event and flow measure
  parsers in that order on an `ApiDataDownloadedEvent`. It stops at the first
  parser that returns `None`.
- `flowdata.scheduler.ApiDataScheduler(publish, clock=None).on_event()`
  publishes an `ApiDataDownloadRequiredEvent` in two cases:
  - on the first tick;
  - once more than `RUN_INTERVAL` (90 seconds) has passed since the last
    request.

## Failure handling

The parsers return `None` when the document as a whole is invalid. Invalid
individual entries are skipped. Both cases are logged through the standard
`logging` module.

## Example

```python
from flowdata.firs import FlightInformationRegionDataParser
from flowdata.event_parser import EventDataParser

published = []
fir_parser = FlightInformationRegionDataParser(published.append)
event_parser = EventDataParser(published.append)

data = {
    "flight_information_regions": [
        {"id": 1, "identifier": "EGTT", "name": "London"},
    ],
    "events": [
        {
            "id": 1,
            "flight_information_region_id": 1,
            "name": "London Event",
            "date_start": "2022-04-16T13:16:00Z",
            "date_end": "2022-04-16T13:17:00Z",
            "vatcan_code": None,
            "participants": [],
        },
    ],
}

firs = fir_parser.parse_firs(data)
events = event_parser.parse_events(data, firs)
print(len(events), events.get(1).name)  # 1 London Event
```

## What this package does not do

- It has no event bus. Each component takes a plain `publish` callable, and
  routing published objects between components is left to you.
- There is no timer and no command-line program.
- Filters are parsed as data only. Nothing in the package checks whether a
  given aircraft or flight plan matches a flow measure's filters.
- `custom_filters` are stored on each `FlowMeasure` and are never applied.