from datetime import timedelta

import pytest

from flowdata.dates import time_point_from_date_string
from flowdata.elements import ElementCollection
from flowdata.events import Event
from flowdata.filters import (
    AirportFilter,
    AirportFilterType,
    FlowMeasureFilterParser,
)
from flowdata.firs import FlightInformationRegion
from flowdata.flow_measures import (
    FlowMeasureDataParser,
    FlowMeasuresUpdatedEvent,
    MeasureStatus,
    measure_status,
)
from flowdata.measures import FlowMeasureMeasureParser, Measure, MeasureType

PAST_START = "2020-04-16T13:16:00Z"
FAR_END = "2999-04-16T13:17:00Z"


@pytest.fixture
def firs():
    collection = ElementCollection()
    collection.add(FlightInformationRegion(1, "EGTT", "London"))
    collection.add(FlightInformationRegion(2, "EGPX", "Scottish"))
    return collection


@pytest.fixture
def events(firs):
    collection = ElementCollection()
    collection.add(
        Event(
            id=1,
            name="London Event",
            start=time_point_from_date_string("2022-04-16T13:16:00Z"),
            end=time_point_from_date_string("2022-04-16T13:17:00Z"),
            flight_information_region=firs.get(1),
            vatcan_code="abc",
        )
    )
    return collection


@pytest.fixture
def published():
    return []


@pytest.fixture
def custom_filters():
    return []


@pytest.fixture
def parser(published, custom_filters):
    return FlowMeasureDataParser(
        FlowMeasureFilterParser(),
        FlowMeasureMeasureParser(),
        published.append,
        custom_filters,
    )


def valid_measure(**overrides):
    data = {
        "id": 1,
        "ident": "EGTT01A",
        "event_id": 1,
        "reason": "Reason",
        "starttime": PAST_START,
        "endtime": FAR_END,
        "withdrawn_at": None,
        "notified_flight_information_regions": [1, 2],
        "measure": {"type": "miles_in_trail", "value": 20},
        "filters": [{"type": "ADEP", "value": ["EGKK", "EGLL"]}],
    }
    data.update(overrides)
    return data


def without(key):
    data = valid_measure(id=2)
    del data[key]
    return data


@pytest.mark.parametrize(
    "data",
    [[], {"not_flow_measures": []}, {"flow_measures": "abc"}],
)
def test_it_returns_none_for_invalid_data(parser, published, events, firs, data):
    assert parser.parse_flow_measures(data, events, firs) is None
    assert published == []


def test_it_parses_a_flow_measure(parser, events, firs, custom_filters):
    result = parser.parse_flow_measures({"flow_measures": [valid_measure()]}, events, firs)

    assert len(result) == 1
    measure = result.get(1)
    assert measure.id == 1
    assert measure.identifier == "EGTT01A"
    assert measure.reason == "Reason"
    assert measure.event is events.get(1)
    assert measure.start == time_point_from_date_string(PAST_START)
    assert measure.end == time_point_from_date_string(FAR_END)
    assert measure.withdrawn_at is None
    assert measure.status is MeasureStatus.ACTIVE
    assert measure.notified_flight_information_regions == (firs.get(1), firs.get(2))
    assert measure.measure == Measure(MeasureType.MILES_IN_TRAIL, 20)
    assert measure.filters.airport_filters == (
        AirportFilter(frozenset({"EGKK", "EGLL"}), AirportFilterType.DEPARTURE),
    )
    assert measure.custom_filters is custom_filters


def test_it_publishes_the_parsed_collection(parser, published, events, firs):
    result = parser.parse_flow_measures({"flow_measures": [valid_measure()]}, events, firs)

    assert published == [FlowMeasuresUpdatedEvent(result)]
    assert published[0].flow_measures is result


def test_it_parses_measure_without_event(parser, events, firs):
    result = parser.parse_flow_measures(
        {"flow_measures": [valid_measure(event_id=None)]}, events, firs
    )

    assert result.get(1).event is None


def test_it_parses_withdrawn_measure(parser, events, firs):
    withdrawn = "2022-04-16T13:20:00Z"
    result = parser.parse_flow_measures(
        {"flow_measures": [valid_measure(withdrawn_at=withdrawn)]}, events, firs
    )

    measure = result.get(1)
    assert measure.withdrawn_at == time_point_from_date_string(withdrawn)
    assert measure.status is MeasureStatus.WITHDRAWN


def test_it_marks_future_measure_notified(parser, events, firs):
    result = parser.parse_flow_measures(
        {"flow_measures": [valid_measure(starttime="2998-04-16T13:16:00Z")]}, events, firs
    )

    assert result.get(1).status is MeasureStatus.NOTIFIED


def test_it_marks_past_measure_expired(parser, events, firs):
    result = parser.parse_flow_measures(
        {"flow_measures": [valid_measure(endtime="2021-04-16T13:17:00Z")]}, events, firs
    )

    assert result.get(1).status is MeasureStatus.EXPIRED


def test_it_parses_empty_list(parser, published, events, firs):
    result = parser.parse_flow_measures({"flow_measures": []}, events, firs)

    assert len(result) == 0
    assert len(published) == 1


@pytest.mark.parametrize(
    "bad",
    [
        without("id"),
        valid_measure(id="abc"),
        without("ident"),
        valid_measure(id=2, ident=123),
        without("event_id"),
        valid_measure(id=2, event_id="abc"),
        valid_measure(id=2, event_id=99),
        without("reason"),
        valid_measure(id=2, reason=123),
        without("starttime"),
        valid_measure(id=2, starttime="abc"),
        without("endtime"),
        valid_measure(id=2, endtime=123),
        without("withdrawn_at"),
        valid_measure(id=2, withdrawn_at="abc"),
        without("measure"),
        valid_measure(id=2, measure={"type": "unknown", "value": 1}),
        without("filters"),
        valid_measure(id=2, filters="abc"),
        without("notified_flight_information_regions"),
        valid_measure(id=2, notified_flight_information_regions="abc"),
        valid_measure(id=2, notified_flight_information_regions=[]),
        valid_measure(id=2, notified_flight_information_regions=[1, 55]),
        valid_measure(id=2, notified_flight_information_regions=[1, "abc"]),
        "abc",
    ],
)
def test_it_skips_bad_flow_measures(parser, published, events, firs, bad):
    result = parser.parse_flow_measures({"flow_measures": [bad, valid_measure()]}, events, firs)

    assert len(result) == 1
    assert result.get(1).id == 1
    assert 2 not in result
    assert len(published) == 1


def test_measure_status_withdrawn_overrides_times():
    start = time_point_from_date_string(PAST_START)
    end = time_point_from_date_string(FAR_END)
    now = start + timedelta(days=1)

    assert measure_status(start, end, now, now) is MeasureStatus.WITHDRAWN


def test_measure_status_by_time():
    start = time_point_from_date_string("2022-04-16T13:16:00Z")
    end = time_point_from_date_string("2022-04-16T13:17:00Z")

    assert measure_status(start, end, None, start - timedelta(seconds=1)) is MeasureStatus.NOTIFIED
    assert measure_status(start, end, None, start) is MeasureStatus.ACTIVE
    assert measure_status(start, end, None, end) is MeasureStatus.ACTIVE
    assert measure_status(start, end, None, end + timedelta(seconds=1)) is MeasureStatus.EXPIRED


def test_measure_status_defaults_to_current_time():
    start = time_point_from_date_string(PAST_START)
    end = time_point_from_date_string(FAR_END)

    assert measure_status(start, end, None) is MeasureStatus.ACTIVE