from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

import pytest

from face_attendance.attendance.model import AttendanceEvent, DailySummary, DateRange
from face_attendance.attendance.summarizer import late_minutes, summarize_daily
from face_attendance.core.enums import EventKind
from face_attendance.core.exceptions import MalformedEventError, ValidationError
from face_attendance.settings.model import ScheduleSetting

NINE = ScheduleSetting(clock_in_deadline=time(9, 0))

_ids = iter(range(1, 10_000))


def ev(kind: EventKind, ts: datetime, employee_id: str = "E1", name: str = "Alice") -> AttendanceEvent:
    return AttendanceEvent(
        event_id=next(_ids),
        employee_id=employee_id,
        employee_name=name,
        date=ts.date(),
        time_of_day=ts.time().replace(microsecond=0),
        kind=kind,
        timestamp=ts,
    )


def clock_in(ts, **kw):
    return ev(EventKind.CLOCK_IN, ts, **kw)


def clock_out(ts, **kw):
    return ev(EventKind.CLOCK_OUT, ts, **kw)


def test_example_day():
    events = [
        clock_in(datetime(2024, 7, 22, 9, 1, 15)),
        clock_out(datetime(2024, 7, 22, 17, 35, 10)),
    ]

    [summary] = summarize_daily(events, schedule=NINE)

    assert summary == DailySummary(
        employee_id="E1",
        employee_name="Alice",
        date=date(2024, 7, 22),
        first_clock_in=time(9, 1, 15),
        last_clock_out=time(17, 35, 10),
        late_minutes=1,
    )
    assert summary.to_dict()["first_clock_in"] == "09:01:15"


@pytest.mark.parametrize(
    "clock,expected",
    [
        (time(9, 15), 15),
        (time(8, 59), 0),
        (time(9, 0), 0),
        (time(9, 0, 29), 0),
        (time(9, 0, 30), 1),
        (time(9, 1, 29), 1),
        (time(10, 30), 90),
    ],
)
def test_lateness_against_deadline(clock, expected):
    ts = datetime.combine(date(2024, 7, 22), clock)
    [summary] = summarize_daily([clock_in(ts)], schedule=NINE)
    assert summary.late_minutes == expected


def test_late_minutes_helper_is_zero_before_deadline():
    assert late_minutes(datetime(2024, 7, 22, 7, 0), NINE) == 0


def test_lateness_is_none_without_schedule():
    [summary] = summarize_daily([clock_in(datetime(2024, 7, 22, 11, 0))])
    assert summary.late_minutes is None
    assert summary.first_clock_in == time(11, 0)


def test_keeps_first_clock_in_and_last_clock_out():
    events = [
        clock_out(datetime(2024, 7, 22, 17, 30)),
        clock_in(datetime(2024, 7, 22, 9, 10)),
        clock_out(datetime(2024, 7, 22, 17, 0)),
        clock_in(datetime(2024, 7, 22, 9, 0)),
    ]

    [summary] = summarize_daily(events, schedule=NINE)

    assert summary.first_clock_in == time(9, 0)
    assert summary.last_clock_out == time(17, 30)
    assert summary.late_minutes == 0


def test_clock_out_only_day():
    [summary] = summarize_daily([clock_out(datetime(2024, 7, 22, 18, 0))], schedule=NINE)

    assert summary.first_clock_in is None
    assert summary.last_clock_out == time(18, 0)
    assert summary.late_minutes is None


def test_one_summary_per_employee_day_sorted_newest_first():
    events = [
        clock_in(datetime(2024, 7, 21, 9, 0), employee_id="E2", name="Bob"),
        clock_in(datetime(2024, 7, 22, 9, 5), employee_id="E2", name="Bob"),
        clock_in(datetime(2024, 7, 22, 8, 55)),
        clock_in(datetime(2024, 7, 21, 9, 20)),
        clock_out(datetime(2024, 7, 21, 17, 0)),
    ]

    summaries = summarize_daily(events, schedule=NINE)

    assert [(s.date.day, s.employee_id) for s in summaries] == [(22, "E1"), (22, "E2"), (21, "E1"), (21, "E2")]
    assert [s.late_minutes for s in summaries] == [0, 5, 20, 0]


def test_empty_input_gives_empty_output():
    assert summarize_daily([], schedule=NINE) == []
    assert summarize_daily([], date_range=DateRange(start=date(2024, 7, 22))) == []


def test_range_boundaries_are_inclusive_to_the_millisecond():
    start, end = date(2024, 7, 10), date(2024, 7, 12)
    lower = datetime(2024, 7, 10, 0, 0, 0)
    upper = datetime(2024, 7, 12, 23, 59, 59, 999000)
    ms = timedelta(milliseconds=1)

    events = [
        clock_in(lower - ms, employee_id="before"),
        clock_in(lower, employee_id="at-start"),
        clock_out(upper, employee_id="at-end"),
        clock_out(upper + ms, employee_id="after"),
    ]

    summaries = summarize_daily(events, date_range=DateRange(start=start, end=end))

    assert sorted(s.employee_id for s in summaries) == ["at-end", "at-start"]


def test_range_end_defaults_to_start_day():
    events = [
        clock_in(datetime(2024, 7, 22, 9, 0)),
        clock_in(datetime(2024, 7, 23, 9, 0)),
    ]

    summaries = summarize_daily(events, date_range=DateRange(start=date(2024, 7, 22)))

    assert [s.date for s in summaries] == [date(2024, 7, 22)]


def test_summarizing_twice_gives_identical_output():
    events = (
        clock_in(datetime(2024, 7, 22, 9, 7)),
        clock_out(datetime(2024, 7, 22, 17, 0)),
        clock_in(datetime(2024, 7, 23, 8, 50), employee_id="E2"),
    )

    assert summarize_daily(events, schedule=NINE) == summarize_daily(events, schedule=NINE)


def test_iso_string_timestamp_is_accepted():
    event = AttendanceEvent(
        event_id=1,
        employee_id="E1",
        employee_name="Alice",
        date=date(2024, 7, 22),
        time_of_day=time(9, 3),
        kind=EventKind.CLOCK_IN,
        timestamp="2024-07-22T09:03:00",
    )
    [summary] = summarize_daily([event], schedule=NINE)
    assert summary.late_minutes == 3


@pytest.mark.parametrize("timestamp", ["yesterday-ish", None, 1721638800])
def test_unparseable_timestamp_is_reported(timestamp):
    event = AttendanceEvent(
        event_id=42,
        employee_id="E1",
        employee_name="Alice",
        date=date(2024, 7, 22),
        time_of_day=time(9, 0),
        kind=EventKind.CLOCK_IN,
        timestamp=timestamp,
    )

    with pytest.raises(MalformedEventError) as exc:
        summarize_daily([event])

    assert exc.value.event_id == 42
    assert "42" in str(exc.value)


def test_unknown_kind_is_reported():
    event = AttendanceEvent(
        event_id=7,
        employee_id="E1",
        employee_name="Alice",
        date=date(2024, 7, 22),
        time_of_day=time(12, 0),
        kind="Lunch Break",
        timestamp=datetime(2024, 7, 22, 12, 0),
    )

    with pytest.raises(MalformedEventError) as exc:
        summarize_daily([clock_in(datetime(2024, 7, 22, 9, 0)), event])

    assert exc.value.event_id == 7


def test_offset_timestamp_mixed_with_local_is_reported():
    offset_event = AttendanceEvent(
        event_id=99,
        employee_id="E1",
        employee_name="Alice",
        date=date(2024, 7, 22),
        time_of_day=time(17, 0),
        kind=EventKind.CLOCK_OUT,
        timestamp="2024-07-22T17:00:00+07:00",
    )

    with pytest.raises(MalformedEventError) as exc:
        summarize_daily([clock_in(datetime(2024, 7, 22, 9, 0)), offset_event])

    assert exc.value.event_id == 99


def test_aware_datetime_timestamp_is_reported():
    event = clock_in(datetime(2024, 7, 22, 9, 0, tzinfo=timezone.utc))
    with pytest.raises(MalformedEventError):
        summarize_daily([event])


def test_date_range_rejects_offset_bounds():
    with pytest.raises(ValidationError):
        DateRange(start=datetime(2024, 7, 22, tzinfo=timezone.utc))
    with pytest.raises(ValidationError):
        DateRange(start=date(2024, 7, 22), end=datetime(2024, 7, 23, tzinfo=timezone.utc))


def test_date_range_accepts_local_datetimes():
    events = [clock_in(datetime(2024, 7, 22, 9, 0)), clock_in(datetime(2024, 7, 23, 9, 0))]

    summaries = summarize_daily(events, date_range=DateRange(start=datetime(2024, 7, 22, 15, 30)))

    assert [s.date for s in summaries] == [date(2024, 7, 22)]
