from datetime import datetime, time, timedelta, timezone
from itertools import product
from zoneinfo import ZoneInfo

import pytest
import pytz

from coffeedate.config.settings import MonthOverflow, SeriesConfig
from coffeedate.core.event_model import (
    EventSeries,
    RecurrenceParams,
    describe_series,
    resolve_duration,
    resolve_occurrence_count,
)
from coffeedate.core.recurrence import (
    add_months,
    compute_first_occurrence,
    generate_series,
    generate_series_now,
    weekday_sunday_first,
)
from coffeedate.core import timezone_utils
from coffeedate.core.timezone_utils import LocalClock
from coffeedate.exceptions import InvalidParameters

NEW_YORK = pytz.timezone("America/New_York")
NEW_YORK_ZI = ZoneInfo("America/New_York")


def local(*args: int) -> datetime:
    return NEW_YORK.localize(datetime(*args))


def wall(dt: datetime) -> datetime:
    return dt.replace(tzinfo=None)


def test_weekday_sunday_first() -> None:
    assert weekday_sunday_first(datetime(2024, 1, 14)) == 0  # Sunday
    assert weekday_sunday_first(datetime(2024, 1, 15)) == 1  # Monday
    assert weekday_sunday_first(datetime(2024, 1, 20)) == 6  # Saturday


def test_first_occurrence_skips_a_time_already_passed_today() -> None:
    now = local(2024, 1, 15, 10, 0)  # Monday 10:00

    first = compute_first_occurrence(now, 1, time(9, 0), 7)

    assert wall(first) == datetime(2024, 1, 22, 9, 0)


def test_first_occurrence_is_today_when_still_ahead() -> None:
    now = local(2024, 1, 15, 8, 0)

    first = compute_first_occurrence(now, 1, time(9, 0), 7)

    assert wall(first) == datetime(2024, 1, 15, 9, 0)


def test_first_occurrence_at_exactly_now_moves_forward() -> None:
    now = local(2024, 1, 15, 9, 0)

    first = compute_first_occurrence(now, 1, time(9, 0), 14)

    assert wall(first) == datetime(2024, 1, 22, 9, 0)
    assert first > now


@pytest.mark.parametrize(
    "weekday, expected_day",
    [(0, 21), (2, 16), (3, 17), (6, 20)],
)
def test_first_occurrence_finds_later_weekday_in_week(weekday: int, expected_day: int) -> None:
    now = local(2024, 1, 15, 10, 0)

    first = compute_first_occurrence(now, weekday, time(18, 30), 7)

    assert wall(first) == datetime(2024, 1, expected_day, 18, 30)


def test_monthly_first_occurrence_moves_one_calendar_month() -> None:
    now = local(2024, 1, 15, 10, 0)

    first = compute_first_occurrence(now, 1, time(9, 0), 30)

    assert wall(first) == datetime(2024, 2, 15, 9, 0)


def test_first_occurrence_with_naive_now_and_explicit_zone() -> None:
    first = compute_first_occurrence(datetime(2024, 1, 15, 10, 0), 1, time(9, 0), 7, tz=NEW_YORK)

    assert wall(first) == datetime(2024, 1, 22, 9, 0)
    assert first.utcoffset() == timedelta(hours=-5)


def test_first_occurrence_converts_now_into_local_zone() -> None:
    # 15:30 UTC is 10:30 in New York, so Monday 09:00 has passed there
    now = datetime(2024, 1, 15, 15, 30, tzinfo=timezone.utc)

    first = compute_first_occurrence(now, 1, time(9, 0), 7, tz=NEW_YORK)

    assert wall(first) == datetime(2024, 1, 22, 9, 0)


def test_first_occurrence_is_always_in_the_future() -> None:
    reference = local(2024, 1, 14, 0, 0)
    nows = [reference + timedelta(hours=h) for h in range(0, 7 * 24, 5)]
    times = [time(0, 0), time(9, 0), time(23, 59)]

    for now, weekday, tod, cadence in product(nows, range(7), times, (7, 14, 30)):
        now = NEW_YORK.normalize(now)
        first = compute_first_occurrence(now, weekday, tod, cadence)
        assert first > now
        assert (first.hour, first.minute) == (tod.hour, tod.minute)
        if cadence != 30:
            assert weekday_sunday_first(first) == weekday


def test_weekly_series_spacing_and_duration() -> None:
    params = RecurrenceParams(7, 1, time(9, 0), duration_minutes=45, occurrence_count=4)

    series = generate_series(local(2024, 1, 15, 10, 0), params)

    assert [wall(e.start) for e in series] == [
        datetime(2024, 1, 22, 9, 0),
        datetime(2024, 1, 29, 9, 0),
        datetime(2024, 2, 5, 9, 0),
        datetime(2024, 2, 12, 9, 0),
    ]
    for event in series:
        assert event.end - event.start == timedelta(minutes=45)
        assert event.duration_minutes == 45


def test_every_n_days_series() -> None:
    params = RecurrenceParams(14, 1, time(9, 0), occurrence_count=3)

    series = generate_series(local(2024, 1, 15, 10, 0), params)

    assert [wall(e.start).date() for e in series] == [
        datetime(2024, 1, 22).date(),
        datetime(2024, 2, 5).date(),
        datetime(2024, 2, 19).date(),
    ]


def test_monthly_series_keeps_day_of_month() -> None:
    params = RecurrenceParams(30, 1, time(9, 0), occurrence_count=14)

    series = generate_series(local(2024, 1, 15, 8, 0), params)

    assert wall(series[0].start) == datetime(2024, 1, 15, 9, 0)
    assert wall(series[1].start) == datetime(2024, 2, 15, 9, 0)
    assert wall(series[13].start) == datetime(2025, 2, 15, 9, 0)


def test_series_is_strictly_increasing_and_starts_after_now() -> None:
    now = local(2024, 1, 31, 10, 0)
    for cadence in (1, 7, 30):
        params = RecurrenceParams(cadence, 3, time(9, 0), occurrence_count=50)
        series = generate_series(now, params)

        assert len(series) == 50
        assert series[0].start > now
        for earlier, later in zip(series, list(series)[1:]):
            assert earlier.start < later.start


def test_weekly_series_keeps_wall_clock_across_dst() -> None:
    params = RecurrenceParams(7, 1, time(9, 0), duration_minutes=30, occurrence_count=3)

    series = generate_series(local(2024, 3, 4, 8, 0), params)

    assert [wall(e.start) for e in series] == [
        datetime(2024, 3, 4, 9, 0),
        datetime(2024, 3, 11, 9, 0),
        datetime(2024, 3, 18, 9, 0),
    ]
    assert series[0].start.utcoffset() == timedelta(hours=-5)
    assert series[1].start.utcoffset() == timedelta(hours=-4)
    # One hour less of elapsed time between the first two dates
    assert series[1].start - series[0].start == timedelta(days=7, hours=-1)
    assert all(e.end - e.start == timedelta(minutes=30) for e in series)


def test_event_ids_encode_start_in_epoch_millis() -> None:
    params = RecurrenceParams(7, 1, time(9, 0), occurrence_count=5)

    series = generate_series(local(2024, 1, 15, 10, 0), params)

    expected_ms = int(datetime(2024, 1, 22, 14, 0, tzinfo=timezone.utc).timestamp()) * 1000
    assert series[0].id == f"event-{expected_ms}"
    assert len({e.id for e in series}) == 5


def test_location_is_copied_to_every_event() -> None:
    params = RecurrenceParams.from_raw(7, 1, "09:00", location="  Blue Bottle  ")

    series = generate_series(local(2024, 1, 15, 10, 0), params)

    assert {e.location for e in series} == {"Blue Bottle"}


def test_generate_series_now_uses_clock() -> None:
    clock = LocalClock.fixed("America/New_York", datetime(2024, 1, 15, 10, 0))
    params = RecurrenceParams.from_raw("7", "1", "09:00", occurrences="2")

    series = generate_series_now(params, clock)

    assert len(series) == 2
    assert wall(series[0].start) == datetime(2024, 1, 22, 9, 0)


def test_add_months_rolls_over_by_default() -> None:
    assert add_months(datetime(2023, 1, 31, 9, 0), 1) == datetime(2023, 3, 3, 9, 0)
    assert add_months(datetime(2024, 1, 31, 9, 0), 1) == datetime(2024, 3, 2, 9, 0)
    assert add_months(datetime(2024, 11, 15, 9, 0), 2) == datetime(2025, 1, 15, 9, 0)


def test_add_months_clamp_policy() -> None:
    assert add_months(datetime(2023, 1, 31, 9, 0), 1, MonthOverflow.CLAMP) == datetime(2023, 2, 28, 9, 0)
    assert add_months(datetime(2023, 1, 31, 9, 0), 2, MonthOverflow.CLAMP) == datetime(2023, 3, 31, 9, 0)


def test_monthly_series_from_month_end_stays_increasing() -> None:
    params = RecurrenceParams(30, 3, time(9, 0), occurrence_count=12)
    now = local(2024, 1, 30, 10, 0)  # Tuesday; next Wednesday is Jan 31

    rolled = generate_series(now, params)
    clamped = generate_series(now, params, month_overflow=MonthOverflow.CLAMP)

    assert wall(rolled[0].start) == datetime(2024, 1, 31, 9, 0)
    assert wall(rolled[1].start) == datetime(2024, 3, 2, 9, 0)
    assert wall(rolled[2].start) == datetime(2024, 3, 31, 9, 0)
    assert wall(clamped[1].start) == datetime(2024, 2, 29, 9, 0)
    for series in (rolled, clamped):
        starts = [e.start for e in series]
        assert starts == sorted(set(starts))


@pytest.mark.parametrize("raw, expected", [(0, 5), (-3, 5), ("abc", 5), (None, 5), ("", 5), (200, 50), ("7", 7), (50, 50)])
def test_occurrence_count_defaults_and_clamps(raw: object, expected: int) -> None:
    params = RecurrenceParams.from_raw(7, 1, "09:00", occurrences=raw)

    series = generate_series(local(2024, 1, 15, 10, 0), params)

    assert params.occurrence_count == expected
    assert len(series) == expected


@pytest.mark.parametrize("raw, expected", [("abc", 60), (None, 60), (0, 60), ("45", 45), ("90 min", 90)])
def test_duration_defaults(raw: object, expected: int) -> None:
    params = RecurrenceParams.from_raw(7, 1, "09:00", duration=raw)

    assert params.duration_minutes == expected


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"weekday": 7}, "target_weekday"),
        ({"weekday": -1}, "target_weekday"),
        ({"weekday": "someday"}, "target_weekday"),
        ({"time_value": "25:00"}, "time_of_day"),
        ({"time_value": "12:60"}, "time_of_day"),
        ({"time_value": "teatime"}, "time_of_day"),
        ({"time_value": ""}, "time_of_day"),
        ({"cadence": 0}, "cadence_days"),
        ({"cadence": -7}, "cadence_days"),
        ({"cadence": "weekly"}, "cadence_days"),
    ],
)
def test_invalid_parameters_are_rejected(kwargs: dict, field: str) -> None:
    raw = {"cadence": 7, "weekday": 1, "time_value": "09:00"}
    raw.update(kwargs)

    with pytest.raises(InvalidParameters) as excinfo:
        RecurrenceParams.from_raw(**raw)

    assert excinfo.value.field == field


def test_event_series_find_resolves_fragments() -> None:
    series = generate_series(local(2024, 1, 15, 10, 0), RecurrenceParams(7, 1, time(9, 0), occurrence_count=3))
    target = series[1]

    assert series.find(target.id) is target
    assert series.find("#" + target.id) is target
    assert series.find("event-0") is None
    assert EventSeries().find(target.id) is None


def test_describe_series() -> None:
    series = generate_series(local(2024, 1, 15, 10, 0), RecurrenceParams(7, 1, time(9, 0)))

    assert describe_series(series) == "Generated 5 events."


def test_naive_now_without_zone_uses_host_zone(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(timezone_utils.tzlocal, "get_localzone", lambda: ZoneInfo("Asia/Tokyo"))

    first = compute_first_occurrence(datetime(2024, 1, 15, 10, 0), 1, time(9, 0), 7)

    assert first.tzinfo.zone == "Asia/Tokyo"
    assert wall(first) == datetime(2024, 1, 22, 9, 0)
    assert first.utcoffset() == timedelta(hours=9)


def test_zoneinfo_series_keeps_elapsed_duration_across_fall_back() -> None:
    params = RecurrenceParams(7, 0, time(0, 30), duration_minutes=120, occurrence_count=3)
    now = datetime(2024, 10, 27, 12, 0, tzinfo=NEW_YORK_ZI)  # Sunday noon

    series = generate_series(now, params)

    assert [wall(e.start) for e in series] == [
        datetime(2024, 11, 3, 0, 30),
        datetime(2024, 11, 10, 0, 30),
        datetime(2024, 11, 17, 0, 30),
    ]
    for event in series:
        assert event.end.astimezone(timezone.utc) - event.start.astimezone(timezone.utc) == timedelta(minutes=120)
        assert event.duration_minutes == 120
    # Clocks go back at 02:00, so two hours after 00:30 EDT is 01:30 EST
    assert wall(series[0].end) == datetime(2024, 11, 3, 1, 30)
    assert series[0].end.utcoffset() == timedelta(hours=-5)


def test_zoneinfo_skipped_start_moves_forward() -> None:
    params = RecurrenceParams(7, 0, time(2, 30), occurrence_count=2)
    now = datetime(2024, 3, 9, 12, 0, tzinfo=NEW_YORK_ZI)  # Saturday

    series = generate_series(now, params)

    assert wall(series[0].start) == datetime(2024, 3, 10, 3, 30)
    assert series[0].start.utcoffset() == timedelta(hours=-4)
    assert wall(series[1].start) == datetime(2024, 3, 17, 3, 30)
    assert series[0].start > now


def test_zoneinfo_first_occurrence_in_repeated_hour() -> None:
    # A repeated 01:30 reads as the earlier, EDT one, which has already passed
    now = datetime(2024, 11, 3, 1, 45, tzinfo=NEW_YORK_ZI)

    first = compute_first_occurrence(now, 0, time(1, 30), 7)

    assert wall(first) == datetime(2024, 11, 10, 1, 30)
    assert first.astimezone(timezone.utc) > now.astimezone(timezone.utc)


def test_non_string_location_is_coerced() -> None:
    params = RecurrenceParams.from_raw(7, 1, "09:00", location=42)

    assert params.location == "42"


def test_resolve_helpers_honour_custom_limits() -> None:
    config = SeriesConfig(default_occurrences=3, max_occurrences=10, default_duration_minutes=30)

    assert resolve_occurrence_count(None, config) == 3
    assert resolve_occurrence_count(99, config) == 10
    assert resolve_duration("soon", config) == 30
