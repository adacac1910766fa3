from datetime import datetime, timedelta, timezone

import pytest

from segment_league.core.errors import InvalidInput, InvalidTimestamp
from segment_league.core.time import to_unix, unix_to_iso
from segment_league.models import Season
from segment_league.services.records import TimeWindow
from segment_league.services.windows import SeasonStatus, is_within, season_status

from factories import BASE, DAY

WEEK = TimeWindow(BASE, BASE + 7 * DAY)


def test_start_is_inclusive_and_end_is_exclusive():
    assert is_within(BASE, WEEK)
    assert is_within(BASE + 7 * DAY - 1, WEEK)
    assert not is_within(BASE + 7 * DAY, WEEK)
    assert not is_within(BASE - 1, WEEK)


def test_accepts_iso_strings_with_offsets():
    assert is_within("2025-01-01T00:00:00Z", WEEK)
    # 23:30 on Dec 31 at -01:00 is 00:30 UTC on Jan 1.
    assert is_within("2024-12-31T23:30:00-01:00", WEEK)
    assert not is_within("2025-01-01T00:30:00+01:00", WEEK)


def test_accepts_aware_datetimes():
    local = timezone(timedelta(hours=-8))
    assert is_within(datetime(2025, 1, 7, 15, 59, 59, tzinfo=local), WEEK)
    assert not is_within(datetime(2025, 1, 7, 16, 0, 0, tzinfo=local), WEEK)


@pytest.mark.parametrize(
    "value",
    [
        "not a date",
        "",
        None,
        True,
        datetime(2025, 1, 2),
        "--5",
        "\u00b2",
        "1_735_689_600",
        float("nan"),
        float("inf"),
        float("-inf"),
    ],
)
def test_unresolvable_timestamps_raise(value):
    with pytest.raises(InvalidTimestamp):
        is_within(value, WEEK)


def test_empty_window_contains_nothing():
    empty = TimeWindow(BASE, BASE)
    assert not is_within(BASE, empty)


def test_window_rejects_reversed_bounds():
    with pytest.raises(InvalidInput):
        TimeWindow(BASE + 1, BASE)


def test_timestamp_helpers_agree():
    assert to_unix("1735689600") == BASE
    assert unix_to_iso(BASE) == "2025-01-01T00:00:00Z"
    assert to_unix(unix_to_iso(BASE + 123)) == BASE + 123


def test_season_status_follows_the_clock():
    season = Season(id=1, name="Spring", start_at=BASE, end_at=BASE + 10 * DAY)
    assert season_status(season, now=BASE - 1) is SeasonStatus.UPCOMING
    assert season_status(season, now=BASE) is SeasonStatus.OPEN
    assert season_status(season, now=BASE + 10 * DAY - 1) is SeasonStatus.OPEN
    assert season_status(season, now=BASE + 10 * DAY) is SeasonStatus.CLOSED
