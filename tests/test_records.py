import pytest

from segment_league.core.errors import InvalidTimestamp, RecordError
from segment_league.services.records import (
    EffortRecord,
    WeekInfo,
    WeekResult,
    effort_to_dict,
    performance_from_payload,
)

from factories import BASE


def _payload(**overrides):
    payload = {
        "id": 991,
        "name": "Tuesday laps",
        "start_date": "2025-01-02T07:00:00Z",
        "device_name": "Edge 540",
        "segment_efforts": [
            {
                "id": 5001,
                "segment": {"id": 1234},
                "elapsed_time": 301,
                "start_date": "2025-01-02T07:10:00Z",
                "pr_rank": 1,
                "average_watts": 250.5,
            },
            {
                "id": 5002,
                "segment": {"id": 1234},
                "elapsed_time": 299,
                "start_date": "2025-01-02T07:20:00Z",
                "pr_rank": 2,
            },
        ],
    }
    payload.update(overrides)
    return payload


def test_strava_payload_becomes_performance_record():
    record = performance_from_payload(_payload())

    assert record.activity_id == "991"
    assert record.device_name == "Edge 540"
    assert [effort.elapsed_seconds for effort in record.efforts_on("1234")] == [301, 299]
    first, second = record.efforts
    assert first.pr_achieved is True
    assert second.pr_achieved is False
    assert first.start_at == BASE + 86_400 + 7 * 3600 + 600
    assert effort_to_dict(first)["average_watts"] == 250.5


def test_summary_without_efforts_is_not_hydrated():
    payload = _payload()
    del payload["segment_efforts"]
    assert performance_from_payload(payload).efforts is None


def test_start_date_is_kept_as_received():
    record = performance_from_payload(_payload(start_date="garbage"))
    assert record.start_date == "garbage"


def test_bad_effort_timestamp_is_rejected():
    payload = _payload()
    payload["segment_efforts"][0]["start_date"] = "yesterday"
    with pytest.raises(InvalidTimestamp):
        performance_from_payload(payload)


@pytest.mark.parametrize(
    "overrides",
    [
        {"id": None},
        {"segment_efforts": "nope"},
    ],
)
def test_malformed_payloads_raise_record_error(overrides):
    with pytest.raises(RecordError):
        performance_from_payload(_payload(**overrides))


def test_non_object_payload_raises_record_error():
    with pytest.raises(RecordError):
        performance_from_payload(["not", "an", "activity"])


@pytest.mark.parametrize("seconds", [0, -5, None, "60"])
def test_effort_requires_positive_seconds(seconds):
    with pytest.raises(RecordError):
        EffortRecord(segment_id="1", elapsed_seconds=seconds, start_at=BASE)


def test_week_info_rejects_zero_laps():
    with pytest.raises(RecordError):
        WeekInfo(
            id=1,
            season_id=1,
            name="Week 1",
            segment_id="1",
            required_laps=0,
            start_at=BASE,
            end_at=BASE + 1,
            multiplier=1,
        )


def test_week_result_rejects_missing_time():
    with pytest.raises(RecordError):
        WeekResult(participant_id="a", participant_name="A", total_time_seconds=None)
