import httpx
import pytest

from segment_league.core.errors import TelemetryError
from segment_league.services.telemetry import PAGE_SIZE, StravaClient

API = "https://strava.test/api/v3"


def _client(handler):
    return StravaClient(base_url=API, timeout=5, transport=httpx.MockTransport(handler))


def _summary(activity_id):
    return {"id": activity_id, "name": f"Ride {activity_id}", "start_date": "2025-01-02T08:00:00Z"}


def test_list_activities_pages_until_short_page():
    seen = []

    def handler(request):
        assert request.headers["Authorization"] == "Bearer secret"
        page = int(request.url.params["page"])
        seen.append((page, request.url.params["after"], request.url.params["before"]))
        if page == 1:
            return httpx.Response(200, json=[_summary(i) for i in range(PAGE_SIZE)])
        return httpx.Response(200, json=[_summary(1000)])

    with _client(handler) as client:
        activities = client.list_activities("secret", after=100, before=200)

    assert len(activities) == PAGE_SIZE + 1
    assert all(item.efforts is None for item in activities)
    assert [page for page, _, _ in seen] == [1, 2]
    assert seen[0][1:] == ("100", "200")


def test_get_activity_requests_all_efforts():
    def handler(request):
        assert request.url.path.endswith("/activities/55")
        assert request.url.params["include_all_efforts"] == "true"
        return httpx.Response(
            200,
            json={
                "id": 55,
                "start_date": "2025-01-02T08:00:00Z",
                "segment_efforts": [
                    {"id": 1, "segment": {"id": 9}, "elapsed_time": 120, "start_date": "2025-01-02T08:05:00Z"}
                ],
            },
        )

    with _client(handler) as client:
        record = client.get_activity("secret", "55")

    assert record.activity_id == "55"
    assert [effort.elapsed_seconds for effort in record.efforts_on("9")] == [120]


def test_activity_without_efforts_is_treated_as_empty():
    def handler(request):
        return httpx.Response(200, json={"id": 56, "start_date": "2025-01-02T08:00:00Z"})

    with _client(handler) as client:
        assert client.get_activity("secret", "56").efforts == ()


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(404, json={"message": "Record Not Found"}),
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json={"not": "a list"}),
    ],
)
def test_bad_responses_raise_telemetry_error(response):
    with _client(lambda request: response) as client:
        with pytest.raises(TelemetryError):
            client.list_activities("secret", after=0, before=1)


def test_transport_failures_raise_telemetry_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(TelemetryError):
            client.get_athlete("secret", "1")


def test_get_athlete_returns_profile_payload():
    def handler(request):
        assert request.url.path.endswith("/athletes/42")
        return httpx.Response(200, json={"id": 42, "profile": "https://img.example/42.jpg"})

    with _client(handler) as client:
        assert client.get_athlete("secret", "42")["profile"] == "https://img.example/42.jpg"
