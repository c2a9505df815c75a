import requests

from weather_client import FORECAST_URL, fetch_weather


class FakeResponse:
    def __init__(self, payload, status_error=None):
        self._payload = payload
        self._status_error = status_error

    def raise_for_status(self):
        if self._status_error:
            raise self._status_error

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error:
            raise self.error
        return self.response


PAYLOAD = {
    "current": {"temperature_2m": 18.4, "weather_code": 3},
    "daily": {"uv_index_max": [6.2]},
}


def test_fetch_weather_parses_payload():
    session = FakeSession(FakeResponse(PAYLOAD))

    assert fetch_weather(40.4, -3.7, session=session) == {
        "uv_index": 6.2,
        "temperature": 18.4,
        "code": 3,
    }
    url, params, timeout = session.calls[0]
    assert url == FORECAST_URL
    assert params["latitude"] == 40.4
    assert params["daily"] == "uv_index_max"
    assert timeout == 10


def test_fetch_weather_connection_error():
    session = FakeSession(error=requests.ConnectionError("offline"))
    assert fetch_weather(0, 0, session=session) is None


def test_fetch_weather_http_error():
    session = FakeSession(FakeResponse({}, status_error=requests.HTTPError("503")))
    assert fetch_weather(0, 0, session=session) is None


def test_fetch_weather_missing_fields():
    session = FakeSession(FakeResponse({"current": {}, "daily": {"uv_index_max": []}}))
    assert fetch_weather(0, 0, session=session) is None
