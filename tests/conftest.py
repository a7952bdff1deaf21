import pytest
import requests


class FakeResponse:
    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self.invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class RecordingTransport:
    """Stands in for requests.get / requests.post and records each call."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_get(monkeypatch):
    def install(*responses):
        transport = RecordingTransport(*responses)
        monkeypatch.setattr(requests, "get", transport)
        return transport
    return install


@pytest.fixture
def fake_post(monkeypatch):
    def install(*responses):
        transport = RecordingTransport(*responses)
        monkeypatch.setattr(requests, "post", transport)
        return transport
    return install


@pytest.fixture
def no_network(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("no network call expected")
    monkeypatch.setattr(requests, "get", fail)
    monkeypatch.setattr(requests, "post", fail)


@pytest.fixture
def make_response():
    return FakeResponse
