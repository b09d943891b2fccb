import pytest
import requests
from requests.structures import CaseInsensitiveDict


class FakeResponse:
    """Just enough of requests.Response for the client code."""

    def __init__(self, status_code=200, reason="OK", headers=None, url=""):
        self.status_code = status_code
        self.reason = reason
        self.headers = CaseInsensitiveDict(headers or {})
        self.url = url


class FakeSession:
    """Records requests and answers them from a queue of responses or exceptions."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    def _answer(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if not self.responses:
            raise AssertionError(f"unexpected {method} {url}")
        answer = self.responses.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer

    def head(self, url, **kwargs):
        return self._answer("HEAD", url, **kwargs)

    def get(self, url, **kwargs):
        return self._answer("GET", url, **kwargs)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def connection_error():
    return requests.exceptions.ConnectionError("connection refused")
