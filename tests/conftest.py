import json

import pytest

from relay.exceptions import UpstreamError


class FakeResponse:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; replays queued responses or raises queued errors."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []
        self.closed = False

    def request(self, method, url, data=None, headers=None, timeout=None):
        self.calls.append(
            {"method": method, "url": url, "data": data, "headers": headers, "timeout": timeout}
        )
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True


class RecordingCaller:
    """Upstream caller double that records every call spec it receives."""

    def __init__(self, results):
        self.results = list(results)
        self.specs = []

    def call(self, spec):
        self.specs.append(spec)
        result = self.results.pop(0)
        if isinstance(result, UpstreamError):
            return None, result
        return result, None

    def close(self):
        pass


def rate_limited(message="rate limit"):
    return UpstreamError(f"HTTP 429: {message}", http_status=429)


@pytest.fixture
def fake_session():
    def _make(*outcomes):
        return FakeSession(outcomes)

    return _make


@pytest.fixture
def recording_caller():
    def _make(*results):
        return RecordingCaller(results)

    return _make
