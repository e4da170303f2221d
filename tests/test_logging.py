import json
import logging

import pytest

from common.logging import SERVICE_NAME, configure_logging, record_extras
from relay.call_spec import CallSpec
from relay.dispatcher import Dispatcher
from relay.upstream import UpstreamCaller

from conftest import FakeResponse, rate_limited

KEYS = ("secret-key-aaaa", "secret-key-bbbb")
ROUTE_BODY = b'{"action": "route", "coordinates": [[1, 2], [3, 4]]}'


@pytest.fixture
def production_logging():
    configure_logging(env="production", level="INFO", force=True)
    yield logging.getLogger().handlers[0]
    configure_logging(env="development", level="INFO", force=True)


def test_failed_attempts_log_masked_keys_only(caplog, recording_caller):
    dispatcher = Dispatcher(KEYS, recording_caller(rate_limited(), rate_limited()))

    with caplog.at_level(logging.INFO):
        status, _ = dispatcher.handle(ROUTE_BODY)

    assert status == 500
    for record in caplog.records:
        rendered = f"{record.getMessage()} {json.dumps(record_extras(record), default=str)}"
        assert all(key not in rendered for key in KEYS)

    warnings = [r for r in caplog.records if r.getMessage() == "Upstream attempt failed"]
    assert [r.levelno for r in warnings] == [logging.WARNING, logging.WARNING]
    assert [r.key for r in warnings] == ["***aaaa", "***bbbb"]
    assert [r.attempt for r in warnings] == [1, 2]
    assert warnings[0].http_status == 429


def test_upstream_response_is_logged_at_info(caplog, fake_session):
    caller = UpstreamCaller(session=fake_session(FakeResponse(429, '{"error": "rate limit"}')))

    with caplog.at_level(logging.INFO, logger="relay.upstream"):
        caller.call(CallSpec(url="http://ors.test/geocode/autocomplete?text=a"))

    [record] = [r for r in caplog.records if r.getMessage() == "Upstream response received"]
    assert record.levelno == logging.INFO
    assert record.status == 429
    assert record.body_preview == '{"error": "rate limit"}'


def test_upstream_body_preview_is_truncated(caplog, fake_session):
    caller = UpstreamCaller(session=fake_session(FakeResponse(500, "x" * 1500)))

    with caplog.at_level(logging.INFO, logger="relay.upstream"):
        caller.call(CallSpec(url="http://ors.test/optimization"))

    [record] = [r for r in caplog.records if r.getMessage() == "Upstream response received"]
    assert record.body_preview == "x" * 1000


def test_production_lines_are_json_with_service_name(production_logging):
    record = logging.getLogger("relay.dispatcher").makeRecord(
        "relay.dispatcher",
        logging.WARNING,
        __file__,
        1,
        "Upstream attempt failed",
        None,
        None,
        extra={"key": "***aaaa", "attempt": 1},
    )

    line = json.loads(production_logging.format(record))

    assert line["service"] == SERVICE_NAME
    assert line["levelname"] == "WARNING"
    assert line["message"] == "Upstream attempt failed"
    assert line["key"] == "***aaaa"
    assert line["attempt"] == 1


def test_development_lines_append_extras():
    configure_logging(env="development", level="INFO", force=True)
    handler = logging.getLogger().handlers[0]
    record = logging.makeLogRecord(
        {"name": "relay.upstream", "levelno": logging.INFO, "levelname": "INFO",
         "msg": "Upstream response received", "status": 200}
    )

    line = handler.format(record)

    assert line.endswith('Upstream response received | {"status": 200}')
