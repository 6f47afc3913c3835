"""Tests for utils.clients.retry.ModelInvoker."""

import asyncio
from types import SimpleNamespace

import pytest

from utils.clients.base import VisionRequest
from utils.clients.retry import ModelInvoker, get_status_code, is_rate_limited

REQUEST = VisionRequest(prompt="p", desktop_image_base64="d", mobile_image_base64="m")
REPLY = {"output_text": "{}"}


def _invoke(invoker):
    return asyncio.run(invoker.invoke(REQUEST))


def test_two_rate_limits_then_success(fake_provider, status_error, recording_sleep):
    provider = fake_provider([status_error(429), status_error(429), REPLY])
    invoker = ModelInvoker(provider, sleep=recording_sleep)

    assert _invoke(invoker) == REPLY
    assert provider.calls == 3
    assert recording_sleep.delays == [1.0, 2.0]


def test_third_rate_limit_propagates(fake_provider, status_error, recording_sleep):
    provider = fake_provider([status_error(429), status_error(429), status_error(429, "third"), REPLY])
    invoker = ModelInvoker(provider, sleep=recording_sleep)

    with pytest.raises(Exception) as exc_info:
        _invoke(invoker)

    assert str(exc_info.value) == "third"
    assert provider.calls == 3
    assert recording_sleep.delays == [1.0, 2.0]


@pytest.mark.parametrize("status", [400, 401, 500, 503])
def test_non_rate_limit_status_fails_immediately(fake_provider, status_error, recording_sleep, status):
    provider = fake_provider([status_error(status), REPLY])
    invoker = ModelInvoker(provider, sleep=recording_sleep)

    with pytest.raises(Exception):
        _invoke(invoker)

    assert provider.calls == 1
    assert recording_sleep.delays == []


def test_connection_error_without_status_fails_immediately(fake_provider, recording_sleep):
    provider = fake_provider([ConnectionError("reset by peer"), REPLY])
    invoker = ModelInvoker(provider, sleep=recording_sleep)

    with pytest.raises(ConnectionError):
        _invoke(invoker)

    assert provider.calls == 1
    assert recording_sleep.delays == []


def test_success_on_first_attempt_never_sleeps(fake_provider, recording_sleep):
    provider = fake_provider([REPLY])
    invoker = ModelInvoker(provider, sleep=recording_sleep)

    assert _invoke(invoker) == REPLY
    assert recording_sleep.delays == []


def test_backoff_uses_configured_base_delay(fake_provider, status_error, recording_sleep):
    provider = fake_provider([status_error(429)] * 3 + [REPLY])
    invoker = ModelInvoker(provider, max_attempts=4, base_delay=0.5, sleep=recording_sleep)

    assert _invoke(invoker) == REPLY
    assert recording_sleep.delays == [0.5, 1.0, 2.0]


def test_status_code_lookup():
    assert get_status_code(SimpleNamespace(status_code=429)) == 429
    assert get_status_code(SimpleNamespace(status=503)) == 503
    assert get_status_code(SimpleNamespace(response=SimpleNamespace(status_code=401))) == 401
    assert get_status_code(ValueError("no status")) is None
    assert is_rate_limited(SimpleNamespace(status_code=429))
    assert not is_rate_limited(SimpleNamespace(status="429"))
