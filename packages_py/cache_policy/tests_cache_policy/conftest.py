"""Pytest configuration for cache_policy tests."""
import pytest

from cache_policy import PolicyResponse, RequestContext, get_settings


@pytest.fixture
def handler():
    """Wrapped handler returning a plain 200 response, recording each call."""
    calls = []

    def _handler(request: RequestContext) -> PolicyResponse:
        calls.append(request)
        return PolicyResponse(
            status_code=200,
            headers={"Content-Type": "text/plain"},
            body=["Hello World"],
        )

    _handler.calls = calls
    return _handler


@pytest.fixture
def make_handler():
    """Build a handler answering with the given Cache-Control value."""

    def _make(cache_control: str):
        def _handler(request: RequestContext) -> PolicyResponse:
            return PolicyResponse(
                status_code=200,
                headers={"Content-Type": "text/plain", "Cache-Control": cache_control},
                body=["Hello World"],
            )

        return _handler

    return _make


@pytest.fixture
def clean_env(monkeypatch):
    """Remove CACHE_POLICY_* variables and reset cached settings."""
    for name in (
        "CACHE_POLICY_PATH_PREFIXES",
        "CACHE_POLICY_PATH_PATTERNS",
        "CACHE_POLICY_WHEN_CACHE_BUSTERS_PRESENT_CACHE_FOR",
        "CACHE_POLICY_WHEN_CACHE_BUSTERS_ABSENT_CACHE_FOR",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
