"""Pytest configuration and fixtures for fetch_compose_cache_policy tests."""
import httpx
import pytest

from cache_policy import CachePolicyOptions, get_settings


class MockAsyncTransport(httpx.AsyncBaseTransport):
    """Mock async transport for testing."""

    def __init__(
        self,
        response_status: int = 200,
        response_content: bytes = b"Hello World",
        response_headers: dict | None = None,
    ) -> None:
        self.response_status = response_status
        self.response_content = response_content
        self.response_headers = response_headers or {"content-type": "text/plain"}
        self.requests: list[httpx.Request] = []
        self.closed = False

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Handle the async request and return a mock response."""
        self.requests.append(request)
        return httpx.Response(
            status_code=self.response_status,
            headers=self.response_headers,
            content=self.response_content,
        )

    async def aclose(self) -> None:
        """Close the transport."""
        self.closed = True


class MockSyncTransport(httpx.BaseTransport):
    """Mock sync transport for testing."""

    def __init__(
        self,
        response_status: int = 200,
        response_content: bytes = b"Hello World",
        response_headers: dict | None = None,
    ) -> None:
        self.response_status = response_status
        self.response_content = response_content
        self.response_headers = response_headers or {"content-type": "text/plain"}
        self.requests: list[httpx.Request] = []
        self.closed = False

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """Handle the sync request and return a mock response."""
        self.requests.append(request)
        return httpx.Response(
            status_code=self.response_status,
            headers=self.response_headers,
            content=self.response_content,
        )

    def close(self) -> None:
        """Close the transport."""
        self.closed = True


@pytest.fixture
def make_async_transport():
    """Build a MockAsyncTransport."""
    return MockAsyncTransport


@pytest.fixture
def make_sync_transport():
    """Build a MockSyncTransport."""
    return MockSyncTransport


@pytest.fixture
def images_options() -> CachePolicyOptions:
    """Cache /images, 30 seconds for cache-busted URLs."""
    return CachePolicyOptions(
        cache_when_path_matches="/images",
        when_cache_busters_present_cache_for="30 seconds",
    )


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
