"""
Tests for cache policy transport wrappers.
"""
import httpx
import pytest

from cache_policy import CachePolicyOptions, ConfigurationError, create_cache_policy
from fetch_compose_cache_policy import (
    CachePolicyTransport,
    SyncCachePolicyTransport,
    request_context,
)

HASH_32 = "2ba81a47c5512d9e23c435c1f29373cb"


class TestRequestContext:
    def test_splits_path_and_query(self):
        request = httpx.Request("GET", "http://test/images/foo.png?6734897846")
        context = request_context(request)
        assert context.method == "GET"
        assert context.path == "/images/foo.png"
        assert context.query_string == "6734897846"

    def test_empty_query(self):
        context = request_context(httpx.Request("POST", "http://test/images"))
        assert context.method == "POST"
        assert context.query_string == ""


class TestCachePolicyTransport:
    """Tests for CachePolicyTransport."""

    @pytest.mark.asyncio
    async def test_create_with_policy(self, make_async_transport):
        inner = make_async_transport()
        policy = create_cache_policy("/images")
        transport = CachePolicyTransport(inner, policy=policy)

        assert transport._inner is inner
        assert transport.policy is policy

        await transport.aclose()
        assert inner.closed is True

    @pytest.mark.asyncio
    async def test_stamps_matching_get(self, make_async_transport, images_options):
        inner = make_async_transport()
        transport = CachePolicyTransport(inner, options=images_options)

        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/images/foo.png")

        assert response.status_code == 200
        assert response.content == b"Hello World"
        assert response.headers["content-type"] == "text/plain"
        assert response.headers["cache-control"] == "public, max-age=3600"
        assert len(inner.requests) == 1

    @pytest.mark.asyncio
    async def test_cache_buster_query(self, make_async_transport, images_options):
        transport = CachePolicyTransport(make_async_transport(), options=images_options)

        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            busted = await client.get("/images/foo.png?6734897846")
            fooled = await client.get("/images/foo.png?value=3487986534")
            fingerprinted = await client.get(f"/images/foo-{HASH_32}.png")

        assert busted.headers["cache-control"] == "public, max-age=30"
        assert fooled.headers["cache-control"] == "public, max-age=3600"
        assert fingerprinted.headers["cache-control"] == "public, max-age=30"

    @pytest.mark.asyncio
    async def test_non_matching_untouched(self, make_async_transport, images_options):
        transport = CachePolicyTransport(make_async_transport(), options=images_options)

        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            other = await client.get("/other/foo")
            posted = await client.post("/images/foo", content=b"x")

        assert "cache-control" not in other.headers
        assert "cache-control" not in posted.headers

    @pytest.mark.asyncio
    async def test_existing_private_preserved(self, make_async_transport, images_options):
        inner = make_async_transport(
            response_headers={"cache-control": "private, max-age=400, must-revalidate"}
        )
        transport = CachePolicyTransport(inner, options=images_options)

        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/images/foo.png")

        assert response.headers["cache-control"] == "private, max-age=400, must-revalidate"

    @pytest.mark.asyncio
    async def test_status_preserved(self, make_async_transport, images_options):
        inner = make_async_transport(response_status=404, response_content=b"missing")
        transport = CachePolicyTransport(inner, options=images_options)

        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/images/gone.png")

        assert response.status_code == 404
        assert response.content == b"missing"

    @pytest.mark.asyncio
    async def test_reads_settings_without_options(self, make_async_transport, clean_env):
        clean_env.setenv("CACHE_POLICY_PATH_PREFIXES", '["/assets"]')
        clean_env.setenv("CACHE_POLICY_WHEN_CACHE_BUSTERS_ABSENT_CACHE_FOR", "2 minutes")
        transport = CachePolicyTransport(make_async_transport())

        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/assets/app.js")

        assert response.headers["cache-control"] == "public, max-age=120"

    def test_invalid_options_fail_at_construction(self, make_async_transport):
        with pytest.raises(ConfigurationError):
            CachePolicyTransport(
                make_async_transport(),
                options=CachePolicyOptions(
                    cache_when_path_matches="/images",
                    when_cache_busters_present_cache_for="2 years",
                ),
            )


class TestSyncCachePolicyTransport:
    """Tests for SyncCachePolicyTransport."""

    def test_stamps_matching_get(self, make_sync_transport, images_options):
        inner = make_sync_transport()
        transport = SyncCachePolicyTransport(inner, options=images_options)

        with httpx.Client(transport=transport, base_url="http://test") as client:
            response = client.get("/images/foo.png?6734897846")
            other = client.get("/other")

        assert response.headers["cache-control"] == "public, max-age=30"
        assert response.text == "Hello World"
        assert "cache-control" not in other.headers
        assert len(inner.requests) == 2

    def test_existing_directives_preserved(self, make_sync_transport, images_options):
        inner = make_sync_transport(response_headers={"Cache-Control": "must-revalidate"})
        transport = SyncCachePolicyTransport(inner, options=images_options)

        with httpx.Client(transport=transport, base_url="http://test") as client:
            response = client.get("/images/foo.png")

        assert response.headers.get_list("cache-control") == [
            "must-revalidate, public, max-age=3600"
        ]

    def test_close(self, make_sync_transport):
        inner = make_sync_transport()
        transport = SyncCachePolicyTransport(inner, policy=create_cache_policy("/images"))
        transport.close()
        assert inner.closed is True
