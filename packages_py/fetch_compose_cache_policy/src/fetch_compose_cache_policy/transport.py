"""
Cache policy transport wrapper for httpx.

Stamps Cache-Control on responses coming back from the wrapped transport.
"""
import logging
from typing import Optional

import httpx

from cache_policy import (
    CACHE_CONTROL_HEADER,
    CachePolicy,
    CachePolicyOptions,
    RequestContext,
    get_settings,
)

logger = logging.getLogger(__name__)


def build_policy(
    policy: Optional[CachePolicy] = None,
    options: Optional[CachePolicyOptions] = None,
) -> CachePolicy:
    """Use the given policy, else build one from options, else from environment settings."""
    if policy is not None:
        return policy
    if options is None:
        logger.debug("build_policy: no options given, reading CACHE_POLICY_* settings")
        options = get_settings().to_options()
    return CachePolicy(options)


def request_context(request: httpx.Request) -> RequestContext:
    """Snapshot the request fields the policy needs."""
    return RequestContext(
        method=request.method,
        path=request.url.path,
        query_string=request.url.query.decode("ascii"),
    )


def apply_policy(
    policy: CachePolicy, request: httpx.Request, response: httpx.Response
) -> httpx.Response:
    """Return a response carrying the policy's Cache-Control; status and stream are reused."""
    value = policy.cache_control_for(
        request_context(request), response.headers.get(CACHE_CONTROL_HEADER)
    )
    if value is None:
        return response

    headers = response.headers.copy()
    headers[CACHE_CONTROL_HEADER] = value
    return httpx.Response(
        status_code=response.status_code,
        headers=headers,
        stream=response.stream,
        extensions=response.extensions,
        request=request,
    )


class CachePolicyTransport(httpx.AsyncBaseTransport):
    """
    Cache policy transport wrapper for httpx.

    Wraps another transport, calls it exactly once per request, and lets the
    policy decide whether the response gets ``public, max-age=N``.

    Example:
        base = httpx.AsyncHTTPTransport()
        transport = CachePolicyTransport(
            base,
            options=CachePolicyOptions(cache_when_path_matches="/images"),
        )
        client = httpx.AsyncClient(transport=transport)
    """

    def __init__(
        self,
        inner: httpx.AsyncBaseTransport,
        *,
        policy: Optional[CachePolicy] = None,
        options: Optional[CachePolicyOptions] = None,
    ) -> None:
        """
        Create a new CachePolicyTransport.

        Args:
            inner: The wrapped transport to delegate requests to
            policy: Policy instance to apply
            options: Options used to build a policy when none is given.
                Defaults to CACHE_POLICY_* environment settings.
        """
        self._inner = inner
        self._policy = build_policy(policy, options)

    @property
    def policy(self) -> CachePolicy:
        return self._policy

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Handle an async HTTP request and apply the cache policy."""
        response = await self._inner.handle_async_request(request)
        return apply_policy(self._policy, request, response)

    async def aclose(self) -> None:
        """Close the transport."""
        await self._inner.aclose()


class SyncCachePolicyTransport(httpx.BaseTransport):
    """Synchronous cache policy transport wrapper for httpx."""

    def __init__(
        self,
        inner: httpx.BaseTransport,
        *,
        policy: Optional[CachePolicy] = None,
        options: Optional[CachePolicyOptions] = None,
    ) -> None:
        """
        Create a new SyncCachePolicyTransport.

        Args:
            inner: The wrapped transport to delegate requests to
            policy: Policy instance to apply
            options: Options used to build a policy when none is given
        """
        self._inner = inner
        self._policy = build_policy(policy, options)

    @property
    def policy(self) -> CachePolicy:
        return self._policy

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """Handle a sync HTTP request and apply the cache policy."""
        response = self._inner.handle_request(request)
        return apply_policy(self._policy, request, response)

    def close(self) -> None:
        """Close the transport."""
        self._inner.close()
