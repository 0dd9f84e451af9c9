"""
Factory functions for creating cache policy transports.
"""
from typing import Callable, Optional

import httpx

from cache_policy import CachePolicy, CachePolicyOptions

from .transport import CachePolicyTransport, SyncCachePolicyTransport


def compose_transport(
    base: httpx.AsyncBaseTransport,
    *wrappers: Callable[[httpx.AsyncBaseTransport], httpx.AsyncBaseTransport],
) -> httpx.AsyncBaseTransport:
    """
    Compose multiple transport wrappers together.

    Args:
        base: The base transport
        wrappers: Transport wrapper functions to apply, innermost first

    Returns:
        Composed transport

    Example:
        transport = compose_transport(
            httpx.AsyncHTTPTransport(),
            lambda inner: CachePolicyTransport(inner, policy=policy),
        )
    """
    transport = base
    for wrapper in wrappers:
        transport = wrapper(transport)
    return transport


def compose_sync_transport(
    base: httpx.BaseTransport,
    *wrappers: Callable[[httpx.BaseTransport], httpx.BaseTransport],
) -> httpx.BaseTransport:
    """Compose multiple sync transport wrappers together."""
    transport = base
    for wrapper in wrappers:
        transport = wrapper(transport)
    return transport


def create_cache_policy_transport(
    inner: Optional[httpx.AsyncBaseTransport] = None,
    *,
    policy: Optional[CachePolicy] = None,
    options: Optional[CachePolicyOptions] = None,
) -> CachePolicyTransport:
    """
    Create a cache policy transport.

    Args:
        inner: The inner transport (defaults to AsyncHTTPTransport)
        policy: Policy instance to apply
        options: Options used to build a policy when none is given

    Returns:
        CachePolicyTransport instance
    """
    if inner is None:
        inner = httpx.AsyncHTTPTransport()

    return CachePolicyTransport(inner, policy=policy, options=options)


def create_cache_policy_sync_transport(
    inner: Optional[httpx.BaseTransport] = None,
    *,
    policy: Optional[CachePolicy] = None,
    options: Optional[CachePolicyOptions] = None,
) -> SyncCachePolicyTransport:
    """
    Create a sync cache policy transport.

    Args:
        inner: The inner transport (defaults to HTTPTransport)
        policy: Policy instance to apply
        options: Options used to build a policy when none is given

    Returns:
        SyncCachePolicyTransport instance
    """
    if inner is None:
        inner = httpx.HTTPTransport()

    return SyncCachePolicyTransport(inner, policy=policy, options=options)


def create_cache_policy_client(
    *,
    policy: Optional[CachePolicy] = None,
    options: Optional[CachePolicyOptions] = None,
    inner: Optional[httpx.AsyncBaseTransport] = None,
    base_url: Optional[str] = None,
    **client_kwargs,
) -> httpx.AsyncClient:
    """
    Create an httpx.AsyncClient whose responses pass through a cache policy.

    Args:
        policy: Policy instance to apply
        options: Options used to build a policy when none is given
        inner: The inner transport (defaults to AsyncHTTPTransport)
        base_url: Base URL for the client
        **client_kwargs: Additional arguments for httpx.AsyncClient

    Returns:
        AsyncClient with cache policy transport
    """
    transport = create_cache_policy_transport(inner, policy=policy, options=options)

    return httpx.AsyncClient(
        transport=transport,
        base_url=base_url or "",
        **client_kwargs,
    )


def create_cache_policy_sync_client(
    *,
    policy: Optional[CachePolicy] = None,
    options: Optional[CachePolicyOptions] = None,
    inner: Optional[httpx.BaseTransport] = None,
    base_url: Optional[str] = None,
    **client_kwargs,
) -> httpx.Client:
    """Create an httpx.Client whose responses pass through a cache policy."""
    transport = create_cache_policy_sync_transport(inner, policy=policy, options=options)

    return httpx.Client(
        transport=transport,
        base_url=base_url or "",
        **client_kwargs,
    )
