"""
Cache policy wrappers for httpx's compose pattern and ASGI applications.

Stamps ``Cache-Control: public, max-age=N`` onto matching GET responses.
"""
from cache_policy import (
    CacheControl,
    CachePolicy,
    CachePolicyOptions,
    CachePolicyConfig,
    CachePolicyError,
    ConfigurationError,
    DurationParseError,
    RequestContext,
    create_cache_policy,
    parse_cache_control,
)
from .transport import (
    CachePolicyTransport,
    SyncCachePolicyTransport,
    apply_policy,
    request_context,
)
from .middleware import CachePolicyMiddleware
from .factory import (
    compose_transport,
    compose_sync_transport,
    create_cache_policy_transport,
    create_cache_policy_sync_transport,
    create_cache_policy_client,
    create_cache_policy_sync_client,
)


__all__ = [
    # Re-exported types from base package
    "CacheControl",
    "CachePolicy",
    "CachePolicyOptions",
    "CachePolicyConfig",
    "CachePolicyError",
    "ConfigurationError",
    "DurationParseError",
    "RequestContext",
    "create_cache_policy",
    "parse_cache_control",
    # Transport wrappers
    "CachePolicyTransport",
    "SyncCachePolicyTransport",
    "apply_policy",
    "request_context",
    # ASGI middleware
    "CachePolicyMiddleware",
    # Factory functions
    "compose_transport",
    "compose_sync_transport",
    "create_cache_policy_transport",
    "create_cache_policy_sync_transport",
    "create_cache_policy_client",
    "create_cache_policy_sync_client",
]

__version__ = "1.0.0"
