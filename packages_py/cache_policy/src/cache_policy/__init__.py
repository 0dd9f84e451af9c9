"""
Cache-Control policy injection.

Stamps ``public, max-age=N`` onto GET responses whose path matches a
configured rule, with a separate max-age for cache-busted URLs.
"""
from .types import (
    CacheControl,
    RequestContext,
    PolicyResponse,
    Handler,
    PathMatcher,
    CachePolicyOptions,
    CachePolicyConfig,
    CachePolicyEventType,
    CachePolicyEvent,
    CachePolicyEventListener,
)
from .errors import (
    CachePolicyError,
    ConfigurationError,
    DurationParseError,
)
from .duration import (
    parse_duration,
    UNIT_SECONDS,
    SECONDS_PER_MINUTE,
    SECONDS_PER_HOUR,
    SECONDS_PER_DAY,
    SECONDS_PER_WEEK,
    SECONDS_PER_MONTH,
    SECONDS_PER_YEAR,
)
from .parser import (
    CACHE_CONTROL_HEADER,
    parse_cache_control,
    build_cache_control,
    get_header_value,
    set_header_value,
)
from .matcher import (
    PrefixMatcher,
    PatternMatcher,
    AnyMatcher,
    compile_path_matcher,
    normalize_path,
    has_cache_buster,
)
from .policy import (
    CachePolicy,
    create_cache_policy,
    resolve_cache_policy_config,
    DEFAULT_MAX_AGE_SECONDS,
    MAX_CACHE_SECONDS,
)
from .settings import CachePolicySettings, get_settings


__all__ = [
    # Types
    "CacheControl",
    "RequestContext",
    "PolicyResponse",
    "Handler",
    "PathMatcher",
    "CachePolicyOptions",
    "CachePolicyConfig",
    "CachePolicyEventType",
    "CachePolicyEvent",
    "CachePolicyEventListener",
    # Errors
    "CachePolicyError",
    "ConfigurationError",
    "DurationParseError",
    # Durations
    "parse_duration",
    "UNIT_SECONDS",
    "SECONDS_PER_MINUTE",
    "SECONDS_PER_HOUR",
    "SECONDS_PER_DAY",
    "SECONDS_PER_WEEK",
    "SECONDS_PER_MONTH",
    "SECONDS_PER_YEAR",
    # Cache-Control codec
    "CACHE_CONTROL_HEADER",
    "parse_cache_control",
    "build_cache_control",
    "get_header_value",
    "set_header_value",
    # Matching
    "PrefixMatcher",
    "PatternMatcher",
    "AnyMatcher",
    "compile_path_matcher",
    "normalize_path",
    "has_cache_buster",
    # Policy
    "CachePolicy",
    "create_cache_policy",
    "resolve_cache_policy_config",
    "DEFAULT_MAX_AGE_SECONDS",
    "MAX_CACHE_SECONDS",
    # Settings
    "CachePolicySettings",
    "get_settings",
]

__version__ = "1.0.0"
