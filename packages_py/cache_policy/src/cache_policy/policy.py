"""
Cache-Control policy engine.

Decides, per request, whether a response should be stamped with
``public, max-age=N`` and for how long.
"""
import logging
import time
from typing import Any, Callable, Dict, Optional, Set

from .duration import SECONDS_PER_YEAR, parse_duration
from .errors import ConfigurationError
from .matcher import compile_path_matcher, has_cache_buster, normalize_path
from .parser import (
    CACHE_CONTROL_HEADER,
    build_cache_control,
    get_header_value,
    parse_cache_control,
    set_header_value,
)
from .types import (
    CacheControl,
    CachePolicyConfig,
    CachePolicyEvent,
    CachePolicyEventListener,
    CachePolicyEventType,
    CachePolicyOptions,
    Handler,
    PolicyResponse,
    RequestContext,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE_SECONDS = 3600
MAX_CACHE_SECONDS = SECONDS_PER_YEAR


def _resolve_duration(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    seconds = parse_duration(value)
    if seconds > MAX_CACHE_SECONDS:
        raise ConfigurationError(
            f"You cannot specify a cache time greater than a year (got '{value}')."
        )
    return seconds


def resolve_cache_policy_config(options: CachePolicyOptions) -> CachePolicyConfig:
    """
    Validate named options and resolve them into a CachePolicyConfig.

    Raises:
        ConfigurationError: Missing matcher, bad matcher type, or a duration over one year.
        DurationParseError: A duration string is malformed.
    """
    matcher = compile_path_matcher(options.cache_when_path_matches)
    present = _resolve_duration(options.when_cache_busters_present_cache_for)
    absent = _resolve_duration(options.when_cache_busters_absent_cache_for)

    return CachePolicyConfig(
        matcher=matcher,
        cache_buster_present_seconds=present,
        cache_buster_absent_seconds=DEFAULT_MAX_AGE_SECONDS if absent is None else absent,
    )


class CachePolicy:
    """
    Injects ``Cache-Control: public, max-age=N`` into matching GET responses.

    A response is left alone when the method is not GET, the path does not
    match, or the handler already declared ``private``, ``no-store`` or a
    ``max-age``. max-age is the cache-buster-present duration when one is
    configured and the URL carries a cache buster, and the cache-buster-absent
    duration (default one hour) otherwise.

    Example:
        policy = CachePolicy(CachePolicyOptions(
            cache_when_path_matches=["/images", re.compile(r"\\.css$")],
            when_cache_busters_present_cache_for="1 year",
        ))
        response = policy.process(request, handler)
    """

    def __init__(self, options: CachePolicyOptions) -> None:
        self._config = resolve_cache_policy_config(options)
        self._listeners: Set[CachePolicyEventListener] = set()
        logger.info(
            "CachePolicy: matcher=%r present=%s absent=%s",
            self._config.matcher,
            self._config.cache_buster_present_seconds,
            self._config.cache_buster_absent_seconds,
        )

    @property
    def config(self) -> CachePolicyConfig:
        return self._config

    def path_matches(self, path: str) -> bool:
        return self._config.matcher.matches(normalize_path(path))

    def has_cache_buster(self, request: RequestContext) -> bool:
        return has_cache_buster(request.path, request.query_string)

    def determine_max_age(self, request: RequestContext) -> int:
        present = self._config.cache_buster_present_seconds
        if present is not None and self.has_cache_buster(request):
            return present
        return self._config.cache_buster_absent_seconds

    def _skip_reason(
        self, request: RequestContext, directives: CacheControl
    ) -> Optional[str]:
        if request.method != "GET":
            return "method"
        if not self.path_matches(request.path):
            return "path"
        if directives.private or directives.no_store or directives.has_max_age:
            return "directive"
        return None

    def should_cache(self, request: RequestContext, response: PolicyResponse) -> bool:
        """Check whether the response should be marked cacheable."""
        existing = get_header_value(response.headers, CACHE_CONTROL_HEADER)
        return self._skip_reason(request, parse_cache_control(existing)) is None

    def cache_control_for(
        self, request: RequestContext, existing: Optional[str]
    ) -> Optional[str]:
        """
        Compute the new Cache-Control value for a response.

        Returns:
            The header value to write, or None to leave the response untouched.
        """
        directives = parse_cache_control(existing)
        reason = self._skip_reason(request, directives)
        if reason is not None:
            logger.debug(
                "CachePolicy: skip %s %s (reason=%s)", request.method, request.path, reason
            )
            self._emit(CachePolicyEventType.POLICY_SKIPPED, request, {"reason": reason})
            return None

        max_age = self.determine_max_age(request)
        directives.public = True
        directives.max_age = max_age
        value = build_cache_control(directives)
        logger.debug("CachePolicy: %s %s -> %s", request.method, request.path, value)
        self._emit(
            CachePolicyEventType.POLICY_APPLIED,
            request,
            {"max_age": max_age, "cache_control": value},
        )
        return value

    def apply(self, request: RequestContext, response: PolicyResponse) -> PolicyResponse:
        """Return the response with Cache-Control possibly replaced. The input is not mutated."""
        existing = get_header_value(response.headers, CACHE_CONTROL_HEADER)
        value = self.cache_control_for(request, existing)
        if value is None:
            return response
        return PolicyResponse(
            status_code=response.status_code,
            headers=set_header_value(response.headers, CACHE_CONTROL_HEADER, value),
            body=response.body,
        )

    def process(self, request: RequestContext, handler: Handler) -> PolicyResponse:
        """Invoke the wrapped handler once and apply the policy to its response."""
        response = handler(request)
        return self.apply(request, response)

    def on(self, listener: CachePolicyEventListener) -> Callable[[], None]:
        """Add event listener."""
        self._listeners.add(listener)
        return lambda: self._listeners.discard(listener)

    def off(self, listener: CachePolicyEventListener) -> None:
        """Remove event listener."""
        self._listeners.discard(listener)

    def _emit(
        self,
        event_type: CachePolicyEventType,
        request: RequestContext,
        metadata: Dict[str, Any],
    ) -> None:
        """Emit an event to all listeners."""
        if not self._listeners:
            return
        event = CachePolicyEvent(
            type=event_type,
            method=request.method,
            path=request.path,
            timestamp=time.time(),
            metadata=metadata,
        )
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.warning("CachePolicy: event listener %r failed", listener, exc_info=True)


def create_cache_policy(
    cache_when_path_matches: Any = None,
    *,
    when_cache_busters_present_cache_for: Optional[str] = None,
    when_cache_busters_absent_cache_for: Optional[str] = None,
) -> CachePolicy:
    """Create a cache policy from named options."""
    return CachePolicy(
        CachePolicyOptions(
            cache_when_path_matches=cache_when_path_matches,
            when_cache_busters_present_cache_for=when_cache_busters_present_cache_for,
            when_cache_busters_absent_cache_for=when_cache_busters_absent_cache_for,
        )
    )
