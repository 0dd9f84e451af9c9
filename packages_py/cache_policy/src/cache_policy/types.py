"""
Types for Cache-Control policy injection.
"""
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

DirectiveValue = Union[bool, str]

PathMatcherSource = Union[str, re.Pattern, Sequence[Union[str, re.Pattern]]]
"""Raw ``cache_when_path_matches`` value: a prefix, a pattern, or a list of either."""


class CacheControl:
    """
    Ordered Cache-Control directive map.

    Flags are stored as ``True`` and valued directives as their raw string,
    so unrecognized directives round-trip unchanged and in order.
    """

    def __init__(self, directives: Optional[List[Tuple[str, DirectiveValue]]] = None) -> None:
        self._directives: Dict[str, DirectiveValue] = {}
        for name, value in directives or []:
            self[name] = value

    def __getitem__(self, name: str) -> DirectiveValue:
        return self._directives[name.lower()]

    def __setitem__(self, name: str, value: Any) -> None:
        key = name.lower()
        if value is None or value is False:
            self._directives.pop(key, None)
        elif value is True:
            self._directives[key] = True
        else:
            self._directives[key] = str(value)

    def __delitem__(self, name: str) -> None:
        del self._directives[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._directives

    def __iter__(self) -> Iterator[str]:
        return iter(self._directives)

    def __len__(self) -> int:
        return len(self._directives)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CacheControl):
            return NotImplemented
        return list(self.items()) == list(other.items())

    def __repr__(self) -> str:
        return f"CacheControl({list(self.items())!r})"

    def get(self, name: str, default: Optional[DirectiveValue] = None) -> Optional[DirectiveValue]:
        return self._directives.get(name.lower(), default)

    def items(self) -> Iterator[Tuple[str, DirectiveValue]]:
        return iter(self._directives.items())

    @property
    def public(self) -> bool:
        return "public" in self

    @public.setter
    def public(self, value: bool) -> None:
        self["public"] = bool(value)

    @property
    def private(self) -> bool:
        return "private" in self

    @property
    def no_store(self) -> bool:
        return "no-store" in self

    @property
    def no_cache(self) -> bool:
        return "no-cache" in self

    @property
    def max_age(self) -> Optional[int]:
        """max-age in seconds; None when absent or not an integer."""
        value = self.get("max-age")
        if value is None or value is True:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @max_age.setter
    def max_age(self, seconds: Optional[int]) -> None:
        self["max-age"] = None if seconds is None else int(seconds)

    @property
    def has_max_age(self) -> bool:
        """Whether any max-age directive is present, valid or not."""
        return "max-age" in self


@dataclass(frozen=True)
class RequestContext:
    """Read-only snapshot of the request fields the policy looks at."""

    method: str
    """Request method."""

    path: str
    """Request path (without query string)."""

    query_string: str = ""
    """Raw query string, without the leading '?'."""


@dataclass(frozen=True)
class PolicyResponse:
    """Response as seen by the policy. Only headers are ever replaced."""

    status_code: int
    """Response status code."""

    headers: Dict[str, str] = field(default_factory=dict)
    """Response headers."""

    body: Any = None
    """Opaque response body, passed through untouched."""


Handler = Callable[[RequestContext], PolicyResponse]
"""Wrapped handler: invoked exactly once per request."""


class PathMatcher(ABC):
    """Compiled ``cache_when_path_matches`` rule."""

    @abstractmethod
    def matches(self, path: str) -> bool:
        """Check a normalized path (always starting with '/')."""
        pass


@dataclass(frozen=True)
class CachePolicyOptions:
    """Named construction options."""

    cache_when_path_matches: Optional[Any] = None
    """Required. A prefix string, a compiled pattern, or a list of either."""

    when_cache_busters_present_cache_for: Optional[str] = None
    """Duration used when the URL carries a cache buster, e.g. '1 year'."""

    when_cache_busters_absent_cache_for: Optional[str] = None
    """Duration used otherwise. Default: 1 hour."""


@dataclass(frozen=True)
class CachePolicyConfig:
    """Resolved, immutable policy configuration."""

    matcher: PathMatcher
    """Compiled path matcher."""

    cache_buster_present_seconds: Optional[int] = None
    """max-age when a cache buster is present. None to use the absent value."""

    cache_buster_absent_seconds: int = 3600
    """max-age when no cache buster is present. Default: 3600."""


class CachePolicyEventType(str, Enum):
    """Event types for policy decisions."""

    POLICY_APPLIED = "policy:applied"
    POLICY_SKIPPED = "policy:skipped"


@dataclass
class CachePolicyEvent:
    """Policy decision event."""

    type: CachePolicyEventType
    method: str
    path: str
    timestamp: float
    metadata: Optional[Dict[str, Any]] = None


CachePolicyEventListener = Callable[[CachePolicyEvent], None]
"""Event listener type."""
