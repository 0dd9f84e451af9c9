"""
Path matching and cache-buster detection.
"""
import logging
import re
from dataclasses import dataclass
from typing import Any, Tuple

from .errors import ConfigurationError
from .types import PathMatcher, PathMatcherSource

logger = logging.getLogger(__name__)

MATCHER_TYPE_ERROR = (
    "cache_when_path_matches expects a string, a compiled regular expression, "
    "or a list of strings/regular expressions as its value."
)

# Epoch timestamp query strings, e.g. /images/foo.png?1356998400
_TIMESTAMP_QUERY_RE = re.compile(r"\A[0-9]{10}\Z")

# Fingerprinted file names, e.g. /assets/app-2ba81a47c5512d9e23c435c1f29373cb.css
_FINGERPRINT_PATH_RE = re.compile(r".+-[0-9a-f]{32,}\.\w+\Z")


@dataclass(frozen=True)
class PrefixMatcher(PathMatcher):
    """Matches paths starting with a literal prefix."""

    prefix: str

    def matches(self, path: str) -> bool:
        return path.startswith(self.prefix)


@dataclass(frozen=True)
class PatternMatcher(PathMatcher):
    """Matches paths where the pattern is found anywhere."""

    pattern: "re.Pattern[str]"

    def matches(self, path: str) -> bool:
        return self.pattern.search(path) is not None


@dataclass(frozen=True)
class AnyMatcher(PathMatcher):
    """Matches when any of its matchers does, checked in order."""

    matchers: Tuple[PathMatcher, ...]

    def matches(self, path: str) -> bool:
        for matcher in self.matchers:
            if not isinstance(matcher, PathMatcher):
                raise ConfigurationError(MATCHER_TYPE_ERROR)
            if matcher.matches(path):
                return True
        return False


def _compile_single(value: Any) -> PathMatcher:
    if isinstance(value, str):
        return PrefixMatcher(value)
    if isinstance(value, re.Pattern):
        return PatternMatcher(value)
    if isinstance(value, PathMatcher):
        return value
    raise ConfigurationError(MATCHER_TYPE_ERROR)


def compile_path_matcher(value: PathMatcherSource) -> PathMatcher:
    """
    Compile a ``cache_when_path_matches`` value into a PathMatcher.

    Strings become prefix matchers, compiled patterns are searched anywhere
    in the path, and lists or tuples match when any element does.

    Raises:
        ConfigurationError: If the value is missing or of an unsupported type.
    """
    if value is None:
        raise ConfigurationError("You must specify cache_when_path_matches.")
    if isinstance(value, (list, tuple)):
        if not value:
            logger.warning("compile_path_matcher: empty matcher list, no path will be cached")
        return AnyMatcher(tuple(_compile_single(item) for item in value))
    return _compile_single(value)


def normalize_path(path: str) -> str:
    """Ensure the path has a leading slash."""
    if not path.startswith("/"):
        return "/" + path
    return path


def has_cache_buster(path: str, query_string: str) -> bool:
    """Check for a 10-digit query string or a fingerprinted file name."""
    if _TIMESTAMP_QUERY_RE.match(query_string or ""):
        return True
    return _FINGERPRINT_PATH_RE.search(path or "") is not None
