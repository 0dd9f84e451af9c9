"""Cache policy configuration loaded from environment variables."""

import re
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings

from .types import CachePolicyOptions


class CachePolicySettings(BaseSettings):
    """
    Cache policy settings.

    List values are read as JSON, e.g.
    ``CACHE_POLICY_PATH_PREFIXES='["/images", "/assets"]'``.
    """

    PATH_PREFIXES: List[str] = []
    PATH_PATTERNS: List[str] = []
    WHEN_CACHE_BUSTERS_PRESENT_CACHE_FOR: Optional[str] = None
    WHEN_CACHE_BUSTERS_ABSENT_CACHE_FOR: Optional[str] = None

    class Config:
        case_sensitive = True
        env_prefix = "CACHE_POLICY_"
        env_file = None  # Use system env only

    def to_options(self) -> CachePolicyOptions:
        """Build policy options; no prefixes and no patterns means no matcher."""
        matchers = list(self.PATH_PREFIXES)
        matchers.extend(re.compile(pattern) for pattern in self.PATH_PATTERNS)
        return CachePolicyOptions(
            cache_when_path_matches=matchers or None,
            when_cache_busters_present_cache_for=self.WHEN_CACHE_BUSTERS_PRESENT_CACHE_FOR,
            when_cache_busters_absent_cache_for=self.WHEN_CACHE_BUSTERS_ABSENT_CACHE_FOR,
        )


@lru_cache()
def get_settings() -> CachePolicySettings:
    """Get cached settings instance."""
    return CachePolicySettings()
