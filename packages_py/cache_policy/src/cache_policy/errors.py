"""
Errors raised while configuring or evaluating a cache policy.
"""


class CachePolicyError(Exception):
    """Base error for cache policy failures."""

    code = "CACHE_POLICY_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(CachePolicyError):
    """Invalid policy configuration (missing matcher, oversized duration, bad matcher type)."""

    code = "CONFIGURATION_ERROR"


class DurationParseError(CachePolicyError):
    """Error thrown when a duration string cannot be parsed."""

    code = "DURATION_PARSE_ERROR"

    def __init__(self, message: str, value: object = None) -> None:
        super().__init__(message)
        self.value = value
