"""
Cache-Control header parsing and serialization.
"""
from typing import Dict, List, Optional

from .types import CacheControl

CACHE_CONTROL_HEADER = "Cache-Control"


def parse_cache_control(header: Optional[str]) -> CacheControl:
    """Parse Cache-Control header into an ordered directive map."""
    directives = CacheControl()

    if not header:
        return directives

    for part in header.split(","):
        part = part.strip()
        if not part:
            continue
        if "=" in part:
            key, value = part.split("=", 1)
            directives[key.strip()] = value.strip()
        else:
            directives[part] = True

    return directives


def build_cache_control(directives: CacheControl) -> str:
    """Build Cache-Control header from directives, in insertion order."""
    parts: List[str] = []

    for name, value in directives.items():
        if value is True:
            parts.append(name)
        else:
            parts.append(f"{name}={value}")

    return ", ".join(parts)


def get_header_value(headers: Dict[str, str], key: str) -> Optional[str]:
    """Get header value case-insensitively."""
    lower_key = key.lower()
    for k, v in headers.items():
        if k.lower() == lower_key:
            return v
    return None


def set_header_value(headers: Dict[str, str], key: str, value: str) -> Dict[str, str]:
    """Return a copy of headers with key set, reusing an existing key's spelling."""
    result = dict(headers)
    lower_key = key.lower()
    for k in headers:
        if k.lower() == lower_key:
            result[k] = value
            return result
    result[key] = value
    return result

