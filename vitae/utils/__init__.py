"""
Shared utilities for vitae.

Common functionality used across contexts:
- Logger setup
- Exception hierarchy
- Resolved-person cache
"""

from vitae.utils.cache import MemoryCache, YAMLFileCache, fingerprint
from vitae.utils.exceptions import ConfigError, FormatError, InputError, NetworkError, VitaeError

__all__ = [
    "MemoryCache",
    "YAMLFileCache",
    "fingerprint",
    "VitaeError",
    "InputError",
    "ConfigError",
    "NetworkError",
    "FormatError",
]
