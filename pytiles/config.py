"""
Cache geometry used by the tile-size heuristics.
"""

from dataclasses import dataclass

from .errors import InvalidParameterError


@dataclass(frozen=True)
class CacheConfig:
    """
    Cache sizes the tile-size heuristics aim for.

    Attributes:
        l1_cache_size: Size of the L1 data cache in bytes
        cache_line_size: Size of one cache line in bytes
    """
    l1_cache_size: int = 2 ** 15
    cache_line_size: int = 64

    def __post_init__(self):
        if self.l1_cache_size <= 0:
            raise InvalidParameterError(
                f"l1_cache_size must be positive, got {self.l1_cache_size}")
        if self.cache_line_size <= 0:
            raise InvalidParameterError(
                f"cache_line_size must be positive, got {self.cache_line_size}")


DEFAULT_CACHE_CONFIG = CacheConfig()


def get_default_cache_config() -> CacheConfig:
    """Get the default cache configuration (32 KiB L1, 64 byte lines)."""
    return DEFAULT_CACHE_CONFIG
