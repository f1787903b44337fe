"""
Server-side caching for history queries.

Provides a thread-safe TTL cache keyed per user. Entries expire after the
TTL and are invalidated explicitly when the user's history changes.
"""

from cachetools import TTLCache
from threading import Lock
from typing import Optional, Any

CACHE_TTL_SECONDS = 10
CACHE_MAX_SIZE = 100

_history_cache: TTLCache = TTLCache(maxsize=CACHE_MAX_SIZE, ttl=CACHE_TTL_SECONDS)
_cache_lock = Lock()


def get_cached(key: str) -> Optional[Any]:
    """
    Retrieve a cached value by key.

    Returns:
        The cached value if present and not expired, None otherwise
    """
    with _cache_lock:
        return _history_cache.get(key)


def set_cached(key: str, data: Any) -> None:
    with _cache_lock:
        _history_cache[key] = data


def invalidate_pattern(prefix: str) -> int:
    """
    Remove all cache entries with keys starting with the given prefix.

    Returns:
        Number of entries invalidated
    """
    with _cache_lock:
        keys_to_remove = [k for k in _history_cache.keys() if k.startswith(prefix)]
        for key in keys_to_remove:
            del _history_cache[key]
        return len(keys_to_remove)


def clear_all() -> int:
    with _cache_lock:
        count = len(_history_cache)
        _history_cache.clear()
        return count


def user_cache_prefix(user_id: str) -> str:
    return f"history:u:{user_id}:"


def make_history_cache_key(user_id: str, limit: int = 50, offset: int = 0) -> str:
    """
    Generate a cache key for a user's history page.

    Args:
        user_id: Owner of the history rows
        limit: Number of items requested
        offset: Pagination offset
    """
    return f"{user_cache_prefix(user_id)}l:{limit}:o:{offset}"

