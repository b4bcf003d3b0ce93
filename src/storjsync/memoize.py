"""
Argument-keyed result caching.
"""

import functools
import inspect
from typing import Any, Callable, Dict


def _normalize(value: Any) -> Any:
    # Mappings and sets are ordered by the repr of their members, so keys of
    # any hashable type (mixed str/int, tuples) produce a stable shape.
    if isinstance(value, dict):
        items = [(repr(_normalize(k)), _normalize(v)) for k, v in value.items()]
        return ("dict", sorted(items, key=lambda item: item[0]))
    if isinstance(value, (set, frozenset)):
        return ("set", sorted(repr(_normalize(v)) for v in value))
    if isinstance(value, list):
        return ("list", [_normalize(v) for v in value])
    if isinstance(value, tuple):
        return ("tuple", [_normalize(v) for v in value])
    return value


def _cache_key(args: tuple, kwargs: dict) -> str:
    # Structural key: equal lists/dicts map to the same slot regardless of identity.
    return repr(_normalize((args, kwargs)))


class Memoizer:
    """
    Cache the results of ``fn`` keyed by its call arguments.

    The first call with a given argument tuple invokes ``fn``; later calls whose
    arguments serialize identically return the stored result, ``None``
    included. Coroutine functions are awaited once and their result is cached.
    There is no eviction: the cache lives as long as this wrapper.
    """

    def __init__(self, fn: Callable[..., Any]):
        self._fn = fn
        self._cache: Dict[str, Any] = {}
        self.calls = 0
        self.is_async = inspect.iscoroutinefunction(fn)
        functools.update_wrapper(self, fn)

    def __call__(self, *args, **kwargs):
        if self.is_async:
            return self._call_async(args, kwargs)

        key = _cache_key(args, kwargs)
        if key not in self._cache:
            self.calls += 1
            self._cache[key] = self._fn(*args, **kwargs)
        return self._cache[key]

    async def _call_async(self, args: tuple, kwargs: dict):
        key = _cache_key(args, kwargs)
        if key not in self._cache:
            self.calls += 1
            self._cache[key] = await self._fn(*args, **kwargs)
        return self._cache[key]

    def cached(self, *args, **kwargs) -> bool:
        """True if a result for these arguments is already stored."""
        return _cache_key(args, kwargs) in self._cache

    def cache_clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


def memoize(fn: Callable[..., Any]) -> Memoizer:
    """Wrap ``fn`` in a fresh Memoizer; usable as a decorator."""
    return Memoizer(fn)
