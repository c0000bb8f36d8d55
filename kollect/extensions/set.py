from __future__ import annotations
import typing
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import Collection


class _SetOperations(Generic[T]):
    # comparisons are type-strict: 1 never matches True, 1.0 or '1'

    def _compare_values(self: 'Collection[T]', other: Any) -> List[Any]:
        """the values of other, realized once"""
        return list(self._spawn(other).iter_values())

    def diff(self: 'Collection[T]', other: Any) -> 'Collection[T]':
        """pairs whose value does not occur in other"""
        candidates = self._compare_values(other)
        return self.filter(lambda value: not strictly_contains(candidates, value))

    def intersect(self: 'Collection[T]', other: Any) -> 'Collection[T]':
        """pairs whose value also occurs in other"""
        candidates = self._compare_values(other)
        return self.filter(lambda value: strictly_contains(candidates, value))

    def distinct(self: 'Collection[T]') -> 'Collection[T]':
        """drop repeated values; the first occurrence keeps its key"""
        def distinct_pairs():
            seen: List[Any] = []
            for key, value in self.iter_pairs():
                if not strictly_contains(seen, value):
                    seen.append(value)
                    yield key, value
        return self._derive(distinct_pairs)

    def only(self: 'Collection[T]', keys: Any) -> 'Collection[T]':
        """pairs whose key is one of keys"""
        wanted = [normalize_key(key) for key in self._compare_values(keys)]
        return self.filter(lambda value, key: strictly_contains(wanted, key))

    def except_(self: 'Collection[T]', keys: Any) -> 'Collection[T]':
        """pairs whose key is none of keys"""
        unwanted = [normalize_key(key) for key in self._compare_values(keys)]
        return self.reject(lambda value, key: strictly_contains(unwanted, key))
