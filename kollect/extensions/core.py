from __future__ import annotations
import typing
from collections.abc import Iterable as IterableABC, Mapping
from functools import cmp_to_key
from ..selector import resolve_selector, adapt_callback
from ..source import KeyedItems
from ..exceptions import InvalidArgument
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import Collection


def _is_int_key(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def _next_int_key(highest: Optional[int]) -> int:
    return 0 if highest is None else highest + 1


def _is_nested(value: Any) -> bool:
    """values flatten() descends into"""
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Mapping, ICollection, IterableABC))


class _CoreOperations(Generic[T]):
    def filter(self: 'Collection[T]', predicate: Optional[Predicate] = None) -> 'Collection[T]':
        """keep the pairs where predicate(value, key) holds; without a predicate, drop falsy values"""
        check = adapt_callback(predicate, 2) if predicate is not None else lambda value, key: bool(value)
        def filter_pairs():
            for key, value in self.iter_pairs():
                if check(value, key):
                    yield key, value
        return self._derive(filter_pairs)

    def reject(self: 'Collection[T]', predicate: Predicate) -> 'Collection[T]':
        """the complement of filter"""
        check = adapt_callback(predicate, 2)
        return self.filter(lambda value, key: not check(value, key))

    def map(self: 'Collection[T]', fn: Callable[..., U]) -> 'Collection[U]':
        """project each value, keeping its key"""
        project = adapt_callback(fn, 2)
        def map_pairs():
            for key, value in self.iter_pairs():
                yield key, project(value, key)
        return self._derive(map_pairs)

    def keys(self: 'Collection[T]') -> 'Collection[Key]':
        """the keys, as values keyed 0..n-1"""
        return self._derive(lambda: enumerate(key for key, _ in self.iter_pairs()))

    def values(self: 'Collection[T]') -> 'Collection[T]':
        """
        re-key the values 0..n-1. the upstream keys are never observed, so this is
        the way out of a collection with duplicate keys.
        """
        return self._derive(lambda: enumerate(self.iter_values()))

    def extract(self: 'Collection[T]', selector: Selector) -> 'Collection[Any]':
        """select a field (or computed value) of every value, keyed 0..n-1"""
        extract = resolve_selector(selector)
        return self._derive(lambda: enumerate(extract(value) for value in self.iter_values()))

    def parts(self: 'Collection[T]', selector: Selector) -> 'Collection[Any]':
        """old name of extract()"""
        return self.extract(selector)

    def index_by(self: 'Collection[T]', selector: Selector) -> 'Collection[T]':
        """re-key each value by its selected field; a None result keeps the positional key"""
        select = adapt_callback(resolve_selector(selector), 2)
        def indexed_pairs():
            # upstream keys are discarded, so they are not observed either
            for position, value in enumerate(self.iter_values()):
                new_key = select(value, position)
                yield (position if new_key is None else new_key), value
        return self._derive(indexed_pairs)

    def flip(self: 'Collection[T]') -> 'Collection[Key]':
        """swap keys and values"""
        return self._derive(lambda: ((value, key) for key, value in self.iter_pairs()))

    # --- adding items ---

    def concat(self: 'Collection[T]', items: Any) -> 'Collection[Any]':
        """the values of this collection keyed 0..n-1, followed by the pairs of items"""
        pushed = self._spawn(items)
        def concat_pairs():
            yield from enumerate(self.iter_values())
            yield from pushed.iter_pairs()
        return self._derive(concat_pairs)

    def push(self: 'Collection[T]', value: Any, key: Any = None) -> 'Collection[Any]':
        """append a pair; without a key it gets the next integer key"""
        def push_pairs():
            highest = None
            for k, v in self.iter_pairs():
                if _is_int_key(k) and (highest is None or k > highest):
                    highest = k
                yield k, v
            yield (_next_int_key(highest) if key is None else key), value
        return self._derive(push_pairs)

    def put(self: 'Collection[T]', value: Any, key: Any) -> 'Collection[Any]':
        """replace the value stored under key, or append it when the key is new"""
        if key is None:
            return self.push(value)
        target = normalize_key(key)
        def put_pairs():
            replaced = False
            for k, v in self.iter_pairs():
                if same(k, target):
                    replaced = True
                    yield k, value
                else:
                    yield k, v
            if not replaced:
                yield target, value
        return self._derive(put_pairs)

    def unshift(self: 'Collection[T]', value: Any, key: Any = None) -> 'Collection[Any]':
        """prepend a pair; without a key it is keyed 0"""
        def unshift_pairs():
            yield (0 if key is None else key), value
            yield from self.iter_pairs()
        return self._derive(unshift_pairs)

    def prepend(self: 'Collection[T]', value: Any) -> 'Collection[Any]':
        """old name of unshift() without a key"""
        return self.unshift(value)

    def merge(self: 'Collection[T]', items: Any) -> 'Collection[Any]':
        """
        merge items in: a string key overwrites the existing pair in place (or is appended
        when new), every other item is appended under the next integer key.
        """
        incoming = self._spawn(items)
        def merge_pairs():
            merged = list(incoming.iter_pairs())
            overrides = {k: v for k, v in merged if isinstance(k, str)}
            applied = set()
            highest = None
            for k, v in self.iter_pairs():
                if _is_int_key(k) and (highest is None or k > highest):
                    highest = k
                if isinstance(k, str) and k in overrides:
                    applied.add(k)
                    yield k, overrides[k]
                else:
                    yield k, v
            for k, v in merged:
                if isinstance(k, str):
                    if k not in applied:
                        applied.add(k)
                        yield k, overrides[k]
                else:
                    highest = _next_int_key(highest)
                    yield highest, v
        return self._derive(merge_pairs)

    # --- windows ---

    def slice(self: 'Collection[T]', offset: int, length: Optional[int] = None) -> 'Collection[T]':
        """
        pairs from position offset on, at most length of them. a negative offset counts
        from the end, a negative length stops that many pairs before the end. only the
        negative cases need the total, and realize the pairs once; the rest stays lazy.
        """
        def slice_pairs():
            pairs = self.iter_pairs()
            total = None
            if offset < 0 or (length is not None and length < 0):
                pairs = list(pairs)
                total = len(pairs)
            start = offset if offset >= 0 else max(total + offset, 0)
            if length is None:
                stop = None
            elif length > 0:
                stop = start + length
            elif length == 0:
                return
            else:
                stop = total + length
            if stop is not None and stop <= start:
                return
            for index, (key, value) in enumerate(pairs):
                if index >= start:
                    yield key, value
                if stop is not None and index + 1 >= stop:
                    break
        return self._derive(slice_pairs)

    def take(self: 'Collection[T]', count: int) -> 'Collection[T]':
        """the first count pairs"""
        return self.slice(0, count)

    def take_nth(self: 'Collection[T]', step: int, offset: int = 0) -> 'Collection[T]':
        """every step-th pair, starting at position offset"""
        if step < 1:
            raise InvalidArgument(f"step must be at least 1, got {step}")
        def nth_pairs():
            for index, (key, value) in enumerate(self.iter_pairs()):
                if index % step == offset:
                    yield key, value
        return self._derive(nth_pairs)

    def nth(self: 'Collection[T]', step: int, offset: int = 0) -> 'Collection[T]':
        return self.take_nth(step, offset)

    def flatten(self: 'Collection[T]', depth: int = -1) -> 'Collection[Any]':
        """
        replace nested containers by their own pairs, depth levels deep (-1: all the way).
        nested pairs keep their own keys, so flattening usually needs values() afterwards.
        """
        def flatten_pairs(pairs, level):
            for key, value in pairs:
                if level != 0 and _is_nested(value):
                    yield from flatten_pairs(self._spawn(value).iter_pairs(), level - 1)
                else:
                    yield key, value
        return self._derive(lambda: flatten_pairs(self.iter_pairs(), depth))

    # --- ordering ---

    def reverse(self: 'Collection[T]') -> 'Collection[T]':
        """the pairs in reverse order; realizes the collection on every pass"""
        def reverse_pairs():
            yield from reversed(list(self.iter_pairs()))
        return self._derive(reverse_pairs)

    def sort(self: 'Collection[T]', comparator: Optional[Comparer] = None) -> 'Collection[T]':
        """
        sort the pairs by value, keeping keys. comparator(a, b[, key_a, key_b]) returns either
        a number (negative, zero, positive) or a "greater than" boolean. equal items keep
        their relative order.
        """
        compare = adapt_callback(comparator if comparator is not None else lambda a, b: a > b, 4)

        def order(left, right):
            (pos_a, key_a, a), (pos_b, key_b, b) = left, right
            result = compare(a, b, key_a, key_b)
            if isinstance(result, bool):
                if result:
                    result = 1
                else:
                    result = -1 if compare(b, a, key_b, key_a) else 0
            return result or (pos_a - pos_b)

        indexed = [(position, key, value) for position, (key, value) in enumerate(self.iter_pairs())]
        ordered = sorted(indexed, key=cmp_to_key(order))
        return self._spawn(KeyedItems([(key, value) for _, key, value in ordered]))

    def sort_by(self: 'Collection[T]', selector: Selector, descending: bool = False) -> 'Collection[T]':
        """stable sort by a selected field, keeping keys"""
        extract = resolve_selector(selector)
        pairs = list(self.iter_pairs())
        ordered = sorted(pairs, key=lambda pair: extract(pair[1]), reverse=descending)
        return self._spawn(KeyedItems(ordered))

    def sort_by_keys(self: 'Collection[T]') -> 'Collection[T]':
        """stable sort by key"""
        return self._spawn(KeyedItems(sorted(self.iter_pairs(), key=lambda pair: pair[0])))

