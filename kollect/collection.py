from __future__ import annotations

import logging
from collections.abc import Mapping
from .config import config
from .exceptions import DuplicateKey, InvalidType
from .source import KeyedItems, Source, SourceKind, StreamCursor
from .types import *

# --- derived operations ---
from .extensions.core import _CoreOperations
from .extensions.set import _SetOperations
from .extensions.grouping import _GroupingOperations
from .extensions.stats import _StatsOperations
from .extensions.terminal import _QueryOperations, TerminalAccessor
from .extensions.utility import _UtilityOperations

logger = logging.getLogger(__name__)


# --- base collection: the iteration engine ---

class _BaseCollection(ICollection[T]):
    def __init__(self, items: Any = None, strict_unique_keys: Optional[bool] = None):
        """init with fixed data, an iterable, or a zero-argument factory"""
        self._strict_unique_keys = config.strict_unique_keys if strict_unique_keys is None else bool(strict_unique_keys)
        self._set_source([] if items is None else items)

    def _set_source(self, items: Any) -> None:
        """install a new source, forgetting everything learned about the previous one"""
        self._cached_count: Optional[int] = None
        self._observed_keys: Set[Tuple[type, Key]] = set()
        self._cursor = None
        self._source = Source(items)

    @property
    def source_kind(self) -> SourceKind:
        return self._source.kind

    # --- configuration ---

    @property
    def is_strict(self) -> bool:
        return self._strict_unique_keys

    def strict_unique_keys(self, enabled: bool = True) -> 'Collection[T]':
        """
        toggles duplicate key detection on this collection (and on anything derived from it later).
        with it disabled, to_array() keeps the last value of a repeated key; call values()
        first to keep every item.
        """
        self._strict_unique_keys = bool(enabled)
        return self

    def allow_duplicate_keys(self) -> 'Collection[T]':
        """shorthand for strict_unique_keys(False)"""
        return self.strict_unique_keys(False)

    def _observe(self, key: Any, observed: Set[Tuple[type, Key]]) -> Key:
        key = normalize_key(key)
        if self._strict_unique_keys:
            # 1, 1.0 and True are distinct keys
            marker = (type(key), key)
            if marker in observed:
                logger.debug(f"duplicate key {key!r} observed on {self!r}")
                raise DuplicateKey(key)
            observed.add(marker)
        return key

    # --- iteration protocol ---

    def _protocol_cursor(self):
        if self._cursor is None:
            self._cursor = self._source.open()
        return self._cursor

    def value(self) -> Any:
        """value at the cursor, None once exhausted"""
        return self._protocol_cursor().current()

    def key(self) -> Optional[Key]:
        """
        key at the cursor. this is where duplicate keys are caught: iterating values only
        never calls it and therefore never fails on repeated keys.
        """
        cursor = self._protocol_cursor()
        if not cursor.valid():
            return None
        return self._observe(cursor.key(), self._observed_keys)

    def advance(self) -> None:
        self._protocol_cursor().next()

    def valid(self) -> bool:
        return self._protocol_cursor().valid()

    def at_end(self) -> bool:
        return not self.valid()

    def restart(self) -> None:
        """start a new pass: forget observed keys and reposition or regenerate the sequence"""
        self._observed_keys = set()
        self._cursor = self._source.restart(self._cursor)

    # --- internal passes ---

    def _walk(self, keyed: bool = True) -> Iterator[Any]:
        """an independent pass with its own cursor and its own set of observed keys"""
        if isinstance(self._cursor, StreamCursor) and self._cursor.rewindable:
            # a protocol cursor that never moved hands its lease over to this pass
            self._source.release(self._cursor)
            self._cursor = None
            self._observed_keys = set()
        cursor = self._source.open()
        observed: Set[Tuple[type, Key]] = set()
        try:
            while cursor.valid():
                if keyed:
                    yield self._observe(cursor.key(), observed), cursor.current()
                else:
                    yield cursor.current()
                cursor.next()
        finally:
            self._source.release(cursor)

    def iter_pairs(self) -> Iterator[Pair]:
        """(key, value) pairs of a fresh pass, subject to duplicate key checks"""
        return self._walk(keyed=True)

    def items(self) -> Iterator[Pair]:
        return self.iter_pairs()

    def iter_values(self) -> Iterator[T]:
        """values of a fresh pass; keys are never looked at"""
        return self._walk(keyed=False)

    def __iter__(self) -> Iterator[T]:
        return self.iter_values()

    def __bool__(self) -> bool:
        for _ in self.iter_values():
            return True
        return False

    def count(self) -> int:
        """number of items; keys are observed, so repeated keys fail here too. memoized"""
        if self._cached_count is None:
            total = 0
            for _ in self.iter_pairs():
                total += 1
            self._cached_count = total
        return self._cached_count

    def to_array(self) -> Dict[Key, T]:
        """realize into an ordered dict. with lenient keys the last value of a repeated key wins"""
        return {key: value for key, value in self.iter_pairs()}

    def json_serialize(self) -> Dict[Key, T]:
        return self.to_array()

    # --- pipeline construction ---

    def _spawn(self, items: Any) -> 'Collection[Any]':
        """a new collection over items, inheriting this one's key strictness"""
        return Collection(items, strict_unique_keys=self._strict_unique_keys)

    def _derive(self, pair_generator: Callable[[], Iterator[Pair]]) -> 'Collection[Any]':
        """wrap a generator function of (key, value) pairs as a new, re-iterable collection"""
        return self._spawn(lambda: KeyedItems(pair_generator()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self._source.kind.name.lower()}, strict={self._strict_unique_keys})"


# --- main collection class ---

class Collection(
    _BaseCollection[T],
    _CoreOperations[T],
    _SetOperations[T],
    _GroupingOperations[T],
    _StatsOperations[T],
    _QueryOperations[T],
    _UtilityOperations[T]
):
    """a lazy, keyed collection pipeline"""
    def __init__(self, items: Any = None, index_by: Selector = None, strict_unique_keys: Optional[bool] = None):
        if index_by is None:
            super().__init__(items, strict_unique_keys)
        else:
            upstream = Collection(items, strict_unique_keys=strict_unique_keys)
            super().__init__(upstream.index_by(index_by), strict_unique_keys)
        # --- initialize accessors ---
        self.to = TerminalAccessor(self)


# --- typed collections ---

class _TypedCollection(Collection[T]):
    """validates every value; fixed input up front, lazy input as it is pulled"""
    _expected = 'value'

    @classmethod
    def _accepts(cls, value: Any) -> bool:
        raise NotImplementedError

    def _check(self, value: Any) -> Any:
        if not self._accepts(value):
            raise InvalidType(f"{type(self).__name__} expects every {self._expected}, got {type(value).__name__}")
        return value

    def __init__(self, items: Any = None, index_by: Selector = None, strict_unique_keys: Optional[bool] = None):
        items = [] if items is None else items
        if isinstance(items, KeyedItems) and isinstance(items.pairs, (list, tuple)):
            values = [value for _, value in items.pairs]
        elif isinstance(items, Mapping):
            values = list(items.values())
        elif isinstance(items, (list, tuple)):
            values = items
        else:
            values = None

        if values is not None:
            for value in values:
                self._check(value)
            checked = items
        else:
            upstream = Collection(items, strict_unique_keys=strict_unique_keys)

            def checked_pairs():
                for key, value in upstream.iter_pairs():
                    yield key, self._check(value)
            checked = lambda: KeyedItems(checked_pairs())
        super().__init__(checked, index_by, strict_unique_keys)


class ArrayCollection(_TypedCollection[T]):
    """a collection whose values are all mappings or lists"""
    _expected = 'value to be a mapping or a list'

    @classmethod
    def _accepts(cls, value: Any) -> bool:
        return isinstance(value, (Mapping, list, tuple))


class CollectionCollection(_TypedCollection[T]):
    """a collection of collections"""
    _expected = 'value to be a Collection'

    @classmethod
    def _accepts(cls, value: Any) -> bool:
        return isinstance(value, Collection)
