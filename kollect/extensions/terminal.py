from __future__ import annotations
import json
import typing
import numpy as np
import pandas as pd
from collections.abc import Iterable as IterableABC, Mapping
from ..config import config
from ..selector import resolve_selector, adapt_callback
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import Collection


class _QueryOperations(Generic[T]):
    def contains(self: 'Collection[T]', needle: Any) -> bool:
        """whether some value is (type-strictly) equal to needle"""
        return any(same(value, needle) for _, value in self.iter_pairs())

    def get(self: 'Collection[T]', key: Any, default: Any = None) -> Any:
        """value stored under key"""
        wanted = normalize_key(key)
        for k, value in self.iter_pairs():
            if same(k, wanted):
                return value
        return default

    def has(self: 'Collection[T]', key: Any) -> bool:
        wanted = normalize_key(key)
        return any(same(k, wanted) for k, _ in self.iter_pairs())

    def first(self: 'Collection[T]', predicate: Optional[Predicate] = None, default: Any = None) -> Any:
        """first value (that satisfies predicate), or default"""
        if predicate is None:
            for value in self.iter_values():
                return value
            return default
        return self.find(predicate, default)

    def last(self: 'Collection[T]', predicate: Optional[Predicate] = None, default: Any = None) -> Any:
        """last value (that satisfies predicate), or default"""
        check = adapt_callback(predicate, 2) if predicate is not None else lambda value, key: True
        result = default
        for key, value in self.iter_pairs():
            if check(value, key):
                result = value
        return result

    def find(self: 'Collection[T]', predicate: Predicate, default: Any = None) -> Any:
        """first value for which predicate(value, key) holds"""
        check = adapt_callback(predicate, 2)
        for key, value in self.iter_pairs():
            if check(value, key):
                return value
        return default

    def every(self: 'Collection[T]', predicate: Predicate) -> bool:
        check = adapt_callback(predicate, 2)
        return all(check(value, key) for key, value in self.iter_pairs())

    def some(self: 'Collection[T]', predicate: Predicate) -> bool:
        check = adapt_callback(predicate, 2)
        return any(check(value, key) for key, value in self.iter_pairs())

    def reduce(self: 'Collection[T]', accumulator: Accumulator, initial: Any) -> Any:
        """
        fold with accumulator(carry, value, key). a result that is itself iterable
        (other than a string) comes back as a collection.
        """
        step = adapt_callback(accumulator, 3)
        carry = initial
        for key, value in self.iter_pairs():
            carry = step(carry, value, key)
        if isinstance(carry, IterableABC) and not isinstance(carry, (str, bytes, bytearray)):
            return self._spawn(carry)
        return carry

    def implode(self: 'Collection[T]', glue: str = ', ', selector: Selector = None) -> str:
        """join the (selected) values into a string"""
        extract = resolve_selector(selector)
        return glue.join(str(extract(value)) for value in self.iter_values())

    def is_empty(self: 'Collection[T]') -> bool:
        for _ in self.iter_values():
            return False
        return True

    def is_not_empty(self: 'Collection[T]') -> bool:
        return not self.is_empty()

    def all(self: 'Collection[T]') -> Dict[Key, T]:
        """old name of to_array()"""
        return self.to_array()


def _realize(value: Any) -> Any:
    """turn nested collections into plain dicts, recursively"""
    if isinstance(value, ICollection):
        return {key: _realize(item) for key, item in value.iter_pairs()}
    if isinstance(value, Mapping):
        return {key: _realize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_realize(item) for item in value]
    return value


class TerminalAccessor(Generic[T]):
    def __init__(self, collection_instance: 'Collection[T]'):
        self._collection = collection_instance

    def list(self) -> List[T]:
        """the values as a list; keys are ignored"""
        return list(self._collection.iter_values())

    def dict(self) -> Dict[Key, T]:
        """the pairs as a dict, same as to_array()"""
        return self._collection.to_array()

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self.list())

    def series(self) -> pd.Series:
        """convert to pandas series indexed by key"""
        realized = self._collection.to_array()
        return pd.Series(list(realized.values()), index=list(realized.keys()))

    def df(self) -> pd.DataFrame:
        """convert to pandas dataframe, one row per pair, indexed by key"""
        realized = self._collection.to_array()
        rows = [_realize(value) for value in realized.values()]
        return pd.DataFrame(rows, index=list(realized.keys()))

    def json(self, indent: Optional[int] = None) -> str:
        """encode to_array() as json, nested collections included"""
        return json.dumps(_realize(self._collection), indent=config.json_indent if indent is None else indent)
