from abc import ABC, abstractmethod
from numbers import Number
from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

Key = Union[str, int, float, bool]
Pair = Tuple[Key, Any]

Predicate = Callable[..., bool]
Selector = Union[None, str, int, Callable[[Any], Any]]
Comparer = Callable[[T, T], Union[int, bool]]
Accumulator = Callable[..., U]

SCALAR_TYPES = (str, bytes, bool, Number)


def is_scalar(value: Any) -> bool:
    """strings, numbers and booleans; None is not a scalar"""
    return isinstance(value, SCALAR_TYPES)


def normalize_key(key: Any) -> Key:
    """scalar keys pass through, anything else is coerced to its string form"""
    if isinstance(key, (str, int, float, bool)):
        return key
    return str(key)


def same(a: Any, b: Any) -> bool:
    """type-strict equality, so 1 never matches True or 1.0"""
    return a is b or (type(a) is type(b) and a == b)


def strictly_contains(candidates: Iterable[Any], needle: Any) -> bool:
    return any(same(candidate, needle) for candidate in candidates)


class ICollection(ABC, Generic[T]):
    """anything that can hand out a fresh, independent pass of (key, value) pairs"""

    @abstractmethod
    def iter_pairs(self) -> Iterator[Pair]:
        """start a new keyed pass"""
        pass
