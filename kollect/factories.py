import typing
from .source import KeyedItems
from .types import *

if typing.TYPE_CHECKING:
    from .collection import Collection


def from_iterable(items: Any = None, strict_unique_keys: Optional[bool] = None) -> 'Collection[Any]':
    """create a collection from a list, dict, iterable, generator or factory"""
    from .collection import Collection
    return Collection(items, strict_unique_keys=strict_unique_keys)


def from_pairs(pairs: Iterable[Pair], strict_unique_keys: Optional[bool] = None) -> 'Collection[Any]':
    """create a collection from explicit (key, value) pairs"""
    from .collection import Collection
    if not isinstance(pairs, Iterator):
        pairs = list(pairs)
    return Collection(KeyedItems(pairs), strict_unique_keys=strict_unique_keys)


def from_range(start: int, count: int) -> 'Collection[int]':
    """create collection from range"""
    from .collection import Collection
    return Collection(range(start, start + count))


def repeat(item: T, count: int) -> 'Collection[T]':
    """create collection with repeated item"""
    from .collection import Collection
    return Collection([item] * count)


def empty() -> 'Collection[Any]':
    """create empty collection"""
    from .collection import Collection
    return Collection([])


def iterate(seed: T, step: Callable[[T], T]) -> 'Collection[T]':
    """
    the infinite sequence seed, step(seed), step(step(seed)), ...
    regenerated for every pass, so take() or slice() it before realizing.
    """
    from .collection import Collection
    def iterate_values():
        value = seed
        while True:
            yield value
            value = step(value)
    return Collection(iterate_values)


# --- aliases ---
collect = from_iterable
C = from_iterable
