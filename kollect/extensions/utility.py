from __future__ import annotations
import random as _random
import typing
from itertools import zip_longest
from ..selector import adapt_callback
from ..source import KeyedItems
from ..exceptions import InvalidArgument, InvalidReturnValue
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import Collection


class _UtilityOperations(Generic[T]):
    def each(self: 'Collection[T]', action: Callable[..., Any]) -> 'Collection[T]':
        """
        call action(value, key) for every pair as it is pulled, passing the pairs on unchanged.
        lazy: nothing happens until the result is iterated.
        """
        run = adapt_callback(action, 2)
        def each_pairs():
            for key, value in self.iter_pairs():
                run(value, key)
                yield key, value
        return self._derive(each_pairs)

    def shuffle(self: 'Collection[T]') -> 'Collection[T]':
        """the pairs in random order, keys kept"""
        pairs = list(self.iter_pairs())
        _random.shuffle(pairs)
        return self._spawn(KeyedItems(pairs))

    def random(self: 'Collection[T]', number: int = 1) -> 'Collection[T]':
        """number randomly chosen pairs, in their original order"""
        pairs = list(self.iter_pairs())
        if number < 1 or number > len(pairs):
            raise InvalidArgument(f"cannot pick {number} random item(s) from a collection of {len(pairs)}")
        chosen = sorted(_random.sample(range(len(pairs)), number))
        return self._spawn(KeyedItems([pairs[index] for index in chosen]))

    def transform(self: 'Collection[T]', transformer: Callable[['Collection[T]'], 'Collection[U]']) -> 'Collection[U]':
        """hand the whole collection to transformer, which must return a collection"""
        from ..collection import Collection
        result = transformer(self)
        if not isinstance(result, Collection):
            raise InvalidReturnValue(f"transform() callback must return a Collection, got {type(result).__name__}")
        return result

    def transpose(self: 'Collection[T]') -> 'Collection[Collection[Any]]':
        """
        turn a collection of collections (rows) into one of columns. shorter rows are
        padded with None.
        """
        from ..collection import Collection, CollectionCollection
        rows = [value for _, value in self.iter_pairs()]
        if any(not isinstance(row, Collection) for row in rows):
            raise InvalidArgument("can only transpose collections of collections")
        columns = zip_longest(*(row.to.list() for row in rows))
        return CollectionCollection(
            [self._spawn(list(column)) for column in columns],
            strict_unique_keys=self._strict_unique_keys)
