from __future__ import annotations
import math
import typing
from itertools import batched
from ..selector import resolve_selector
from ..source import KeyedItems
from ..exceptions import InvalidArgument
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import Collection, CollectionCollection


class _GroupingOperations(Generic[T]):
    def group_by(self: 'Collection[T]', selector: Selector) -> 'CollectionCollection[Collection[T]]':
        """group the values by a selected key; each group is a collection keyed 0..n-1"""
        from ..collection import CollectionCollection
        extract = resolve_selector(selector)
        groups: Dict[Tuple[type, Key], Tuple[Key, List[T]]] = {}
        for _, value in self.iter_pairs():
            group_key = normalize_key(extract(value))
            # keep 1 and True apart, as keys are elsewhere
            marker = (type(group_key), group_key)
            if marker not in groups:
                groups[marker] = (group_key, [])
            groups[marker][1].append(value)
        return CollectionCollection(
            KeyedItems([(group_key, self._spawn(members)) for group_key, members in groups.values()]),
            strict_unique_keys=self._strict_unique_keys)

    def count_by(self: 'Collection[T]', selector: Selector) -> 'Collection[int]':
        """number of values per selected key"""
        return self.group_by(selector).map(lambda group: group.count())

    def frequencies(self: 'Collection[T]') -> 'Collection[int]':
        """number of occurrences per value"""
        return self.count_by(lambda value: value)

    def _chunked(self: 'Collection[T]', realized: Dict[Key, T], size: int,
                 preserve_keys: bool) -> 'CollectionCollection[Collection[T]]':
        from ..collection import CollectionCollection
        chunks = []
        for batch in batched(realized.items(), size):
            if preserve_keys:
                chunks.append(self._spawn(KeyedItems(list(batch))))
            else:
                chunks.append(self._spawn([value for _, value in batch]))
        return CollectionCollection(chunks, strict_unique_keys=self._strict_unique_keys)

    def chunk(self: 'Collection[T]', size: int, preserve_keys: bool = True) -> 'CollectionCollection[Collection[T]]':
        """
        split into collections of at most size pairs. realizes through to_array(), so with
        lenient keys only the last pair of a repeated key survives. without preserve_keys
        every chunk is keyed 0..n-1.
        """
        if size < 1:
            raise InvalidArgument(f"chunk size must be at least 1, got {size}")
        return self._chunked(self.to_array(), size, preserve_keys)

    def split(self: 'Collection[T]', groups: int, preserve_keys: bool = True) -> 'CollectionCollection[Collection[T]]':
        """split into at most groups chunks of equal size (the last one may be shorter)"""
        if groups < 1:
            raise InvalidArgument(f"number of groups must be at least 1, got {groups}")
        realized = self.to_array()
        return self._chunked(realized, max(math.ceil(len(realized) / groups), 1), preserve_keys)
