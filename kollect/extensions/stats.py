from __future__ import annotations
import typing
import numpy as np
from ..selector import resolve_selector
from ..exceptions import EmptyCollection
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import Collection


def _total(values: List[Any]) -> Union[int, float]:
    """numpy for floats; ints stay python ints so they never wrap around"""
    if values and all(isinstance(value, float) for value in values):
        return np.sum(values).item()
    return sum(values)


class _StatsOperations(Generic[T]):
    def _get_values(self: 'Collection[T]', selector: Selector = None) -> List[Any]:
        """helper to extract the values statistics run over"""
        extract = resolve_selector(selector)
        return [extract(value) for value in self.iter_values()]

    def sum(self: 'Collection[T]', selector: Selector = None) -> Union[int, float]:
        """calc sum, 0 when empty"""
        return _total(self._get_values(selector))

    def avg(self: 'Collection[T]', selector: Selector = None) -> float:
        """calc average over a single pass"""
        values = self._get_values(selector)
        if not values:
            raise EmptyCollection("cannot calculate average on empty collection")
        return _total(values) / len(values)

    def min(self: 'Collection[T]', selector: Selector = None) -> Any:
        """smallest selected value; the first one wins ties"""
        values = self._get_values(selector)
        if not values:
            raise EmptyCollection("cannot find minimum of empty collection")
        return min(values)

    def max(self: 'Collection[T]', selector: Selector = None) -> Any:
        """largest selected value; the first one wins ties"""
        values = self._get_values(selector)
        if not values:
            raise EmptyCollection("cannot find maximum of empty collection")
        return max(values)

    def median(self: 'Collection[T]', selector: Selector = None) -> Any:
        """
        middle of the sorted selected values, ignoring None. an even number of values
        gives the mean of the two in the middle.
        """
        values = sorted(value for value in self._get_values(selector) if value is not None)
        if not values:
            raise EmptyCollection("cannot calculate median of empty collection")
        middle = len(values) // 2
        if len(values) % 2:
            return values[middle]
        return (values[middle - 1] + values[middle]) / 2
