"""
source normalization and cursors.

every collection owns exactly one Source. a Source knows what kind of input it was
built from and hands out cursors, one per pass. cursors over fixed data can always
be repositioned; cursors over python iterators can only be reused until they have
been advanced, after which the factory (if any) is asked for a fresh iterator.
"""
from __future__ import annotations
import enum
import logging
from collections.abc import Iterator as IteratorABC, Iterable as IterableABC, Mapping
from .exceptions import InvalidArgument, InvalidReturnValue, SourceExhausted
from .types import *

logger = logging.getLogger(__name__)


class KeyedItems:
    """wraps an iterable whose elements are explicit (key, value) pairs instead of bare values"""
    __slots__ = ('pairs',)

    def __init__(self, pairs: Iterable[Pair]):
        self.pairs = pairs

    def __iter__(self) -> Iterator[Pair]:
        return iter(self.pairs)

    def __repr__(self) -> str:
        return f"KeyedItems({type(self.pairs).__name__})"


class SourceKind(enum.Enum):
    FIXED = enum.auto()        # in-memory pairs
    REGENERABLE = enum.auto()  # zero-argument factory, re-invoked when its sequence is spent
    SINGLE_USE = enum.auto()   # bare iterator/generator, one pass only
    PASSTHROUGH = enum.auto()  # re-iterable object (another collection, range, set...)


class CursorState(enum.Enum):
    PENDING = enum.auto()    # nothing pulled yet
    STARTED = enum.auto()    # positioned on the first element
    RUNNING = enum.auto()    # advanced at least once
    EXHAUSTED = enum.auto()


# --- cursors ---

class PositionalCursor:
    """cursor over an in-memory list of pairs"""

    def __init__(self, pairs: List[Pair]):
        self._pairs = pairs
        self._index = 0

    @property
    def rewindable(self) -> bool:
        return True

    def rewind(self) -> None:
        self._index = 0

    def valid(self) -> bool:
        return self._index < len(self._pairs)

    def current(self) -> Any:
        return self._pairs[self._index][1] if self.valid() else None

    def key(self) -> Any:
        return self._pairs[self._index][0] if self.valid() else None

    def next(self) -> None:
        if self.valid():
            self._index += 1


class StreamCursor:
    """cursor over a python iterator of pairs; pulls lazily and cannot go back once advanced"""

    def __init__(self, pairs: Iterator[Pair]):
        self._pairs = pairs
        self._state = CursorState.PENDING
        self._advanced = False
        self._pair: Optional[Pair] = None

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def rewindable(self) -> bool:
        return not self._advanced

    def _pull(self, next_state: CursorState) -> None:
        try:
            key, value = next(self._pairs)
        except StopIteration:
            self._pair = None
            self._state = CursorState.EXHAUSTED
            return
        self._pair = (key, value)
        self._state = next_state

    def _start(self) -> None:
        if self._state is CursorState.PENDING:
            self._pull(CursorState.STARTED)

    def rewind(self) -> None:
        if self._advanced:
            raise SourceExhausted("cannot restart a single-use sequence that was already traversed")
        self._start()

    def valid(self) -> bool:
        self._start()
        return self._state is not CursorState.EXHAUSTED

    def current(self) -> Any:
        return self._pair[1] if self.valid() else None

    def key(self) -> Any:
        return self._pair[0] if self.valid() else None

    def next(self) -> None:
        if not self.valid():
            return
        self._advanced = True
        self._pull(CursorState.RUNNING)


# --- origins: what a source was normalized into ---

def _pairs_of(iterable: Iterable, keyed: bool) -> Iterator[Pair]:
    if isinstance(iterable, ICollection):
        return iterable.iter_pairs()
    if keyed:
        return iter(iterable)
    return enumerate(iterable)


class _Origin:
    kind: SourceKind

    def open(self) -> Optional[Union[PositionalCursor, StreamCursor]]:
        raise NotImplementedError

    def release(self, cursor) -> None:
        pass


class _Fixed(_Origin):
    kind = SourceKind.FIXED

    def __init__(self, pairs: List[Pair]):
        self.pairs = pairs

    def open(self) -> PositionalCursor:
        return PositionalCursor(self.pairs)


class _Reiterable(_Origin):
    kind = SourceKind.PASSTHROUGH

    def __init__(self, iterable: Iterable, keyed: bool):
        self._iterable = iterable
        self._keyed = keyed

    def open(self) -> StreamCursor:
        # a fresh adapter per pass, so the wrapped object's own cursor is never touched
        return StreamCursor(_pairs_of(self._iterable, self._keyed))


class _OneShot(_Origin):
    kind = SourceKind.SINGLE_USE

    def __init__(self, iterator: Iterator, keyed: bool):
        self.cursor = StreamCursor(_pairs_of(iterator, keyed))
        self._leased = False

    def open(self) -> Optional[StreamCursor]:
        """the one cursor, as long as nobody else holds it and it has not moved on"""
        if self._leased or not self.cursor.rewindable:
            return None
        self._leased = True
        return self.cursor

    def release(self, cursor) -> None:
        if cursor is self.cursor:
            self._leased = False


def _origin_of(items: Any, produced: bool = False) -> _Origin:
    """
    normalize an input into an origin. `produced` marks values returned by a factory
    so a bad value is reported as the factory's fault.
    """
    if isinstance(items, KeyedItems):
        inner = items.pairs
        if isinstance(inner, (list, tuple)):
            return _Fixed([(key, value) for key, value in inner])
        if isinstance(inner, IteratorABC):
            return _OneShot(inner, keyed=True)
        if isinstance(inner, IterableABC):
            return _Reiterable(inner, keyed=True)
    elif isinstance(items, Mapping):
        return _Fixed(list(items.items()))
    elif isinstance(items, (list, tuple)):
        return _Fixed(list(enumerate(items)))
    elif isinstance(items, (str, bytes, bytearray)):
        pass
    elif isinstance(items, IteratorABC):
        return _OneShot(items, keyed=False)
    elif isinstance(items, IterableABC):
        return _Reiterable(items, keyed=False)

    if produced:
        raise InvalidReturnValue(f"source factory returned an unusable {type(items).__name__}")
    raise InvalidArgument(f"cannot build a collection from {type(items).__name__}")


class Source:
    """the tagged source variant owned by a single collection"""

    def __init__(self, items: Any):
        self.factory: Optional[Callable[[], Any]] = None
        if callable(items) and not isinstance(items, (str, KeyedItems, ICollection)):
            self.factory = items
            self._origin = _origin_of(items(), produced=True)
            self.kind = SourceKind.REGENERABLE
        else:
            self._origin = _origin_of(items)
            self.kind = self._origin.kind
        logger.debug(f"installed {self.kind.name.lower()} source ({self._origin.kind.name.lower()} origin)")

    def open(self) -> Union[PositionalCursor, StreamCursor]:
        """lease a cursor positioned at the start of a pass"""
        cursor = self._origin.open()
        if cursor is None:
            if self.factory is None:
                raise SourceExhausted(
                    "single-use sequence already consumed; pass a factory (e.g. lambda: generator()) to iterate repeatedly")
            logger.debug("single-use sequence spent, regenerating from factory")
            self._origin = _origin_of(self.factory(), produced=True)
            cursor = self._origin.open()
        cursor.rewind()
        return cursor

    def release(self, cursor) -> None:
        """give a leased cursor back once its pass is over"""
        self._origin.release(cursor)

    def restart(self, cursor) -> Union[PositionalCursor, StreamCursor]:
        """reposition an existing cursor when possible, otherwise lease a fresh one"""
        if cursor is not None:
            if cursor.rewindable:
                cursor.rewind()
                return cursor
            self.release(cursor)
        return self.open()
