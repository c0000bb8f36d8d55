"""
selector resolution.

a selector is either nothing, a scalar key, or a callable. resolving it yields a
one-argument extractor that works the same way on plain dicts/lists, custom
containers and ordinary objects.
"""
from __future__ import annotations
import enum
import inspect
from collections.abc import Mapping, Sequence
from .config import config
from .exceptions import InvalidArgument, InvalidReturnValue
from .types import *

_MISSING = object()


class ValueShape(enum.Enum):
    INDEXABLE = enum.auto()    # custom containers with item access (dict/tuple subclasses, ...)
    RAW_MAPPING = enum.auto()  # plain dict, list, tuple
    OBJECT = enum.auto()       # anything reachable through attributes
    NEITHER = enum.auto()      # scalars and None


def classify(value: Any) -> ValueShape:
    if value is None or is_scalar(value):
        return ValueShape.NEITHER
    if type(value) in (dict, list, tuple):
        return ValueShape.RAW_MAPPING
    if hasattr(type(value), '__getitem__'):
        return ValueShape.INDEXABLE
    return ValueShape.OBJECT


def _offset(value: Any, key: Key) -> Any:
    """item at key, or _MISSING when the container has no such offset"""
    if isinstance(value, Mapping):
        return value[key] if key in value else _MISSING
    if isinstance(value, Sequence):
        if isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(value):
            return value[key]
        return _MISSING
    try:
        return value[key]
    except (LookupError, TypeError):
        return _MISSING


def _attribute(value: Any, key: Key, strict: bool) -> Any:
    if isinstance(key, str) and hasattr(value, key):
        return getattr(value, key)
    if strict:
        raise InvalidReturnValue(f"cannot select {key!r} from {type(value).__name__}")
    return None


def _scalar_value(value: Any) -> Any:
    if not is_scalar(value):
        raise InvalidReturnValue(
            f"a selector is required for non-scalar values, got {type(value).__name__}")
    return value


def resolve_selector(selector: Selector = None, strict: Optional[bool] = None) -> Callable[[Any], Any]:
    """turn a selector spec into an extractor function"""
    if selector is None:
        return _scalar_value

    # strings are never treated as callables, they always name a key
    if callable(selector) and not isinstance(selector, str):
        return selector

    if not isinstance(selector, (str, int)) or isinstance(selector, bool):
        raise InvalidArgument(f"selector must be a key, a callable or None, got {type(selector).__name__}")

    def extract(value: Any) -> Any:
        is_strict = config.strict_selectors if strict is None else strict
        shape = classify(value)
        if shape is ValueShape.INDEXABLE:
            found = _offset(value, selector)
            return found if found is not _MISSING else _attribute(value, selector, is_strict)
        elif shape is ValueShape.RAW_MAPPING:
            found = _offset(value, selector)
            return None if found is _MISSING else found
        elif shape is ValueShape.OBJECT:
            return _attribute(value, selector, is_strict)
        else:
            return None

    return extract


def _positional_arity(fn: Callable) -> Optional[int]:
    """number of positional parameters, None when it takes *args"""
    if inspect.isclass(fn):
        # converters such as str, int or Collection take the value
        return 1
    try:
        parameters = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        # builtins without introspectable signatures take the value only
        return 1
    count = 0
    for parameter in parameters:
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if parameter.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            count += 1
    return count


def adapt_callback(fn: Callable, max_args: int) -> Callable[..., Any]:
    """
    callbacks get (value, key) or (carry, value, key); this trims the call down to
    what the callable actually accepts so `lambda v: ...` works everywhere.
    """
    if not callable(fn) or isinstance(fn, str):
        raise InvalidArgument(f"expected a callable, got {type(fn).__name__}")
    arity = _positional_arity(fn)
    if arity is None or arity >= max_args:
        return lambda *args: fn(*args[:max_args])
    return lambda *args: fn(*args[:arity])
