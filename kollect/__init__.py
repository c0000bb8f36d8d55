r"""
'    __ __ ____  __    __    ______ ______ ______
'   / //_// __ \/ /   / /   / ____// ____//_  __/
'  / ,<  / / / / /   / /   / __/  / /      / /
' / /| |/ /_/ / /___/ /___/ /___ / /___   / /
'/_/ |_|\____/_____/_____/_____/ \____/  /_/
"""
import logging

# expose the main classes
from .collection import Collection, ArrayCollection, CollectionCollection

# expose the factory functions
from .factories import (
    from_iterable,
    from_pairs,
    from_range,
    repeat,
    empty,
    iterate,
    collect,
    C
)

# expose the engine and configuration pieces
from .source import KeyedItems, SourceKind
from .selector import resolve_selector, ValueShape
from .config import CollectionConfig, config, configure, reset_config
from .exceptions import (
    CollectionError,
    InvalidArgument,
    InvalidReturnValue,
    DuplicateKey,
    EmptyCollection,
    InvalidType,
    SourceExhausted
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

# define what `import *` does
__all__ = [
    "Collection",
    "ArrayCollection",
    "CollectionCollection",
    "from_iterable",
    "from_pairs",
    "from_range",
    "repeat",
    "empty",
    "iterate",
    "collect",
    "C",
    "KeyedItems",
    "SourceKind",
    "resolve_selector",
    "ValueShape",
    "CollectionConfig",
    "config",
    "configure",
    "reset_config",
    "CollectionError",
    "InvalidArgument",
    "InvalidReturnValue",
    "DuplicateKey",
    "EmptyCollection",
    "InvalidType",
    "SourceExhausted"
]
