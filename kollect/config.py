from dataclasses import dataclass, asdict, fields
from typing import Optional

from .exceptions import InvalidArgument


@dataclass
class CollectionConfig:
    """process-wide defaults picked up by new collections"""
    strict_unique_keys: bool = True
    strict_selectors: bool = True  # raise instead of returning None when an object lacks the selected attribute
    json_indent: Optional[int] = None


config = CollectionConfig()


def configure(**overrides) -> CollectionConfig:
    """update the defaults in place and return them"""
    known = {f.name for f in fields(CollectionConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise InvalidArgument(f"unknown config option(s): {', '.join(sorted(unknown))}")
    for name, value in overrides.items():
        setattr(config, name, value)
    return config


def reset_config() -> CollectionConfig:
    """restore the shipped defaults"""
    for name, value in asdict(CollectionConfig()).items():
        setattr(config, name, value)
    return config
