"""Base classes for user-defined mappers and reducers, and their registry."""

from __future__ import annotations

from abc import ABC, abstractmethod

_MAPPERS: dict[str, type["Mapper"]] = {}
_REDUCERS: dict[str, type["Reducer"]] = {}


class Mapper(ABC):
    """Turns one input line into a list of ``(key, value)`` pairs."""

    @abstractmethod
    def map(self, line: str) -> list[tuple[str, str]]:
        """Map one line of input to key/value pairs."""


class Reducer(ABC):
    """Folds all values of one key into a single ``(key, value)`` pair."""

    @abstractmethod
    def reduce(self, key: str, values: list[str]) -> tuple[str, str]:
        """Reduce the values grouped under ``key``."""


def register_mapper(cls: type[Mapper]) -> type[Mapper]:
    """Register a mapper class under its class name; usable as a decorator."""
    if not (isinstance(cls, type) and issubclass(cls, Mapper)):
        raise TypeError(f"{cls!r} is not a Mapper subclass")
    _MAPPERS[cls.__name__] = cls
    return cls


def register_reducer(cls: type[Reducer]) -> type[Reducer]:
    """Register a reducer class under its class name; usable as a decorator."""
    if not (isinstance(cls, type) and issubclass(cls, Reducer)):
        raise TypeError(f"{cls!r} is not a Reducer subclass")
    _REDUCERS[cls.__name__] = cls
    return cls


def get_mapper(name: str) -> type[Mapper]:
    """Return the mapper class registered as ``name``."""
    try:
        return _MAPPERS[name]
    except KeyError:
        raise KeyError(f"no mapper registered as {name!r}") from None


def get_reducer(name: str) -> type[Reducer]:
    """Return the reducer class registered as ``name``."""
    try:
        return _REDUCERS[name]
    except KeyError:
        raise KeyError(f"no reducer registered as {name!r}") from None