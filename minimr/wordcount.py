"""Word-count mapper and reducer."""

from __future__ import annotations

from .base import Mapper, Reducer, register_mapper, register_reducer
from .text import split


@register_mapper
class WordCountMapper(Mapper):
    """Emits ``(word, "1")`` for every space-separated token of a line."""

    def map(self, line: str) -> list[tuple[str, str]]:
        return [(token, "1") for token in split(line, " ")]


@register_reducer
class WordCountReducer(Reducer):
    """Sums the integer counts collected for a word."""

    def reduce(self, key: str, values: list[str]) -> tuple[str, str]:
        return key, str(sum(int(value) for value in values))