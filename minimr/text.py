"""Small text helpers shared by the master, the worker and the tasks."""

from __future__ import annotations

from collections.abc import Iterable


def split(text: str, delimiter: str) -> list[str]:
    """Split ``text`` on a single-character ``delimiter``.

    Empty fields between delimiters are kept, but a trailing delimiter
    does not produce a final empty field, and an empty string yields no
    fields at all.
    """
    if len(delimiter) != 1:
        raise ValueError("delimiter must be a single character")
    if not text:
        return []
    parts = text.split(delimiter)
    if parts[-1] == "":
        parts.pop()
    return parts


def format_tokens(tokens: Iterable[str]) -> str:
    """Render tokens as ``[a, b, c]``."""
    return "[" + ", ".join(tokens) + "]"


def println(tokens: Iterable[str]) -> None:
    """Print tokens in the ``[a, b, c]`` form."""
    print(format_tokens(tokens))