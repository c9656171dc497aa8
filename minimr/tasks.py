"""The map, shuffle and reduce steps of a job and their on-disk formats.

Map output holds one ``key value`` pair per line. Shuffle output holds one
group per line: the key followed by each of its values, every field
followed by a single space. Reduce output holds ``key<TAB>value`` lines.
"""

from __future__ import annotations

from collections.abc import Iterable
from itertools import groupby
from os import PathLike
from pathlib import Path

from .base import Mapper, Reducer
from .text import split

Pair = tuple[str, str]
Group = tuple[str, list[str]]


def _read_lines(path: str | PathLike[str]) -> list[str]:
    with open(path, encoding="utf-8", newline="") as handle:
        return split(handle.read(), "\n")


def _write(path: str | PathLike[str], lines: Iterable[str]) -> None:
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.writelines(lines)


def map_lines(mapper: Mapper, lines: Iterable[str]) -> list[Pair]:
    """Map every line and concatenate the resulting pairs in order."""
    return [pair for line in lines for pair in mapper.map(line)]


def shuffle_pairs(pairs: Iterable[Pair]) -> list[Group]:
    """Sort the pairs and collect runs of identical pairs into groups.

    A group gathers equal ``(key, value)`` pairs; pairs that share a key
    but differ in value land in separate, adjacent groups.
    """
    return [
        (key, [value for _, value in run])
        for (key, _), run in ((pair, list(run)) for pair, run in groupby(sorted(pairs)))
    ]


def reduce_groups(reducer: Reducer, groups: Iterable[Group]) -> list[Pair]:
    """Reduce each group to a single pair, keeping the group order."""
    return [reducer.reduce(key, list(values)) for key, values in groups]


def _parse_pair(line: str) -> Pair:
    tokens = split(line, " ")
    if len(tokens) < 2:
        raise ValueError(f"malformed map output line: {line!r}")
    return tokens[0], tokens[1]


def _parse_group(line: str) -> Group:
    tokens = split(line, " ")
    if not tokens:
        raise ValueError(f"malformed shuffle output line: {line!r}")
    return tokens[0], tokens[1:]


def run_map(mapper: Mapper, input_path, output_path) -> list[Pair]:
    """Map the lines of ``input_path`` and write the pairs to ``output_path``."""
    pairs = map_lines(mapper, _read_lines(input_path))
    _write(output_path, (f"{key} {value}\n" for key, value in pairs))
    return pairs


def run_shuffle(input_path, output_path) -> list[Group]:
    """Group the map output in ``input_path`` and write it to ``output_path``."""
    groups = shuffle_pairs(_parse_pair(line) for line in _read_lines(input_path))
    _write(
        output_path,
        (f"{key} " + "".join(f"{value} " for value in values) + "\n" for key, values in groups),
    )
    return groups


def run_reduce(reducer: Reducer, input_path, output_path) -> list[Pair]:
    """Reduce the shuffle output in ``input_path`` and write it to ``output_path``."""
    groups = [_parse_group(line) for line in _read_lines(input_path)]
    results = reduce_groups(reducer, groups)
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    _write(output_path, (f"{key}\t{value}\n" for key, value in results))
    return results