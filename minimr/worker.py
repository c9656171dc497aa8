"""Worker node: receives map and reduce jobs and runs them."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from . import wordcount  # noqa: F401  registers the built-in word-count classes
from .base import Mapper, Reducer, get_mapper, get_reducer
from .net import Client, Server
from .tasks import run_map, run_reduce, run_shuffle
from .text import println, split

DEFAULT_WORKDIR = Path("/tmp/out")
MAP_OUTPUT = "map_out.txt"
SHUFFLE_OUTPUT = "shuffle_out.txt"


class Phase(Enum):
    MAP = "Map"
    REDUCE = "Reduce"


@dataclass(frozen=True)
class Job:
    """A job message: where to read and write, which classes, and which phase."""

    input_path: str
    output_path: str
    load_path: str
    mapper_class_name: str
    reducer_class_name: str
    phase: Phase

    @classmethod
    def from_message(cls, msg: str) -> "Job":
        """Parse a newline-separated job message."""
        tokens = split(msg, "\n")
        if len(tokens) < 6:
            raise ValueError(f"job message needs 6 fields, got {len(tokens)}")
        try:
            phase = Phase(tokens[5])
        except ValueError:
            raise ValueError(f"unknown job phase {tokens[5]!r}") from None
        return cls(*tokens[:5], phase)


def _mapper(job: Job) -> Mapper:
    return get_mapper(job.mapper_class_name)()


def _reducer(job: Job) -> Reducer:
    return get_reducer(job.reducer_class_name)()


def run_job(job: Job, workdir=DEFAULT_WORKDIR) -> Path:
    """Run one phase of ``job``, using ``workdir`` for intermediate files.

    Mapper and reducer classes are looked up by name among the registered
    classes. Returns the path of the file the phase wrote.
    """
    workdir = Path(workdir)
    map_out = workdir / MAP_OUTPUT
    if job.phase is Phase.MAP:
        workdir.mkdir(parents=True, exist_ok=True)
        run_map(_mapper(job), job.input_path, map_out)
        print("Finished map!")
        return map_out
    shuffle_out = workdir / SHUFFLE_OUTPUT
    run_shuffle(map_out, shuffle_out)
    print("Finished shuffle ...")
    run_reduce(_reducer(job), shuffle_out, job.output_path)
    print("Finished reduce ...")
    return Path(job.output_path)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a worker node.")
    parser.add_argument("--port", type=int, default=9002, help="port to listen on")
    parser.add_argument("--master-host", default="127.0.0.1")
    parser.add_argument("--master-port", type=int, default=9001)
    parser.add_argument("--workdir", default=str(DEFAULT_WORKDIR))
    parser.add_argument(
        "--max-jobs", type=int, default=None, help="stop after this many messages"
    )
    return parser


def main(argv=None) -> int:
    args = _parser().parse_args(argv)
    handled = 0
    with Server(args.port) as server:
        while args.max_jobs is None or handled < args.max_jobs:
            server.get_connection()
            msg = server.get_msg()
            handled += 1
            println(split(msg, "\n"))
            try:
                job = Job.from_message(msg)
            except ValueError as exc:
                print(f"Ignoring message: {exc}", file=sys.stderr)
                continue
            run_job(job, args.workdir)
            if job.phase is Phase.MAP:
                with Client(args.master_port, args.master_host) as client:
                    client.connect_to_server()
                    client.send_msg("OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())