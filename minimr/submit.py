"""Command that submits a job to the master node."""

from __future__ import annotations

import argparse
import sys

from .net import Client


def build_message(
    input_path: str,
    output_path: str,
    load_path: str,
    mapper_class_name: str,
    reducer_class_name: str,
) -> str:
    """Join the job fields into the newline-terminated message the master expects."""
    fields = (input_path, output_path, load_path, mapper_class_name, reducer_class_name)
    return "".join(f"{field}\n" for field in fields)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Submit a job to the master node.")
    parser.add_argument("input_path")
    parser.add_argument("output_path")
    parser.add_argument("load_path", help="directory holding the mapper and reducer")
    parser.add_argument("mapper_class_name")
    parser.add_argument("reducer_class_name")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=9001)
    args = parser.parse_args(argv)
    msg = build_message(
        args.input_path,
        args.output_path,
        args.load_path,
        args.mapper_class_name,
        args.reducer_class_name,
    )
    with Client(args.port, args.host) as client:
        client.connect_to_server()
        client.send_msg(msg)
    print("Message has passed to the master node.")
    return 0


if __name__ == "__main__":
    sys.exit(main())