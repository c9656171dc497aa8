"""Master node: hands a submitted job to the worker, map first, then reduce."""

from __future__ import annotations

import argparse
import sys
import time

from .net import Client, Server

_CONNECT_TIMEOUT = 5.0
_RETRY_DELAY = 0.05


def _deliver(port: int, msg: str, host: str = "127.0.0.1") -> None:
    """Send ``msg`` to ``host:port``, retrying briefly while nobody listens."""
    deadline = time.monotonic() + _CONNECT_TIMEOUT
    while True:
        client = Client(port, host)
        try:
            client.connect_to_server()
        except ConnectionRefusedError:
            client.close_connection()
            if time.monotonic() > deadline:
                raise
            time.sleep(_RETRY_DELAY)
            continue
        with client:
            client.send_msg(msg)
        return


def serve_once(master_port: int = 9001, worker_port: int = 9002) -> tuple[str, str]:
    """Handle one submitted job.

    Waits for a job message, sends the map phase to the worker, waits for
    the worker's answer, then sends the reduce phase. Returns the job
    message and the worker's answer.
    """
    with Server(master_port) as server:
        server.get_connection()
        msg = server.get_msg()
        print(f"Get: {msg}")
        _deliver(worker_port, msg + "Map")
        server.get_connection()
        response = server.get_msg()
        print(f"Get: {response}")
        print(response)
        print("Try to send reduce ...")
        _deliver(worker_port, msg + "Reduce")
    return msg, response


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run the master node.")
    parser.add_argument("--port", type=int, default=9001, help="port to listen on")
    parser.add_argument("--worker-port", type=int, default=9002)
    parser.add_argument(
        "--rounds", type=int, default=None, help="stop after this many jobs"
    )
    args = parser.parse_args(argv)
    handled = 0
    while args.rounds is None or handled < args.rounds:
        serve_once(args.port, args.worker_port)
        handled += 1
    return 0


if __name__ == "__main__":
    sys.exit(main())