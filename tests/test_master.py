import socket
import threading
import time

import pytest

from minimr.master import main, serve_once
from minimr.net import Client, Server


def _free_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def _send(port, msg, timeout=5.0):
    deadline = time.monotonic() + timeout
    while True:
        client = Client(port)
        try:
            client.connect_to_server()
        except ConnectionRefusedError:
            client.close_connection()
            if time.monotonic() > deadline:
                raise
            time.sleep(0.02)
            continue
        with client:
            client.send_msg(msg)
        return


def _fake_worker(server, master_port, received):
    with server:
        server.get_connection()
        received.append(server.get_msg())
        _send(master_port, "OK")
        server.get_connection()
        received.append(server.get_msg())


def _start_round(job):
    """Start a fake worker and a job sender; return what the master needs."""
    worker_server = Server(0)
    master_port = _free_port()
    received = []
    worker = threading.Thread(
        target=_fake_worker, args=(worker_server, master_port, received)
    )
    worker.start()
    sender = threading.Thread(target=_send, args=(master_port, job))
    sender.start()
    return master_port, worker_server.port, received, (worker, sender)


def _finish(threads):
    for thread in threads:
        thread.join(timeout=10)


def test_serve_once_sends_map_then_reduce():
    job = "in\nout\nload\nWordCountMapper\nWordCountReducer\n"
    master_port, worker_port, received, threads = _start_round(job)
    out = serve_once(master_port, worker_port)
    _finish(threads)
    assert out == (job, "OK")
    assert received == [job + "Map", job + "Reduce"]


def test_main_runs_requested_rounds():
    job = "a\nb\nc\nM\nR\n"
    master_port, worker_port, received, threads = _start_round(job)
    code = main(
        ["--port", str(master_port), "--worker-port", str(worker_port), "--rounds", "1"]
    )
    _finish(threads)
    assert code == 0
    assert received == [job + "Map", job + "Reduce"]


def test_main_rejects_bad_port():
    with pytest.raises(SystemExit):
        main(["--port", "not-a-port"])