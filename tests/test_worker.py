import socket
import threading
import time

import pytest

from minimr.base import Mapper, register_mapper
from minimr.net import Client
from minimr.worker import Job, Phase, main, run_job


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


def _message(input_path, output_path, load_path, phase, mapper="WordCountMapper", reducer="WordCountReducer"):
    return f"{input_path}\n{output_path}\n{load_path}\n{mapper}\n{reducer}\n{phase}"


def test_job_from_message_fields():
    job = Job.from_message("in\nout\nload\nM\nR\nMap")
    assert job == Job("in", "out", "load", "M", "R", Phase.MAP)


def test_job_from_message_reduce_phase():
    assert Job.from_message("in\nout\nload\nM\nR\nReduce").phase is Phase.REDUCE


def test_job_from_message_unknown_phase():
    with pytest.raises(ValueError):
        Job.from_message("in\nout\nload\nM\nR\nSort")


def test_job_from_message_too_few_fields():
    with pytest.raises(ValueError):
        Job.from_message("in\nout\nload\nM\n")


def test_run_job_map_then_reduce(tmp_path):
    source = tmp_path / "in.txt"
    source.write_text("b a b\n", encoding="utf-8")
    output = tmp_path / "result.txt"
    workdir = tmp_path / "work"
    map_job = Job.from_message(_message(source, output, tmp_path, "Map"))
    map_out = run_job(map_job, workdir)
    assert map_out.read_text(encoding="utf-8") == "b 1\na 1\nb 1\n"
    reduce_job = Job.from_message(_message(source, output, tmp_path, "Reduce"))
    assert run_job(reduce_job, workdir) == output
    assert output.read_text(encoding="utf-8") == "a\t1\nb\t2\n"


class WorkerTestUpperMapper(Mapper):
    def map(self, line):
        return [(word.upper(), "1") for word in line.split()]


register_mapper(WorkerTestUpperMapper)


def test_run_job_uses_registered_mapper(tmp_path):
    source = tmp_path / "in.txt"
    source.write_text("a b\n", encoding="utf-8")
    job = Job.from_message(
        _message(source, tmp_path / "o.txt", tmp_path, "Map", mapper="WorkerTestUpperMapper")
    )
    map_out = run_job(job, tmp_path / "work")
    assert map_out.read_text(encoding="utf-8") == "A 1\nB 1\n"


def test_run_job_unknown_mapper(tmp_path):
    source = tmp_path / "in.txt"
    source.write_text("a\n", encoding="utf-8")
    job = Job.from_message(_message(source, tmp_path / "o.txt", tmp_path, "Map", mapper="NoSuchMapper"))
    with pytest.raises(KeyError):
        run_job(job, tmp_path / "work")


def test_main_handles_reduce_message(tmp_path):
    workdir = tmp_path / "work"
    workdir.mkdir()
    (workdir / "map_out.txt").write_text("x 1\ny 1\nx 1\n", encoding="utf-8")
    output = tmp_path / "result.txt"
    port = _free_port()
    sender = threading.Thread(
        target=_send, args=(port, _message(tmp_path / "in.txt", output, tmp_path, "Reduce"))
    )
    sender.start()
    code = main(["--port", str(port), "--workdir", str(workdir), "--max-jobs", "1"])
    sender.join(timeout=10)
    assert code == 0
    assert output.read_text(encoding="utf-8") == "x\t2\ny\t1\n"