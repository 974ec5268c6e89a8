import subprocess
from io import BytesIO

from xzsink.commons.subprocess import StreamCopy, log_stream, start_stream_thread


def count_handler():
    def handler(*args, **kwargs):
        handler.calls += 1

    handler.calls = 0
    return handler


class FailingDestination:
    def write(self, data):
        raise OSError("disk full")


def test_log_stream():
    process = subprocess.Popen("yes | head -n 100", shell=True, stdout=subprocess.PIPE)
    handler = count_handler()
    thread = start_stream_thread(log_stream, process.stdout, handler, name="test")
    thread.join()
    process.wait()
    assert handler.calls == 100
    assert process.stdout.closed


def test_log_stream_prefix():
    process = subprocess.Popen(["echo", "hello"], stdout=subprocess.PIPE)
    lines = []
    log_stream(process.stdout, lines.append, prefix="xz: ")
    process.wait()
    assert lines == ["xz: hello"]


def test_stream_copy():
    process = subprocess.Popen(
        "yes | head -n 100", shell=True, stdout=subprocess.PIPE, bufsize=0
    )
    destination = BytesIO()
    copier = StreamCopy(process.stdout, destination, chunk_size=7).start()
    assert copier.join() is None
    process.wait()
    assert destination.getvalue() == b"y\n" * 100


def test_stream_copy_error():
    process = subprocess.Popen(["echo", "hello"], stdout=subprocess.PIPE, bufsize=0)
    copier = StreamCopy(process.stdout, FailingDestination(), chunk_size=1024)
    copier.start()
    error = copier.join()
    process.wait()
    assert isinstance(error, OSError)
    assert process.stdout.closed
