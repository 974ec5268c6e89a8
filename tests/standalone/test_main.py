import os

import pytest
from typer.testing import CliRunner

from xzsink.commons.logger import base_logger
from xzsink.standalone.main import app
from tests.helpers import decompress, requires_xz

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logger():
    handlers, level = base_logger.handlers, base_logger.level
    yield
    base_logger.handlers, base_logger.level = handlers, level


@requires_xz
def test_compress_file(tmp_path):
    data = os.urandom(2**12) * 64
    input_path = tmp_path / "data.bin"
    input_path.write_bytes(data)
    output_path = tmp_path / "data.bin.xz"
    result = runner.invoke(app, [str(input_path), "--output", str(output_path)])
    assert result.exit_code == 0
    assert decompress(output_path.read_bytes()) == data


@requires_xz
def test_compress_stdin_to_stdout():
    result = runner.invoke(app, ["--chunk-size", "3"], input=b"hello world")
    assert result.exit_code == 0
    assert decompress(result.stdout_bytes) == b"hello world"


@requires_xz
def test_compress_stats(tmp_path):
    input_path = tmp_path / "data.txt"
    input_path.write_text("hello world\n" * 1000)
    output_path = tmp_path / "data.txt.xz"
    result = runner.invoke(
        app, [str(input_path), "-o", str(output_path), "--stats", "--verbose"]
    )
    assert result.exit_code == 0
    assert decompress(output_path.read_bytes()) == input_path.read_bytes()


def test_compress_executable_not_found(tmp_path, monkeypatch):
    monkeypatch.setenv("XZSINK_EXECUTABLE", "xzsink-executable-not-found")
    input_path = tmp_path / "data.txt"
    input_path.write_text("hello world")
    result = runner.invoke(app, [str(input_path), "-o", str(tmp_path / "out.xz")])
    assert result.exit_code == 1
