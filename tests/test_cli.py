import io

import pytest

from cashflow.cli import build_parser, main, run
from cashflow.config import get_settings


SESSION = """
3
T 1 x
A 1 x
B 1 y
1
A B 30
"""


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    monkeypatch.delenv("CASHFLOW_TREASURER", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _run(argv, text=""):
    stdout, stderr = io.StringIO(), io.StringIO()
    code = run(argv, io.StringIO(text), stdout, stderr)
    return code, stdout.getvalue(), stderr.getvalue()


def test_run_reads_stdin():
    code, out, err = _run([], SESSION)

    assert code == 0
    assert err == ""
    lines = out.splitlines()
    assert lines[3].split() == ["A", "T", "30", "x"]
    assert lines[4].split() == ["T", "B", "30", "y"]


def test_run_reads_file(tmp_path):
    path = tmp_path / "session.txt"
    path.write_text(SESSION, encoding="utf-8")

    code, out, _ = _run([str(path)])

    assert code == 0
    assert "=== Settlement Summary ===" in out


def test_run_reports_validation_error():
    code, out, err = _run(["-"], "1 T 1 x 0")

    assert code == 1
    assert out == ""
    assert err.strip() == "Error: At least 2 participants required."


def test_run_uses_configured_treasurer(monkeypatch):
    monkeypatch.setenv("CASHFLOW_TREASURER", "B")
    get_settings.cache_clear()

    code, out, _ = _run([], "3 T 1 x A 1 z B 1 y 1 A T 30")

    assert code == 0
    lines = out.splitlines()
    assert lines[3].split() == ["A", "B", "30", "z"]
    assert lines[4].split() == ["B", "T", "30", "x"]


def test_main_returns_exit_code(monkeypatch, tmp_path):
    monkeypatch.setenv("CASHFLOW_LOG_JSON", "false")
    get_settings.cache_clear()
    path = tmp_path / "bad.txt"
    path.write_text("2 T 1 x A 1 x 1 A Z 5", encoding="utf-8")

    assert main([str(path)]) == 1


def test_run_rejects_extra_arguments(tmp_path):
    path = tmp_path / "session.txt"
    path.write_text(SESSION, encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        _run([str(path), "extra"])

    assert exc_info.value.code == 2


def test_parser_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args(["--help"])

    assert exc_info.value.code == 0
    assert "cashflow" in capsys.readouterr().out
