import io

import pytest

from aratamq.cli import consumer_main, main, producer_main
from aratamq.logger import Logger


@pytest.fixture(autouse=True)
def _reset_logger():
    Logger.cleanup()
    yield
    Logger.cleanup()


def _log_text(root):
    return (root / "files" / "aratamq.log").read_text(encoding="utf-8")


def _feed_stdin(monkeypatch, text):
    monkeypatch.setattr("sys.stdin", io.StringIO(text))


def test_main_logs_start_and_shutdown(tmp_path, monkeypatch):
    _feed_stdin(monkeypatch, "q\n")
    code = main(["--root-dir", str(tmp_path)])
    assert code == 0
    text = _log_text(tmp_path)
    assert "Starting ArataMQ" in text
    assert "Shutting down ArataMQ" in text
    assert text.index("Starting ArataMQ") < text.index("Shutting down ArataMQ")


def test_main_stops_on_upper_case_quit(tmp_path, monkeypatch):
    _feed_stdin(monkeypatch, "abc\nQ\nignored\n")
    code = main(["--root-dir", str(tmp_path)])
    assert code == 0
    assert "Shutting down ArataMQ" in _log_text(tmp_path)


def test_main_stops_at_end_of_input(tmp_path, monkeypatch):
    _feed_stdin(monkeypatch, "")
    assert main(["--root-dir", str(tmp_path)]) == 0
    assert "[ArataMQ]" in _log_text(tmp_path)


def test_main_truncates_existing_log(tmp_path, monkeypatch):
    log_dir = tmp_path / "files"
    log_dir.mkdir()
    (log_dir / "aratamq.log").write_text("previous run\n", encoding="utf-8")
    _feed_stdin(monkeypatch, "q")
    main(["--root-dir", str(tmp_path)])
    text = _log_text(tmp_path)
    assert "previous run" not in text
    assert "Starting ArataMQ" in text


def test_main_releases_logger(tmp_path, monkeypatch):
    _feed_stdin(monkeypatch, "q")
    main(["--root-dir", str(tmp_path)])
    with pytest.raises(RuntimeError, match="Logger not initialized"):
        Logger.instance()


def test_main_uses_environment_root(tmp_path, monkeypatch):
    monkeypatch.setenv("ARATAMQ_DIR", str(tmp_path))
    _feed_stdin(monkeypatch, "q")
    assert main([]) == 0
    assert "Starting ArataMQ" in _log_text(tmp_path)


def test_main_reports_failure(tmp_path, monkeypatch, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    _feed_stdin(monkeypatch, "q")
    code = main(["--root-dir", str(blocker)])
    assert code == 1
    assert capsys.readouterr().err.startswith("Error ")


def test_producer_logs_session(tmp_path):
    assert producer_main(["--root-dir", str(tmp_path)]) == 0
    text = _log_text(tmp_path)
    assert "Connected ArataMQ Producer" in text
    assert "Shutting down ArataMQ Producer" in text
    assert "[ArataMQ_Producer]" in text


def test_consumer_logs_session(tmp_path):
    assert consumer_main(["--root-dir", str(tmp_path)]) == 0
    text = _log_text(tmp_path)
    assert "Connected ArataMQ Consumer" in text
    assert "Shutting down ArataMQ Consumer" in text
    assert "[ArataMQ_Consumer]" in text


def test_clients_append_to_shared_log(tmp_path, monkeypatch):
    _feed_stdin(monkeypatch, "q")
    main(["--root-dir", str(tmp_path)])
    producer_main(["--root-dir", str(tmp_path)])
    consumer_main(["--root-dir", str(tmp_path)])
    text = _log_text(tmp_path)
    assert "Starting ArataMQ" in text
    assert text.index("Connected ArataMQ Producer") < text.index(
        "Connected ArataMQ Consumer"
    )


def test_producer_reports_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    assert producer_main(["--root-dir", str(blocker)]) == 1
    with pytest.raises(RuntimeError):
        Logger.instance()