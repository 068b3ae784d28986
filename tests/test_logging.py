import json
import logging

from cyberfort.logging_config import JsonFormatter, configure_logging


def test_json_formatter():
    fmt = JsonFormatter()
    record = fmt.format(
        logging.LogRecord(
            name="test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="checked %s",
            args=("https://example.com",),
            exc_info=None,
        )
    )
    data = json.loads(record)
    assert data["message"] == "checked https://example.com"
    assert data["level"] == "INFO"
    assert data["name"] == "test"


def test_configure_logging_writes_rotating_file(tmp_path, monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    log_file = tmp_path / "app.log"

    configure_logging(level="debug", log_file=str(log_file), max_bytes=1024, backup_count=1)
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    logging.getLogger("cyberfort.test").info("hello file")
    for h in root.handlers:
        h.flush()
    assert "hello file" in log_file.read_text(encoding="utf-8")
    for h in root.handlers:
        h.close()


def test_configure_logging_is_idempotent(monkeypatch):
    root = logging.getLogger()
    sentinel = logging.NullHandler()
    monkeypatch.setattr(root, "handlers", [sentinel])
    configure_logging(level="INFO")
    assert root.handlers == [sentinel]


def test_json_formatter_includes_check_fields():
    record = logging.LogRecord(
        name="cyberfort.api.routes",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Phone checked",
        args=(),
        exc_info=None,
    )
    record.check_kind = "phone"
    record.verdict_source = "heuristic"
    record.risk_score = 42
    data = json.loads(JsonFormatter().format(record))
    assert data["check_kind"] == "phone"
    assert data["verdict_source"] == "heuristic"
    assert data["risk_score"] == 42
    assert "is_safe" not in data
