import json
import logging
import pytest
from sv_core.logger import get_logger, set_level


def test_json_file_logging(tmp_path):
    path = tmp_path / "logs" / "sv.log"
    log = get_logger("sv.test.file", level=logging.INFO, to_file=str(path))
    log.info("hello")
    for h in log.handlers:
        h.flush()
    record = json.loads(path.read_text().splitlines()[-1])
    assert record["msg"] == "hello"
    assert record["level"] == "INFO"
    assert record["ts"].endswith("Z")


def test_env_level(monkeypatch):
    monkeypatch.setenv("SV_LOG_LEVEL", "debug")
    assert get_logger("sv.test.env").level == logging.DEBUG


def test_set_level_prefix():
    a = get_logger("sv.test.a", level=logging.WARNING)
    other = get_logger("elsewhere", level=logging.WARNING)
    set_level("DEBUG", prefix="sv.test")
    assert a.level == logging.DEBUG
    assert other.level == logging.WARNING


def test_unknown_env_level_falls_back(monkeypatch):
    monkeypatch.setenv("SV_LOG_LEVEL", "verbose")
    assert get_logger("sv.test.badenv").level == logging.WARNING


def test_set_level_rejects_unknown_name():
    with pytest.raises(ValueError, match="unknown log level"):
        set_level("verbose", prefix="sv.test")
