import pytest

from teamwear.config import set_config_for_test
from teamwear.logging import AppLogger, get_logger


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    yield
    set_config_for_test()


def test_sink_added_once():
    set_config_for_test(log_level="INFO")
    get_logger("teamwear.one")
    sink = AppLogger._sink_id
    get_logger("teamwear.two")
    get_logger()
    assert AppLogger._sink_id == sink


def test_level_change_replaces_sink():
    set_config_for_test(log_level="INFO")
    get_logger()
    sink = AppLogger._sink_id

    set_config_for_test(log_level="warning")
    get_logger()
    assert AppLogger._sink_id != sink
    assert AppLogger._level == "WARNING"


def test_messages_filtered_by_level(capsys):
    set_config_for_test(log_level="WARNING")
    log = get_logger("teamwear.tests")
    log.info("quiet message")
    log.warning("loud message")
    out = capsys.readouterr().out
    assert "loud message" in out
    assert "quiet message" not in out
    assert out.count("loud message") == 1
