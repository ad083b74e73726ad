# tests/test_config.py

from hijrical.bootstrap import build_engine
from hijrical.config import Settings


def test_defaults():
    s = Settings.from_env({})
    assert s.table_path is None
    assert s.build_index is False
    assert s.log_level == "WARNING"


def test_from_env():
    s = Settings.from_env({
        "HIJRICAL_TABLE": " /tmp/t.json ",
        "HIJRICAL_INDEX": "Yes",
        "HIJRICAL_LOG_LEVEL": "debug",
    })
    assert s.table_path == "/tmp/t.json"
    assert s.build_index is True
    assert s.log_level == "DEBUG"


def test_index_flag_values():
    for v in ("1", "true", "on"):
        assert Settings.from_env({"HIJRICAL_INDEX": v}).build_index
    for v in ("", "0", "no", "off"):
        assert not Settings.from_env({"HIJRICAL_INDEX": v}).build_index


def test_build_engine_honours_index():
    assert build_engine(Settings(build_index=True)).info()["indexed"] is True
    assert build_engine(Settings()).info()["indexed"] is False
