import json

from utils.app_config import DEFAULTS, load_config, save_config


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "config.json") == DEFAULTS


def test_unreadable_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{oops")
    assert load_config(path) == DEFAULTS


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "config.json"
    save_config({"backend": "memory", "alert_poll_interval_ms": 5000}, path)
    config = load_config(path)
    assert config["backend"] == "memory"
    assert config["alert_poll_interval_ms"] == 5000
    assert config["log_level"] == "INFO"
    assert json.loads(path.read_text())["backend"] == "memory"
    assert not path.with_suffix(".tmp").exists()
