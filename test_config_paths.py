import json
import tempfile
from pathlib import Path

import config_paths


def _with_config(data):
    tmp = tempfile.TemporaryDirectory()
    cfg_dir = Path(tmp.name) / "greetings"
    cfg_dir.mkdir(parents=True, exist_ok=True)
    cfg_path = cfg_dir / "config.json"
    if data is not None:
        cfg_path.write_text(data if isinstance(data, str) else json.dumps(data))
    return tmp, cfg_dir, cfg_path


def _load(cfg_dir, cfg_path):
    orig_dir = config_paths.CONFIG_DIR
    orig_json = config_paths.CONFIG_JSON
    try:
        config_paths.CONFIG_DIR = str(cfg_dir)
        config_paths.CONFIG_JSON = str(cfg_path)
        return config_paths.load_config()
    finally:
        config_paths.CONFIG_DIR = orig_dir
        config_paths.CONFIG_JSON = orig_json


def test_load_config_defaults_without_json():
    tmp, cfg_dir, cfg_path = _with_config(None)
    with tmp:
        cfg = _load(cfg_dir, cfg_path)
        assert cfg == config_paths.default_config()
        assert cfg["REVISION"] == 3
        assert cfg["SUBJECT_COUNT"] == 1000
        assert cfg["NAMES"] is None


def test_load_config_reads_json_overrides():
    tmp, cfg_dir, cfg_path = _with_config(
        {
            "revision": 1,
            "subject_count": 25,
            "names": ["Ada", "Grace"],
            "frame_interval_ms": 33,
            "dark": True,
            "log_level": "debug",
        }
    )
    with tmp:
        cfg = _load(cfg_dir, cfg_path)
        assert cfg["REVISION"] == 1
        assert cfg["SUBJECT_COUNT"] == 25
        assert cfg["NAMES"] == ["Ada", "Grace"]
        assert cfg["FRAME_INTERVAL_MS"] == 33
        assert cfg["DARK"] is True
        assert cfg["LOG_LEVEL"] == "DEBUG"


def test_load_config_ignores_invalid_values(caplog):
    tmp, cfg_dir, cfg_path = _with_config(
        {
            "revision": 7,
            "subject_count": 0,
            "names": ["ok", 3],
            "frame_interval_ms": True,
            "dark": "yes",
            "log_level": "LOUD",
        }
    )
    with tmp:
        with caplog.at_level("WARNING", logger="config_paths"):
            cfg = _load(cfg_dir, cfg_path)
        assert cfg == config_paths.default_config()
        assert len(caplog.records) == 6


def test_load_config_survives_malformed_json(caplog):
    tmp, cfg_dir, cfg_path = _with_config("{not json")
    with tmp:
        with caplog.at_level("WARNING", logger="config_paths"):
            cfg = _load(cfg_dir, cfg_path)
        assert cfg == config_paths.default_config()
        assert "unreadable config" in caplog.text


def test_load_config_rejects_non_object(caplog):
    tmp, cfg_dir, cfg_path = _with_config([1, 2])
    with tmp:
        cfg = _load(cfg_dir, cfg_path)
        assert cfg == config_paths.default_config()
