import json
import logging
import os

from revisions import DEFAULT_SUBJECT_COUNT, LATEST_REVISION, REVISIONS

logger = logging.getLogger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "greetings")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
SAVED_STATE_PATH = os.path.join(CONFIG_DIR, "saved_state.json")
LOG_PATH = os.path.join(CONFIG_DIR, "greetings.log")

# default settings
REVISION_DEFAULT = LATEST_REVISION
SUBJECT_COUNT_DEFAULT = DEFAULT_SUBJECT_COUNT
FRAME_INTERVAL_MS_DEFAULT = 16
LOG_LEVEL_DEFAULT = "INFO"
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def default_config():
    return {
        "REVISION": REVISION_DEFAULT,
        "SUBJECT_COUNT": SUBJECT_COUNT_DEFAULT,
        "NAMES": None,
        "FRAME_INTERVAL_MS": FRAME_INTERVAL_MS_DEFAULT,
        "DARK": False,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def load_config():
    cfg = default_config()

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_JSON, e)
        return cfg

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not an object", CONFIG_JSON)
        return cfg

    revision = data.get("revision")
    if revision is not None:
        if _is_int(revision) and revision in REVISIONS:
            cfg["REVISION"] = revision
        else:
            logger.warning("Ignoring invalid revision %r", revision)

    count = data.get("subject_count")
    if count is not None:
        if _is_int(count) and count > 0:
            cfg["SUBJECT_COUNT"] = count
        else:
            logger.warning("Ignoring invalid subject_count %r", count)

    names = data.get("names")
    if names is not None:
        if isinstance(names, list) and all(isinstance(n, str) for n in names):
            cfg["NAMES"] = list(names)
        else:
            logger.warning("Ignoring names: expected a list of strings")

    interval = data.get("frame_interval_ms")
    if interval is not None:
        if _is_int(interval) and 1 <= interval <= 1000:
            cfg["FRAME_INTERVAL_MS"] = interval
        else:
            logger.warning("Ignoring invalid frame_interval_ms %r", interval)

    dark = data.get("dark")
    if dark is not None:
        if isinstance(dark, bool):
            cfg["DARK"] = dark
        else:
            logger.warning("Ignoring invalid dark %r", dark)

    level = data.get("log_level")
    if level is not None:
        if isinstance(level, str) and level.upper() in LOG_LEVELS:
            cfg["LOG_LEVEL"] = level.upper()
        else:
            logger.warning("Ignoring invalid log_level %r", level)

    return cfg
