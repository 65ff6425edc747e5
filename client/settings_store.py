import configparser
import logging
from pathlib import Path

from client.ui_config import LOG_LEVEL_ORDER, SLOT_COUNT

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path(__file__).with_name("settings.ini")
SECTION = "game"

DEFAULT_SETTINGS = {
    "level_id": "1",
    "save_slot": "1",
    "log_level": "WARNING",
}


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: str(v) for k, v in settings.items() if k in DEFAULT_SETTINGS})

    try:
        level_id = int(data["level_id"])
    except ValueError:
        level_id = int(DEFAULT_SETTINGS["level_id"])
    if level_id < 1:
        level_id = int(DEFAULT_SETTINGS["level_id"])
    data["level_id"] = str(level_id)

    try:
        slot = int(data["save_slot"])
    except ValueError:
        slot = int(DEFAULT_SETTINGS["save_slot"])
    if slot < 1:
        slot = 1
    if slot > SLOT_COUNT:
        slot = SLOT_COUNT
    data["save_slot"] = str(slot)

    level = data["log_level"].strip().upper()
    if level not in LOG_LEVEL_ORDER:
        level = DEFAULT_SETTINGS["log_level"]
    data["log_level"] = level
    return data


def load_settings():
    parser = configparser.ConfigParser()
    if not SETTINGS_PATH.exists():
        return dict(DEFAULT_SETTINGS)
    try:
        parser.read(SETTINGS_PATH, encoding="utf-8")
    except configparser.Error as e:
        logger.warning("Failed to read settings %s: %s", SETTINGS_PATH, e)
        return dict(DEFAULT_SETTINGS)
    if SECTION not in parser:
        return dict(DEFAULT_SETTINGS)
    raw = {key: parser[SECTION].get(key, default) for key, default in DEFAULT_SETTINGS.items()}
    return _sanitize(raw)


def save_settings(settings):
    data = _sanitize(settings)
    parser = configparser.ConfigParser()
    parser[SECTION] = data
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as f:
        parser.write(f)
