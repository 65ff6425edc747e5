import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from engine.game_model import GameModel
from engine.results import InvariantViolation
from engine.undo import UndoManager, UndoRecord, record_from_dict
from client.ui_config import SLOT_COUNT

logger = logging.getLogger(__name__)

SAVE_PREFIX = "savegame_slot"
SAVE_SUFFIX = ".json"


@dataclass(frozen=True)
class SavedGame:
    game_model: GameModel
    records: tuple[UndoRecord, ...]
    level_id: Optional[int]


def _slot_path(slot: int) -> Path:
    return Path(__file__).with_name(f"{SAVE_PREFIX}{slot}{SAVE_SUFFIX}")


def valid_slot(slot: int) -> int:
    try:
        slot_int = int(slot)
    except (TypeError, ValueError):
        slot_int = 1
    if slot_int < 1:
        slot_int = 1
    if slot_int > SLOT_COUNT:
        slot_int = SLOT_COUNT
    return slot_int


def has_saved_game(slot: int = 1) -> bool:
    path = _slot_path(valid_slot(slot))
    return path.exists() and path.is_file()


def save_game(model: GameModel, undo_manager: UndoManager, slot: int = 1, level_id=None) -> bool:
    path = _slot_path(valid_slot(slot))
    data = {
        "date": time.strftime("%Y-%m-%d %H:%M:%S", time.localtime()),
        "levelId": level_id,
        "game": model.to_dict(),
        "undo": undo_manager.to_list(),
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    except OSError as e:
        logger.warning("Failed to save game to %s: %s", path, e)
        return False
    logger.debug("Saved game to %s", path)
    return True


def _check_history(model: GameModel, records) -> None:
    """
    Undo every record on a copy of the model.
    :raise ValueError: when a record is rejected
    :raise InvariantViolation: when the history does not lead back from the stored state
    """
    replay = UndoManager(GameModel.from_dict(model.to_dict()))
    if not replay.load_records(records):
        raise ValueError("undo history holds an invalid record")
    while replay.can_undo():
        replay.undo()


def load_game(slot: int = 1) -> Optional[SavedGame]:
    path = _slot_path(valid_slot(slot))
    if not path.exists() or not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        model = GameModel.from_dict(data["game"])
        records = tuple(record_from_dict(entry) for entry in data.get("undo", []))
        level_id = data.get("levelId")
        _check_history(model, records)
    except (OSError, ValueError, KeyError, TypeError, InvariantViolation) as e:
        logger.warning("Invalid saved game in %s: %s", path, e)
        return None
    return SavedGame(game_model=model, records=records, level_id=level_id)


def clear_game(slot: int = 1) -> bool:
    path = _slot_path(valid_slot(slot))
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Failed to remove %s: %s", path, e)
        return False
    return True


def list_slot_status() -> list[dict]:
    rows = []
    for slot in range(1, SLOT_COUNT + 1):
        path = _slot_path(slot)
        exists = path.exists() and path.is_file()
        rows.append({"slot": slot, "exists": exists, "path": str(path.name)})
    return rows
