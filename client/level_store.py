import re
from pathlib import Path
from typing import Optional

from engine.level_config import LevelConfig, load_level_from_file

LEVELS_DIR = Path(__file__).with_name("levels")
_LEVEL_FILE = re.compile(r"^level_(\d+)\.json$")


def level_path(level_id: int) -> Path:
    return LEVELS_DIR / f"level_{int(level_id)}.json"


def available_levels() -> list[int]:
    if not LEVELS_DIR.is_dir():
        return []
    ids = []
    for path in LEVELS_DIR.iterdir():
        m = _LEVEL_FILE.match(path.name)
        if m:
            ids.append(int(m.group(1)))
    return sorted(ids)


def load_level(level_id: int) -> Optional[LevelConfig]:
    path = level_path(level_id)
    if not path.is_file():
        return None
    return load_level_from_file(path, level_id)
