from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from engine.card import Vec2
from engine.card_types import CardFace, CardSuit, face_from_int, suit_from_int
from engine.results import GenerationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardConfig:
    face: CardFace
    suit: CardSuit
    position: Vec2 = field(default_factory=Vec2)

    def is_valid(self) -> bool:
        return self.face != CardFace.NONE and self.suit != CardSuit.NONE


@dataclass
class LevelConfig:
    """Read-only description of a level as it comes out of a level file."""
    level_id: int = 0
    playfield_cards: list[CardConfig] = field(default_factory=list)
    stack_cards: list[CardConfig] = field(default_factory=list)

    def validate(self) -> Optional[GenerationError]:
        if not self.playfield_cards:
            return GenerationError.EMPTY_PLAYFIELD
        if not self.stack_cards:
            return GenerationError.EMPTY_STACK_SOURCE
        for card in self.playfield_cards + self.stack_cards:
            if not card.is_valid():
                return GenerationError.INVALID_CARD
        return None

    def is_valid(self) -> bool:
        return self.validate() is None


def _number(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def _card_entry(obj, with_position: bool) -> CardConfig:
    if not isinstance(obj, dict):
        return CardConfig(CardFace.NONE, CardSuit.NONE)
    face = face_from_int(obj["CardFace"]) if isinstance(obj.get("CardFace"), int) else CardFace.NONE
    suit = suit_from_int(obj["CardSuit"]) if isinstance(obj.get("CardSuit"), int) else CardSuit.NONE
    position = Vec2()
    raw = obj.get("Position")
    if with_position and isinstance(raw, dict):
        position = Vec2(_number(raw.get("x", 0)), _number(raw.get("y", 0)))
    return CardConfig(face, suit, position)


def load_level_from_string(text: str, level_id: int = 0) -> Optional[LevelConfig]:
    """
    Parse a level document::

        {"Playfield": [{"CardFace": 12, "CardSuit": 0, "Position": {"x": 250, "y": 1000}}, ...],
         "Stack": [{"CardFace": 3, "CardSuit": 0}, ...]}

    Positions of stack entries are ignored.
    :return: the level, or None when the text is not JSON or the level is invalid
    """
    try:
        doc = json.loads(text)
    except ValueError as e:
        logger.warning("Level %d: JSON parse error: %s", level_id, e)
        return None
    if not isinstance(doc, dict):
        logger.warning("Level %d: top level must be an object", level_id)
        return None

    config = LevelConfig(level_id=level_id)
    playfield = doc.get("Playfield")
    if isinstance(playfield, list):
        config.playfield_cards = [_card_entry(obj, True) for obj in playfield]
    stack = doc.get("Stack")
    if isinstance(stack, list):
        config.stack_cards = [_card_entry(obj, False) for obj in stack]

    error = config.validate()
    if error is not None:
        logger.warning("Level %d: invalid level config: %s", level_id, error.value)
        return None
    logger.debug("Level %d: loaded %d playfield cards, %d stack cards",
                 level_id, len(config.playfield_cards), len(config.stack_cards))
    return config


def load_level_from_file(path, level_id: int = 0) -> Optional[LevelConfig]:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Level file %s could not be read: %s", path, e)
        return None
    return load_level_from_string(text, level_id)
