from __future__ import annotations

from dataclasses import dataclass, field, replace

from engine.card_types import CardArea, CardFace, CardSuit, area_from_int, face_from_int, suit_from_int
from engine.rules import can_match, is_red_suit


@dataclass(frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @staticmethod
    def from_dict(data) -> "Vec2":
        if not isinstance(data, dict):
            return Vec2()
        return Vec2(float(data.get("x", 0.0)), float(data.get("y", 0.0)))


@dataclass(frozen=True)
class CardModel:
    """
    One card revision. Cards are never changed in place, the game model swaps
    in a new revision built with ``replace``.
    """
    FACES = ("A ", "2 ", "3 ", "4 ", "5 ", "6 ", "7 ", "8 ", "9 ", "10", "J ", "Q ", "K ")
    SUITS = "♣♦♥♠"

    id: int = -1
    suit: CardSuit = CardSuit.NONE
    face: CardFace = CardFace.NONE
    position: Vec2 = field(default_factory=Vec2)
    area: CardArea = CardArea.NONE
    face_up: bool = False
    clickable: bool = False

    @property
    def is_red(self) -> bool:
        return is_red_suit(self.suit)

    @property
    def is_empty(self) -> bool:
        return self.id < 0

    def can_match_with(self, other: CardModel) -> bool:
        return can_match(self.face, other.face)

    def moved_to(self, area: CardArea, face_up: bool, clickable: bool = False) -> CardModel:
        return replace(self, area=area, face_up=face_up, clickable=clickable)

    def game_str(self) -> str:
        if self.is_empty:
            return "[]"
        if not self.face_up:
            return "---"
        return CardModel.SUITS[self.suit] + CardModel.FACES[self.face]

    def __str__(self):
        return f"#{self.id}:{self.game_str().strip()}"

    def to_dict(self) -> dict:
        return {
            "cardId": self.id,
            "suit": int(self.suit),
            "face": int(self.face),
            "position": self.position.to_dict(),
            "area": int(self.area),
            "isFaceUp": self.face_up,
            "isClickable": self.clickable,
        }

    @staticmethod
    def from_dict(data: dict) -> CardModel:
        if not isinstance(data, dict):
            raise ValueError(f"card entry must be an object, got {type(data).__name__}")
        return CardModel(
            id=int(data.get("cardId", -1)),
            suit=suit_from_int(data.get("suit")),
            face=face_from_int(data.get("face")),
            position=Vec2.from_dict(data.get("position")),
            area=area_from_int(data.get("area")),
            face_up=bool(data.get("isFaceUp", False)),
            clickable=bool(data.get("isClickable", False)),
        )


EMPTY_CARD = CardModel()
