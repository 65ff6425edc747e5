from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CardView:
    id: int
    face: int
    suit: int
    area: int
    face_up: bool
    clickable: bool
    x: float
    y: float


@dataclass(frozen=True)
class GameViewModel:
    playfield: tuple[CardView, ...]
    stack_top: Optional[CardView]
    reserve_count: int
    can_undo: bool
    cleared: bool


@dataclass(frozen=True)
class AnimationEvent:
    type: str
    payload: dict
