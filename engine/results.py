from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")
E = TypeVar("E")


class MatchError(Enum):
    CARD_NOT_FOUND = "card not found"
    NOT_CLICKABLE = "card is blocked"
    RANK_MISMATCH = "rank does not match the stack top"


class DrawError(Enum):
    RESERVE_EMPTY = "reserve is empty"


class UndoError(Enum):
    EMPTY_STACK = "nothing to undo"


class GenerationError(Enum):
    EMPTY_PLAYFIELD = "level has no playfield cards"
    EMPTY_STACK_SOURCE = "level has no stack cards"
    INVALID_CARD = "level contains a card without face or suit"


class ControllerError(Enum):
    NO_GAME = "no game in progress"
    BUSY = "previous operation still settling"


class InvariantViolation(RuntimeError):
    """Raised when the game model ends up in a state its own operations never produce."""


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Outcome of an operation that can be refused. Exactly one of value/error is set."""
    value: Optional[T] = None
    error: Optional[E] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self):
        return self.ok

    @staticmethod
    def success(value: T) -> Result:
        return Result(value=value)

    @staticmethod
    def failure(error: E) -> Result:
        return Result(error=error)
