from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Union

from engine.card import CardModel, Vec2
from engine.game_model import DrawOutcome, GameModel, MatchOutcome
from engine.results import InvariantViolation, Result, UndoError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayfieldToStack:
    """A playfield card was matched onto the stack."""
    moved_card: CardModel
    previous_stack_top: CardModel
    original_position: Vec2
    target_position: Vec2 = field(default_factory=Vec2)

    def is_valid(self) -> bool:
        return self.moved_card.id >= 0


@dataclass(frozen=True)
class ReserveToStack:
    """The top reserve card was drawn onto the stack."""
    drawn_card: CardModel
    previous_stack_top: CardModel

    @property
    def moved_card(self) -> CardModel:
        return self.drawn_card

    def is_valid(self) -> bool:
        return self.drawn_card.id >= 0


UndoRecord = Union[PlayfieldToStack, ReserveToStack]


def match_record(outcome: MatchOutcome, target_position: Vec2 = Vec2()) -> PlayfieldToStack:
    return PlayfieldToStack(
        moved_card=outcome.moved_card,
        previous_stack_top=outcome.previous_stack_top,
        original_position=outcome.original_position,
        target_position=target_position,
    )


def draw_record(outcome: DrawOutcome) -> ReserveToStack:
    return ReserveToStack(drawn_card=outcome.drawn_card, previous_stack_top=outcome.previous_stack_top)


PLAYFIELD_TO_STACK = "PLAYFIELD_TO_STACK"
RESERVE_TO_STACK = "RESERVE_TO_STACK"


def record_to_dict(record: UndoRecord) -> dict:
    if isinstance(record, PlayfieldToStack):
        return {
            "operationType": PLAYFIELD_TO_STACK,
            "movedCard": record.moved_card.to_dict(),
            "previousStackTopCard": record.previous_stack_top.to_dict(),
            "originalPosition": record.original_position.to_dict(),
            "targetPosition": record.target_position.to_dict(),
        }
    return {
        "operationType": RESERVE_TO_STACK,
        "movedCard": record.drawn_card.to_dict(),
        "previousStackTopCard": record.previous_stack_top.to_dict(),
    }


def record_from_dict(data: dict) -> UndoRecord:
    if not isinstance(data, dict):
        raise ValueError("undo record must be an object")
    op = data.get("operationType")
    moved = CardModel.from_dict(data.get("movedCard"))
    previous = CardModel.from_dict(data.get("previousStackTopCard"))
    if op == PLAYFIELD_TO_STACK:
        return PlayfieldToStack(
            moved_card=moved,
            previous_stack_top=previous,
            original_position=Vec2.from_dict(data.get("originalPosition")),
            target_position=Vec2.from_dict(data.get("targetPosition")),
        )
    if op == RESERVE_TO_STACK:
        return ReserveToStack(drawn_card=moved, previous_stack_top=previous)
    raise ValueError(f"unknown operation type {op!r}")


class UndoManager:
    """
    Stack of undo records for one game model. Records are pushed after a move
    commits and popped exactly once by ``undo``; there is no redo.
    """

    def __init__(self, game_model: GameModel):
        self.game_model = game_model
        self._records: list[UndoRecord] = []

    def __len__(self):
        return len(self._records)

    @property
    def records(self) -> tuple[UndoRecord, ...]:
        return tuple(self._records)

    def can_undo(self) -> bool:
        return len(self._records) > 0

    def clear(self):
        self._records = []

    def record(self, op: UndoRecord) -> bool:
        if not isinstance(op, (PlayfieldToStack, ReserveToStack)) or not op.is_valid():
            logger.warning("Rejected undo record %r", op)
            return False
        self._records.append(op)
        logger.debug("Recorded %s, stack size: %d", type(op).__name__, len(self._records))
        return True

    def undo(self) -> Result:
        if not self._records:
            logger.debug("Cannot undo, stack is empty")
            return Result.failure(UndoError.EMPTY_STACK)

        record = self._records.pop()
        model = self.game_model
        if isinstance(record, PlayfieldToStack):
            model.restore_playfield_card(record.moved_card, record.original_position)
            model.set_stack_top(record.previous_stack_top)
            model.update_clickable()
        elif isinstance(record, ReserveToStack):
            model.restore_reserve_card(record.drawn_card)
            model.set_stack_top(record.previous_stack_top)
        else:
            raise InvariantViolation(f"unknown undo record {record!r}")
        model.check_invariants()
        logger.debug("Undone %s for card %d, remaining: %d",
                     type(record).__name__, record.moved_card.id, len(self._records))
        return Result.success(record)

    def to_list(self) -> list[dict]:
        return [record_to_dict(r) for r in self._records]

    def load_records(self, records: Iterable[UndoRecord]) -> bool:
        """
        Replace the stack with decoded records, oldest first.
        :return: False when a record was rejected, the stack then holds the accepted ones
        """
        self._records = []
        accepted = True
        for record in records:
            accepted = self.record(record) and accepted
        return accepted
