from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from engine.card import EMPTY_CARD, CardModel, Vec2
from engine.card_types import CardArea
from engine.occlusion import compute_clickable
from engine.results import DrawError, InvariantViolation, MatchError, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchOutcome:
    moved_card: CardModel  # as it was in the playfield
    previous_stack_top: CardModel
    original_position: Vec2
    new_stack_top: CardModel


@dataclass(frozen=True)
class DrawOutcome:
    drawn_card: CardModel  # as it was in the reserve
    previous_stack_top: CardModel
    new_stack_top: CardModel


class GameModel:
    """
    Runtime state of one game: the playfield, the stack top and the reserve.

    attempt_match / draw_reserve : moves triggered by the player, refused with an error value
    restore_* / set_stack_top : raw writes used while undoing
    """

    def __init__(self):
        self._playfield: dict[int, CardModel] = {}
        self._stack_top: CardModel = EMPTY_CARD
        self._reserve: list[CardModel] = []
        self._next_card_id = 0

    # ---- queries ----

    @property
    def playfield_cards(self) -> tuple[CardModel, ...]:
        """Playfield cards ordered by id."""
        return tuple(sorted(self._playfield.values(), key=lambda c: c.id))

    @property
    def stack_top(self) -> CardModel:
        return self._stack_top

    @property
    def reserve_cards(self) -> tuple[CardModel, ...]:
        """Reserve from bottom to top, the last card is drawn first."""
        return tuple(self._reserve)

    @property
    def next_card_id(self) -> int:
        return self._next_card_id

    @property
    def playfield_count(self) -> int:
        return len(self._playfield)

    @property
    def reserve_count(self) -> int:
        return len(self._reserve)

    def has_stack_top(self) -> bool:
        return self._stack_top.id >= 0

    def is_reserve_empty(self) -> bool:
        return len(self._reserve) == 0

    def is_cleared(self) -> bool:
        return len(self._playfield) == 0

    def get_playfield_card(self, card_id: int) -> Optional[CardModel]:
        return self._playfield.get(card_id)

    def find_card(self, card_id: int) -> Optional[CardModel]:
        card = self._playfield.get(card_id)
        if card is not None:
            return card
        if self.has_stack_top() and self._stack_top.id == card_id:
            return self._stack_top
        for card in self._reserve:
            if card.id == card_id:
                return card
        return None

    def matchable_card_ids(self) -> list[int]:
        if not self.has_stack_top():
            return []
        return [
            card.id
            for card in self._playfield.values()
            if card.clickable and card.can_match_with(self._stack_top)
        ]

    def has_available_move(self) -> bool:
        return not self.is_reserve_empty() or len(self.matchable_card_ids()) > 0

    # ---- building ----

    def allocate_card_id(self) -> int:
        card_id = self._next_card_id
        self._next_card_id += 1
        return card_id

    def add_playfield_card(self, card: CardModel):
        if card.id in self._playfield:
            raise InvariantViolation(f"card {card.id} is already in the playfield")
        self._playfield[card.id] = replace(card, area=CardArea.PLAYFIELD)

    def add_reserve_card(self, card: CardModel):
        self._reserve.append(card.moved_to(CardArea.RESERVE, face_up=False))

    def clear(self):
        self._playfield = {}
        self._stack_top = EMPTY_CARD
        self._reserve = []
        self._next_card_id = 0

    def update_clickable(self):
        flags = compute_clickable(self._playfield.values())
        self._playfield = {
            card_id: card if card.clickable == flags[card_id] else replace(card, clickable=flags[card_id])
            for card_id, card in self._playfield.items()
        }

    # ---- player moves ----

    def attempt_match(self, card_id: int) -> Result:
        card = self._playfield.get(card_id)
        if card is None:
            logger.debug("Card %d not found in playfield", card_id)
            return Result.failure(MatchError.CARD_NOT_FOUND)
        if not card.clickable:
            logger.debug("Card %d is blocked by other cards", card_id)
            return Result.failure(MatchError.NOT_CLICKABLE)
        if not self.has_stack_top() or not card.can_match_with(self._stack_top):
            logger.debug("Card %d cannot match stack top %s", card_id, self._stack_top)
            return Result.failure(MatchError.RANK_MISMATCH)

        previous = self._stack_top
        del self._playfield[card_id]
        self.set_stack_top(card.moved_to(CardArea.STACK, face_up=True))
        self.update_clickable()
        self.check_invariants()
        logger.debug("Matched %s onto %s", card, previous)
        return Result.success(MatchOutcome(
            moved_card=card,
            previous_stack_top=previous,
            original_position=card.position,
            new_stack_top=self._stack_top,
        ))

    def draw_reserve(self) -> Result:
        if self.is_reserve_empty():
            logger.debug("Reserve is empty")
            return Result.failure(DrawError.RESERVE_EMPTY)

        previous = self._stack_top
        drawn = self._reserve.pop()
        self.set_stack_top(drawn.moved_to(CardArea.STACK, face_up=True))
        self.check_invariants()
        logger.debug("Drew %s from reserve, %d left", self._stack_top, len(self._reserve))
        return Result.success(DrawOutcome(
            drawn_card=drawn,
            previous_stack_top=previous,
            new_stack_top=self._stack_top,
        ))

    # ---- raw writes ----

    def restore_playfield_card(self, card: CardModel, position: Vec2):
        """Put a card back into the playfield. The caller has to run ``update_clickable`` afterwards."""
        if card.id in self._playfield:
            raise InvariantViolation(f"card {card.id} is already in the playfield")
        restored = replace(card, position=position, area=CardArea.PLAYFIELD, face_up=True, clickable=True)
        self._playfield[card.id] = restored

    def restore_reserve_card(self, card: CardModel):
        if any(c.id == card.id for c in self._reserve):
            raise InvariantViolation(f"card {card.id} is already in the reserve")
        self._reserve.append(card.moved_to(CardArea.RESERVE, face_up=False))

    def set_stack_top(self, card: CardModel):
        if card.id < 0:
            self._stack_top = EMPTY_CARD
        else:
            self._stack_top = replace(card, area=CardArea.STACK)

    # ---- consistency ----

    def check_invariants(self):
        seen = set()

        def claim(card: CardModel, area: CardArea, face_up: bool):
            if card.id in seen:
                raise InvariantViolation(f"card {card.id} is stored twice")
            seen.add(card.id)
            if card.area != area:
                raise InvariantViolation(f"card {card.id} has area {card.area.name}, stored in {area.name}")
            if card.face_up != face_up:
                raise InvariantViolation(f"card {card.id} in {area.name} has face_up={card.face_up}")
            if card.id >= self._next_card_id:
                raise InvariantViolation(f"card {card.id} was never allocated (next id {self._next_card_id})")

        for card_id, card in self._playfield.items():
            if card_id != card.id:
                raise InvariantViolation(f"playfield key {card_id} holds card {card.id}")
            claim(card, CardArea.PLAYFIELD, True)
        if self.has_stack_top():
            claim(self._stack_top, CardArea.STACK, True)
        for card in self._reserve:
            claim(card, CardArea.RESERVE, False)

        flags = compute_clickable(self._playfield.values())
        for card in self._playfield.values():
            if card.clickable != flags[card.id]:
                raise InvariantViolation(f"card {card.id} clickability is stale")

    # ---- persistence ----

    def to_dict(self) -> dict:
        return {
            "playfieldCards": [card.to_dict() for card in self.playfield_cards],
            "stackTopCard": self._stack_top.to_dict(),
            "reserveCards": [card.to_dict() for card in self._reserve],
            "nextCardId": self._next_card_id,
        }

    @staticmethod
    def from_dict(data: dict) -> GameModel:
        """
        Rebuild a model written by ``to_dict``.
        :raise ValueError: on malformed data
        :raise InvariantViolation: when the stored cards contradict each other
        """
        if not isinstance(data, dict):
            raise ValueError("game state must be an object")
        model = GameModel()
        for entry in data.get("playfieldCards", []):
            card = CardModel.from_dict(entry)
            if card.id in model._playfield:
                raise InvariantViolation(f"card {card.id} is stored twice")
            model._playfield[card.id] = card
        model._stack_top = CardModel.from_dict(data.get("stackTopCard", EMPTY_CARD.to_dict()))
        if model._stack_top.id < 0:
            model._stack_top = EMPTY_CARD
        model._reserve = [CardModel.from_dict(entry) for entry in data.get("reserveCards", [])]
        model._next_card_id = int(data.get("nextCardId", 0))
        model.check_invariants()
        return model
