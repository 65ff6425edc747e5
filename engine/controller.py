from __future__ import annotations

import logging
from typing import Iterable, Optional

from engine.card import Vec2
from engine.game_model import GameModel
from engine.generator import generate, generate_demo_model
from engine.interface import Interface
from engine.level_config import LevelConfig
from engine.results import ControllerError, Result
from engine.undo import UndoManager, UndoRecord, draw_record, match_record

logger = logging.getLogger(__name__)


class GameController:
    """
    Owns the game model and its undo stack, and is the only entry point for
    player intents.

    handle_*: called by the front end, every call returns a ``Result``.
    A command is refused with ``ControllerError.BUSY`` while the interface has
    not yet acknowledged the previous event.
    """

    def __init__(self):
        self.interface: Optional[Interface] = None
        self.game_model: Optional[GameModel] = None
        self.undo_manager: Optional[UndoManager] = None
        self.level_id: Optional[int] = None
        self._is_animating = False
        self._event_serial = 0

    def register_interface(self, interface: Interface):
        self.interface = interface
        interface.controller = self

    @property
    def is_animating(self) -> bool:
        return self._is_animating

    def finish_animation(self):
        self._is_animating = False

    def start_game(self, level_config: Optional[LevelConfig] = None) -> Result:
        if level_config is None:
            model = generate_demo_model()
            self.level_id = None
        else:
            result = generate(level_config)
            if not result.ok:
                logger.warning("Failed to generate game model from level %d", level_config.level_id)
                return result
            model = result.value
            self.level_id = level_config.level_id
        self._install(model, ())
        logger.info("Game started (level %s)", self.level_id)
        return Result.success(model)

    def resume_game(self, game_model: GameModel, records: Iterable[UndoRecord] = (), level_id=None):
        self.level_id = level_id
        self._install(game_model, records)
        logger.info("Game resumed with %d undo records", len(self.undo_manager))

    def _install(self, game_model: GameModel, records: Iterable[UndoRecord]):
        self.game_model = game_model
        self.undo_manager = UndoManager(game_model)
        self.undo_manager.load_records(records)
        # callbacks of events from the previous game no longer count
        self._event_serial += 1
        self._is_animating = False
        if self.interface is not None:
            self.interface.on_start()

    def _refuse(self) -> Optional[ControllerError]:
        if self.game_model is None:
            return ControllerError.NO_GAME
        if self._is_animating:
            logger.debug("Animation in progress, ignoring command")
            return ControllerError.BUSY
        return None

    def _notify(self, callback_name: str, record: UndoRecord):
        if self.interface is None:
            return
        self._event_serial += 1
        serial = self._event_serial

        def done():
            # only the pending event may release the guard
            if serial == self._event_serial:
                self.finish_animation()

        self._is_animating = True
        getattr(self.interface, callback_name)(record, done)

    def can_undo(self) -> bool:
        return self.undo_manager is not None and self.undo_manager.can_undo()

    def is_won(self) -> bool:
        return self.game_model is not None and self.game_model.is_cleared()

    def handle_playfield_click(self, card_id: int, target_position: Vec2 = Vec2()) -> Result:
        """
        Match a playfield card onto the stack top.
        :param target_position: where the view moves the card to, kept for the reverse animation
        """
        refused = self._refuse()
        if refused is not None:
            return Result.failure(refused)
        result = self.game_model.attempt_match(card_id)
        if not result.ok:
            return result
        record = match_record(result.value, target_position)
        self.undo_manager.record(record)
        self._notify("on_event", record)
        if self.game_model.is_cleared():
            logger.info("Playfield cleared")
            if self.interface is not None:
                self.interface.on_win()
        return result

    def handle_reserve_click(self) -> Result:
        refused = self._refuse()
        if refused is not None:
            return Result.failure(refused)
        result = self.game_model.draw_reserve()
        if not result.ok:
            return result
        record = draw_record(result.value)
        self.undo_manager.record(record)
        self._notify("on_event", record)
        return result

    def handle_undo_click(self) -> Result:
        refused = self._refuse()
        if refused is not None:
            return Result.failure(refused)
        result = self.undo_manager.undo()
        if result.ok:
            self._notify("on_undo_event", result.value)
        return result
