from engine.card import CardModel
from engine.game_model import GameModel
from engine.undo import PlayfieldToStack, UndoRecord
from client.view_model import AnimationEvent, CardView, GameViewModel


class GameAdapter:
    """Turns engine state and undo records into renderer-friendly, immutable values."""

    @staticmethod
    def card_view(card: CardModel) -> CardView:
        return CardView(
            id=card.id,
            face=int(card.face),
            suit=int(card.suit),
            area=int(card.area),
            face_up=card.face_up,
            clickable=card.clickable,
            x=card.position.x,
            y=card.position.y,
        )

    @staticmethod
    def snapshot(model: GameModel, can_undo: bool = False) -> GameViewModel:
        stack_top = model.stack_top
        return GameViewModel(
            playfield=tuple(GameAdapter.card_view(card) for card in model.playfield_cards),
            stack_top=GameAdapter.card_view(stack_top) if model.has_stack_top() else None,
            reserve_count=model.reserve_count,
            can_undo=can_undo,
            cleared=model.is_cleared(),
        )

    @staticmethod
    def record_to_animation(record: UndoRecord, undone: bool = False) -> AnimationEvent:
        payload = {
            "card": GameAdapter.card_view(record.moved_card),
            "previous_top": GameAdapter.card_view(record.previous_stack_top),
        }
        if isinstance(record, PlayfieldToStack):
            payload["from"] = (record.original_position.x, record.original_position.y)
            payload["to"] = (record.target_position.x, record.target_position.y)
            return AnimationEvent(type="UNDO_MATCH" if undone else "MATCH", payload=payload)
        return AnimationEvent(type="UNDO_DRAW" if undone else "DRAW", payload=payload)
