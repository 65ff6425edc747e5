import unittest

from engine.card import EMPTY_CARD, Vec2
from engine.card_types import CardArea, CardFace, CardSuit
from engine.generator import generate, generate_demo_model
from engine.level_config import CardConfig, LevelConfig
from engine.results import InvariantViolation, UndoError
from engine.undo import (
    PlayfieldToStack,
    ReserveToStack,
    UndoManager,
    draw_record,
    match_record,
    record_from_dict,
    record_to_dict,
)


def single_three_model():
    config = LevelConfig(
        playfield_cards=[CardConfig(CardFace.THREE, CardSuit.CLUBS, Vec2(300, 800))],
        stack_cards=[CardConfig(CardFace.FOUR, CardSuit.CLUBS)],
    )
    return generate(config).value


class UndoManagerTestCase(unittest.TestCase):
    def test_undo_on_empty_stack(self):
        manager = UndoManager(generate_demo_model())
        result = manager.undo()
        self.assertFalse(result.ok)
        self.assertEqual(UndoError.EMPTY_STACK, result.error)
        self.assertFalse(manager.can_undo())

    def test_match_then_undo_restores_card_and_stack_top(self):
        model = single_three_model()
        manager = UndoManager(model)

        outcome = model.attempt_match(0).value
        self.assertTrue(manager.record(match_record(outcome)))
        self.assertEqual(1, len(manager))
        self.assertTrue(model.is_cleared())
        self.assertEqual(CardFace.THREE, model.stack_top.face)

        result = manager.undo()
        self.assertTrue(result.ok)
        self.assertIsInstance(result.value, PlayfieldToStack)
        self.assertEqual(0, len(manager))

        card = model.get_playfield_card(0)
        self.assertIsNotNone(card)
        self.assertEqual(Vec2(300, 800), card.position)
        self.assertTrue(card.face_up)
        self.assertTrue(card.clickable)
        self.assertEqual(CardArea.PLAYFIELD, card.area)
        self.assertEqual(1, model.stack_top.id)
        self.assertEqual(CardFace.FOUR, model.stack_top.face)
        self.assertEqual(CardSuit.CLUBS, model.stack_top.suit)

    def test_match_undo_leaves_reserve_untouched(self):
        model = generate_demo_model()
        manager = UndoManager(model)
        before = model.to_dict()
        manager.record(match_record(model.attempt_match(2).value, Vec2(440, 290)))
        record = manager.undo().value
        self.assertEqual(Vec2(440, 290), record.target_position)
        self.assertEqual(before, model.to_dict())

    def test_undo_recomputes_clickable(self):
        model = generate_demo_model()
        manager = UndoManager(model)
        manager.record(match_record(model.attempt_match(2).value))
        self.assertTrue(model.get_playfield_card(1).clickable)
        manager.undo()
        self.assertFalse(model.get_playfield_card(1).clickable)
        self.assertTrue(model.get_playfield_card(2).clickable)

    def test_draw_then_undo_puts_card_back_on_reserve_top(self):
        model = generate_demo_model()
        manager = UndoManager(model)
        previous_top = model.stack_top

        drawn = model.draw_reserve().value
        manager.record(draw_record(drawn))
        result = manager.undo()
        self.assertIsInstance(result.value, ReserveToStack)
        self.assertEqual(previous_top, model.stack_top)
        top_of_reserve = model.reserve_cards[-1]
        self.assertEqual(drawn.drawn_card.id, top_of_reserve.id)
        self.assertFalse(top_of_reserve.face_up)
        self.assertFalse(top_of_reserve.clickable)

        again = model.draw_reserve().value
        self.assertEqual(drawn.drawn_card.id, again.new_stack_top.id)

    def test_undo_is_last_in_first_out(self):
        model = generate_demo_model()
        manager = UndoManager(model)
        start = model.to_dict()
        manager.record(draw_record(model.draw_reserve().value))
        after_draw = model.to_dict()
        # Four of Diamonds on top, the Three of Diamonds matches it
        manager.record(match_record(model.attempt_match(2).value))
        manager.record(draw_record(model.draw_reserve().value))

        self.assertIsInstance(manager.undo().value, ReserveToStack)
        self.assertIsInstance(manager.undo().value, PlayfieldToStack)
        self.assertEqual(after_draw, model.to_dict())
        self.assertIsInstance(manager.undo().value, ReserveToStack)
        self.assertEqual(start, model.to_dict())
        self.assertFalse(manager.can_undo())

    def test_record_rejects_invalid(self):
        manager = UndoManager(generate_demo_model())
        self.assertFalse(manager.record(ReserveToStack(EMPTY_CARD, EMPTY_CARD)))
        self.assertFalse(manager.record(PlayfieldToStack(EMPTY_CARD, EMPTY_CARD, Vec2())))
        self.assertFalse(manager.record("not a record"))
        self.assertEqual(0, len(manager))

    def test_undo_restores_empty_stack_top(self):
        model = single_three_model()
        manager = UndoManager(model)
        outcome = model.attempt_match(0).value
        # pretend the stack was empty before the match
        manager.record(PlayfieldToStack(outcome.moved_card, EMPTY_CARD, outcome.original_position))
        self.assertTrue(manager.undo().ok)
        self.assertFalse(model.has_stack_top())
        self.assertIsNotNone(model.get_playfield_card(0))

    def test_clear(self):
        model = generate_demo_model()
        manager = UndoManager(model)
        manager.record(draw_record(model.draw_reserve().value))
        manager.clear()
        self.assertFalse(manager.can_undo())

    def test_record_serialization(self):
        model = generate_demo_model()
        match = match_record(model.attempt_match(2).value, Vec2(1, 2))
        draw = draw_record(model.draw_reserve().value)
        self.assertEqual(match, record_from_dict(record_to_dict(match)))
        self.assertEqual(draw, record_from_dict(record_to_dict(draw)))
        with self.assertRaises(ValueError):
            record_from_dict({"operationType": "NONE", "movedCard": {}, "previousStackTopCard": {}})

    def test_load_records(self):
        model = generate_demo_model()
        manager = UndoManager(model)
        manager.record(draw_record(model.draw_reserve().value))
        data = manager.to_list()

        other = UndoManager(model)
        self.assertTrue(other.load_records(record_from_dict(entry) for entry in data))
        self.assertEqual(manager.records, other.records)
        self.assertTrue(other.undo().ok)
        self.assertEqual(2, model.reserve_count)


    def test_load_records_rejects_invalid(self):
        model = generate_demo_model()
        manager = UndoManager(model)
        good = draw_record(model.draw_reserve().value)
        self.assertFalse(manager.load_records([ReserveToStack(EMPTY_CARD, EMPTY_CARD), good]))
        self.assertEqual((good,), manager.records)

    def test_undo_refuses_unknown_record(self):
        manager = UndoManager(generate_demo_model())
        manager._records.append("not a record")
        with self.assertRaises(InvariantViolation):
            manager.undo()


if __name__ == "__main__":
    unittest.main()
