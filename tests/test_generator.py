import json
import unittest

from engine.card import Vec2
from engine.card_types import CardArea, CardFace, CardSuit
from engine.generator import demo_level_config, generate, generate_demo_model
from engine.level_config import CardConfig, LevelConfig, load_level_from_string
from engine.results import GenerationError
from client import level_store


def level_text(playfield, stack):
    return json.dumps({"Playfield": playfield, "Stack": stack})


class GeneratorTestCase(unittest.TestCase):
    def test_ids_follow_playfield_then_stack(self):
        model = generate_demo_model()
        self.assertEqual([0, 1, 2, 3, 4, 5], [c.id for c in model.playfield_cards])
        self.assertEqual(6, model.stack_top.id)
        self.assertEqual([7, 8], [c.id for c in model.reserve_cards])
        self.assertEqual(9, model.next_card_id)

    def test_initial_card_states(self):
        model = generate_demo_model()
        for card in model.playfield_cards:
            self.assertEqual(CardArea.PLAYFIELD, card.area)
            self.assertTrue(card.face_up)
        self.assertEqual(CardArea.STACK, model.stack_top.area)
        self.assertTrue(model.stack_top.face_up)
        self.assertFalse(model.stack_top.clickable)
        for card in model.reserve_cards:
            self.assertEqual(CardArea.RESERVE, card.area)
            self.assertFalse(card.face_up)
        self.assertEqual({2, 5}, {c.id for c in model.playfield_cards if c.clickable})

    def test_last_stack_entry_is_drawn_first(self):
        model = generate_demo_model()
        self.assertEqual(CardFace.FOUR, model.reserve_cards[-1].face)
        self.assertEqual(CardSuit.DIAMONDS, model.reserve_cards[-1].suit)

    def test_invalid_configs_are_refused(self):
        three = CardConfig(CardFace.THREE, CardSuit.CLUBS, Vec2(100, 100))
        self.assertEqual(GenerationError.EMPTY_PLAYFIELD, generate(LevelConfig(stack_cards=[three])).error)
        self.assertEqual(GenerationError.EMPTY_STACK_SOURCE, generate(LevelConfig(playfield_cards=[three])).error)
        bad = CardConfig(CardFace.NONE, CardSuit.CLUBS)
        self.assertEqual(
            GenerationError.INVALID_CARD,
            generate(LevelConfig(playfield_cards=[three], stack_cards=[bad])).error,
        )


class LevelParsingTestCase(unittest.TestCase):
    def test_parse_level(self):
        text = level_text(
            [{"CardFace": 12, "CardSuit": 0, "Position": {"x": 250, "y": 1000}}],
            [{"CardFace": 3, "CardSuit": 0, "Position": {"x": 9, "y": 9}}, {"CardFace": 0, "CardSuit": 2}],
        )
        config = load_level_from_string(text, level_id=4)
        self.assertIsNotNone(config)
        self.assertEqual(4, config.level_id)
        self.assertEqual(CardFace.KING, config.playfield_cards[0].face)
        self.assertEqual(Vec2(250, 1000), config.playfield_cards[0].position)
        # stack positions are not used
        self.assertEqual(Vec2(), config.stack_cards[0].position)
        self.assertEqual(CardSuit.HEARTS, config.stack_cards[1].suit)

    def test_out_of_range_face_is_rejected(self):
        text = level_text(
            [{"CardFace": 13, "CardSuit": 0, "Position": {"x": 250, "y": 1000}}],
            [{"CardFace": 3, "CardSuit": 0}],
        )
        self.assertIsNone(load_level_from_string(text))

    def test_not_json(self):
        self.assertIsNone(load_level_from_string("{Playfield"))
        self.assertIsNone(load_level_from_string("[1, 2]"))

    def test_missing_stack(self):
        text = json.dumps({"Playfield": [{"CardFace": 1, "CardSuit": 1, "Position": {"x": 1, "y": 1}}]})
        self.assertIsNone(load_level_from_string(text))


class LevelStoreTestCase(unittest.TestCase):
    def test_bundled_levels(self):
        self.assertTrue({1, 2}.issubset(set(level_store.available_levels())))

    def test_first_level_is_the_demo_layout(self):
        config = level_store.load_level(1)
        self.assertIsNotNone(config)
        self.assertEqual(demo_level_config().playfield_cards, config.playfield_cards)
        self.assertEqual(demo_level_config().stack_cards, config.stack_cards)
        self.assertEqual(generate_demo_model().to_dict(), generate(config).value.to_dict())

    def test_second_level_generates(self):
        result = generate(level_store.load_level(2))
        self.assertTrue(result.ok)
        self.assertEqual(16, result.value.playfield_count)
        self.assertEqual(9, result.value.reserve_count)

    def test_missing_level(self):
        self.assertIsNone(level_store.load_level(999))


if __name__ == "__main__":
    unittest.main()
