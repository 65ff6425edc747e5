import logging

from engine.card import CardModel, Vec2
from engine.card_types import CardArea, CardFace, CardSuit
from engine.game_model import GameModel
from engine.level_config import CardConfig, LevelConfig
from engine.results import Result

logger = logging.getLogger(__name__)


def create_card(config: CardConfig, card_id: int, area: CardArea) -> CardModel:
    return CardModel(id=card_id, suit=config.suit, face=config.face, position=config.position, area=area)


def generate(level_config: LevelConfig) -> Result:
    """
    Build the initial game model of a level.

    Ids are handed out in order: playfield cards, then the first stack card
    which becomes the stack top, then the remaining stack cards which go to
    the reserve. The last reserve entry is drawn first.
    """
    error = level_config.validate()
    if error is not None:
        logger.warning("Cannot generate level %d: %s", level_config.level_id, error.value)
        return Result.failure(error)

    model = GameModel()
    for config in level_config.playfield_cards:
        card = create_card(config, model.allocate_card_id(), CardArea.PLAYFIELD)
        model.add_playfield_card(card.moved_to(CardArea.PLAYFIELD, face_up=True, clickable=False))
    model.update_clickable()

    top_config = level_config.stack_cards[0]
    top = create_card(top_config, model.allocate_card_id(), CardArea.STACK)
    model.set_stack_top(top.moved_to(CardArea.STACK, face_up=True, clickable=False))

    for config in level_config.stack_cards[1:]:
        model.add_reserve_card(create_card(config, model.allocate_card_id(), CardArea.RESERVE))

    model.check_invariants()
    logger.debug("Generated %d playfield cards, 1 top card, %d reserve cards",
                 model.playfield_count, model.reserve_count)
    return Result.success(model)


DEMO_PLAYFIELD = (
    # left column
    (CardFace.KING, CardSuit.CLUBS, Vec2(250, 1000)),
    (CardFace.THREE, CardSuit.CLUBS, Vec2(300, 800)),
    (CardFace.THREE, CardSuit.DIAMONDS, Vec2(350, 600)),
    # right column
    (CardFace.THREE, CardSuit.CLUBS, Vec2(850, 1000)),
    (CardFace.THREE, CardSuit.CLUBS, Vec2(800, 800)),
    (CardFace.TWO, CardSuit.SPADES, Vec2(750, 600)),
)
DEMO_STACK = (
    (CardFace.FOUR, CardSuit.CLUBS),
    (CardFace.ACE, CardSuit.HEARTS),
    (CardFace.FOUR, CardSuit.DIAMONDS),
)


def demo_level_config() -> LevelConfig:
    return LevelConfig(
        level_id=0,
        playfield_cards=[CardConfig(face, suit, pos) for face, suit, pos in DEMO_PLAYFIELD],
        stack_cards=[CardConfig(face, suit) for face, suit in DEMO_STACK],
    )


def generate_demo_model() -> GameModel:
    """The built-in demo layout, used when no level file is given."""
    return generate(demo_level_config()).value
