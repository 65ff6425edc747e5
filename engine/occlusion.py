from typing import Iterable

from engine.card import CardModel, Vec2
from engine.card_types import CARD_HEIGHT, CARD_WIDTH


def is_overlapping(pos1: Vec2, pos2: Vec2, width: float = CARD_WIDTH, height: float = CARD_HEIGHT) -> bool:
    """Whether two card-sized boxes centered on the positions intersect. Touching edges do not count."""
    half_w = width / 2
    half_h = height / 2
    overlap_x = (pos1.x - half_w < pos2.x + half_w) and (pos1.x + half_w > pos2.x - half_w)
    overlap_y = (pos1.y - half_h < pos2.y + half_h) and (pos1.y + half_h > pos2.y - half_h)
    return overlap_x and overlap_y


def is_blocked_by(card: CardModel, other: CardModel, width: float = CARD_WIDTH, height: float = CARD_HEIGHT) -> bool:
    # smaller y lies on top; equal y never occludes
    if other.id == card.id:
        return False
    if not other.position.y < card.position.y:
        return False
    return is_overlapping(card.position, other.position, width, height)


def compute_clickable(
    cards: Iterable[CardModel],
    width: float = CARD_WIDTH,
    height: float = CARD_HEIGHT,
) -> dict[int, bool]:
    """
    Resolve which playfield cards can be clicked.

    A card is blocked when any other card of the set sits above it (strictly
    smaller y) and their boxes overlap on both axes. Every pair is checked, so
    the cost is quadratic in the playfield size.

    :param cards: the playfield cards
    :return: card id -> clickable
    """
    cards = list(cards)
    result = {}
    for card in cards:
        blocked = False
        for other in cards:
            if is_blocked_by(card, other, width, height):
                blocked = True
                break
        result[card.id] = not blocked
    return result
