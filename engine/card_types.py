from enum import IntEnum


class CardSuit(IntEnum):
    NONE = -1
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


class CardFace(IntEnum):
    NONE = -1
    ACE = 0
    TWO = 1
    THREE = 2
    FOUR = 3
    FIVE = 4
    SIX = 5
    SEVEN = 6
    EIGHT = 7
    NINE = 8
    TEN = 9
    JACK = 10
    QUEEN = 11
    KING = 12


class CardArea(IntEnum):
    NONE = 0
    PLAYFIELD = 1
    STACK = 2
    RESERVE = 3


SUIT_COUNT = 4
FACE_COUNT = 13

# design units, positions are card centers
CARD_WIDTH = 150.0
CARD_HEIGHT = 210.0
PLAYFIELD_WIDTH = 1080.0
PLAYFIELD_HEIGHT = 1500.0


def suit_from_int(value) -> CardSuit:
    """Map a raw value to a suit, anything unknown becomes ``NONE``."""
    try:
        return CardSuit(int(value))
    except (TypeError, ValueError):
        return CardSuit.NONE


def face_from_int(value) -> CardFace:
    try:
        return CardFace(int(value))
    except (TypeError, ValueError):
        return CardFace.NONE


def area_from_int(value) -> CardArea:
    try:
        return CardArea(int(value))
    except (TypeError, ValueError):
        return CardArea.NONE
