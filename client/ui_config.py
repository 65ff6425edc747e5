NUMS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
SUIT_SYMBOLS = ("♣", "♦", "♥", "♠")
SUIT_NAMES = ("Clubs", "Diamonds", "Hearts", "Spades")

SLOT_COUNT = 3
LOG_LEVEL_ORDER = ("DEBUG", "INFO", "WARNING", "ERROR")

# level preview, pixels per design unit and colors
PREVIEW_SCALE = 0.5
PREVIEW_COLORS = {
    "background": (27, 67, 50),
    "card_front": (247, 232, 188),
    "card_border": (15, 23, 42),
    "clickable": (253, 224, 71),
    "red": (220, 38, 38),
    "black": (17, 24, 39),
}
