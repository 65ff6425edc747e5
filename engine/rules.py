from engine.card_types import CardFace, CardSuit


def is_red_suit(suit: CardSuit) -> bool:
    return suit in (CardSuit.DIAMONDS, CardSuit.HEARTS)


def can_match(face_a: CardFace, face_b: CardFace) -> bool:
    """
    Two faces match when their values differ by one. Ace and King also match
    each other, which is the only wraparound.
    :return: False whenever either face is the ``NONE`` sentinel
    """
    if face_a == CardFace.NONE or face_b == CardFace.NONE:
        return False
    if abs(int(face_a) - int(face_b)) == 1:
        return True
    return {face_a, face_b} == {CardFace.ACE, CardFace.KING}
