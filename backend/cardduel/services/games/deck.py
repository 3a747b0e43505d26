import random
from typing import List, Optional

from .cards import Card, RANKS, SUITS


def create_deck() -> List[Card]:
    """Return the 52 canonical cards, suit-major then rank."""
    return [Card(suit, rank) for suit in SUITS for rank in RANKS]


def shuffle(deck: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Fisher-Yates shuffle in place. Returns the same list for chaining."""
    rng = rng or random
    for i in range(len(deck) - 1, 0, -1):
        j = rng.randint(0, i)
        deck[i], deck[j] = deck[j], deck[i]
    return deck


class Deck:
    """Draw pile. Dealing and drawing both take from the tail."""

    def __init__(self, cards: Optional[List[Card]] = None):
        self.cards: List[Card] = list(cards) if cards is not None else []

    @classmethod
    def shuffled(cls, rng: Optional[random.Random] = None) -> 'Deck':
        return cls(shuffle(create_deck(), rng))

    def draw(self) -> Optional[Card]:
        if not self.cards:
            return None
        return self.cards.pop()

    def deal(self, count: int) -> List[Card]:
        dealt = []
        for _ in range(count):
            card = self.draw()
            if card is None:
                break
            dealt.append(card)
        return dealt

    def __len__(self) -> int:
        return len(self.cards)
