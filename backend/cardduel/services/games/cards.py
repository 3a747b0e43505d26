from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Suit(str, Enum):
    SPADES = 'spades'
    CLUBS = 'clubs'
    DIAMONDS = 'diamonds'
    HEARTS = 'hearts'


class CardType(str, Enum):
    ATTACK = 'attack'
    COUNTER = 'counter'
    HEAL = 'heal'
    NONE = 'none'


SUITS = (Suit.SPADES, Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS)
RANKS = ('A', '2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K')

SUIT_SYMBOLS = {
    Suit.SPADES: '♠',
    Suit.CLUBS: '♣',
    Suit.DIAMONDS: '♦',
    Suit.HEARTS: '♥',
}

_SUIT_TYPES = {
    Suit.SPADES: CardType.ATTACK,
    Suit.CLUBS: CardType.ATTACK,
    Suit.DIAMONDS: CardType.COUNTER,
    Suit.HEARTS: CardType.HEAL,
}

# Face cards do not follow their position in RANKS
_FACE_VALUES = {'A': 1, 'J': 1, 'Q': 2, 'K': 11}


@dataclass(frozen=True)
class Card:
    suit: Suit
    rank: str

    def __post_init__(self):
        if self.rank not in RANKS:
            raise ValueError(f'Invalid rank: {self.rank}')
        # Accept plain strings for the suit as well as the enum
        object.__setattr__(self, 'suit', Suit(self.suit))

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self.suit]

    def to_dict(self):
        return {
            'suit': self.suit.value,
            'rank': self.rank,
            'symbol': self.symbol,
        }

    def __str__(self) -> str:
        return f"{self.rank}{self.symbol}"


def card_value(card: Optional[Card]) -> int:
    """Numeric strength of a card; an absent card is worth nothing."""
    if card is None:
        return 0
    return _FACE_VALUES.get(card.rank) or int(card.rank)


def card_type(card: Optional[Card]) -> CardType:
    """Classify a card by suit: spades/clubs attack, diamonds counter, hearts heal."""
    if card is None:
        return CardType.NONE
    return _SUIT_TYPES[card.suit]
