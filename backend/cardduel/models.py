from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from cardduel.services.games.cards import Card


STARTING_HP = 25


@dataclass
class Player:
    id: str
    name: str
    hp: int = STARTING_HP
    hand: List[Card] = field(default_factory=list)
    played_card: Optional[Card] = None
    wins: int = 0
    ready_for_rematch: bool = False

    def reset(self, hp: int = STARTING_HP) -> None:
        """Prepare for a new match; wins are kept."""
        self.hp = hp
        self.hand = []
        self.played_card = None
        self.ready_for_rematch = False

    def to_dict(self, reveal_hand: bool = True, reveal_played: bool = True) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'hp': self.hp,
            'wins': self.wins,
            'hand': [c.to_dict() for c in self.hand] if reveal_hand else [],
            'hand_size': len(self.hand),
            'played_card': self.played_card.to_dict() if (reveal_played and self.played_card) else None,
            'ready_for_rematch': self.ready_for_rematch,
        }


@dataclass(frozen=True)
class PublicRoom:
    code: str
    host_name: str
    player_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'code': self.code,
            'host_name': self.host_name,
            'player_count': self.player_count,
        }


@dataclass(frozen=True)
class Notification:
    """An outbound event addressed to one channel (a socket id or a room)."""
    event: str
    payload: Dict[str, Any]
    to: str
