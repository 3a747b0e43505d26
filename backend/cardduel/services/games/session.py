"""Per-room turn engine.

A ``RoomSession`` is a small state machine::

    waiting_for_opponent -> waiting_for_play <-> resolving
                                  ^                 |
                                  |                 v
                            rematch_pending <- game_over

Every public method validates before it mutates and returns the
notifications the change produced; delivering them is the caller's job.
Callers hold ``session.lock`` for the duration of a call.
"""

import logging
import random
import threading
from enum import Enum
from typing import List, Optional

from cardduel.models import Notification, Player, STARTING_HP
from .deck import Deck
from .errors import InvalidCardIndex, InvalidTurn, RoomFull, RoomNotFound
from .projector import project_all
from .rules import apply_effects, clash, describe

logger = logging.getLogger(__name__)

HAND_SIZE = 5


class Phase(str, Enum):
    WAITING_FOR_OPPONENT = 'waiting_for_opponent'
    WAITING_FOR_PLAY = 'waiting_for_play'
    RESOLVING = 'resolving'
    GAME_OVER = 'game_over'
    REMATCH_PENDING = 'rematch_pending'


class RoomSession:

    def __init__(self, code: str, is_public: bool = False, starting_hp: int = STARTING_HP,
                 hand_size: int = HAND_SIZE, rng: Optional[random.Random] = None):
        self.code = code
        self.is_public = is_public
        self.starting_hp = starting_hp
        self.hand_size = hand_size
        self.players: List[Player] = []
        self.deck = Deck()
        self.current_player_id: Optional[str] = None
        self.turn_starter_id: Optional[str] = None
        self.log = 'Waiting for an opponent to join...'
        self.phase = Phase.WAITING_FOR_OPPONENT
        self.closed = False
        # Bumped on every reveal so a stale scheduled resolution can be told apart
        self.reveal_token = 0
        self.lock = threading.RLock()
        self._rng = rng or random.Random()

    # ---- seating ----

    @property
    def is_full(self) -> bool:
        return len(self.players) >= 2

    @property
    def host(self) -> Optional[Player]:
        return self.players[0] if self.players else None

    def seat(self, player_id: str, name: str) -> Player:
        if self.is_full:
            raise RoomFull()
        player = Player(id=player_id, name=name, hp=self.starting_hp)
        self.players.append(player)
        return player

    def get_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def opponent_of(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id != player_id), None)

    def close(self) -> None:
        self.closed = True

    # ---- state transitions ----

    def start_game(self) -> List[Notification]:
        """Reset both players, deal fresh hands and pick who opens."""
        self._ensure_open()
        if not self.is_full:
            raise InvalidTurn('Waiting for an opponent.')
        self.deck = Deck.shuffled(self._rng)
        for player in self.players:
            player.reset(self.starting_hp)
            player.hand = self.deck.deal(self.hand_size)

        first = self._rng.choice(self.players)
        self.current_player_id = self.turn_starter_id = first.id
        self.phase = Phase.WAITING_FOR_PLAY
        self.log = f"Game started! It is {first.name}'s turn."
        logger.info("[game-start] code=%s first=%s wins=%s", self.code, first.name,
                    [p.wins for p in self.players])
        return self.broadcast_state()

    def play_card(self, player_id: str, card_index) -> List[Notification]:
        self._ensure_open()
        player = self.get_player(player_id)
        if player is None:
            raise InvalidTurn('You are not seated in this room.')
        if self.phase is not Phase.WAITING_FOR_PLAY or self.current_player_id != player_id:
            raise InvalidTurn()
        if player.played_card is not None:
            raise InvalidTurn('You have already played this turn.')
        if isinstance(card_index, bool) or not isinstance(card_index, int) \
                or not 0 <= card_index < len(player.hand):
            raise InvalidCardIndex()

        player.played_card = player.hand.pop(card_index)
        opponent = self.opponent_of(player_id)
        if opponent.played_card is None:
            self.current_player_id = opponent.id
            self.log = f"Waiting for {opponent.name} to play..."
            return self.broadcast_state()

        # Both cards are down: reveal them and hold until resolve_turn()
        self.phase = Phase.RESOLVING
        self.current_player_id = None
        self.reveal_token += 1
        self.log = ' | '.join(f"{p.name} played {p.played_card}" for p in self.players)
        return self.broadcast_state()

    def resolve_turn(self) -> List[Notification]:
        self._ensure_open()
        if self.phase is not Phase.RESOLVING:
            raise InvalidTurn('No turn is waiting to be resolved.')

        first, second = self.players
        effects = clash(first.id, first.played_card, second.id, second.played_card)
        new_hp = apply_effects({p.id: p.hp for p in self.players}, effects, self.starting_hp)
        for player in self.players:
            player.hp = new_hp[player.id]

        names = {p.id: p.name for p in self.players}
        self.log = ', '.join(describe(e, names) for e in effects) if effects else 'Nothing happened.'

        if first.hp <= 0 or second.hp <= 0:
            return self._finish(self._leader())

        for player in self.players:
            player.played_card = None
        for player in self.players:
            card = self.deck.draw()
            if card is not None:
                player.hand.append(card)

        if not first.hand and not second.hand:
            return self._finish(None, "Deck exhausted, it's a draw!")

        next_player = self.opponent_of(self.turn_starter_id)
        self.current_player_id = self.turn_starter_id = next_player.id
        self.phase = Phase.WAITING_FOR_PLAY
        self.log += f" | It is now {next_player.name}'s turn."
        return self.broadcast_state()

    def request_rematch(self, player_id: str) -> List[Notification]:
        self._ensure_open()
        player = self.get_player(player_id)
        if player is None:
            raise InvalidTurn('You are not seated in this room.')
        if self.phase not in (Phase.GAME_OVER, Phase.REMATCH_PENDING):
            raise InvalidTurn('A rematch can only be requested once the game is over.')

        player.ready_for_rematch = True
        if all(p.ready_for_rematch for p in self.players):
            logger.info("[rematch] code=%s", self.code)
            return self.start_game()

        self.phase = Phase.REMATCH_PENDING
        message = f"{player.name} wants a rematch!"
        return [Notification('rematchStatus', {'message': message}, to=p.id) for p in self.players]

    def player_left(self, player_id: str) -> List[Notification]:
        """Close the room and tell whoever is still seated."""
        self.close()
        return [Notification('opponentLeft', {}, to=p.id) for p in self.players if p.id != player_id]

    def broadcast_state(self) -> List[Notification]:
        return [Notification('updateGameState', view, to=pid) for pid, view in project_all(self)]

    # ---- helpers ----

    def _leader(self) -> Optional[Player]:
        first, second = self.players
        if first.hp == second.hp:
            return None
        return first if first.hp > second.hp else second

    def _finish(self, winner: Optional[Player], message: str = None) -> List[Notification]:
        if winner is not None:
            winner.wins += 1
            message = f"{winner.name} wins!"
        elif message is None:
            message = "It's a draw!"
        self.phase = Phase.GAME_OVER
        self.current_player_id = None
        self.log = f"{self.log} | {message}"
        logger.info("[game-over] code=%s result=%r hp=%s", self.code, message,
                    [p.hp for p in self.players])
        return [
            Notification('gameOver', {'message': message, 'final_state': view}, to=pid)
            for pid, view in project_all(self)
        ]

    def _ensure_open(self) -> None:
        if self.closed:
            raise RoomNotFound()
