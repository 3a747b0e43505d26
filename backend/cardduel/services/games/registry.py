import logging
import random
import string
import threading
from typing import Callable, Dict, List, Optional

from cardduel.models import PublicRoom, STARTING_HP
from .errors import AlreadySeated, RoomFull, RoomNotFound
from .session import HAND_SIZE, RoomSession

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits

Listener = Callable[[List[PublicRoom]], None]


class RoomRegistry:
    """Open rooms by code, plus the index of public rooms awaiting a second player.

    Create/join/remove are serialised by one registry lock. A session lock may
    be held while taking the registry lock, never the other way round. Listeners
    registered with ``subscribe`` receive a fresh snapshot of the public index
    whenever it changes; they are called after the lock is released.
    """

    def __init__(self, code_length: int = 5, starting_hp: int = STARTING_HP,
                 hand_size: int = HAND_SIZE, rng: Optional[random.Random] = None):
        self.code_length = code_length
        self.starting_hp = starting_hp
        self.hand_size = hand_size
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        self._sessions: Dict[str, RoomSession] = {}
        self._public: Dict[str, PublicRoom] = {}
        self._seats: Dict[str, str] = {}  # player_id -> room code
        self._listeners: List[Listener] = []
        self._on_remove: List[Callable[[str], None]] = []

    def __len__(self) -> int:
        return len(self._sessions)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def on_remove(self, callback: Callable[[str], None]) -> None:
        self._on_remove.append(callback)

    def generate_code(self) -> str:
        """Generate a short room code not used by any open room. Caller holds the lock."""
        while True:
            code = ''.join(self._rng.choices(CODE_ALPHABET, k=self.code_length))
            if code not in self._sessions:
                return code

    def create_room(self, player_id: str, player_name: str, is_public: bool = False) -> RoomSession:
        with self._lock:
            if player_id in self._seats:
                raise AlreadySeated()
            code = self.generate_code()
            session = RoomSession(
                code,
                is_public=is_public,
                starting_hp=self.starting_hp,
                hand_size=self.hand_size,
                rng=random.Random(self._rng.random()),
            )
            session.seat(player_id, player_name)
            self._sessions[code] = session
            self._seats[player_id] = code
            if is_public:
                self._public[code] = PublicRoom(code, player_name, 1)
                snapshot = self._snapshot()
        logger.info("[room-create] code=%s host=%s public=%s", code, player_name, is_public)
        if is_public:
            self._notify(snapshot)
        return session

    def join_room(self, player_id: str, player_name: str, code: str) -> RoomSession:
        """Seat a second player. The caller starts the game."""
        code = (code or '').upper()
        with self._lock:
            if player_id in self._seats:
                raise AlreadySeated()
            session = self._sessions.get(code)
            if session is None:
                raise RoomNotFound()
            # Seating only ever happens under the registry lock
            if session.is_full:
                raise RoomFull()
            session.seat(player_id, player_name)
            self._seats[player_id] = code
            was_listed = self._public.pop(code, None) is not None
            snapshot = self._snapshot()
        logger.info("[room-join] code=%s player=%s", code, player_name)
        if was_listed:
            self._notify(snapshot)
        return session

    def remove_room(self, code: str) -> Optional[RoomSession]:
        """Evict a room and its discovery entry. Safe to call twice."""
        with self._lock:
            session = self._sessions.pop(code, None)
            was_listed = self._public.pop(code, None) is not None
            if session is not None:
                for player in session.players:
                    self._seats.pop(player.id, None)
            snapshot = self._snapshot()
        if session is None:
            return None
        with session.lock:
            session.close()
        for callback in self._on_remove:
            callback(code)
        logger.info("[room-remove] code=%s", code)
        if was_listed:
            self._notify(snapshot)
        return session

    def get(self, code: str) -> Optional[RoomSession]:
        with self._lock:
            return self._sessions.get((code or '').upper())

    def room_for_player(self, player_id: str) -> Optional[RoomSession]:
        with self._lock:
            code = self._seats.get(player_id)
            return self._sessions.get(code) if code else None

    def list_public_rooms(self) -> List[PublicRoom]:
        with self._lock:
            return self._snapshot()

    def _snapshot(self) -> List[PublicRoom]:
        return list(self._public.values())

    def _notify(self, snapshot: List[PublicRoom]) -> None:
        for listener in self._listeners:
            listener(snapshot)
