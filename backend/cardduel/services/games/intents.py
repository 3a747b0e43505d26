"""Client intents, validated at the socket boundary.

Each socket event maps to exactly one frozen record. ``parse_intent`` turns a
raw event payload into that record or raises ``IntentError``.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

from .errors import IntentError, InvalidCardIndex

MAX_NAME_LENGTH = 24


@dataclass(frozen=True)
class CreateRoom:
    player_name: str
    is_public: bool = False


@dataclass(frozen=True)
class JoinRoom:
    player_name: str
    room_code: str


@dataclass(frozen=True)
class PlayCard:
    room_code: str
    card_index: int


@dataclass(frozen=True)
class RequestRematch:
    room_code: str


Intent = Union[CreateRoom, JoinRoom, PlayCard, RequestRematch]


def _field(data: Dict[str, Any], key: str, alias: str, default: Any = None) -> Any:
    """Read a camelCase wire key, falling back to its snake_case spelling."""
    if key in data:
        return data[key]
    return data.get(alias, default)


def _name(data: Dict[str, Any]) -> str:
    name = _field(data, 'playerName', 'player_name')
    if not isinstance(name, str) or not name.strip():
        raise IntentError('playerName is required')
    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise IntentError(f'playerName must be at most {MAX_NAME_LENGTH} characters')
    return name


def _is_public(data: Dict[str, Any]) -> bool:
    value = _field(data, 'isPublic', 'is_public', False)
    if not isinstance(value, bool):
        raise IntentError('isPublic must be true or false')
    return value


def _room_code(data: Dict[str, Any]) -> str:
    code = _field(data, 'roomCode', 'room_code')
    if not isinstance(code, str) or not code.strip():
        raise IntentError('roomCode is required')
    return code.strip().upper()


def _card_index(data: Dict[str, Any]) -> int:
    index = _field(data, 'cardIndex', 'card_index')
    # bool is an int subclass; True must not mean card 1
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidCardIndex()
    return index


def parse_intent(kind: str, data: Any) -> Intent:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise IntentError('payload must be an object')

    if kind == 'createRoom':
        return CreateRoom(_name(data), _is_public(data))
    if kind == 'joinRoom':
        return JoinRoom(_name(data), _room_code(data))
    if kind == 'playCard':
        return PlayCard(_room_code(data), _card_index(data))
    if kind == 'requestRematch':
        return RequestRematch(_room_code(data))
    raise IntentError(f'unknown intent: {kind}')
