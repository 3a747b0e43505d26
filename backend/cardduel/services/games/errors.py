"""Recoverable, per-intent errors raised by the game services.

Each carries a user-facing ``message``; transport handlers turn them into
rejection notifications. None of them leaves a session partially mutated.
"""


class GameError(Exception):
    default_message = 'Request rejected'

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class RoomNotFound(GameError):
    default_message = 'Room not found.'


class RoomFull(GameError):
    default_message = 'Room is full.'


class AlreadySeated(GameError):
    default_message = 'You are already seated in a room.'


class InvalidTurn(GameError):
    default_message = 'It is not your turn.'


class InvalidCardIndex(GameError):
    default_message = 'Invalid card index.'


class IntentError(GameError):
    default_message = 'Malformed request.'
