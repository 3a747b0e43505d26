from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from cardduel import NAMESPACE, socketio
from cardduel.services.games.errors import GameError, InvalidCardIndex, RoomNotFound
from cardduel.services.games.intents import parse_intent
from cardduel.services.games.session import Phase

LOBBY_ROOM = 'lobby'


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _registry():
    return current_app.extensions['room_registry']


def _scheduler():
    return current_app.extensions['reveal_scheduler']


def _session_for(room_code: str):
    session = _registry().get(room_code)
    if session is None:
        raise RoomNotFound()
    return session


def dispatch(notifications) -> None:
    """Deliver notifications, each to its own channel."""
    # Use socketio.emit since this may be called from a background task
    for note in notifications:
        socketio.emit(note.event, note.payload, to=note.to, namespace=NAMESPACE)


def broadcast_public_rooms(public_rooms) -> None:
    socketio.emit(
        'updatePublicRooms',
        {'rooms': [r.to_dict() for r in public_rooms]},
        to=LOBBY_ROOM,
        namespace=NAMESPACE,
    )


def handle_connect(auth=None):
    emit('connected', {'message': 'Connected to /ws'})


def handle_disconnect(reason=None):
    # Leaving destroys the room for both players
    sid = _get_sid()
    session = _registry().room_for_player(sid)
    if session is None:
        return
    with session.lock:
        notifications = session.player_left(sid)
        _registry().remove_room(session.code)
        dispatch(notifications)
    current_app.logger.info(f"[disconnect] code={session.code} sid={sid}")


def handle_create_room(data):
    sid = _get_sid()
    try:
        intent = parse_intent('createRoom', data)
        session = _registry().create_room(sid, intent.player_name, intent.is_public)
    except GameError as exc:
        emit('error', {'message': exc.message})
        return
    current_app.logger.info(f"[create] code={session.code} sid={sid} public={intent.is_public}")
    emit('roomCreated', {'code': session.code, 'roomCode': session.code})


def handle_join_room(data):
    sid = _get_sid()
    try:
        intent = parse_intent('joinRoom', data)
        session = _registry().join_room(sid, intent.player_name, intent.room_code)
        with session.lock:
            dispatch(session.start_game())
    except GameError as exc:
        current_app.logger.info(f"[join-reject] sid={sid} reason={exc.message!r}")
        emit('joinError', {'message': exc.message})
        return
    current_app.logger.info(f"[join] code={session.code} sid={sid}")


def handle_play_card(data):
    sid = _get_sid()
    try:
        intent = parse_intent('playCard', data)
        session = _session_for(intent.room_code)
        with session.lock:
            dispatch(session.play_card(sid, intent.card_index))
            if session.phase is Phase.RESOLVING:
                _scheduler().schedule(session)
    except InvalidCardIndex:
        # Malformed indices are dropped without a reply
        current_app.logger.info(f"[play-reject] sid={sid} invalid card index")
    except GameError as exc:
        emit('error', {'message': exc.message})


def handle_request_rematch(data):
    sid = _get_sid()
    try:
        intent = parse_intent('requestRematch', data)
        session = _session_for(intent.room_code)
        with session.lock:
            dispatch(session.request_rematch(sid))
    except GameError as exc:
        emit('error', {'message': exc.message})


def handle_join_lobby(data=None):
    join_room(LOBBY_ROOM)
    rooms = _registry().list_public_rooms()
    emit('updatePublicRooms', {'rooms': [r.to_dict() for r in rooms]})


def handle_leave_lobby(data=None):
    leave_room(LOBBY_ROOM)


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'."""
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=NAMESPACE)
    socketio.on_event('createRoom', handle_create_room, namespace=NAMESPACE)
    socketio.on_event('joinRoom', handle_join_room, namespace=NAMESPACE)
    socketio.on_event('playCard', handle_play_card, namespace=NAMESPACE)
    socketio.on_event('requestRematch', handle_request_rematch, namespace=NAMESPACE)
    socketio.on_event('joinLobby', handle_join_lobby, namespace=NAMESPACE)
    socketio.on_event('leaveLobby', handle_leave_lobby, namespace=NAMESPACE)
