from flask import Blueprint, current_app, jsonify


rooms = Blueprint('rooms', __name__)


def _registry():
    return current_app.extensions['room_registry']


@rooms.route('/public', methods=['GET'])
def list_public_rooms():
    return jsonify([room.to_dict() for room in _registry().list_public_rooms()])


@rooms.route('/<string:room_code>', methods=['GET'])
def get_room(room_code):
    """Public summary of a room. Never includes hands or played cards."""
    session = _registry().get(room_code)
    if session is None:
        return jsonify({'error': 'Room not found'}), 404
    with session.lock:
        return jsonify({
            'room_code': session.code,
            'phase': session.phase.value,
            'is_public': session.is_public,
            'players': [{'name': p.name, 'wins': p.wins} for p in session.players],
        })
