from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the card duel server!'})

@main.route('/health')
def health():
    registry = current_app.extensions['room_registry']
    return jsonify({'status': 'ok', 'open_rooms': len(registry)})
