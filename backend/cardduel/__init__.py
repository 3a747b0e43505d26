from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

NAMESPACE = '/ws'

socketio = SocketIO(async_mode=None)


def _origins(value):
    if not value or value == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = _origins(flask_app.config.get('CORS_ORIGINS'))

    CORS(flask_app, supports_credentials=allowed_origins != '*', origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Room state lives on the app, not in module globals
    from cardduel.services.games.registry import RoomRegistry
    from cardduel.services.games.scheduler import RevealScheduler
    from cardduel.socketio_events import dispatch, broadcast_public_rooms

    registry = RoomRegistry(
        code_length=flask_app.config.get('ROOM_CODE_LENGTH', 5),
        starting_hp=flask_app.config.get('STARTING_HP', 25),
        hand_size=flask_app.config.get('HAND_SIZE', 5),
    )
    registry.subscribe(broadcast_public_rooms)
    flask_app.extensions['room_registry'] = registry
    flask_app.extensions['reveal_scheduler'] = RevealScheduler(flask_app, registry, dispatch, socketio)

    # Import and register blueprints here
    from cardduel.main import main
    flask_app.register_blueprint(main)

    from cardduel.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Register Socket.IO event handlers
    from cardduel.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    return flask_app
