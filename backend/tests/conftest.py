import os
import random
import sys
import pytest

# Ensure the backend root (containing the `cardduel` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from cardduel import NAMESPACE, create_app, socketio
from cardduel.services.games.session import RoomSession


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = '*'
    REVEAL_DELAY_SEC = 0
    STARTING_HP = 25
    HAND_SIZE = 5
    ROOM_CODE_LENGTH = 5


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def registry(flask_app):
    return flask_app.extensions['room_registry']


@pytest.fixture()
def sio_factory(flask_app):
    """Create Socket.IO test clients on /ws; all are disconnected on teardown."""
    created = []

    def _make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace=NAMESPACE,
        )
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        if test_client.is_connected(NAMESPACE):
            test_client.disconnect(namespace=NAMESPACE)


@pytest.fixture()
def sio_client(sio_factory):
    return sio_factory()


@pytest.fixture()
def session():
    """A started two-player session with a fixed seed."""
    room = RoomSession('ROOM1', rng=random.Random(7))
    room.seat('p1', 'Alice')
    room.seat('p2', 'Bob')
    room.start_game()
    return room
