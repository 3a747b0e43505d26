import random
import string

import pytest

from cardduel.services.games.errors import AlreadySeated, RoomFull, RoomNotFound
from cardduel.services.games.registry import RoomRegistry
from cardduel.services.games.session import Phase


@pytest.fixture()
def rooms():
    return RoomRegistry(rng=random.Random(11))


def test_create_room_seats_host(rooms):
    session = rooms.create_room('sid-a', 'Alice')
    assert len(session.code) == 5
    assert set(session.code) <= set(string.ascii_uppercase + string.digits)
    assert [p.name for p in session.players] == ['Alice']
    assert session.phase is Phase.WAITING_FOR_OPPONENT
    assert rooms.get(session.code) is session
    assert rooms.room_for_player('sid-a') is session
    assert len(rooms) == 1


def test_code_generation_retries_on_collision(rooms, monkeypatch):
    taken = rooms.create_room('sid-a', 'Alice').code
    candidates = iter([taken, taken, 'ZZZZZ'])
    monkeypatch.setattr(rooms._rng, 'choices', lambda population, k: next(candidates))
    assert rooms.create_room('sid-b', 'Bob').code == 'ZZZZZ'


def test_join_room_seats_second_player(rooms):
    code = rooms.create_room('sid-a', 'Alice').code
    session = rooms.join_room('sid-b', 'Bob', code.lower())
    assert [p.id for p in session.players] == ['sid-a', 'sid-b']
    assert rooms.room_for_player('sid-b') is session


def test_join_errors(rooms):
    with pytest.raises(RoomNotFound):
        rooms.join_room('sid-b', 'Bob', 'NOPE1')
    code = rooms.create_room('sid-a', 'Alice').code
    rooms.join_room('sid-b', 'Bob', code)
    with pytest.raises(RoomFull):
        rooms.join_room('sid-c', 'Cara', code)
    assert rooms.room_for_player('sid-c') is None


def test_one_room_per_channel(rooms):
    code = rooms.create_room('sid-a', 'Alice').code
    with pytest.raises(AlreadySeated):
        rooms.create_room('sid-a', 'Alice')
    with pytest.raises(AlreadySeated):
        rooms.join_room('sid-a', 'Alice', code)
    assert len(rooms.get(code).players) == 1


def test_public_index_tracks_open_rooms(rooms):
    seen = []
    rooms.subscribe(seen.append)

    private = rooms.create_room('sid-x', 'Xavier')
    assert seen == []
    assert rooms.list_public_rooms() == []

    public = rooms.create_room('sid-a', 'Alice', is_public=True)
    assert [r.to_dict() for r in seen[-1]] == [
        {'code': public.code, 'host_name': 'Alice', 'player_count': 1}
    ]

    rooms.join_room('sid-b', 'Bob', public.code)
    assert seen[-1] == []
    assert rooms.list_public_rooms() == []

    rooms.join_room('sid-c', 'Cara', private.code)
    assert len(seen) == 2


def test_remove_room_is_idempotent(rooms):
    removed = []
    rooms.on_remove(removed.append)
    seen = []
    rooms.subscribe(seen.append)
    session = rooms.create_room('sid-a', 'Alice', is_public=True)

    assert rooms.remove_room(session.code) is session
    assert session.closed
    assert rooms.get(session.code) is None
    assert rooms.room_for_player('sid-a') is None
    assert seen[-1] == []
    assert removed == [session.code]

    assert rooms.remove_room(session.code) is None
    assert removed == [session.code]
    # The seat is free again
    rooms.create_room('sid-a', 'Alice')


def test_finished_match_keeps_room_until_removed(rooms):
    from cardduel.services.games.cards import Card

    session = rooms.create_room('sid-a', 'Alice')
    rooms.join_room('sid-b', 'Bob', session.code)
    session.start_game()
    first = session.get_player(session.current_player_id)
    second = session.opponent_of(first.id)
    second.hp = 1
    first.hand[0] = Card('spades', '9')
    second.hand[0] = Card('clubs', '2')
    session.play_card(first.id, 0)
    session.play_card(second.id, 0)
    session.resolve_turn()

    assert session.phase is Phase.GAME_OVER
    assert rooms.get(session.code) is session
    assert rooms.room_for_player('sid-a') is session
    session.request_rematch('sid-a')
    assert session.phase is Phase.REMATCH_PENDING

    rooms.remove_room(session.code)
    assert rooms.get(session.code) is None
