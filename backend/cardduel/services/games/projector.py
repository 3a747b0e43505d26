from typing import Any, Dict, Iterator, Tuple


def project(session, recipient_id: str) -> Dict[str, Any]:
    """Build the view of ``session`` that ``recipient_id`` is allowed to see.

    The recipient always comes first in ``players``. The opponent's hand is
    reduced to its size, and the opponent's played card stays hidden until
    both players have a card on the table.
    """
    me = session.get_player(recipient_id)
    opponent = session.opponent_of(recipient_id)
    turn_complete = all(p.played_card is not None for p in session.players) and len(session.players) == 2

    players = [me.to_dict()]
    if opponent is not None:
        players.append(opponent.to_dict(reveal_hand=False, reveal_played=turn_complete))

    return {
        'room_code': session.code,
        'phase': session.phase.value,
        'current_player_id': session.current_player_id,
        'log': session.log,
        'players': players,
    }


def project_all(session) -> Iterator[Tuple[str, Dict[str, Any]]]:
    for player in session.players:
        yield player.id, project(session, player.id)
