from cardduel.services.games.cards import Card
from cardduel.services.games.rules import COUNTER, DAMAGE, HEAL, apply_effects, clash, describe


def _resolve(card_a, card_b, hp_a=25, hp_b=25):
    effects = clash('a', card_a, 'b', card_b)
    return apply_effects({'a': hp_a, 'b': hp_b}, effects, 25)


def test_attack_against_counter_is_reflected():
    assert _resolve(Card('spades', '5'), Card('diamonds', '3')) == {'a': 22, 'b': 25}


def test_attacks_trade_simultaneously():
    assert _resolve(Card('spades', '5'), Card('clubs', '5')) == {'a': 20, 'b': 20}


def test_counter_against_non_attack_does_nothing():
    assert clash('a', Card('diamonds', '9'), 'b', Card('diamonds', '4')) == []
    assert _resolve(Card('diamonds', '9'), Card('hearts', '4'), hp_b=10) == {'a': 25, 'b': 14}


def test_heal_is_capped():
    assert _resolve(Card('hearts', 'K'), Card('hearts', '2'), hp_a=20, hp_b=24) == {'a': 25, 'b': 25}


def test_heal_and_damage_on_same_player_net_out():
    assert _resolve(Card('clubs', '5'), Card('hearts', '3')) == {'a': 25, 'b': 23}


def test_hp_never_negative():
    assert _resolve(Card('spades', 'K'), Card('spades', '2'), hp_b=4) == {'a': 23, 'b': 0}


def test_order_of_players_does_not_matter():
    pairs = [
        (Card('spades', '7'), Card('diamonds', 'K')),
        (Card('hearts', '6'), Card('clubs', '9')),
        (Card('clubs', 'Q'), Card('spades', 'A')),
    ]
    for card_a, card_b in pairs:
        forward = _resolve(card_a, card_b, hp_a=12, hp_b=18)
        backward = apply_effects({'b': 18, 'a': 12}, clash('b', card_b, 'a', card_a), 25)
        assert forward == backward


def test_effect_kinds_and_descriptions():
    effects = clash('a', Card('spades', '4'), 'b', Card('diamonds', '2'))
    assert [e.kind for e in effects] == [COUNTER]
    names = {'a': 'Alice', 'b': 'Bob'}
    assert describe(effects[0], names) == 'Bob countered for 2 damage'

    effects = clash('a', Card('clubs', '3'), 'b', Card('hearts', '8'))
    assert [e.kind for e in effects] == [DAMAGE, HEAL]
    assert [describe(e, names) for e in effects] == ['Alice dealt 3 damage', 'Bob healed 8 HP']
