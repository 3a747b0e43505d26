"""Clash resolution for one turn.

Both played cards are evaluated against each other at the same time, so the
outcome never depends on which player acted first:

- an attack damages the opponent by its value unless the opponent countered;
- a counter facing an attack deals its own value back to the attacker;
- a heal restores its value to its owner.

``clash`` only describes the effects. ``apply_effects`` folds them into net
hp changes and clamps the result into ``[0, max_hp]``.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .cards import Card, CardType, card_type, card_value


DAMAGE = 'damage'
COUNTER = 'counter'
HEAL = 'heal'


@dataclass(frozen=True)
class Effect:
    kind: str
    source_id: str
    target_id: str
    amount: int


def _effects_of(own_id: str, own_card: Optional[Card], other_id: str, other_card: Optional[Card]) -> List[Effect]:
    own_type, other_type = card_type(own_card), card_type(other_card)
    value = card_value(own_card)
    effects = []
    if own_type is CardType.ATTACK and other_type is not CardType.COUNTER:
        effects.append(Effect(DAMAGE, own_id, other_id, value))
    if own_type is CardType.COUNTER and other_type is CardType.ATTACK:
        effects.append(Effect(COUNTER, own_id, other_id, value))
    if own_type is CardType.HEAL:
        effects.append(Effect(HEAL, own_id, own_id, value))
    return effects


def clash(first_id: str, first_card: Optional[Card], second_id: str, second_card: Optional[Card]) -> List[Effect]:
    """Effects produced by two simultaneously played cards."""
    return (
        _effects_of(first_id, first_card, second_id, second_card)
        + _effects_of(second_id, second_card, first_id, first_card)
    )


def apply_effects(hp: Dict[str, int], effects: List[Effect], max_hp: int) -> Dict[str, int]:
    """Return new hp values after applying all effects at once."""
    delta = {player_id: 0 for player_id in hp}
    for effect in effects:
        if effect.kind == HEAL:
            delta[effect.target_id] += effect.amount
        else:
            delta[effect.target_id] -= effect.amount
    return {
        player_id: max(0, min(max_hp, value + delta[player_id]))
        for player_id, value in hp.items()
    }


def describe(effect: Effect, names: Dict[str, str]) -> str:
    source = names.get(effect.source_id, effect.source_id)
    if effect.kind == DAMAGE:
        return f"{source} dealt {effect.amount} damage"
    if effect.kind == COUNTER:
        return f"{source} countered for {effect.amount} damage"
    return f"{source} healed {effect.amount} HP"
