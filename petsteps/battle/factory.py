"""Factory helpers for constructing Combatants from pets and the opponent roster.

Shared across the battle service, the CLI and tests.
"""
from __future__ import annotations
from typing import Dict, List, Optional
from petsteps.game.care import care_modifiers_for
from .core import Combatant

OPPONENT_CRIT_RATE = 0.1

OPPONENTS: List[Dict[str, object]] = [
    {"id": "1", "name": "Shadow Wolf",    "element": "air",   "level": 15, "attack": 18, "defense": 12, "health": 95},
    {"id": "2", "name": "Flame Serpent",  "element": "fire",  "level": 12, "attack": 20, "defense": 10, "health": 85},
    {"id": "3", "name": "Stone Guardian", "element": "earth", "level": 18, "attack": 14, "defense": 22, "health": 120},
    {"id": "4", "name": "Tide Dragon",    "element": "water", "level": 20, "attack": 16, "defense": 18, "health": 110},
]


def combatant_from_pet(pet, *, with_care: bool = True) -> Combatant:
    """Player-side combatant at full health; care meters feed its modifiers."""
    c = Combatant(
        id=pet.id,
        name=pet.name,
        element=pet.primary_element,
        attack=pet.attack,
        defense=pet.defense,
        max_health=pet.max_health,
        crit_rate=pet.crit_rate,
        level=pet.level,
    )
    if with_care:
        c.care = care_modifiers_for(pet)
    return c


def opponent_by_id(opponent_id: str) -> Optional[Dict[str, object]]:
    for spec in OPPONENTS:
        if spec["id"] == str(opponent_id):
            return spec
    return None


def combatant_from_opponent(spec: Dict[str, object]) -> Combatant:
    return Combatant(
        id=f"opponent_{spec['id']}",
        name=str(spec["name"]),
        element=str(spec["element"]),
        attack=int(spec["attack"]),
        defense=int(spec["defense"]),
        max_health=int(spec["health"]),
        crit_rate=float(spec.get("crit_rate", OPPONENT_CRIT_RATE)),
        level=int(spec["level"]),
    )

__all__ = ["OPPONENTS","combatant_from_pet","opponent_by_id","combatant_from_opponent"]
