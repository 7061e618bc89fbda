"""Battle mechanics: element chart, crit roll and the per-attack damage formula.

damage = max(1, floor((attack_eff - defense_eff * 0.5) * element * crit))

where attack_eff / defense_eff / crit rate include the attacker's and the
defender's care modifiers for this battle. Randomness only enters through the
crit roll, drawn from the injected ``random.Random``.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
import math
import random

from petsteps.game.care import CareModifiers, NEUTRAL_CARE
from petsteps.game.constants import CRIT_MULTIPLIER, DEFENSE_WEIGHT

# attacker -> defender -> multiplier
ELEMENT_EFFECTIVENESS: Dict[str, Dict[str, float]] = {
    "fire":  {"fire": 1.0, "water": 0.5, "earth": 1.5, "air": 1.0},
    "water": {"fire": 1.5, "water": 1.0, "earth": 0.5, "air": 1.0},
    "earth": {"fire": 0.5, "water": 1.5, "earth": 1.0, "air": 0.5},
    "air":   {"fire": 1.0, "water": 1.0, "earth": 1.5, "air": 1.0},
}

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------
@dataclass
class Combatant:
    id: str
    name: str
    element: str
    attack: int
    defense: int
    max_health: int
    crit_rate: float = 0.05
    level: int = 1
    care: CareModifiers = NEUTRAL_CARE
    current_health: Optional[int] = None  # lazily initialized to max health

    def __post_init__(self):
        self.max_health = max(1, int(self.max_health))
        if self.current_health is None or self.current_health > self.max_health:
            self.current_health = int(self.max_health)
        if self.current_health < 0:
            self.current_health = 0

    @property
    def effective_attack(self) -> float:
        return self.attack * self.care.attack_mod

    @property
    def effective_defense(self) -> float:
        return self.defense * self.care.defense_mod

    @property
    def effective_crit_rate(self) -> float:
        return self.crit_rate + self.care.crit_mod

    def is_down(self) -> bool:
        return (self.current_health or 0) <= 0


@dataclass(frozen=True)
class BattleTurn:
    turn: int
    attacker_id: str
    defender_id: str
    damage: int
    is_crit: bool
    attacker_health_after: int
    defender_health_after: int

    def to_json(self) -> Dict[str, Any]:
        return {
            "turn": self.turn,
            "attacker_id": self.attacker_id,
            "defender_id": self.defender_id,
            "damage": self.damage,
            "is_crit": self.is_crit,
            "attacker_health_after": self.attacker_health_after,
            "defender_health_after": self.defender_health_after,
        }


class BattleCore:
    def __init__(self, rng: Optional[random.Random] = None, message_cb: Optional[Callable[[str], None]] = None):
        self.rng = rng or random.Random()
        self.message_cb = message_cb

    def _msg(self, text: str):
        if self.message_cb:
            self.message_cb(text)

    # ------------------------------------------------------------------
    # Mechanics
    # ------------------------------------------------------------------
    def get_effectiveness(self, attacker_element: str, defender_element: str) -> float:
        return ELEMENT_EFFECTIVENESS.get(attacker_element.lower(), {}).get(defender_element.lower(), 1.0)

    def roll_crit(self, crit_rate: float) -> bool:
        return self.rng.random() < crit_rate

    def calc_damage(self, attacker: Combatant, defender: Combatant) -> Dict[str, Any]:
        effectiveness = self.get_effectiveness(attacker.element, defender.element)
        crit = self.roll_crit(attacker.effective_crit_rate)
        raw = (attacker.effective_attack - defender.effective_defense * DEFENSE_WEIGHT) * effectiveness
        if crit:
            raw *= CRIT_MULTIPLIER
        damage = max(1, math.floor(raw))
        return {"damage": damage, "crit": crit, "effectiveness": effectiveness}

    def apply_damage(self, target: Combatant, amount: int):
        old = int(target.current_health or 0)
        target.current_health = max(0, old - int(amount))
        if target.current_health <= 0:
            self._msg(f"{target.name} fainted!")

    def attack(self, attacker: Combatant, defender: Combatant, turn: int) -> BattleTurn:
        """Resolve one attack and return its log entry."""
        res = self.calc_damage(attacker, defender)
        self._msg(f"{attacker.name} attacks {defender.name}!")
        if res["crit"]:
            self._msg("A critical hit!")
        if res["effectiveness"] > 1:
            self._msg("It's super effective!")
        elif res["effectiveness"] < 1:
            self._msg("It's not very effective...")
        self.apply_damage(defender, res["damage"])
        return BattleTurn(
            turn=turn,
            attacker_id=attacker.id,
            defender_id=defender.id,
            damage=res["damage"],
            is_crit=res["crit"],
            attacker_health_after=int(attacker.current_health or 0),
            defender_health_after=int(defender.current_health or 0),
        )

__all__ = ["ELEMENT_EFFECTIVENESS","Combatant","BattleTurn","BattleCore"]
