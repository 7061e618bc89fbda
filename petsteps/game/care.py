"""Care meters: time-based decay and the battle modifiers they produce."""
from __future__ import annotations
from dataclasses import dataclass
import math
from .constants import CARE_MAX, CARE_DECAY_PER_HOUR, CARE_WARNING_THRESHOLD, CARE_CRITICAL_THRESHOLD

SECONDS_PER_HOUR = 3600.0


@dataclass(frozen=True)
class CareModifiers:
    attack_mod: float = 1.0
    defense_mod: float = 1.0
    crit_mod: float = 0.0


NEUTRAL_CARE = CareModifiers()


def care_modifiers(happiness: float, hunger: float, thirst: float) -> CareModifiers:
    # happiness -> attack [0.5, 1.5], hunger -> defense [0.5, 1.0], thirst -> crit bonus [0, 0.1]
    return CareModifiers(
        attack_mod=0.5 + happiness / 100,
        defense_mod=0.5 + hunger / 200,
        crit_mod=thirst / 1000,
    )


def care_modifiers_for(pet) -> CareModifiers:
    return care_modifiers(pet.happiness, pet.hunger, pet.thirst)


def decayed_meter(last_ts: float, now: float, rate_per_hour: float) -> int:
    hours = max(0.0, (now - last_ts) / SECONDS_PER_HOUR)
    return max(0, CARE_MAX - math.floor(hours * rate_per_hour))


def apply_care_decay(pet, now: float) -> None:
    """Recompute all three meters from their last-serviced timestamps."""
    pet.hunger = decayed_meter(pet.last_fed, now, CARE_DECAY_PER_HOUR["hunger"])
    pet.thirst = decayed_meter(pet.last_watered, now, CARE_DECAY_PER_HOUR["thirst"])
    pet.happiness = decayed_meter(pet.last_played, now, CARE_DECAY_PER_HOUR["happiness"])


def meter_status(value: int) -> str:
    if value <= CARE_CRITICAL_THRESHOLD:
        return "critical"
    if value <= CARE_WARNING_THRESHOLD:
        return "warning"
    return "ok"


def bump_meter(value: int, amount: int) -> int:
    return max(0, min(CARE_MAX, value + amount))

__all__ = [
    "CareModifiers","NEUTRAL_CARE","care_modifiers","care_modifiers_for","decayed_meter",
    "apply_care_decay","meter_status","bump_meter",
]
