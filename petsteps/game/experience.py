"""Experience curve and level-up handling.

The per-level requirement is a fixed exponential curve:
    xp_for_level(level) = floor(5000 * 1.15 ** (level - 1))
Experience resets at every level-up (leftover XP carries over), so a pet's
``experience`` is always progress inside its current level.
"""
from __future__ import annotations
from functools import lru_cache
import math
from .constants import (
    MIN_LEVEL, MAX_LEVEL, XP_BASE, XP_GROWTH_RATE, EVOLUTION_LEVELS, BREEDING_LEVEL, RETIREMENT_LEVEL,
)

def clamp_level(level) -> int:
    try:
        return max(MIN_LEVEL, min(int(level), MAX_LEVEL))
    except (TypeError, ValueError):
        return MIN_LEVEL


@lru_cache(maxsize=None)
def xp_for_level(level: int) -> int:
    """XP needed to go from ``level`` to ``level + 1``."""
    return math.floor(XP_BASE * math.pow(XP_GROWTH_RATE, int(level) - 1))


def total_xp_for_level(level: int) -> int:
    """Total XP needed to reach ``level`` starting from level 1."""
    return sum(xp_for_level(i) for i in range(1, int(level)))


def evolution_stage_for_level(level: int) -> int:
    """Number of evolution levels at or below ``level`` (0-4)."""
    return sum(1 for lvl in EVOLUTION_LEVELS if level >= lvl)


def apply_experience(pet, gained: int) -> dict:
    """Apply XP to a Pet-like object (level, experience, evolution_stage fields).

    Levels up while the carried XP covers the current threshold, stopping at
    the retirement level. Returns a report; the caller decides what to do with
    a retired pet.
    """
    before_level = pet.level
    report = {"gained": gained, "from": before_level, "to": before_level,
              "evolved_to": None, "breeding_ready": False, "retired": False}
    if gained <= 0 or pet.level >= RETIREMENT_LEVEL:
        return report
    xp = pet.experience + gained
    level = pet.level
    stage = pet.evolution_stage
    while level < RETIREMENT_LEVEL:
        need = xp_for_level(level)
        if xp < need:
            break
        xp -= need
        level += 1
        if level in EVOLUTION_LEVELS:
            idx = EVOLUTION_LEVELS.index(level) + 1
            if stage < idx:
                stage = idx
                report["evolved_to"] = idx
        if level == BREEDING_LEVEL:
            report["breeding_ready"] = True
    if level >= RETIREMENT_LEVEL:
        level = RETIREMENT_LEVEL
        xp = 0
        report["retired"] = True
    pet.level = level
    pet.experience = xp
    pet.evolution_stage = stage
    report["to"] = level
    return report

__all__ = [
    "xp_for_level","total_xp_for_level","apply_experience","evolution_stage_for_level","clamp_level",
]
