"""Battle energy: a point every 30 minutes up to a cap of 5.

``last_ts`` only moves forward by whole recharge periods, so ticking at
irregular intervals gives the same result as ticking once.
"""
from __future__ import annotations
from typing import Tuple
import math
from .constants import MAX_BATTLE_ENERGY, ENERGY_RECHARGE_MINUTES

PERIOD_SECONDS = ENERGY_RECHARGE_MINUTES * 60


def recharge(energy: int, last_ts: float, now: float, *, max_energy: int = MAX_BATTLE_ENERGY) -> Tuple[int, float]:
    if energy >= max_energy:
        return max_energy, max(last_ts, now)
    elapsed = now - last_ts
    if elapsed <= 0:
        return energy, last_ts
    periods = int(elapsed // PERIOD_SECONDS)
    if periods <= 0:
        return energy, last_ts
    new_energy = min(max_energy, energy + periods)
    if new_energy >= max_energy:
        return max_energy, now
    return new_energy, last_ts + periods * PERIOD_SECONDS


def minutes_until_full(energy: int, last_ts: float, now: float, *, max_energy: int = MAX_BATTLE_ENERGY) -> int:
    if energy >= max_energy:
        return 0
    into_period = max(0.0, now - last_ts) % PERIOD_SECONDS
    seconds = (max_energy - energy) * PERIOD_SECONDS - into_period
    return max(0, math.ceil(seconds / 60))


def battles_left_today(used: int, last_battle_date: str, today: str, limit: int) -> int:
    if last_battle_date != today:
        return limit
    return max(0, limit - used)

__all__ = ["recharge","minutes_until_full","battles_left_today","PERIOD_SECONDS"]
