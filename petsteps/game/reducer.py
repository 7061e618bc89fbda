"""Progression state machine.

``transition(state, action)`` returns the next GameState. The input is never
mutated: each handler works on a deep copy and reports whether it applied.
Invalid requests (missing consumable, wrong lifecycle stage, bad arguments)
are absorbed and the original object is returned unchanged, so callers can
detect a no-op with ``new is old``.
"""
from __future__ import annotations
import copy
import math
import random
from typing import Callable, Dict, Optional, Type

from petsteps.core.types import normalize_element
from . import actions as A
from .care import apply_care_decay, bump_meter
from .constants import (
    BASE_CRIT_RATE, BASE_STATS, BREEDING_INHERIT_RATIO, BREEDING_LEVEL, CONSUMABLE_KINDS,
    DAILY_BATTLE_LIMIT, DAILY_GOAL_REWARD, EGG_HATCH_STEPS, EVOLUTION_ATTACK_BOOST,
    EVOLUTION_DEFENSE_BOOST, EVOLUTION_HEALTH_BOOST, FEED_AMOUNT, MAX_BATTLE_ENERGY,
    MAX_DAILY_STEP_GOAL, MIN_DAILY_STEP_GOAL, PLAY_AMOUNT, RETIREMENT_LEVEL, STAT_VARIANCE,
    SUBSCRIPTION_TIERS, AI_TOKEN_COSTS, TREAT_AMOUNT, TUTORIAL_PET, TUTORIAL_PET_ID,
    TUTORIAL_STEPS_TO_RETIRE, WATER_AMOUNT, WEEKLY_GOAL_DAYS,
)
from .energy import battles_left_today, recharge
from .experience import apply_experience
from .models import Egg, GameState, Pet
from .subscription import can_afford

Handler = Callable[[GameState, object, random.Random], bool]


def _pet_id(now: float) -> str:
    return f"pet_{int(now * 1000)}"


def _has_pet(state: GameState) -> bool:
    pet = state.active_pet
    return pet is not None and not pet.is_egg and not pet.is_retired


def _is_tutorial(state: GameState) -> bool:
    return (not state.tutorial_completed and state.active_pet is not None
            and state.active_pet.id == TUTORIAL_PET_ID)


def _retire_active(state: GameState, now: float) -> None:
    pet = state.active_pet
    if pet is None:
        return
    pet.is_retired = True
    pet.is_active = False
    pet.retired_at = now
    state.retired_pets.append(pet)
    state.active_pet = None
    state.evolution_ready = False
    state.breeding_ready = False
    state.needs_new_pet = True


# ---------------------------------------------------------------------------
# Steps & experience
# ---------------------------------------------------------------------------
def _add_steps(state: GameState, action: A.AddSteps, rng: random.Random) -> bool:
    n = int(action.steps)
    if n <= 0:
        return False
    state.today_steps += n
    state.total_steps += n
    state.weekly_steps += n
    if _is_tutorial(state):
        state.tutorial_steps = min(TUTORIAL_STEPS_TO_RETIRE, state.tutorial_steps + n)
        if state.tutorial_steps >= TUTORIAL_STEPS_TO_RETIRE:
            state.active_pet.level = RETIREMENT_LEVEL
            _retire_active(state, action.now)
        return True
    if state.egg is not None:
        egg = state.egg
        egg.steps_progress = min(egg.steps_required, egg.steps_progress + n)
    return True


def _add_xp(state: GameState, action: A.AddXp, rng: random.Random) -> bool:
    if not _has_pet(state) or action.amount <= 0:
        return False
    report = apply_experience(state.active_pet, int(action.amount))
    if report["retired"]:
        _retire_active(state, action.now)
        return True
    if report["evolved_to"] is not None:
        state.evolution_ready = True
    if report["breeding_ready"]:
        state.breeding_ready = True
    return True


# ---------------------------------------------------------------------------
# Care
# ---------------------------------------------------------------------------
def _feed(state: GameState, action: A.FeedPet, rng: random.Random) -> bool:
    if not _has_pet(state) or state.consumable("food") <= 0:
        return False
    pet = state.active_pet
    pet.hunger = bump_meter(pet.hunger, FEED_AMOUNT)
    pet.last_fed = action.now
    state.consumables["food"] -= 1
    return True


def _water(state: GameState, action: A.WaterPet, rng: random.Random) -> bool:
    if not _has_pet(state) or state.consumable("water") <= 0:
        return False
    pet = state.active_pet
    pet.thirst = bump_meter(pet.thirst, WATER_AMOUNT)
    pet.last_watered = action.now
    state.consumables["water"] -= 1
    return True


def _play(state: GameState, action: A.PlayWithPet, rng: random.Random) -> bool:
    if not _has_pet(state):
        return False
    pet = state.active_pet
    pet.happiness = bump_meter(pet.happiness, PLAY_AMOUNT)
    pet.last_played = action.now
    return True


def _treat(state: GameState, action: A.UseTreat, rng: random.Random) -> bool:
    if not _has_pet(state) or state.consumable("treat") <= 0:
        return False
    pet = state.active_pet
    pet.hunger = bump_meter(pet.hunger, TREAT_AMOUNT)
    pet.thirst = bump_meter(pet.thirst, TREAT_AMOUNT)
    pet.happiness = bump_meter(pet.happiness, TREAT_AMOUNT)
    pet.last_fed = pet.last_watered = pet.last_played = action.now
    state.consumables["treat"] -= 1
    return True


def _update_care(state: GameState, action: A.UpdateCareLevels, rng: random.Random) -> bool:
    if not _has_pet(state):
        return False
    apply_care_decay(state.active_pet, action.now)
    return True


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------
def _create(state: GameState, action: A.CreatePet, rng: random.Random) -> bool:
    element = normalize_element(action.element)
    name = (action.name or "").strip()
    if state.active_pet is not None or state.egg is not None or element is None or not name:
        return False
    base = BASE_STATS[element]
    def variance() -> int:
        return rng.randint(-STAT_VARIANCE, STAT_VARIANCE)
    health = base["health"] + variance()
    state.active_pet = Pet(
        id=_pet_id(action.now),
        name=name,
        primary_element=element,
        attack=base["attack"] + variance(),
        defense=base["defense"] + variance(),
        health=health,
        max_health=health,
        crit_rate=BASE_CRIT_RATE,
        last_fed=action.now,
        last_watered=action.now,
        last_played=action.now,
        image_url=action.image_url,
        is_template=bool(action.is_template),
        template_type=action.template_type,
        created_at=action.now,
    )
    state.tutorial_completed = True
    state.needs_new_pet = False
    state.evolution_ready = False
    state.breeding_ready = False
    return True


def _evolve(state: GameState, action: A.EvolvePet, rng: random.Random) -> bool:
    if not _has_pet(state) or not state.evolution_ready:
        return False
    pet = state.active_pet
    pet.attack += math.floor(pet.attack * EVOLUTION_ATTACK_BOOST)
    pet.defense += math.floor(pet.defense * EVOLUTION_DEFENSE_BOOST)
    pet.max_health += math.floor(pet.max_health * EVOLUTION_HEALTH_BOOST)
    pet.health = pet.max_health
    if action.update_visual and action.image_url:
        pet.image_url = action.image_url
    state.evolution_ready = False
    return True


def _breed(state: GameState, action: A.BreedPet, rng: random.Random) -> bool:
    partner_element = normalize_element(action.partner_element)
    if not _has_pet(state) or state.egg is not None or partner_element is None:
        return False
    mom = state.active_pet
    if mom.level < BREEDING_LEVEL:
        return False
    stats = action.partner_stats or {}
    def inherit(mine: int, theirs) -> int:
        return math.floor(mine * BREEDING_INHERIT_RATIO + int(theirs or 0) * BREEDING_INHERIT_RATIO)
    secondary = None
    if partner_element != mom.primary_element and action.keep_secondary_element:
        secondary = partner_element
    egg = Egg(
        primary_element=mom.primary_element,
        secondary_element=secondary,
        generation=mom.generation + 1,
        parent_mom_id=mom.id,
        parent_dad_id=str(action.partner_id),
        inherited_stats={
            "attack": inherit(mom.attack, stats.get("attack")),
            "defense": inherit(mom.defense, stats.get("defense")),
            "health": inherit(mom.max_health, stats.get("health")),
        },
        steps_required=EGG_HATCH_STEPS,
        tracked_parent_elements=[mom.primary_element, partner_element],
    )
    _retire_active(state, action.now)
    # Breeding is a planned handover, not a "choose a new pet" prompt
    state.needs_new_pet = False
    state.egg = egg
    return True


def _hatch(state: GameState, action: A.HatchEgg, rng: random.Random) -> bool:
    egg = state.egg
    name = (action.name or "").strip()
    if egg is None or not egg.hatch_ready or state.active_pet is not None or not name:
        return False
    inherited = egg.inherited_stats
    health = max(1, int(inherited.get("health", 1)))
    state.active_pet = Pet(
        id=_pet_id(action.now),
        name=name,
        primary_element=egg.primary_element,
        secondary_element=egg.secondary_element,
        attack=int(inherited.get("attack", 0)),
        defense=int(inherited.get("defense", 0)),
        health=health,
        max_health=health,
        crit_rate=BASE_CRIT_RATE,
        last_fed=action.now,
        last_watered=action.now,
        last_played=action.now,
        image_url=action.image_url,
        generation=egg.generation,
        parent_mom_id=egg.parent_mom_id,
        parent_dad_id=egg.parent_dad_id,
        created_at=action.now,
    )
    state.egg = None
    state.needs_new_pet = False
    return True


def _retire(state: GameState, action: A.RetirePet, rng: random.Random) -> bool:
    if state.active_pet is None:
        return False
    _retire_active(state, action.now)
    return True


# ---------------------------------------------------------------------------
# Inventory, tutorial, energy & daily loop
# ---------------------------------------------------------------------------
def _add_consumable(state: GameState, action: A.AddConsumable, rng: random.Random) -> bool:
    if action.kind not in CONSUMABLE_KINDS or action.amount <= 0:
        return False
    state.consumables[action.kind] = state.consumable(action.kind) + int(action.amount)
    return True


def _start_tutorial(state: GameState, action: A.StartTutorial, rng: random.Random) -> bool:
    if state.tutorial_completed or state.active_pet is not None or state.egg is not None:
        return False
    t = TUTORIAL_PET
    state.active_pet = Pet(
        id=TUTORIAL_PET_ID,
        name=t["name"],
        primary_element=t["element"],
        level=t["level"],
        attack=t["attack"],
        defense=t["defense"],
        health=t["health"],
        max_health=t["health"],
        crit_rate=t["crit_rate"],
        evolution_stage=t["evolution_stage"],
        last_fed=action.now,
        last_watered=action.now,
        last_played=action.now,
        is_template=True,
        template_type=t["template_type"],
        created_at=action.now,
    )
    state.tutorial_steps = 0
    return True


def _complete_tutorial(state: GameState, action: A.CompleteTutorial, rng: random.Random) -> bool:
    if state.tutorial_completed:
        return False
    state.tutorial_completed = True
    return True


def _recharge(state: GameState, action: A.RechargeEnergy, rng: random.Random) -> bool:
    energy, last_ts = recharge(state.battle_energy, state.last_energy_recharge, action.now)
    if (energy, last_ts) == (state.battle_energy, state.last_energy_recharge):
        return False
    state.battle_energy, state.last_energy_recharge = energy, last_ts
    return True


def _energy_boost(state: GameState, action: A.UseEnergyBoost, rng: random.Random) -> bool:
    if state.consumable("energy_boost") <= 0 or state.battle_energy >= MAX_BATTLE_ENERGY:
        return False
    state.consumables["energy_boost"] -= 1
    state.battle_energy += 1
    return True


def _use_battle(state: GameState, action: A.UseBattle, rng: random.Random) -> bool:
    if not _has_pet(state) or state.battle_energy <= 0:
        return False
    if battles_left_today(state.daily_battles_used, state.last_battle_date, action.today, DAILY_BATTLE_LIMIT) <= 0:
        return False
    if state.battle_energy >= MAX_BATTLE_ENERGY:
        # Recharge clock starts when the pool stops being full
        state.last_energy_recharge = action.now
    state.battle_energy -= 1
    if state.last_battle_date == action.today:
        state.daily_battles_used += 1
    else:
        state.daily_battles_used = 1
    state.last_battle_date = action.today
    return True


def _new_day(state: GameState, action: A.StartNewDay, rng: random.Random) -> bool:
    if not action.today or action.today == state.current_day:
        return False
    state.current_day = action.today
    state.today_steps = 0
    state.daily_goal_claimed = False
    if action.new_week:
        state.weekly_steps = 0
    return True


def _claim_goal(state: GameState, action: A.ClaimDailyGoal, rng: random.Random) -> bool:
    if state.daily_goal_claimed or state.today_steps < state.daily_step_goal:
        return False
    for kind in DAILY_GOAL_REWARD["consumables"]:
        state.consumables[kind] = state.consumable(kind) + 1
    state.battle_energy = min(MAX_BATTLE_ENERGY, state.battle_energy + int(DAILY_GOAL_REWARD["bonus_energy"]))
    state.daily_goal_claimed = True
    return True


def _set_goal(state: GameState, action: A.SetStepGoal, rng: random.Random) -> bool:
    daily = max(MIN_DAILY_STEP_GOAL, min(MAX_DAILY_STEP_GOAL, int(action.daily)))
    weekly = daily * WEEKLY_GOAL_DAYS
    if (daily, weekly) == (state.daily_step_goal, state.weekly_step_goal):
        return False
    state.daily_step_goal, state.weekly_step_goal = daily, weekly
    return True


def _set_tier(state: GameState, action: A.SetSubscriptionTier, rng: random.Random) -> bool:
    if action.tier not in SUBSCRIPTION_TIERS or action.tier == state.subscription_tier:
        return False
    state.subscription_tier = action.tier
    # The monthly allowance replaces the balance
    state.ai_tokens = int(SUBSCRIPTION_TIERS[action.tier]["ai_tokens_per_month"])
    return True


def _spend_tokens(state: GameState, action: A.SpendAiTokens, rng: random.Random) -> bool:
    if not can_afford(state.subscription_tier, state.ai_tokens, action.operation):
        return False
    state.ai_tokens -= AI_TOKEN_COSTS[action.operation]
    return True


_HANDLERS: Dict[Type, Handler] = {
    A.AddSteps: _add_steps,
    A.AddXp: _add_xp,
    A.FeedPet: _feed,
    A.WaterPet: _water,
    A.PlayWithPet: _play,
    A.UseTreat: _treat,
    A.UpdateCareLevels: _update_care,
    A.CreatePet: _create,
    A.EvolvePet: _evolve,
    A.BreedPet: _breed,
    A.HatchEgg: _hatch,
    A.RetirePet: _retire,
    A.AddConsumable: _add_consumable,
    A.StartTutorial: _start_tutorial,
    A.CompleteTutorial: _complete_tutorial,
    A.RechargeEnergy: _recharge,
    A.UseEnergyBoost: _energy_boost,
    A.UseBattle: _use_battle,
    A.StartNewDay: _new_day,
    A.ClaimDailyGoal: _claim_goal,
    A.SetStepGoal: _set_goal,
    A.SetSubscriptionTier: _set_tier,
    A.SpendAiTokens: _spend_tokens,
}


def transition(state: GameState, action: A.GameAction, *, rng: Optional[random.Random] = None) -> GameState:
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return state
    nxt = copy.deepcopy(state)
    if not handler(nxt, action, rng or random.Random()):
        return state
    return nxt

__all__ = ["transition"]
