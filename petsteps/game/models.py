"""Game records: Pet, Egg and the GameState aggregate.

All three serialize to plain JSON dicts. ``from_json`` backfills missing
fields so older saves keep loading.
"""
from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional

from petsteps.core.errors import ValidationError
from petsteps.core.logging import logger
from petsteps.core.types import normalize_element
from .constants import (
    CARE_MAX, DEFAULT_DAILY_STEP_GOAL, EGG_HATCH_STEPS, MAX_BATTLE_ENERGY,
    STARTING_CONSUMABLES, SUBSCRIPTION_TIERS, WEEKLY_GOAL_DAYS,
)
from .experience import clamp_level


def _element_or_raise(value: Any, what: str) -> str:
    element = normalize_element(value)
    if element is None:
        raise ValidationError(f"{what} must be one of fire/water/earth/air, got {value!r}")
    return element


def _clamp_meter(value: Any) -> int:
    try:
        return max(0, min(CARE_MAX, int(value)))
    except (TypeError, ValueError, OverflowError):
        return CARE_MAX


@dataclass
class Pet:
    id: str
    name: str
    primary_element: str
    secondary_element: Optional[str] = None
    level: int = 1
    experience: int = 0
    evolution_stage: int = 0
    attack: int = 10
    defense: int = 10
    health: int = 100
    max_health: int = 100
    crit_rate: float = 0.05
    happiness: int = CARE_MAX
    hunger: int = CARE_MAX
    thirst: int = CARE_MAX
    last_fed: float = 0.0
    last_watered: float = 0.0
    last_played: float = 0.0
    image_url: Optional[str] = None
    is_egg: bool = False
    generation: int = 1
    parent_mom_id: Optional[str] = None
    parent_dad_id: Optional[str] = None
    is_template: bool = False
    template_type: Optional[str] = None
    is_active: bool = True
    is_retired: bool = False
    retired_at: Optional[float] = None
    created_at: float = 0.0

    @property
    def elements(self) -> tuple:
        return (self.primary_element, self.secondary_element)

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Pet":
        if "id" not in data or "primary_element" not in data:
            raise ValidationError("pet record needs id and primary_element")
        secondary = data.get("secondary_element")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            primary_element=_element_or_raise(data["primary_element"], "primary_element"),
            secondary_element=_element_or_raise(secondary, "secondary_element") if secondary else None,
            level=clamp_level(data.get("level", 1)),
            experience=max(0, int(data.get("experience", 0))),
            evolution_stage=max(0, min(4, int(data.get("evolution_stage", 0)))),
            attack=int(data.get("attack", 10)),
            defense=int(data.get("defense", 10)),
            health=int(data.get("health", data.get("max_health", 100))),
            max_health=int(data.get("max_health", 100)),
            crit_rate=float(data.get("crit_rate", 0.05)),
            happiness=_clamp_meter(data.get("happiness", CARE_MAX)),
            hunger=_clamp_meter(data.get("hunger", CARE_MAX)),
            thirst=_clamp_meter(data.get("thirst", CARE_MAX)),
            last_fed=float(data.get("last_fed", 0.0)),
            last_watered=float(data.get("last_watered", 0.0)),
            last_played=float(data.get("last_played", 0.0)),
            image_url=data.get("image_url"),
            is_egg=bool(data.get("is_egg", False)),
            generation=max(1, int(data.get("generation", 1))),
            parent_mom_id=data.get("parent_mom_id"),
            parent_dad_id=data.get("parent_dad_id"),
            is_template=bool(data.get("is_template", False)),
            template_type=data.get("template_type"),
            is_active=bool(data.get("is_active", True)),
            is_retired=bool(data.get("is_retired", False)),
            retired_at=data.get("retired_at"),
            created_at=float(data.get("created_at", 0.0)),
        )


@dataclass
class Egg:
    primary_element: str
    generation: int
    parent_mom_id: str
    parent_dad_id: str
    inherited_stats: Dict[str, int] = field(default_factory=dict)  # attack / defense / health
    secondary_element: Optional[str] = None
    steps_required: int = EGG_HATCH_STEPS
    steps_progress: int = 0
    # Both parents' elements, kept even when the secondary element was dropped
    tracked_parent_elements: List[str] = field(default_factory=list)

    @property
    def hatch_ready(self) -> bool:
        return self.steps_progress >= self.steps_required

    @property
    def steps_remaining(self) -> int:
        return max(0, self.steps_required - self.steps_progress)

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Egg":
        secondary = data.get("secondary_element")
        stats = dict(data.get("inherited_stats", {}))
        return cls(
            primary_element=_element_or_raise(data.get("primary_element"), "primary_element"),
            secondary_element=_element_or_raise(secondary, "secondary_element") if secondary else None,
            generation=max(1, int(data.get("generation", 2))),
            parent_mom_id=str(data.get("parent_mom_id", "")),
            parent_dad_id=str(data.get("parent_dad_id", "")),
            inherited_stats={k: int(stats.get(k, 0)) for k in ("attack", "defense", "health")},
            steps_required=max(1, int(data.get("steps_required", EGG_HATCH_STEPS))),
            steps_progress=max(0, int(data.get("steps_progress", 0))),
            tracked_parent_elements=[e for e in (normalize_element(x) for x in data.get("tracked_parent_elements", [])) if e],
        )


@dataclass
class GameState:
    active_pet: Optional[Pet] = None
    retired_pets: List[Pet] = field(default_factory=list)
    egg: Optional[Egg] = None
    consumables: Dict[str, int] = field(default_factory=lambda: dict(STARTING_CONSUMABLES))
    # Steps
    today_steps: int = 0
    total_steps: int = 0
    weekly_steps: int = 0
    daily_step_goal: int = DEFAULT_DAILY_STEP_GOAL
    weekly_step_goal: int = DEFAULT_DAILY_STEP_GOAL * WEEKLY_GOAL_DAYS
    daily_goal_claimed: bool = False
    current_day: str = ""
    # Battles
    battle_energy: int = MAX_BATTLE_ENERGY
    last_energy_recharge: float = 0.0
    daily_battles_used: int = 0
    last_battle_date: str = ""
    # Account
    subscription_tier: str = "free"
    ai_tokens: int = 0
    tutorial_completed: bool = False
    tutorial_steps: int = 0
    # Prompts the front end reacts to
    evolution_ready: bool = False
    breeding_ready: bool = False
    needs_new_pet: bool = False
    version: int = 1

    def consumable(self, kind: str) -> int:
        return int(self.consumables.get(kind, 0))

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "GameState":
        # Backward-compatible fill; broken nested records are dropped, not fatal
        active = None
        if data.get("active_pet"):
            try:
                active = Pet.from_json(data["active_pet"])
            except (ValidationError, TypeError, ValueError, OverflowError) as e:
                logger.warn("ActivePetDropped", error=str(e))
        retired: List[Pet] = []
        for raw in data.get("retired_pets", []) or []:
            try:
                retired.append(Pet.from_json(raw))
            except (ValidationError, TypeError, ValueError, OverflowError) as e:
                logger.warn("RetiredPetDropped", error=str(e))
        egg = None
        if data.get("egg"):
            try:
                egg = Egg.from_json(data["egg"])
            except (ValidationError, TypeError, ValueError, OverflowError) as e:
                logger.warn("EggDropped", error=str(e))
        if active is not None and egg is not None:
            # Only one of them may drive progress; the egg wins because the pet was already bred
            logger.warn("ActivePetAndEggBothSet", pet=active.id)
            active = None
        consumables = dict(STARTING_CONSUMABLES)
        for kind, count in dict(data.get("consumables", {})).items():
            if kind in consumables:
                consumables[kind] = max(0, int(count))
        tier = data.get("subscription_tier", "free")
        daily_goal = int(data.get("daily_step_goal", DEFAULT_DAILY_STEP_GOAL))
        return cls(
            active_pet=active,
            retired_pets=retired,
            egg=egg,
            consumables=consumables,
            today_steps=max(0, int(data.get("today_steps", 0))),
            total_steps=max(0, int(data.get("total_steps", 0))),
            weekly_steps=max(0, int(data.get("weekly_steps", 0))),
            daily_step_goal=daily_goal,
            weekly_step_goal=int(data.get("weekly_step_goal", daily_goal * WEEKLY_GOAL_DAYS)),
            daily_goal_claimed=bool(data.get("daily_goal_claimed", False)),
            current_day=str(data.get("current_day", "")),
            battle_energy=max(0, min(MAX_BATTLE_ENERGY, int(data.get("battle_energy", MAX_BATTLE_ENERGY)))),
            last_energy_recharge=float(data.get("last_energy_recharge", 0.0)),
            daily_battles_used=max(0, int(data.get("daily_battles_used", 0))),
            last_battle_date=str(data.get("last_battle_date", "")),
            subscription_tier=tier if tier in SUBSCRIPTION_TIERS else "free",
            ai_tokens=max(0, int(data.get("ai_tokens", 0))),
            tutorial_completed=bool(data.get("tutorial_completed", False)),
            tutorial_steps=max(0, int(data.get("tutorial_steps", 0))),
            evolution_ready=bool(data.get("evolution_ready", False)),
            breeding_ready=bool(data.get("breeding_ready", False)),
            needs_new_pet=bool(data.get("needs_new_pet", False)),
            version=int(data.get("version", 1)),
        )

__all__ = ["Pet", "Egg", "GameState"]
