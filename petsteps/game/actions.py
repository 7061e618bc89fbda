"""Tagged actions accepted by :func:`petsteps.game.reducer.transition`.

Every action is an immutable record. Actions that depend on wall-clock time
carry ``now`` (epoch seconds) or ``today`` (a calendar date string) so the
reducer never reads a clock itself.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Union


@dataclass(frozen=True)
class AddSteps:
    steps: int
    now: float = 0.0


@dataclass(frozen=True)
class AddXp:
    amount: int
    now: float = 0.0


@dataclass(frozen=True)
class FeedPet:
    now: float


@dataclass(frozen=True)
class WaterPet:
    now: float


@dataclass(frozen=True)
class PlayWithPet:
    now: float


@dataclass(frozen=True)
class UseTreat:
    now: float


@dataclass(frozen=True)
class CreatePet:
    element: str
    name: str
    now: float
    is_template: bool = False
    template_type: Optional[str] = None
    image_url: Optional[str] = None


@dataclass(frozen=True)
class EvolvePet:
    image_url: Optional[str] = None
    # Entitlement decided outside the core (subscription tier)
    update_visual: bool = False


@dataclass(frozen=True)
class BreedPet:
    partner_id: str
    partner_element: str
    partner_stats: Dict[str, int] = field(default_factory=dict)  # attack / defense / health
    now: float = 0.0
    keep_secondary_element: bool = True


@dataclass(frozen=True)
class HatchEgg:
    name: str
    now: float
    image_url: Optional[str] = None


@dataclass(frozen=True)
class UpdateCareLevels:
    now: float


@dataclass(frozen=True)
class RetirePet:
    now: float


@dataclass(frozen=True)
class AddConsumable:
    kind: str
    amount: int = 1


@dataclass(frozen=True)
class StartTutorial:
    now: float


@dataclass(frozen=True)
class CompleteTutorial:
    pass


@dataclass(frozen=True)
class RechargeEnergy:
    now: float


@dataclass(frozen=True)
class UseEnergyBoost:
    pass


@dataclass(frozen=True)
class UseBattle:
    now: float
    today: str


@dataclass(frozen=True)
class StartNewDay:
    today: str
    new_week: bool = False


@dataclass(frozen=True)
class ClaimDailyGoal:
    now: float = 0.0


@dataclass(frozen=True)
class SetStepGoal:
    daily: int


@dataclass(frozen=True)
class SetSubscriptionTier:
    tier: str


@dataclass(frozen=True)
class SpendAiTokens:
    operation: str


GameAction = Union[
    AddSteps, AddXp, FeedPet, WaterPet, PlayWithPet, UseTreat, CreatePet, EvolvePet,
    BreedPet, HatchEgg, UpdateCareLevels, RetirePet, AddConsumable, StartTutorial,
    CompleteTutorial, RechargeEnergy, UseEnergyBoost, UseBattle, StartNewDay,
    ClaimDailyGoal, SetStepGoal, SetSubscriptionTier, SpendAiTokens,
]

__all__ = [
    "AddSteps","AddXp","FeedPet","WaterPet","PlayWithPet","UseTreat","CreatePet","EvolvePet",
    "BreedPet","HatchEgg","UpdateCareLevels","RetirePet","AddConsumable","StartTutorial",
    "CompleteTutorial","RechargeEnergy","UseEnergyBoost","UseBattle","StartNewDay",
    "ClaimDailyGoal","SetStepGoal","SetSubscriptionTier","SpendAiTokens","GameAction",
]
