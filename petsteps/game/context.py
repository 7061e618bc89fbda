"""Session object owning the single GameState.

Every change goes through ``dispatch`` which runs the pure transition, swaps
the new state in, logs the outcome and autosaves when enabled.
"""
from __future__ import annotations
from datetime import date
from typing import Optional
import random

from petsteps.core.logging import logger
from petsteps.system.save import save_game, load_latest
from petsteps.system.settings import Settings
from . import actions as A
from .constants import DAILY_GOAL_REWARD, STEPS_PER_XP, TUTORIAL_PET_ID
from .models import GameState, Pet
from .reducer import transition
from .subscription import can_update_visual, keeps_secondary_element


def _new_week(previous: str, today: str) -> bool:
    if not previous:
        return False
    try:
        before = date.fromisoformat(previous).isocalendar()[:2]
        after = date.fromisoformat(today).isocalendar()[:2]
    except ValueError:
        return False
    return before != after


class GameContext:
    def __init__(self, settings: Optional[Settings] = None, state: Optional[GameState] = None,
                 rng: Optional[random.Random] = None):
        self.settings = settings or Settings.defaults(autosave=False)
        self.state = state or GameState()
        self.rng = rng or random.Random()
        self._autosave_suspended = False

    # --- Dispatch ---
    def dispatch(self, action: A.GameAction) -> bool:
        """Apply one action. Returns False when the action was a no-op."""
        before = self.state
        after = transition(before, action, rng=self.rng)
        name = type(action).__name__
        if after is before:
            logger.debug("ActionIgnored", action=name)
            return False
        self.state = after
        logger.debug("ActionApplied", action=name)
        self._log_lifecycle(before, after)
        if self.settings.data.autosave:
            self._autosave()
        return True

    def _log_lifecycle(self, before: GameState, after: GameState):
        if len(after.retired_pets) > len(before.retired_pets):
            pet = after.retired_pets[-1]
            logger.info("PetRetired", pet=pet.id, level=pet.level, generation=pet.generation)
        if before.egg is not None and after.egg is None and after.active_pet is not None:
            logger.info("EggHatched", pet=after.active_pet.id, generation=after.active_pet.generation)
        if after.evolution_ready and not before.evolution_ready:
            logger.info("EvolutionReady", stage=after.active_pet.evolution_stage if after.active_pet else None)
        if after.breeding_ready and not before.breeding_ready:
            logger.info("BreedingReady")

    # --- Autosave ---
    def _autosave(self):
        if self._autosave_suspended:
            return
        save_game(self.state, self.settings.data.save_dir or None)

    def suspend_autosave(self):
        self._autosave_suspended = True

    def resume_autosave(self, flush: bool = True):
        was = self._autosave_suspended
        self._autosave_suspended = False
        if flush and was and self.settings.data.autosave:
            self._autosave()

    def save(self):
        return save_game(self.state, self.settings.data.save_dir or None)

    def load(self) -> bool:
        gs = load_latest(self.settings.data.save_dir or None)
        if gs is None:
            return False
        self.state = gs
        return True

    # --- Compound operations ---
    def add_steps(self, steps: int, now: float) -> bool:
        """Record steps; the active pet also earns one XP per step.

        No XP is granted while an egg is incubating or during the tutorial.
        """
        pet = self.state.active_pet
        tutorial = pet is not None and pet.id == TUTORIAL_PET_ID
        if not self.dispatch(A.AddSteps(steps, now=now)):
            return False
        if self.state.egg is None and not tutorial and self.state.active_pet is not None:
            self.dispatch(A.AddXp(steps // STEPS_PER_XP, now=now))
        return True

    def tick(self, now: float, today: Optional[str] = None):
        """Advance clocks: day rollover, care decay and energy recharge."""
        self.suspend_autosave()
        try:
            if today:
                self.dispatch(A.StartNewDay(today=today, new_week=_new_week(self.state.current_day, today)))
            self.dispatch(A.UpdateCareLevels(now))
            self.dispatch(A.RechargeEnergy(now))
        finally:
            self.resume_autosave(flush=True)

    def claim_daily_goal(self, now: float) -> bool:
        if not self.dispatch(A.ClaimDailyGoal(now)):
            return False
        self.dispatch(A.AddXp(int(DAILY_GOAL_REWARD["xp_bonus"]), now=now))
        return True

    def evolve(self, image_url: Optional[str] = None) -> bool:
        return self.dispatch(A.EvolvePet(image_url=image_url,
                                         update_visual=can_update_visual(self.state.subscription_tier)))

    def breed(self, partner: Pet, now: float) -> bool:
        stats = {"attack": partner.attack, "defense": partner.defense, "health": partner.max_health}
        return self.dispatch(A.BreedPet(
            partner_id=partner.id,
            partner_element=partner.primary_element,
            partner_stats=stats,
            now=now,
            keep_secondary_element=keeps_secondary_element(self.state.subscription_tier),
        ))

__all__ = ["GameContext"]
