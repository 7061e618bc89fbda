"""Battle service tying the resolver to the game context.

Checks battle energy and the daily limit, resolves the fight with the active
pet's care modifiers and awards experience for a win.
"""
from __future__ import annotations
from typing import Optional
import random

from petsteps.core.logging import logger
from petsteps.game.actions import AddXp, RechargeEnergy, UseBattle
from petsteps.game.constants import BATTLE_XP_PER_OPPONENT_LEVEL
from .core import BattleCore
from .factory import combatant_from_opponent, combatant_from_pet, opponent_by_id
from .session import BattleResult, BattleSession


class BattleService:
    def __init__(self, rng: Optional[random.Random] = None):
        self.core = BattleCore(rng)

    def challenge(self, ctx, opponent_id: str, *, now: float, today: str) -> Optional[BattleResult]:
        """Fight a roster opponent. Returns None when the battle cannot start."""
        spec = opponent_by_id(opponent_id)
        if spec is None:
            logger.warn("UnknownOpponent", opponent=opponent_id)
            return None
        ctx.dispatch(RechargeEnergy(now))
        pet = ctx.state.active_pet
        if pet is None or not ctx.dispatch(UseBattle(now=now, today=today)):
            logger.info("BattleUnavailable", energy=ctx.state.battle_energy, used=ctx.state.daily_battles_used)
            return None
        player = combatant_from_pet(pet)
        opponent = combatant_from_opponent(spec)
        logger.info("BattleStart", pet=pet.id, opponent=opponent.name)
        session = BattleSession(player, opponent, self.core)
        result = session.run_auto()
        if ctx.settings.data.debug:
            for line in session.log:
                logger.debug("BattleMessage", text=line)
        won = result.player_won(player.id)
        logger.info("BattleEnd", winner=result.winner_id, turns=len(result.turns))
        if won:
            ctx.dispatch(AddXp(int(spec["level"]) * BATTLE_XP_PER_OPPONENT_LEVEL, now=now))
        return result

battle_service = BattleService()
