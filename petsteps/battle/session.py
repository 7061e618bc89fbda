"""1v1 auto-battle orchestration atop BattleCore mechanics.

The player side always strikes first and the sides alternate strictly. Each
attack appends one BattleTurn; ``turn`` counts rounds, so a player attack and
the opponent's reply share a number.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple
import random

from petsteps.game.care import CareModifiers
from .core import BattleCore, BattleTurn, Combatant


@dataclass(frozen=True)
class BattleResult:
    winner_id: str
    loser_id: str
    turns: Tuple[BattleTurn, ...]
    total_damage_dealt: Dict[str, int] = field(default_factory=dict)

    def player_won(self, player_id: str) -> bool:
        return self.winner_id == player_id

    def to_json(self) -> dict:
        return {
            "winner_id": self.winner_id,
            "loser_id": self.loser_id,
            "turns": [t.to_json() for t in self.turns],
            "total_damage_dealt": dict(self.total_damage_dealt),
        }


class BattleSession:
    def __init__(self, player: Combatant, opponent: Combatant, core: Optional[BattleCore] = None, *,
                 player_care: Optional[CareModifiers] = None, opponent_care: Optional[CareModifiers] = None):
        # Work on fresh copies; the caller's combatants are left untouched
        self.player = replace(player, current_health=None, care=player_care or player.care)
        self.opponent = replace(opponent, current_health=None, care=opponent_care or opponent.care)
        self.core = core or BattleCore()
        self.round = 1
        self.player_to_move = True
        self.turns: List[BattleTurn] = []
        self.log: List[str] = []
        self.damage_dealt: Dict[str, int] = {player.id: 0, opponent.id: 0}

        def _capture(msg: str):
            self.log.append(msg)
        self.core.message_cb = _capture

    def is_over(self) -> bool:
        return self.player.is_down() or self.opponent.is_down()

    def step(self) -> Optional[BattleTurn]:
        if self.is_over():
            return None
        if self.player_to_move:
            entry = self.core.attack(self.player, self.opponent, self.round)
        else:
            entry = self.core.attack(self.opponent, self.player, self.round)
            self.round += 1
        self.player_to_move = not self.player_to_move
        self.turns.append(entry)
        self.damage_dealt[entry.attacker_id] = self.damage_dealt.get(entry.attacker_id, 0) + entry.damage
        return entry

    def run_auto(self) -> BattleResult:
        # Every attack deals at least 1 damage, so this always terminates
        while not self.is_over():
            self.step()
        return self.result()

    def result(self) -> BattleResult:
        if not self.is_over():
            raise RuntimeError("battle still in progress")
        if self.opponent.is_down():
            winner, loser = self.player, self.opponent
        else:
            winner, loser = self.opponent, self.player
        return BattleResult(
            winner_id=winner.id,
            loser_id=loser.id,
            turns=tuple(self.turns),
            total_damage_dealt=dict(self.damage_dealt),
        )


def resolve_battle(player: Combatant, opponent: Combatant, *, rng: Optional[random.Random] = None,
                   player_care: Optional[CareModifiers] = None,
                   opponent_care: Optional[CareModifiers] = None) -> BattleResult:
    """Run a whole battle in one call."""
    session = BattleSession(player, opponent, BattleCore(rng),
                            player_care=player_care, opponent_care=opponent_care)
    return session.run_auto()

__all__ = ["BattleSession","BattleResult","resolve_battle"]
