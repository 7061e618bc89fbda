import random
from petsteps.battle.service import BattleService
from petsteps.game import actions as A
from petsteps.game.context import GameContext

NOW = 1_700_000_000.0
TODAY = "2024-05-01"


def ctx_with_pet(attack=None) -> GameContext:
    ctx = GameContext(rng=random.Random(3))
    ctx.dispatch(A.CreatePet(element="water", name="Splash", now=NOW))
    if attack is not None:
        ctx.state.active_pet.attack = attack
    return ctx


def test_win_awards_opponent_level_xp():
    ctx = ctx_with_pet(attack=500)
    service = BattleService(random.Random(1))
    result = service.challenge(ctx, "4", now=NOW, today=TODAY)
    assert result is not None and result.winner_id == ctx.state.active_pet.id
    assert ctx.state.active_pet.experience == 20 * 50
    assert ctx.state.battle_energy == 4
    assert ctx.state.daily_battles_used == 1


def test_daily_limit_and_unknown_opponent():
    ctx = ctx_with_pet(attack=500)
    service = BattleService(random.Random(2))
    assert service.challenge(ctx, "99", now=NOW, today=TODAY) is None
    for _ in range(3):
        assert service.challenge(ctx, "1", now=NOW, today=TODAY) is not None
    assert service.challenge(ctx, "1", now=NOW, today=TODAY) is None
    assert ctx.state.battle_energy == 2


def test_no_pet_no_battle():
    ctx = GameContext()
    assert BattleService().challenge(ctx, "1", now=NOW, today=TODAY) is None
