import random
from petsteps.cli import handle_command
from petsteps.game.context import GameContext

NOW = 1_700_000_000.0
TODAY = "2024-02-02"


def test_command_flow():
    ctx = GameContext(rng=random.Random(4))
    assert handle_command(ctx, "create earth Pebble", NOW, TODAY)
    assert ctx.state.active_pet.name == "Pebble"
    handle_command(ctx, "walk 250", NOW, TODAY)
    assert ctx.state.today_steps == 250
    handle_command(ctx, "feed", NOW, TODAY)
    assert ctx.state.consumables["food"] == 2
    handle_command(ctx, "status", NOW, TODAY)
    handle_command(ctx, "opponents", NOW, TODAY)
    handle_command(ctx, "battle 2", NOW, TODAY)
    assert ctx.state.daily_battles_used == 1
    handle_command(ctx, "goal 8000", NOW, TODAY)
    assert ctx.state.weekly_step_goal == 56000
    assert not handle_command(ctx, "quit", NOW, TODAY)


def test_unknown_and_bad_arguments_do_not_crash():
    ctx = GameContext()
    assert handle_command(ctx, "dance", NOW, TODAY)
    assert handle_command(ctx, "walk many", NOW, TODAY)
    assert handle_command(ctx, "breed", NOW, TODAY)
    assert handle_command(ctx, "", NOW, TODAY)
