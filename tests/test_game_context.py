import random
from petsteps.game import actions as A
from petsteps.game.context import GameContext
from petsteps.game.models import GameState, Pet
from petsteps.system.save import load_latest
from petsteps.system.settings import Settings

NOW = 1_700_000_000.0


def new_ctx(**kw) -> GameContext:
    ctx = GameContext(rng=random.Random(9), **kw)
    ctx.dispatch(A.CreatePet(element="fire", name="Blaze", now=NOW))
    return ctx


def test_steps_give_one_xp_each():
    ctx = new_ctx()
    ctx.add_steps(1234, NOW)
    assert ctx.state.today_steps == 1234
    assert ctx.state.active_pet.experience == 1234


def test_no_xp_while_egg_incubates():
    mom = Pet(id="mom", name="Mom", primary_element="fire", level=90)
    ctx = GameContext(state=GameState(active_pet=mom, tutorial_completed=True))
    partner = Pet(id="dad", name="Dad", primary_element="earth", attack=20, defense=20, max_health=100)
    assert ctx.breed(partner, NOW)
    # free tier keeps only the mother's element
    assert ctx.state.egg.secondary_element is None
    assert ctx.state.egg.tracked_parent_elements == ["fire", "earth"]
    ctx.add_steps(100, NOW)
    assert ctx.state.egg.steps_progress == 100


def test_paid_tier_keeps_secondary_and_updates_visual():
    ctx = new_ctx()
    ctx.dispatch(A.SetSubscriptionTier("tier1"))
    ctx.state.evolution_ready = True
    assert ctx.evolve(image_url="evolved.png")
    assert ctx.state.active_pet.image_url == "evolved.png"


def test_free_tier_evolution_keeps_image():
    ctx = new_ctx()
    ctx.state.evolution_ready = True
    assert ctx.evolve(image_url="evolved.png")
    assert ctx.state.active_pet.image_url is None


def test_claim_daily_goal_adds_xp_bonus():
    ctx = new_ctx()
    ctx.add_steps(5000, NOW)
    assert ctx.state.active_pet.level == 2
    assert ctx.claim_daily_goal(NOW)
    assert ctx.state.active_pet.experience == 500
    assert not ctx.claim_daily_goal(NOW)


def test_tick_rolls_day_and_decays_care():
    ctx = new_ctx()
    ctx.tick(NOW, "2024-01-01")
    ctx.add_steps(10, NOW)
    ctx.tick(NOW + 10 * 3600, "2024-01-02")
    assert ctx.state.current_day == "2024-01-02"
    assert ctx.state.today_steps == 0
    assert ctx.state.weekly_steps == 10
    assert ctx.state.active_pet.hunger == 70
    # 2024-01-08 is a Monday
    ctx.tick(NOW + 10 * 3600, "2024-01-08")
    assert ctx.state.weekly_steps == 0


def test_autosave_writes_save_file(tmp_path):
    settings = Settings.load(tmp_path / "settings.json")
    settings.data.save_dir = str(tmp_path / "saves")
    ctx = GameContext(settings, rng=random.Random(1))
    ctx.dispatch(A.CreatePet(element="air", name="Gale", now=NOW))
    loaded = load_latest(tmp_path / "saves")
    assert loaded.active_pet.name == "Gale"
    assert ctx.load()
    assert ctx.state.active_pet.name == "Gale"
