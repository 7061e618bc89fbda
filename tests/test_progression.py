import random
from petsteps.game import actions as A
from petsteps.game.experience import xp_for_level
from petsteps.game.models import GameState, Pet
from petsteps.game.reducer import transition


def state_with_pet(**pet_kw) -> GameState:
    pet = Pet(id="pet_1", name="Pip", primary_element=pet_kw.pop("primary_element", "fire"), **pet_kw)
    return GameState(active_pet=pet, tutorial_completed=True)


def test_transition_does_not_mutate_input():
    s = state_with_pet()
    nxt = transition(s, A.AddSteps(100))
    assert nxt is not s
    assert s.today_steps == 0 and nxt.today_steps == 100


def test_no_op_returns_same_object():
    s = GameState()
    assert transition(s, A.AddSteps(0)) is s
    assert transition(s, A.AddSteps(-5)) is s
    assert transition(s, A.FeedPet(0)) is s
    assert transition(s, A.AddXp(100)) is s


def test_steps_accumulate():
    s = transition(state_with_pet(), A.AddSteps(1200))
    s = transition(s, A.AddSteps(300))
    assert (s.today_steps, s.total_steps, s.weekly_steps) == (1500, 1500, 1500)


def test_level_89_to_90_raises_breeding_ready():
    s = state_with_pet(level=89)
    s = transition(s, A.AddXp(xp_for_level(89)))
    assert s.active_pet.level == 90
    assert s.breeding_ready


def test_evolution_ready_at_20():
    s = transition(state_with_pet(level=19), A.AddXp(xp_for_level(19)))
    assert s.evolution_ready
    assert s.active_pet.evolution_stage == 1


def test_reaching_100_retires_pet():
    s = state_with_pet(level=99)
    s.evolution_ready = True
    s = transition(s, A.AddXp(xp_for_level(99), now=42.0))
    assert s.active_pet is None
    assert s.needs_new_pet
    assert not s.evolution_ready and not s.breeding_ready
    retired = s.retired_pets[-1]
    assert retired.is_retired and not retired.is_active
    assert (retired.level, retired.experience, retired.retired_at) == (100, 0, 42.0)


def test_feed_consumes_food_and_clamps():
    s = state_with_pet(hunger=90)
    s = transition(s, A.FeedPet(now=10.0))
    assert s.active_pet.hunger == 100
    assert s.active_pet.last_fed == 10.0
    assert s.consumables["food"] == 2


def test_feed_without_food_is_ignored():
    s = state_with_pet()
    s.consumables["food"] = 0
    assert transition(s, A.FeedPet(now=1.0)) is s


def test_play_is_free_and_treat_boosts_all():
    s = state_with_pet(happiness=50, hunger=50, thirst=50)
    s = transition(s, A.PlayWithPet(now=1.0))
    assert s.active_pet.happiness == 70
    s = transition(s, A.AddConsumable("treat", 1))
    s = transition(s, A.UseTreat(now=2.0))
    assert (s.active_pet.happiness, s.active_pet.hunger, s.active_pet.thirst) == (85, 65, 65)
    assert s.consumables["treat"] == 0


def test_create_pet_stats_within_variance():
    s = transition(GameState(), A.CreatePet(element="earth", name="Rocky", now=1.5), rng=random.Random(7))
    pet = s.active_pet
    assert pet.id == "pet_1500"
    assert 6 <= pet.attack <= 10 and 13 <= pet.defense <= 17
    assert 108 <= pet.max_health <= 112
    assert pet.health == pet.max_health
    assert s.tutorial_completed


def test_create_rejected_when_pet_exists_or_bad_input():
    s = state_with_pet()
    assert transition(s, A.CreatePet(element="fire", name="Two", now=0)) is s
    empty = GameState()
    assert transition(empty, A.CreatePet(element="plasma", name="X", now=0)) is empty
    assert transition(empty, A.CreatePet(element="fire", name="  ", now=0)) is empty


def test_evolve_boosts_stats():
    s = state_with_pet(attack=20, defense=20, max_health=100, health=50)
    assert transition(s, A.EvolvePet()) is s
    s.evolution_ready = True
    s = transition(s, A.EvolvePet(image_url="new.png", update_visual=False))
    pet = s.active_pet
    assert (pet.attack, pet.defense, pet.max_health, pet.health) == (23, 23, 110, 110)
    assert pet.image_url is None
    assert not s.evolution_ready


def test_set_step_goal_clamps():
    s = transition(GameState(), A.SetStepGoal(100))
    assert (s.daily_step_goal, s.weekly_step_goal) == (3000, 21000)
    s = transition(s, A.SetStepGoal(50000))
    assert s.daily_step_goal == 20000


def test_new_day_and_daily_goal_claim():
    s = state_with_pet()
    s = transition(s, A.StartNewDay(today="2024-03-04"))
    s = transition(s, A.AddSteps(5000))
    s = transition(s, A.ClaimDailyGoal())
    assert s.daily_goal_claimed
    assert (s.consumables["food"], s.consumables["water"], s.consumables["toy"]) == (4, 4, 2)
    assert transition(s, A.ClaimDailyGoal()) is s
    s = transition(s, A.StartNewDay(today="2024-03-05"))
    assert s.today_steps == 0 and not s.daily_goal_claimed
    assert s.weekly_steps == 5000


def test_level_89_one_short_then_101_xp():
    s = state_with_pet(level=89, experience=xp_for_level(89) - 1)
    s = transition(s, A.AddXp(101))
    assert (s.active_pet.level, s.active_pet.experience) == (90, 100)
    assert s.breeding_ready and not s.evolution_ready


def test_manual_retire_and_add_consumable():
    s = transition(state_with_pet(), A.RetirePet(now=9.0))
    assert s.active_pet is None and s.needs_new_pet
    assert s.retired_pets[-1].retired_at == 9.0
    assert transition(s, A.RetirePet(now=10.0)) is s
    assert transition(s, A.AddConsumable("rocket", 1)) is s
    assert transition(s, A.AddConsumable("energy_boost", 0)) is s
    s = transition(s, A.AddConsumable("energy_boost", 2))
    assert s.consumables["energy_boost"] == 2
