from petsteps.game import actions as A
from petsteps.game.constants import EGG_HATCH_STEPS
from petsteps.game.models import GameState, Pet
from petsteps.game.reducer import transition


def bred_state(keep_secondary=True, partner_element="water") -> GameState:
    mom = Pet(id="mom", name="Mom", primary_element="fire", level=90, attack=40, defense=30, max_health=150, generation=2)
    s = GameState(active_pet=mom, tutorial_completed=True, breeding_ready=True)
    return transition(s, A.BreedPet(partner_id="dad", partner_element=partner_element,
                                    partner_stats={"attack": 50, "defense": 20, "health": 100},
                                    now=5.0, keep_secondary_element=keep_secondary))


def test_breed_creates_egg_and_retires_mom():
    s = bred_state()
    assert s.active_pet is None
    assert s.retired_pets[-1].id == "mom"
    egg = s.egg
    assert egg.inherited_stats == {"attack": 18, "defense": 10, "health": 50}
    assert egg.generation == 3
    assert (egg.parent_mom_id, egg.parent_dad_id) == ("mom", "dad")
    assert egg.secondary_element == "water"
    assert egg.steps_required == EGG_HATCH_STEPS
    assert not s.breeding_ready and not s.needs_new_pet


def test_breed_without_secondary_still_tracks_parents():
    s = bred_state(keep_secondary=False)
    assert s.egg.secondary_element is None
    assert s.egg.tracked_parent_elements == ["fire", "water"]


def test_same_element_partner_gives_no_secondary():
    assert bred_state(partner_element="fire").egg.secondary_element is None


def test_breed_requires_level_90():
    s = GameState(active_pet=Pet(id="p", name="P", primary_element="air", level=89))
    assert transition(s, A.BreedPet(partner_id="d", partner_element="fire")) is s


def test_egg_progress_and_hatch():
    s = bred_state()
    assert transition(s, A.HatchEgg(name="Chick", now=6.0)) is s
    s = transition(s, A.AddSteps(EGG_HATCH_STEPS + 999))
    assert s.egg.steps_progress == EGG_HATCH_STEPS
    assert s.egg.hatch_ready
    assert transition(s, A.HatchEgg(name="   ", now=6.0)) is s
    s = transition(s, A.HatchEgg(name="Chick", now=6.0))
    pet = s.active_pet
    assert s.egg is None
    assert (pet.level, pet.generation, pet.primary_element, pet.secondary_element) == (1, 3, "fire", "water")
    assert (pet.attack, pet.defense, pet.max_health, pet.health) == (18, 10, 50, 50)
    assert pet.parent_mom_id == "mom"
