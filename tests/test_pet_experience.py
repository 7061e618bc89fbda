import math
from petsteps.game.experience import xp_for_level, total_xp_for_level, apply_experience, clamp_level, evolution_stage_for_level
from petsteps.game.models import Pet


def test_xp_curve_values():
    assert xp_for_level(1) == 5000
    assert xp_for_level(2) == math.floor(5000 * 1.15)
    assert xp_for_level(50) > xp_for_level(49)
    assert total_xp_for_level(1) == 0
    assert total_xp_for_level(3) == xp_for_level(1) + xp_for_level(2)


def test_clamp_level():
    assert clamp_level(0) == 1
    assert clamp_level(150) == 100
    assert clamp_level("bad") == 1


def test_leftover_xp_carries_over():
    pet = Pet(id="p", name="Pip", primary_element="fire")
    report = apply_experience(pet, 5100)
    assert (pet.level, pet.experience) == (2, 100)
    assert report["from"] == 1 and report["to"] == 2


def test_crossing_evolution_level_sets_stage():
    pet = Pet(id="p", name="Pip", primary_element="water", level=19)
    report = apply_experience(pet, xp_for_level(19))
    assert pet.level == 20
    assert pet.evolution_stage == 1
    assert report["evolved_to"] == 1
    assert evolution_stage_for_level(85) == 4


def test_reaching_100_retires_with_zero_experience():
    pet = Pet(id="p", name="Pip", primary_element="air", level=99, experience=10)
    report = apply_experience(pet, xp_for_level(99) * 3)
    assert report["retired"]
    assert (pet.level, pet.experience) == (100, 0)
