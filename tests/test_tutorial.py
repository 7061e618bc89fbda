from petsteps.game import actions as A
from petsteps.game.context import GameContext
from petsteps.game.reducer import transition
from petsteps.game.models import GameState


def test_tutorial_pet_retires_after_ten_steps():
    ctx = GameContext()
    assert ctx.dispatch(A.StartTutorial(now=1.0))
    pet = ctx.state.active_pet
    assert (pet.id, pet.level, pet.primary_element, pet.is_template) == ("tutorial", 99, "fire", True)
    ctx.add_steps(4, 2.0)
    assert ctx.state.tutorial_steps == 4
    assert ctx.state.active_pet.experience == 0
    ctx.add_steps(6, 3.0)
    assert ctx.state.active_pet is None
    assert ctx.state.needs_new_pet
    assert ctx.state.retired_pets[-1].level == 100
    assert ctx.dispatch(A.CreatePet(element="water", name="Drip", now=4.0))
    assert ctx.state.tutorial_completed


def test_tutorial_only_once():
    s = transition(GameState(), A.CompleteTutorial())
    assert s.tutorial_completed
    assert transition(s, A.StartTutorial(now=0)) is s
    assert transition(s, A.CompleteTutorial()) is s
