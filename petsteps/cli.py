from __future__ import annotations
from datetime import date
from typing import Callable, Optional
import time

from petsteps.battle import battle_service
from petsteps.battle.factory import OPPONENTS, opponent_by_id
from petsteps.battle.render import result_panel, turn_table
from petsteps.core.logging import logger
from petsteps.core.types import normalize_element
from petsteps.game import actions as A
from petsteps.game.constants import TEMPLATE_PETS
from petsteps.game.context import GameContext
from petsteps.game.models import Pet
from petsteps.system.settings import Settings
from petsteps.ui.status import console, opponents_table, status_view

HELP = """Commands:
  status                 show pet, care meters, energy and goals
  walk N                 record N steps
  feed | water | play | treat
  create ELEMENT [NAME]  start a new pet (fire/water/earth/air)
  evolve                 evolve when ready
  breed PARTNER          breed with a retired pet id or opponent id
  hatch NAME             hatch a ready egg
  battle ID              fight an opponent (see: opponents)
  opponents              list opponents
  boost                  use an energy boost
  goal N                 set the daily step goal
  claim                  claim the daily goal reward
  save                   save now
  quit"""


def _partner(ctx: GameContext, partner_id: str) -> Optional[Pet]:
    for pet in ctx.state.retired_pets:
        if pet.id == partner_id:
            return pet
    spec = opponent_by_id(partner_id)
    if spec is None:
        return None
    health = int(spec["health"])
    return Pet(id=f"opponent_{spec['id']}", name=str(spec["name"]), primary_element=str(spec["element"]),
               level=int(spec["level"]), attack=int(spec["attack"]), defense=int(spec["defense"]),
               health=health, max_health=health)


def _create_action(args: list, now: float) -> Optional[A.CreatePet]:
    if not args:
        return None
    element = normalize_element(args[0])
    if len(args) > 1:
        return A.CreatePet(element=args[0], name=" ".join(args[1:]), now=now)
    if element is None:
        return None
    template = TEMPLATE_PETS[element][0]
    return A.CreatePet(element=element, name=template["name"], now=now,
                       is_template=True, template_type=template["template_type"])


def _int_arg(args: list) -> Optional[int]:
    if not args:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


def _report(ok: bool, done: str, failed: str):
    console.print(f"[green]{done}[/green]" if ok else f"[yellow]{failed}[/yellow]")


def handle_command(ctx: GameContext, line: str, now: float, today: str) -> bool:
    """Execute one command line. Returns False when the loop should stop."""
    parts = line.strip().split()
    if not parts:
        return True
    cmd, args = parts[0].lower(), parts[1:]
    ctx.tick(now, today)
    if cmd in ("quit", "exit", "q"):
        return False
    if cmd == "help":
        console.print(HELP)
    elif cmd == "status":
        console.print(status_view(ctx.state, now, today))
    elif cmd == "walk":
        steps = _int_arg(args)
        if steps is None or steps <= 0:
            console.print("Usage: walk N (N > 0)")
        else:
            ctx.add_steps(steps, now)
            console.print(f"Walked {steps} steps. Today: {ctx.state.today_steps}")
            if ctx.state.needs_new_pet:
                console.print("[bold]Your pet retired. Use create ELEMENT NAME for a new one.[/bold]")
            elif ctx.state.egg is not None and ctx.state.egg.hatch_ready:
                console.print("[bold green]Your egg is ready to hatch![/bold green]")
    elif cmd in ("feed", "water", "play", "treat"):
        action: Callable = {"feed": A.FeedPet, "water": A.WaterPet, "play": A.PlayWithPet, "treat": A.UseTreat}[cmd]
        _report(ctx.dispatch(action(now)), f"You {cmd} your pet.", "Nothing happened (no pet or no items).")
    elif cmd == "create":
        create = _create_action(args, now)
        if create is None:
            console.print("Usage: create ELEMENT [NAME] (no name picks the element's template pet)")
        else:
            _report(ctx.dispatch(create), f"Welcome, {create.name}!", "Cannot create a pet now.")
    elif cmd == "evolve":
        _report(ctx.evolve(), "Your pet evolved!", "Your pet is not ready to evolve.")
    elif cmd == "breed":
        partner = _partner(ctx, args[0]) if args else None
        if partner is None:
            console.print("Usage: breed PARTNER (retired pet id or opponent id)")
        else:
            _report(ctx.breed(partner, now), "An egg appeared! Walk to hatch it.", "Breeding needs a level 90 pet and no egg.")
    elif cmd == "hatch":
        ok = ctx.dispatch(A.HatchEgg(name=" ".join(args), now=now))
        _report(ok, "The egg hatched!", "The egg is not ready (or no name given).")
    elif cmd == "battle":
        pet = ctx.state.active_pet
        result = battle_service.challenge(ctx, args[0], now=now, today=today) if args else None
        if result is None:
            console.print("[yellow]Cannot battle now (no pet, no energy, daily limit or unknown opponent).[/yellow]")
        else:
            spec = opponent_by_id(args[0])
            opp_id = f"opponent_{spec['id']}"
            names = {pet.id: pet.name, opp_id: str(spec["name"])}
            max_hp = {pet.id: pet.max_health, opp_id: int(spec["health"])}
            console.print(turn_table(result.turns, names))
            console.print(result_panel(result, names, pet.id, max_hp))
    elif cmd == "opponents":
        console.print(opponents_table(OPPONENTS))
    elif cmd == "boost":
        _report(ctx.dispatch(A.UseEnergyBoost()), "Energy restored by one.", "No boost available or energy full.")
    elif cmd == "goal":
        goal = _int_arg(args)
        if goal is None:
            console.print("Usage: goal N")
        else:
            ctx.dispatch(A.SetStepGoal(goal))
            console.print(f"Daily goal: {ctx.state.daily_step_goal}  Weekly: {ctx.state.weekly_step_goal}")
    elif cmd == "claim":
        _report(ctx.claim_daily_goal(now), "Daily reward claimed!", "Goal not reached or already claimed.")
    elif cmd == "save":
        path = ctx.save()
        console.print(f"Saved to {path}")
    else:
        console.print(f"Unknown command: {cmd}. Type help.")
    return True


def run():
    settings = Settings.load()
    settings.apply_log_level()
    ctx = GameContext(settings)
    if ctx.load():
        logger.info("GameLoaded")
    elif not ctx.state.tutorial_completed:
        ctx.dispatch(A.StartTutorial(time.time()))
        console.print("[bold]Meet your Tutorial Companion! Walk 10 steps to see it retire.[/bold]")
    console.print(HELP)
    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        if not handle_command(ctx, line, time.time(), date.today().isoformat()):
            break
    ctx.save()
    settings.save()
    console.print("Goodbye!")


if __name__ == "__main__":
    run()
