"""Rich panels for the pet, its care meters, energy and the daily goal."""
from __future__ import annotations
from typing import Iterable, Optional
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.box import ROUNDED

from petsteps.core.types import ELEMENT_COLORS_HEX, element_abbreviation
from petsteps.game.care import meter_status
from petsteps.game.constants import CARE_MAX, DAILY_BATTLE_LIMIT, MAX_BATTLE_ENERGY, RETIREMENT_LEVEL
from petsteps.game.energy import battles_left_today, minutes_until_full
from petsteps.game.experience import xp_for_level
from petsteps.game.models import GameState, Pet

console = Console()

_METER_COLORS = {"ok": "green", "warning": "yellow", "critical": "red"}


def rich_element(element: Optional[str], text: Optional[str] = None) -> str:
    """Element name as Rich markup in its element colour."""
    if not element:
        return ""
    text = text or element_abbreviation(element)
    hex_color = ELEMENT_COLORS_HEX.get(element.lower())
    if not hex_color:
        return text
    return f"[{hex_color}]{text}[/{hex_color}]"


def meter_bar(value: int, width: int = 20) -> str:
    value = max(0, min(CARE_MAX, value))
    filled = int(value / CARE_MAX * width)
    color = _METER_COLORS[meter_status(value)]
    return f"[{color}]{'█' * filled}{'░' * (width - filled)}[/{color}] {value:>3}"


def pet_panel(pet: Pet, *, evolution_ready: bool = False, breeding_ready: bool = False) -> Panel:
    elements = "/".join(rich_element(e) for e in pet.elements if e)
    if pet.level >= RETIREMENT_LEVEL:
        xp_line = "XP: MAX"
    else:
        xp_line = f"XP: {pet.experience}/{xp_for_level(pet.level)}"
    lines = [
        f"[bold bright_white]{pet.name} Lv{pet.level}[/bold bright_white]  [{elements}]  Gen {pet.generation}",
        xp_line,
        f"ATK {pet.attack}  DEF {pet.defense}  HP {pet.health}/{pet.max_health}  CRIT {pet.crit_rate:.0%}",
        "",
        f"Happiness {meter_bar(pet.happiness)}",
        f"Hunger    {meter_bar(pet.hunger)}",
        f"Thirst    {meter_bar(pet.thirst)}",
    ]
    if evolution_ready:
        lines.append("[bold magenta]Ready to evolve! (evolve)[/bold magenta]")
    if breeding_ready:
        lines.append("[bold cyan]Ready to breed! (breed PARTNER)[/bold cyan]")
    return Panel("\n".join(lines), title="[bold]YOUR PET[/bold]", box=ROUNDED, padding=(0, 1))


def egg_panel(state: GameState) -> Panel:
    egg = state.egg
    elements = "/".join(rich_element(e) for e in (egg.primary_element, egg.secondary_element) if e)
    status = "[bold green]Ready to hatch! (hatch NAME)[/bold green]" if egg.hatch_ready else \
        f"{egg.steps_remaining} steps to go"
    body = (f"Egg [{elements}]  Gen {egg.generation}\n"
            f"Progress {egg.steps_progress}/{egg.steps_required}\n{status}")
    return Panel(body, title="[bold]EGG[/bold]", box=ROUNDED, padding=(0, 1))


def account_table(state: GameState, now: float, today: str) -> Table:
    table = Table(box=ROUNDED, show_header=False)
    table.add_column("key", style="bold")
    table.add_column("value")
    goal_mark = " [green](claimed)[/green]" if state.daily_goal_claimed else ""
    table.add_row("Steps today", f"{state.today_steps}/{state.daily_step_goal}{goal_mark}")
    table.add_row("Steps this week", f"{state.weekly_steps}/{state.weekly_step_goal}")
    energy = f"{state.battle_energy}/{MAX_BATTLE_ENERGY}"
    if state.battle_energy < MAX_BATTLE_ENERGY:
        energy += f" (full in {minutes_until_full(state.battle_energy, state.last_energy_recharge, now)} min)"
    table.add_row("Battle energy", energy)
    left = battles_left_today(state.daily_battles_used, state.last_battle_date, today, DAILY_BATTLE_LIMIT)
    table.add_row("Battles left", str(left))
    table.add_row("Items", ", ".join(f"{k} x{v}" for k, v in state.consumables.items()))
    table.add_row("Tier", f"{state.subscription_tier} ({state.ai_tokens} AI tokens)")
    table.add_row("Retired pets", str(len(state.retired_pets)))
    return table


def status_view(state: GameState, now: float, today: str) -> Group:
    parts = []
    if state.active_pet is not None:
        parts.append(pet_panel(state.active_pet, evolution_ready=state.evolution_ready,
                               breeding_ready=state.breeding_ready))
    elif state.egg is not None:
        parts.append(egg_panel(state))
    else:
        parts.append(Panel("No pet yet. Use [bold]create ELEMENT NAME[/bold].", box=ROUNDED))
    parts.append(account_table(state, now, today))
    return Group(*parts)


def opponents_table(opponents: Iterable[dict]) -> Table:
    table = Table(title="Opponents", box=ROUNDED)
    for col in ("ID", "Name", "Element", "Lv", "ATK", "DEF", "HP"):
        table.add_column(col)
    for o in opponents:
        table.add_row(str(o["id"]), str(o["name"]), rich_element(str(o["element"]), str(o["element"])),
                      str(o["level"]), str(o["attack"]), str(o["defense"]), str(o["health"]))
    return table

__all__ = ["console","rich_element","meter_bar","pet_panel","egg_panel","account_table","status_view","opponents_table"]
