"""Rich renderables for battles: HP bars and the turn log."""
from __future__ import annotations
from typing import Dict, Optional
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.box import ROUNDED

from .session import BattleResult


def hp_color(current: int, max_hp: int) -> str:
    ratio = current / max_hp if max_hp > 0 else 0
    if ratio > 0.5:
        return "green"
    if ratio > 0.2:
        return "yellow"
    return "red"


def draw_hp_bar(current: int, max_hp: int, width: int = 20) -> Text:
    if max_hp <= 0:
        return Text("█" * width, style="red")
    ratio = max(0.0, min(1.0, current / max_hp))
    filled = int(ratio * width)
    bar = "█" * filled + "░" * (width - filled)
    return Text(bar, style=hp_color(current, max_hp))


def turn_table(turns: tuple, names: Dict[str, str]) -> Table:
    table = Table(title="Battle Log", box=ROUNDED, show_lines=False)
    table.add_column("Turn", justify="right", style="bold")
    table.add_column("Attacker")
    table.add_column("Damage", justify="right")
    table.add_column("Defender HP", justify="right")
    for t in turns:
        dmg = f"[bold yellow]{t.damage} CRIT![/]" if t.is_crit else str(t.damage)
        table.add_row(str(t.turn), names.get(t.attacker_id, t.attacker_id), dmg, str(t.defender_health_after))
    return table


def final_health(result: BattleResult) -> Dict[str, int]:
    hp: Dict[str, int] = {}
    for t in result.turns:
        hp[t.attacker_id] = t.attacker_health_after
        hp[t.defender_id] = t.defender_health_after
    return hp


def result_panel(result: BattleResult, names: Dict[str, str], player_id: str,
                 max_hp: Optional[Dict[str, int]] = None) -> Panel:
    won = result.player_won(player_id)
    lines = Text()
    lines.append("VICTORY!\n" if won else "DEFEAT\n", style="bold green" if won else "bold red")
    lines.append(f"Winner: {names.get(result.winner_id, result.winner_id)}\n")
    lines.append(f"Turns: {len(result.turns)}\n")
    for cid, total in result.total_damage_dealt.items():
        lines.append(f"{names.get(cid, cid)} dealt {total} damage\n")
    if max_hp:
        for cid, hp in final_health(result).items():
            lines.append(f"{names.get(cid, cid):<16}")
            lines.append_text(draw_hp_bar(hp, max_hp.get(cid, 0)))
            lines.append(f" {hp}/{max_hp.get(cid, 0)}\n")
    return Panel(lines, title="Result", border_style="green" if won else "red", box=ROUNDED)

__all__ = ["draw_hp_bar","hp_color","turn_table","final_health","result_panel"]
