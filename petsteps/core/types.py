"""Global element metadata: colors & abbreviations.

Provides:
  ELEMENTS: the four elements in canonical order
  ELEMENT_COLORS_HEX: mapping element -> hex color string (#RRGGBB)
  ELEMENT_ABBREVIATIONS: mapping element -> 3-letter abbreviation (upper)
  helper functions for colorized terminal output.
"""
from __future__ import annotations
from typing import Dict, Literal, Optional, Tuple
import os, re

from colorama import Fore, Style

Element = Literal["fire", "water", "earth", "air"]

ELEMENTS: Tuple[str, ...] = ("fire", "water", "earth", "air")

ELEMENT_COLORS_HEX: Dict[str, str] = {
    "fire": "#F97316",
    "water": "#3B82F6",
    "earth": "#84CC16",
    "air": "#06B6D4",
}

ELEMENT_ABBREVIATIONS: Dict[str, str] = {
    "fire": "FIR",
    "water": "WTR",
    "earth": "ERT",
    "air": "AIR",
}

_TRUECOLOR = bool(os.environ.get("COLORTERM","" ).lower().find("truecolor") != -1)

_FALLBACK_FORE: Dict[str,str] = {
    "fire": Fore.RED,
    "water": Fore.BLUE,
    "earth": Fore.GREEN,
    "air": Fore.CYAN,
}

RESET = Style.RESET_ALL

def is_element(value: object) -> bool:
    return isinstance(value, str) and value.lower() in ELEMENTS

def normalize_element(value: object) -> Optional[str]:
    """Lower-cased element name, or None when the value is not an element."""
    if not is_element(value):
        return None
    return str(value).lower()

def _hex_to_rgb(h: str) -> Tuple[int,int,int]:
    h = h.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def color_code(element: str) -> str:
    e = element.lower()
    hex_val = ELEMENT_COLORS_HEX.get(e)
    if not hex_val:
        return ''
    if _TRUECOLOR:
        r,g,b = _hex_to_rgb(hex_val)
        return f"\033[38;2;{r};{g};{b}m"
    return _FALLBACK_FORE.get(e,'')

def colorize_element_text(element: str, text: str) -> str:
    code = color_code(element)
    if not code:
        return text
    return f"{code}{text}{RESET}"

def element_abbreviation(element: str) -> str:
    return ELEMENT_ABBREVIATIONS.get(element.lower(), element[:3].upper())

def format_elements(elements: Tuple[Optional[str],...]) -> str:
    parts = [colorize_element_text(e, element_abbreviation(e)) for e in elements if e]
    return '/'.join(parts)

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")

def strip_ansi(s: str) -> str:
    return ANSI_ESCAPE_RE.sub('', s)

__all__ = [
    'Element','ELEMENTS','ELEMENT_COLORS_HEX','ELEMENT_ABBREVIATIONS',
    'is_element','normalize_element','colorize_element_text','element_abbreviation',
    'format_elements','strip_ansi'
]
