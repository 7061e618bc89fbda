#!/usr/bin/env python3
"""
PetSteps - terminal edition

Thin wrapper around the petsteps package:
- game/    progression state machine, care, energy, game context
- battle/  element chart, auto-battle resolver, opponent roster
- system/  save file and settings
- ui/      rich status panels

To run: python main.py
"""

from petsteps.cli import run

if __name__ == "__main__":
    run()
