"""
Error classes for clearer exception sources.

Game transitions never raise; these cover loading records and save files.
"""
from __future__ import annotations

class PetStepsError(Exception):
    pass

class SaveLoadError(PetStepsError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class ValidationError(PetStepsError):
    pass
