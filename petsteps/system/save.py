from __future__ import annotations
import json, os
from pathlib import Path
from typing import Optional, Union
from petsteps.core.errors import SaveLoadError
from petsteps.core.logging import logger
from petsteps.game.constants import STORAGE_KEY
from petsteps.game.models import GameState

SAVE_DIR_NAME = ".petsteps_saves"
SAVE_FILENAME = f"{STORAGE_KEY}.json"
TEMP_SUFFIX = ".tmp"

PathLike = Union[str, Path, None]


def _save_dir(save_dir: PathLike = None) -> Path:
    if save_dir:
        path = Path(save_dir).expanduser()
    else:
        path = Path(os.path.expanduser("~")) / SAVE_DIR_NAME
    path.mkdir(parents=True, exist_ok=True)
    return path

def save_path(save_dir: PathLike = None) -> Path:
    return _save_dir(save_dir) / SAVE_FILENAME


def save_game(state: GameState, save_dir: PathLike = None) -> Path:
    """Write the whole state; readers never see a half-written file."""
    path = save_path(save_dir)
    tmp = path.with_name(path.name + TEMP_SUFFIX)
    tmp.write_text(json.dumps(state.to_json(), indent=2), encoding="utf-8")
    os.replace(tmp, path)
    logger.info("GameSaved", file=str(path))
    return path


def read_state(path: Path) -> GameState:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise SaveLoadError(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise SaveLoadError(str(path), "root must be an object")
    try:
        return GameState.from_json(data)
    except (TypeError, ValueError, OverflowError, AttributeError) as e:
        raise SaveLoadError(str(path), str(e)) from e


def load_latest(save_dir: PathLike = None) -> Optional[GameState]:
    """None when nothing was saved yet; a fresh state when the save is unreadable."""
    path = save_path(save_dir)
    if not path.exists():
        return None
    try:
        state = read_state(path)
    except SaveLoadError as e:
        logger.error("GameLoadFailed", file=e.path, error=e.detail)
        return GameState()
    logger.debug("GameLoaded", file=str(path))
    return state


def delete_save(save_dir: PathLike = None) -> bool:
    path = save_path(save_dir)
    if not path.exists():
        return False
    path.unlink()
    logger.info("GameSaveDeleted", file=str(path))
    return True

__all__ = ["save_game", "load_latest", "delete_save", "save_path", "read_state"]
