from __future__ import annotations
import importlib.util
import logging
from pathlib import Path
import yaml
from typing import Dict, Any

log = logging.getLogger(__name__)

GAMES_DIR = Path(__file__).resolve().parents[2] / "games"


def resolve_game_root(game_id: str, games_dir: Path = GAMES_DIR) -> Path:
    """Map a CLI game id ("reaction-time" or "reaction_time") to its folder."""
    game_root = games_dir / game_id
    if not game_root.is_dir():
        alt = games_dir / game_id.replace("-", "_")
        if alt.is_dir():
            return alt
    return game_root


def load_game_manifest(game_root: Path) -> Dict[str, Any]:
    manifest = game_root / "manifest.yaml"
    if not manifest.exists():
        raise FileNotFoundError(f"Missing manifest.yaml in {game_root}")
    with open(manifest, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"manifest.yaml in {game_root} must be a mapping")
    data.setdefault("options", {})
    log.debug("Loaded manifest for %s: %s", game_root.name, data)
    return data


def load_game_module(game_root: Path):
    """
    Loads games/<id>/main.py module and returns the module object.
    The file must define a get_game() -> Game factory.
    """
    main_py = game_root / "main.py"
    if not main_py.exists():
        raise FileNotFoundError(f"Missing main.py in {game_root}")
    spec = importlib.util.spec_from_file_location(
        f"games.{game_root.name}.main", main_py)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)  # type: ignore[attr-defined]
    if not hasattr(module, "get_game"):
        raise AttributeError("Game module must define get_game()")
    return module
