import pytest

from engine.app.loader import GAMES_DIR, load_game_manifest, load_game_module, resolve_game_root
from games.reaction_time.controller import ReactionOptions


def test_resolves_dashed_game_id():
    assert resolve_game_root("reaction-time") == GAMES_DIR / "reaction_time"
    assert resolve_game_root("reaction_time") == GAMES_DIR / "reaction_time"


def test_bundled_manifest_loads_into_options():
    manifest = load_game_manifest(resolve_game_root("reaction_time"))
    assert manifest["name"] == "Reaction Time Test"
    opts = ReactionOptions.from_manifest(manifest)
    assert (opts.delay_min_ms, opts.delay_max_ms) == (1000, 3000)
    assert opts.tick_ms == 10
    assert opts.ranking_size == 5
    assert opts.player_id_length == 4


def test_bundled_game_module_has_factory():
    module = load_game_module(resolve_game_root("reaction_time"))
    assert callable(module.get_game)


def test_missing_manifest(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_game_manifest(tmp_path)


def test_missing_main(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_game_module(tmp_path)


def test_main_without_factory(tmp_path):
    (tmp_path / "main.py").write_text("X = 1\n", encoding="utf-8")
    with pytest.raises(AttributeError):
        load_game_module(tmp_path)


def test_empty_manifest_gets_options(tmp_path):
    (tmp_path / "manifest.yaml").write_text("", encoding="utf-8")
    assert load_game_manifest(tmp_path) == {"options": {}}


def test_non_mapping_manifest(tmp_path):
    (tmp_path / "manifest.yaml").write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_game_manifest(tmp_path)
