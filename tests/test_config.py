"""Tests for YAML settings loading."""

import pytest

from pong import config
from pong.config import ConfigReadError, Settings, load, load_settings


@pytest.fixture
def cfg_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("PONG_CFG_DIR", str(tmp_path))
    monkeypatch.setattr(config, "LOADED_CONFIGS", {})
    return tmp_path


def test_defaults_when_profile_missing(cfg_dir):
    settings = load_settings()
    assert settings == Settings.from_mapping({})
    assert settings.target_score == 5
    assert settings.api_token is None
    assert settings.ai_difficulty == "normal"


def test_load_missing_profile_raises(cfg_dir):
    with pytest.raises(ConfigReadError):
        load("pong")


def test_yaml_overrides_defaults(cfg_dir):
    (cfg_dir / "pong.yml").write_text(
        "api_url: https://pong.example\n"
        "api_token: abc\n"
        "target_score: 3\n"
        "seed: 12\n"
    )

    settings = load_settings()

    assert settings.api_url == "https://pong.example"
    assert settings.api_token == "abc"
    assert settings.target_score == 3
    assert settings.seed == 12
    assert settings.player_name == "Player 1"


def test_empty_file_gives_defaults(cfg_dir):
    (cfg_dir / "pong.yml").write_text("")
    assert load_settings() == Settings.from_mapping({})


def test_unknown_key_rejected(cfg_dir):
    (cfg_dir / "pong.yml").write_text("colour: green\n")
    with pytest.raises(ConfigReadError):
        load_settings()


def test_non_mapping_rejected(cfg_dir):
    (cfg_dir / "pong.yml").write_text("- a\n- b\n")
    with pytest.raises(ConfigReadError):
        load_settings()


def test_invalid_yaml_rejected(cfg_dir):
    (cfg_dir / "pong.yml").write_text("api_url: [unclosed\n")
    with pytest.raises(ConfigReadError):
        load("pong")


def test_profiles_are_cached(cfg_dir):
    path = cfg_dir / "other.yml"
    path.write_text("seed: 1\n")
    first = load("other")
    path.unlink()

    assert load("other") is first
    assert load_settings("other").seed == 1


def test_unknown_difficulty_rejected(cfg_dir):
    (cfg_dir / "pong.yml").write_text("ai_difficulty: insane\n")
    with pytest.raises(ConfigReadError):
        load_settings()


@pytest.mark.parametrize("score", [0, -3, "five", True])
def test_bad_target_score_rejected(cfg_dir, score):
    with pytest.raises(ConfigReadError):
        Settings.from_mapping({"target_score": score})


def test_valid_difficulty_accepted(cfg_dir):
    (cfg_dir / "pong.yml").write_text("ai_difficulty: hard\n")
    assert load_settings().ai_difficulty == "hard"
