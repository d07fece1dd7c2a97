"""Configuration loading — YAML profiles with built-in defaults."""

import os
import os.path
from dataclasses import dataclass, fields
from typing import Optional

import yaml

from pong import field
from pong.ai_player import DIFFICULTIES

DEFAULT_CFG_DIR = os.path.join(os.path.expanduser("~"), ".config", "pong")
LOADED_CONFIGS = {}

DEFAULTS = {
    "api_url": "http://localhost:3000",
    "api_token": None,
    "request_timeout": 10.0,
    "target_score": field.TARGET_SCORE,
    "ai_difficulty": "normal",
    "seed": None,
    "player_name": "Player 1",
}


class ConfigReadError(Exception):
    pass


@dataclass
class Settings:
    api_url: str
    api_token: Optional[str]
    request_timeout: float
    target_score: int
    ai_difficulty: str
    seed: Optional[int]
    player_name: str

    @classmethod
    def from_mapping(cls, values: dict) -> "Settings":
        merged = dict(DEFAULTS)
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigReadError("unknown settings: %s" % ", ".join(sorted(unknown)))
        merged.update(values)
        if merged["ai_difficulty"] not in DIFFICULTIES:
            raise ConfigReadError("unknown ai_difficulty %r (expected one of: %s)"
                                  % (merged["ai_difficulty"], ", ".join(DIFFICULTIES)))
        score = merged["target_score"]
        if not isinstance(score, int) or isinstance(score, bool) or score < 1:
            raise ConfigReadError("target_score must be a positive integer, got %r" % (score,))
        return cls(**merged)


def profile_path(profile):
    cfg_filename = '{}.yml'.format(profile)
    cfg_directory = os.environ.get('PONG_CFG_DIR', DEFAULT_CFG_DIR)
    return os.path.join(cfg_directory, cfg_filename)


def load(profile):
    """Load (if needed) and return the configuration file for `profile`.

    Profile configurations are cached. Look for configuration profiles in the
    "PONG_CFG_DIR" environment variable if it is set, or in the
    DEFAULT_CFG_DIR otherwise. Raise a ConfigReadError if no such file exist.
    """

    try:
        return LOADED_CONFIGS[profile]
    except KeyError:
        pass

    cfg_path = profile_path(profile)

    try:
        with open(cfg_path, 'r') as cfg_fp:
            cfg = yaml.safe_load(cfg_fp)
    except IOError:
        raise ConfigReadError("%s does not exist (specify PONG_CFG_DIR?)"
                              % cfg_path)
    except yaml.YAMLError as e:
        raise ConfigReadError("%s is not valid YAML: %s" % (cfg_path, e))

    LOADED_CONFIGS[profile] = cfg or {}

    return LOADED_CONFIGS[profile]


def load_settings(profile='pong'):
    """Settings from `profile`, falling back to DEFAULTS when it is absent."""
    if profile not in LOADED_CONFIGS and not os.path.exists(profile_path(profile)):
        return Settings.from_mapping({})
    values = load(profile)
    if not isinstance(values, dict):
        raise ConfigReadError("profile %s must be a mapping" % profile)
    return Settings.from_mapping(values)
