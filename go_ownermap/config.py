"""
Configuration management for the ownership statistics core.

Loads judgement thresholds and board defaults from config.yaml and provides
typed access. Every setting has a default, so a missing file is not an error
unless a path was given explicitly.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .board import RULES_HANDICAP_COMPENSATION

# Strict threshold separating confident verdicts from unclear ones
GJ_THRESHOLD = 0.8
# Looser threshold for imprecise estimates (scoring, fallback display)
LOOSE_THRESHOLD = 0.67


def _check_threshold(name: str, value: float) -> float:
    value = float(value)
    if not (0.0 <= value <= 1.0):
        raise ValueError(f"{name} must be within [0, 1], got {value}")
    return value


@dataclass
class JudgementConfig:
    """Thresholds used to turn playout counts into verdicts."""
    group_threshold: float = GJ_THRESHOLD
    loose_threshold: float = LOOSE_THRESHOLD
    score_threshold: float = LOOSE_THRESHOLD

    def __post_init__(self):
        self.group_threshold = _check_threshold("group_threshold", self.group_threshold)
        self.loose_threshold = _check_threshold("loose_threshold", self.loose_threshold)
        self.score_threshold = _check_threshold("score_threshold", self.score_threshold)


@dataclass
class BoardConfig:
    """Board defaults."""
    default_komi: float = 7.5
    rules: str = "chinese"

    def __post_init__(self):
        if self.rules not in RULES_HANDICAP_COMPENSATION:
            raise ValueError(
                f"rules must be one of {sorted(RULES_HANDICAP_COMPENSATION)}, got {self.rules}"
            )


@dataclass
class AppConfig:
    """Main application configuration."""
    judgement: JudgementConfig = field(default_factory=JudgementConfig)
    board: BoardConfig = field(default_factory=BoardConfig)


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{name}' section must be a mapping")
    return section


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config.yaml. If None, searches in:
                     1. Current directory
                     2. Project root (relative to this file)
                     and falls back to defaults when neither exists.

    Returns:
        AppConfig instance

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        ValueError: If config file is invalid
    """
    if config_path is None:
        search_paths = [
            Path.cwd() / "config.yaml",
            get_project_root() / "config.yaml",
        ]

        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break
        else:
            return AppConfig()
    elif not Path(config_path).exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return AppConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    judgement_data = _section(data, "judgement")
    judgement_config = JudgementConfig(
        group_threshold=judgement_data.get("group_threshold", GJ_THRESHOLD),
        loose_threshold=judgement_data.get("loose_threshold", LOOSE_THRESHOLD),
        score_threshold=judgement_data.get("score_threshold", LOOSE_THRESHOLD),
    )

    board_data = _section(data, "board")
    board_config = BoardConfig(
        default_komi=float(board_data.get("default_komi", 7.5)),
        rules=board_data.get("rules", "chinese"),
    )

    return AppConfig(
        judgement=judgement_config,
        board=board_config,
    )
