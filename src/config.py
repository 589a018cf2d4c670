# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Configuration module for the word trail game engine.

Handles loading configuration from YAML files and the environment,
with proper defaults and validation.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any

import yaml

from grid_generator import DEFAULT_MAX_ATTEMPTS, FAILURE_POLICIES, FAILURE_POLICY_SKIP
from models import DEFAULT_ALPHABETS, DEFAULT_GRID_SIZE, Language
from scoring import (
    DEFAULT_CATEGORY_PRICES, HINT_COST, POINTS_PER_WORD, SECOND_HINT_COST,
)


# Environment variable naming a YAML configuration file
CONFIG_PATH_ENV = "WORD_TRAIL_CONFIG"

# Valid configuration values
MIN_GRID_SIZE = 2
MAX_GRID_SIZE = 12
VALID_LANGUAGES = [language.value for language in Language]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


def _is_int(value: Any) -> bool:
    # YAML reads 'yes' as a bool, and bool is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class GridConfig:
    """Configuration for grid generation."""
    size: int = DEFAULT_GRID_SIZE
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    on_placement_failure: str = FAILURE_POLICY_SKIP


@dataclass
class ScoringConfig:
    """Configuration for points, hints and category prices."""
    points_per_word: int = POINTS_PER_WORD
    hint_cost: int = HINT_COST
    second_hint_cost: int = SECOND_HINT_COST
    starting_points: int = 0
    category_prices: Dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_PRICES)
    )


@dataclass
class StorageConfig:
    """Configuration for progress persistence."""
    progress_path: Optional[str] = "./progress.yaml"
    autosave: bool = True


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    directory: Optional[str] = None
    level: str = "INFO"
    console: bool = True
    file_prefix: str = "word_trail"


@dataclass
class GameConfig:
    """Complete configuration for a game session."""
    language: str = Language.EN.value
    start_category: Optional[str] = None
    shuffle_words: bool = True
    alphabets: Dict[str, str] = field(default_factory=lambda: {
        language.value: letters for language, letters in DEFAULT_ALPHABETS.items()
    })

    # Sub-configurations
    grid: GridConfig = field(default_factory=GridConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        """Convert dicts to dataclass instances if needed."""
        if isinstance(self.grid, dict):
            self.grid = GridConfig(**self.grid)
        if isinstance(self.scoring, dict):
            self.scoring = ScoringConfig(**self.scoring)
        if isinstance(self.storage, dict):
            self.storage = StorageConfig(**self.storage)
        if isinstance(self.logging, dict):
            self.logging = LoggingConfig(**self.logging)

    @classmethod
    def from_yaml(cls, path: str) -> 'GameConfig':
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            GameConfig instance

        Raises:
            ConfigValidationError: If file doesn't exist or is invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigValidationError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Configuration file must contain a YAML mapping, got {type(data)}"
            )

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> 'GameConfig':
        """Create GameConfig from dictionary. Unknown keys are ignored."""
        game_data = data.get('game') or {}
        config = cls(
            language=game_data.get('language', cls.language),
            start_category=game_data.get('start_category'),
            shuffle_words=game_data.get('shuffle_words', cls.shuffle_words),
        )

        if 'alphabets' in data:
            for code, letters in (data['alphabets'] or {}).items():
                config.alphabets[str(code).lower()] = letters

        if 'grid' in data:
            grid_data = data['grid'] or {}
            config.grid = GridConfig(
                size=grid_data.get('size', config.grid.size),
                max_attempts=grid_data.get(
                    'max_attempts', config.grid.max_attempts
                ),
                on_placement_failure=grid_data.get(
                    'on_placement_failure', config.grid.on_placement_failure
                ),
            )

        if 'scoring' in data:
            score_data = data['scoring'] or {}
            prices = dict(config.scoring.category_prices)
            extra_prices = score_data.get('category_prices') or {}
            if not isinstance(extra_prices, dict):
                raise ConfigValidationError(
                    f"category_prices must be a mapping, got {type(extra_prices)}"
                )
            prices.update(extra_prices)
            config.scoring = ScoringConfig(
                points_per_word=score_data.get(
                    'points_per_word', config.scoring.points_per_word
                ),
                hint_cost=score_data.get('hint_cost', config.scoring.hint_cost),
                second_hint_cost=score_data.get(
                    'second_hint_cost', config.scoring.second_hint_cost
                ),
                starting_points=score_data.get(
                    'starting_points', config.scoring.starting_points
                ),
                category_prices=prices,
            )

        if 'storage' in data:
            store_data = data['storage'] or {}
            config.storage = StorageConfig(
                progress_path=store_data.get(
                    'progress_path', config.storage.progress_path
                ),
                autosave=store_data.get('autosave', config.storage.autosave),
            )

        if 'logging' in data:
            log_data = data['logging'] or {}
            config.logging = LoggingConfig(
                directory=log_data.get('directory', config.logging.directory),
                level=log_data.get('level', config.logging.level),
                console=log_data.get('console', config.logging.console),
                file_prefix=log_data.get(
                    'file_prefix', config.logging.file_prefix
                ),
            )

        return config

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        # Validate language
        if str(self.language).lower() not in VALID_LANGUAGES:
            errors.append(
                f"Invalid language '{self.language}'. "
                f"Must be one of: {VALID_LANGUAGES}"
            )

        # Validate alphabets
        for code, letters in self.alphabets.items():
            if code not in VALID_LANGUAGES:
                errors.append(f"Alphabet given for unknown language '{code}'")
            elif not isinstance(letters, str):
                errors.append(f"Alphabet for '{code}' must be a string of letters")
            elif not letters:
                errors.append(f"Alphabet for '{code}' cannot be empty")

        # Validate grid
        if not _is_int(self.grid.size):
            errors.append(f"Grid size must be an integer, got {self.grid.size!r}")
        elif not MIN_GRID_SIZE <= self.grid.size <= MAX_GRID_SIZE:
            errors.append(
                f"Invalid grid size {self.grid.size}. "
                f"Must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}"
            )
        if not _is_int(self.grid.max_attempts):
            errors.append(
                f"max_attempts must be an integer, got {self.grid.max_attempts!r}"
            )
        elif self.grid.max_attempts < 1:
            errors.append("max_attempts must be at least 1")
        if self.grid.on_placement_failure not in FAILURE_POLICIES:
            errors.append(
                f"Invalid placement failure policy "
                f"'{self.grid.on_placement_failure}'. "
                f"Must be one of: {FAILURE_POLICIES}"
            )

        # Validate scoring
        for name in ('points_per_word', 'hint_cost', 'second_hint_cost',
                     'starting_points'):
            value = getattr(self.scoring, name)
            if not _is_int(value):
                errors.append(f"{name} must be an integer, got {value!r}")
            elif value < 0:
                errors.append(f"{name} must be non-negative")
        for category, price in self.scoring.category_prices.items():
            if not _is_int(price):
                errors.append(f"Price for '{category}' must be an integer, got {price!r}")
            elif price < 0:
                errors.append(f"Price for '{category}' must be non-negative")

        # Validate logging
        if str(self.logging.level).upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log level '{self.logging.level}'. "
                f"Must be one of: {VALID_LOG_LEVELS}"
            )

        return errors

    def language_enum(self) -> Language:
        return Language.from_code(self.language)

    def alphabet_map(self) -> Dict[Language, str]:
        """Alphabets keyed by Language."""
        return {
            Language.from_code(code): letters
            for code, letters in self.alphabets.items()
            if code in VALID_LANGUAGES
        }

    def hint_costs(self) -> Dict[int, int]:
        return {1: self.scoring.hint_cost, 2: self.scoring.second_hint_cost}

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'game': {
                'language': self.language,
                'start_category': self.start_category,
                'shuffle_words': self.shuffle_words,
            },
            'alphabets': dict(self.alphabets),
            'grid': asdict(self.grid),
            'scoring': asdict(self.scoring),
            'storage': asdict(self.storage),
            'logging': asdict(self.logging),
        }


def load_config(path: Optional[str] = None) -> GameConfig:
    """
    Load configuration from a YAML file or defaults.

    Priority order:
    1. Explicit path argument
    2. WORD_TRAIL_CONFIG environment variable
    3. Built-in defaults

    Args:
        path: YAML configuration file

    Returns:
        Validated GameConfig

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    path = path or os.environ.get(CONFIG_PATH_ENV)
    config = GameConfig.from_yaml(path) if path else GameConfig()

    errors = config.validate()
    if errors:
        raise ConfigValidationError(
            "Configuration validation failed:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )

    return config
