# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for config module."""

import os
import sys
import tempfile
import unittest
from unittest.mock import patch

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from config import (
    GameConfig, GridConfig, ScoringConfig, StorageConfig, LoggingConfig,
    ConfigValidationError, CONFIG_PATH_ENV, load_config,
)
from models import Language


class TestGameConfig(unittest.TestCase):
    """Tests for GameConfig class."""

    def test_default_config(self):
        """Test default configuration values."""
        config = GameConfig()

        self.assertEqual(config.language, "en")
        self.assertIsNone(config.start_category)
        self.assertTrue(config.shuffle_words)
        self.assertEqual(config.grid.size, 6)
        self.assertEqual(config.grid.on_placement_failure, "skip")
        self.assertEqual(config.scoring.points_per_word, 100)
        self.assertEqual(config.hint_costs(), {1: 50, 2: 100})
        self.assertEqual(config.scoring.category_prices["Renaissance"], 1000)
        self.assertIn("Ç", config.alphabets["tr"])

    def test_nested_config_from_dict(self):
        """Test creating config with nested dict values."""
        config = GameConfig(
            grid={'size': 8},
            storage={'progress_path': None, 'autosave': False},
            logging={'level': 'DEBUG'},
        )

        self.assertIsInstance(config.grid, GridConfig)
        self.assertEqual(config.grid.size, 8)
        self.assertFalse(config.storage.autosave)
        self.assertIsNone(config.storage.progress_path)
        self.assertEqual(config.logging.level, 'DEBUG')

    def test_validation_valid_config(self):
        self.assertEqual(GameConfig().validate(), [])

    def test_validation_invalid_values(self):
        """Test validation catches each invalid field."""
        config = GameConfig(
            language="de",
            grid=GridConfig(size=20, max_attempts=0, on_placement_failure="retry"),
            scoring=ScoringConfig(hint_cost=-1),
            logging=LoggingConfig(level="LOUD"),
        )

        errors = config.validate()
        self.assertEqual(len(errors), 6)
        self.assertTrue(any("language" in e for e in errors))
        self.assertTrue(any("grid size" in e for e in errors))

    def test_validation_empty_alphabet(self):
        config = GameConfig()
        config.alphabets["tr"] = ""

        self.assertEqual(len(config.validate()), 1)

    def test_validation_wrong_types(self):
        """Non-integer values are reported instead of raising TypeError."""
        config = GameConfig(
            grid=GridConfig(size="6", max_attempts=None),
            scoring=ScoringConfig(points_per_word=True),
            logging=LoggingConfig(level=10),
        )
        config.scoring.category_prices["Renaissance"] = "cheap"
        config.alphabets["en"] = ["A", "B"]

        errors = config.validate()
        self.assertEqual(len(errors), 6)
        self.assertTrue(any("Grid size must be an integer" in e for e in errors))
        self.assertTrue(any("max_attempts must be an integer" in e for e in errors))
        self.assertTrue(any("points_per_word must be an integer" in e for e in errors))
        self.assertTrue(any("Renaissance" in e for e in errors))

    def test_language_helpers(self):
        config = GameConfig(language="TR")
        config.alphabets["tr"] = "ABC"

        self.assertEqual(config.language_enum(), Language.TR)
        self.assertEqual(config.alphabet_map()[Language.TR], "ABC")

    def test_to_dict(self):
        data = GameConfig().to_dict()

        self.assertEqual(data['game']['language'], 'en')
        self.assertEqual(data['grid']['size'], 6)
        self.assertEqual(data['storage'], {
            'progress_path': StorageConfig().progress_path,
            'autosave': True,
        })


class TestYAMLLoading(unittest.TestCase):
    """Tests for YAML configuration loading."""

    def setUp(self):
        """Create a temporary YAML file for testing."""
        self.temp_file = tempfile.NamedTemporaryFile(
            mode='w', suffix='.yaml', delete=False, encoding='utf-8'
        )
        self.temp_file.write('''
game:
  language: tr
  start_category: Medieval Europe
  shuffle_words: false

alphabets:
  tr: "ABCÇ"

grid:
  size: 5
  on_placement_failure: serpentine

scoring:
  hint_cost: 25
  category_prices:
    Renaissance: 500

storage:
  progress_path: "./saves/progress.yaml"

unknown_section:
  ignored: true
''')
        self.temp_file.close()

    def tearDown(self):
        """Clean up temporary file."""
        os.unlink(self.temp_file.name)

    def test_load_from_yaml(self):
        """Test loading configuration from YAML file."""
        config = GameConfig.from_yaml(self.temp_file.name)

        self.assertEqual(config.language, "tr")
        self.assertEqual(config.start_category, "Medieval Europe")
        self.assertFalse(config.shuffle_words)
        self.assertEqual(config.alphabets["tr"], "ABCÇ")
        self.assertEqual(config.alphabets["en"], "ABCDEFGHIJKLMNOPQRSTUVWXYZ")
        self.assertEqual(config.grid.size, 5)
        self.assertEqual(config.grid.max_attempts, 300)
        self.assertEqual(config.grid.on_placement_failure, "serpentine")
        self.assertEqual(config.hint_costs(), {1: 25, 2: 100})
        self.assertEqual(config.scoring.category_prices["Renaissance"], 500)
        self.assertEqual(config.scoring.category_prices["Ancient Greece"], 3000)
        self.assertEqual(config.storage.progress_path, "./saves/progress.yaml")
        self.assertTrue(config.storage.autosave)

    def test_load_nonexistent_file(self):
        """Test error when loading non-existent file."""
        with self.assertRaises(ConfigValidationError):
            GameConfig.from_yaml("/nonexistent/path.yaml")

    def test_load_invalid_yaml(self):
        with open(self.temp_file.name, 'w', encoding='utf-8') as f:
            f.write("grid: [size\n")

        with self.assertRaises(ConfigValidationError):
            GameConfig.from_yaml(self.temp_file.name)

    def test_empty_file_gives_defaults(self):
        with open(self.temp_file.name, 'w', encoding='utf-8') as f:
            f.write("")

        config = GameConfig.from_yaml(self.temp_file.name)
        self.assertEqual(config.grid.size, 6)


class TestLoadConfig(unittest.TestCase):
    """Tests for load_config source priority."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.temp_dir.name, "game.yaml")
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write("grid:\n  size: 4\n")

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_defaults_without_path(self):
        with patch.dict(os.environ, {}, clear=True):
            config = load_config()
        self.assertEqual(config.grid.size, 6)

    def test_environment_variable(self):
        with patch.dict(os.environ, {CONFIG_PATH_ENV: self.path}):
            config = load_config()
        self.assertEqual(config.grid.size, 4)

    def test_explicit_path_wins(self):
        other = os.path.join(self.temp_dir.name, "other.yaml")
        with open(other, 'w', encoding='utf-8') as f:
            f.write("grid:\n  size: 9\n")

        with patch.dict(os.environ, {CONFIG_PATH_ENV: self.path}):
            config = load_config(other)
        self.assertEqual(config.grid.size, 9)

    def test_invalid_config_raises(self):
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write("grid:\n  size: 1\n")

        with self.assertRaises(ConfigValidationError) as ctx:
            load_config(self.path)
        self.assertIn("grid size", str(ctx.exception))

    def test_quoted_number_raises_validation_error(self):
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write('grid:\n  size: "6"\nscoring:\n  hint_cost: "50"\n')

        with self.assertRaises(ConfigValidationError) as ctx:
            load_config(self.path)
        self.assertIn("Grid size must be an integer", str(ctx.exception))
        self.assertIn("hint_cost must be an integer", str(ctx.exception))

    def test_list_of_prices_raises_validation_error(self):
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write("scoring:\n  category_prices: [100, 200]\n")

        with self.assertRaises(ConfigValidationError):
            load_config(self.path)


if __name__ == '__main__':
    unittest.main()
