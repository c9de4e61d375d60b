"""Unit tests for configuration system."""
import pytest
import os
from pathlib import Path
from unittest.mock import patch

import yaml

from greenlight.config import Settings, get_settings, constants


class TestSettings:
    """Test Settings configuration."""

    def test_defaults(self, temp_dir):
        """Test default values when nothing is configured."""
        settings = Settings(history_dir=temp_dir)

        assert settings.catalog_dir is None
        assert settings.random_seed is None
        assert settings.analysis_delay == constants.DEFAULT_ANALYSIS_DELAY
        assert settings.history_timeout == constants.DEFAULT_HISTORY_TIMEOUT
        assert settings.log_level == "INFO"

    def test_environment_prefix(self, temp_dir):
        """Test GREENLIGHT_ environment variables are read."""
        with patch.dict(os.environ, {
            'GREENLIGHT_RANDOM_SEED': '42',
            'GREENLIGHT_HISTORY_DIR': str(temp_dir / "env_history"),
            'GREENLIGHT_LOG_LEVEL': 'debug',
        }):
            settings = Settings()

        assert settings.random_seed == 42
        assert settings.history_dir == (temp_dir / "env_history").resolve()
        assert settings.log_level == "DEBUG"

    def test_log_level_validation(self, temp_dir):
        """Test invalid log level raises error."""
        with pytest.raises(ValueError, match="Log level must be one of"):
            Settings(history_dir=temp_dir, log_level="LOUD")

    def test_history_directory_creation(self, temp_dir):
        """Test that the history directory is created if it doesn't exist."""
        history_dir = temp_dir / "nested" / "history"
        Settings(history_dir=history_dir)

        assert history_dir.exists()

    def test_catalog_dir_must_exist(self, temp_dir):
        """Test catalog override pointing nowhere is rejected."""
        with pytest.raises(ValueError, match="Catalog directory not found"):
            Settings(history_dir=temp_dir, catalog_dir=temp_dir / "missing")

    def test_timeout_must_be_positive(self, temp_dir):
        """Test a zero history timeout is rejected."""
        with pytest.raises(ValueError):
            Settings(history_dir=temp_dir, history_timeout=0)

    def test_load_config_file(self, temp_dir):
        """Test loading configuration from YAML file."""
        config_file = temp_dir / "config.yaml"
        config_file.write_text("""
random_seed: 7
analysis_delay: 0.5
unknown_key: ignored
load_config_file: ignored too
""")

        settings = Settings(history_dir=temp_dir)
        settings.load_config_file(config_file)

        assert settings.random_seed == 7
        assert settings.analysis_delay == 0.5
        assert not hasattr(settings, 'unknown_key')
        assert callable(settings.load_config_file)

    def test_load_config_file_validates(self, temp_dir):
        """Test invalid file values raise instead of being stored."""
        config_file = temp_dir / "config.yaml"
        config_file.write_text("history_timeout: 0\n")

        settings = Settings(history_dir=temp_dir)
        with pytest.raises(ValueError):
            settings.load_config_file(config_file)

        assert settings.history_timeout == constants.DEFAULT_HISTORY_TIMEOUT

    def test_assignment_validated(self, temp_dir):
        """Test attribute assignment runs the field validators."""
        settings = Settings(history_dir=temp_dir)

        with pytest.raises(ValueError, match="Log level must be one of"):
            settings.log_level = "verbose"
        with pytest.raises(ValueError):
            settings.history_timeout = 0

        settings.log_level = "debug"
        settings.random_seed = "12"
        assert settings.log_level == "DEBUG"
        assert settings.random_seed == 12
        assert settings.history_timeout == constants.DEFAULT_HISTORY_TIMEOUT

    def test_load_missing_config_file(self, temp_dir):
        """Test a missing config file leaves settings untouched."""
        settings = Settings(history_dir=temp_dir, random_seed=3)
        settings.load_config_file(temp_dir / "nope.yaml")

        assert settings.random_seed == 3

    def test_save_config_file(self, temp_dir):
        """Test saving configuration to YAML file."""
        config_file = temp_dir / "config.yaml"

        settings = Settings(history_dir=temp_dir)
        settings.random_seed = 99
        settings.save_config_file(config_file)

        assert config_file.exists()

        with open(config_file) as f:
            saved = yaml.safe_load(f)

        assert saved['random_seed'] == 99
        assert saved['history_dir'] == str(temp_dir.resolve())
        assert saved['catalog_dir'] is None

    def test_get_settings_cached(self):
        """Test get_settings returns one shared instance."""
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestConstants:
    """Test configuration constants."""

    def test_score_bounds(self):
        """Test final score bounds."""
        assert constants.MIN_SCORE == 25
        assert constants.MAX_SCORE == 98
        assert constants.SCORE_JITTER == (-2, 2)

    def test_match_bounds(self):
        """Test buyer/producer match bounds."""
        assert constants.MIN_MATCH == 50
        assert constants.MAX_MATCH == 98
        assert constants.MATCH_THRESHOLD == 60
        assert constants.MAX_MATCHES == 10

    def test_budget_tiers_contiguous(self):
        """Test each budget tier starts where the previous one ends."""
        tiers = list(constants.BUDGET_TIERS.values())
        for (_, high), (low, _) in zip(tiers, tiers[1:]):
            assert high == low
        assert tiers[-1][1] is None

    def test_catalog_files(self):
        """Test bundled catalog files exist."""
        for file_name in constants.CATALOG_FILES.values():
            assert (constants.BUNDLED_CATALOG_DIR / file_name).exists()

    def test_history_suffix(self):
        """Test version history file suffix."""
        assert constants.HISTORY_FILE_SUFFIX == ".versions.json"
        assert isinstance(constants.DEFAULT_HISTORY_DIR, Path)
