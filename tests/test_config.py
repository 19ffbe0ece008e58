"""Tests for configuration defaults and environment overrides."""

import pytest

from corelens.config import EngineConfig, SimilarityBands, load_config
from corelens.errors import ConfigError, ValidationError


class TestSimilarityBands:
    """Tests for the canonical band set."""

    @pytest.mark.parametrize("similarity,band", [
        (1.0, "very_high"),
        (0.95, "very_high"),
        (0.9499, "high"),
        (0.85, "high"),
        (0.8, "medium"),
        (0.75, "medium"),
        (0.7, None),
    ])
    def test_band_for(self, similarity, band):
        """Similarities map to the configured bands."""
        assert SimilarityBands().band_for(similarity) == band


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self):
        """Test default settings with an empty environment."""
        config = load_config({})
        assert config == EngineConfig()
        assert config.redundancy.similarity_threshold == 0.85
        assert config.redundancy.batch_size == 10
        assert config.redundancy.max_embedding_chars == 8000
        assert config.savings.hourly_rate == 75.0
        assert config.savings.effort_hours == {"Low": 2, "Medium": 4, "High": 8}
        assert config.fit_to_standard.min_confidence == 0.5

    def test_overrides(self):
        """Environment values override the defaults."""
        config = load_config({
            "CORELENS_SIMILARITY_THRESHOLD": "0.9",
            "CORELENS_BATCH_SIZE": "4",
            "CORELENS_BATCH_PAUSE": "0",
            "CORELENS_HOURLY_RATE": "120",
        })
        assert config.redundancy.similarity_threshold == 0.9
        assert config.redundancy.batch_size == 4
        assert config.redundancy.batch_pause_seconds == 0.0
        assert config.savings.hourly_rate == 120.0

    def test_blank_value_uses_default(self):
        """Blank variables fall back to the default."""
        assert load_config({"CORELENS_BATCH_SIZE": "  "}).redundancy.batch_size == 10

    @pytest.mark.parametrize("name,value", [
        ("CORELENS_SIMILARITY_THRESHOLD", "1.5"),
        ("CORELENS_SIMILARITY_THRESHOLD", "high"),
        ("CORELENS_BATCH_SIZE", "0"),
        ("CORELENS_BATCH_SIZE", "2.5"),
        ("CORELENS_HOURLY_RATE", "-1"),
    ])
    def test_invalid_values(self, name, value):
        """Unparseable or out-of-range values raise ConfigError."""
        with pytest.raises(ConfigError, match=name):
            load_config({name: value})

    def test_config_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            load_config({"CORELENS_BATCH_PAUSE": "soon"})

    def test_reads_environment(self, monkeypatch):
        """Without an explicit mapping the process environment is read."""
        monkeypatch.setenv("CORELENS_PROVIDER_TIMEOUT", "5")
        assert load_config().redundancy.provider_timeout_seconds == 5.0
