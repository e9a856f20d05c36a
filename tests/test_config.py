"""Tests for engine configuration."""

import json

import pytest

from primekit.config import DEFAULT_CONFIG, EngineConfig, get_config
from primekit.errors import InvalidInputError


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_defaults(self):
        """Test default values."""
        config = EngineConfig()
        assert config.segment_size == 65_536
        assert config.small_factor_ceiling == 65_536
        assert config.phi_cache_size == 1024
        assert config.trial_division_limit == 2 ** 32
        assert config.nth_prime_growth == 2.0
        assert config.rho_max_attempts is None

    def test_frozen(self):
        """Test that instances are immutable."""
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.segment_size = 2

    def test_validate(self):
        """Test that out-of-range values are rejected."""
        bad = [
            {"segment_size": 0},
            {"segment_size": 1001},
            {"phi_cache_size": -4},
            {"trial_division_limit": 2},
            {"nth_prime_growth": 1.0},
            {"rho_max_attempts": 0},
        ]
        for kwargs in bad:
            with pytest.raises(InvalidInputError):
                EngineConfig(**kwargs).validate()

    def test_constructor_validates(self):
        """Test that a directly built config is checked on construction."""
        with pytest.raises(InvalidInputError):
            EngineConfig(segment_size=7)
        with pytest.raises(InvalidInputError):
            EngineConfig(nth_prime_growth=0.5)

    def test_from_dict_ignores_unknown(self):
        """Test that unknown keys are dropped."""
        config = EngineConfig.from_dict({"segment_size": 1024, "colour": "blue"})
        assert config.segment_size == 1024
        assert config.phi_cache_size == 1024

    def test_round_trip_file(self, tmp_path):
        """Test saving and loading a JSON file."""
        path = tmp_path / "engine.json"
        config = EngineConfig(segment_size=4096, rho_max_attempts=50)
        config.save(path)

        assert json.loads(path.read_text())["segment_size"] == 4096
        assert EngineConfig.load(path) == config

    def test_load_rejects_non_object(self, tmp_path):
        """Test that a JSON array is not accepted."""
        path = tmp_path / "engine.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(InvalidInputError):
            EngineConfig.load(path)


class TestGetConfig:
    """Tests for environment overrides."""

    def test_no_overrides(self, monkeypatch):
        """Test that the default is returned untouched."""
        for name in ("SEGMENT_SIZE", "RHO_MAX_ATTEMPTS", "NTH_PRIME_GROWTH"):
            monkeypatch.delenv(f"PRIMEKIT_{name}", raising=False)
        assert get_config() is DEFAULT_CONFIG

    def test_env_override(self, monkeypatch):
        """Test that environment variables replace fields."""
        monkeypatch.setenv("PRIMEKIT_SEGMENT_SIZE", "32_768")
        monkeypatch.setenv("PRIMEKIT_NTH_PRIME_GROWTH", "1.5")
        monkeypatch.setenv("PRIMEKIT_RHO_MAX_ATTEMPTS", "none")

        config = get_config(EngineConfig(rho_max_attempts=10))
        assert config.segment_size == 32_768
        assert config.nth_prime_growth == 1.5
        assert config.rho_max_attempts is None

    def test_env_bad_value(self, monkeypatch):
        """Test that unparseable values raise."""
        monkeypatch.setenv("PRIMEKIT_PHI_CACHE_SIZE", "lots")
        with pytest.raises(InvalidInputError):
            get_config()

    def test_env_invalid_range(self, monkeypatch):
        """Test that overrides are validated."""
        monkeypatch.setenv("PRIMEKIT_SEGMENT_SIZE", "7")
        with pytest.raises(InvalidInputError):
            get_config()
