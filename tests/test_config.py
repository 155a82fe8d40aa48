"""Tests for front-end configuration."""

import pytest
from pydantic import ValidationError

from variant_engine.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        """Nothing is required; an empty environment gives the defaults."""
        monkeypatch.delenv("DEFAULT_CATEGORY", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("CHESS960_SEED", raising=False)
        s = Settings(_env_file=None)
        assert s.default_category == "untimed"
        assert s.log_level == "INFO"
        assert s.chess960_seed is None

    def test_all_fields(self, monkeypatch):
        """All fields can be set explicitly."""
        monkeypatch.setenv("DEFAULT_CATEGORY", "crazyhouse")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("CHESS960_SEED", "42")
        s = Settings(_env_file=None)
        assert s.default_category == "crazyhouse"
        assert s.log_level == "DEBUG"
        assert s.chess960_seed == 42

    def test_bad_seed(self, monkeypatch):
        monkeypatch.setenv("CHESS960_SEED", "not-a-number")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_env_file(self, tmp_path, monkeypatch):
        """Values are read from the env file when the environment is silent."""
        monkeypatch.delenv("DEFAULT_CATEGORY", raising=False)
        env = tmp_path / ".env.variants"
        env.write_text("DEFAULT_CATEGORY=wild/fr\n")
        s = Settings(_env_file=env)
        assert s.default_category == "wild/fr"
