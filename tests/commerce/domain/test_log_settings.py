"""Environment-driven logging settings."""

from pathlib import Path

import pytest

from shared.logging import LogSettings


@pytest.fixture()
def clean_env(monkeypatch):
    for name in ("ENV", "ENVIRONMENT", "PROTEAN_ENV", "LOG_LEVEL", "LOG_DIR"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLogSettings:
    def test_defaults(self, clean_env):
        log = LogSettings.from_env()

        assert log.environment == "development"
        assert log.level == "DEBUG"
        assert log.directory == Path("logs")
        assert not log.as_json

    def test_first_environment_variable_wins(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "Production")
        clean_env.setenv("PROTEAN_ENV", "test")

        log = LogSettings.from_env()
        assert log.environment == "production"
        assert log.level == "INFO"
        assert log.as_json

    def test_explicit_level(self, clean_env):
        clean_env.setenv("PROTEAN_ENV", "test")
        clean_env.setenv("LOG_LEVEL", "error")

        assert LogSettings.from_env().level == "ERROR"
