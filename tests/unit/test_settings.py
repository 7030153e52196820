"""Tests for orca.settings module."""

import pytest

from orca.pipelines import ErrorHandlingStrategy
from orca.settings import OrcaSettings


class DescribeOrcaSettings:
    @pytest.fixture(autouse=True)
    def clean_environment(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        for name in ("ORCA_ERROR_STRATEGY", "ORCA_LOG_LEVEL", "ORCA_SERIALIZE_LOGS", "ORCA_DEBUG"):
            monkeypatch.delenv(name, raising=False)

    def it_has_sensible_defaults(self) -> None:
        settings = OrcaSettings()

        assert settings.error_strategy == ErrorHandlingStrategy.STOP_ON_ERROR
        assert settings.log_level == "INFO"
        assert settings.serialize_logs is False
        assert settings.debug is False

    def it_reads_prefixed_environment_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ORCA_ERROR_STRATEGY", "skip_failed")
        monkeypatch.setenv("ORCA_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("ORCA_SERIALIZE_LOGS", "true")

        settings = OrcaSettings()

        assert settings.error_strategy == ErrorHandlingStrategy.SKIP_FAILED
        assert settings.log_level == "DEBUG"
        assert settings.serialize_logs is True

    def it_reads_the_dotenv_file(self, tmp_path) -> None:
        (tmp_path / ".env").write_text("ORCA_DEBUG=true\n")

        assert OrcaSettings().debug is True

    def it_rejects_unknown_strategies(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ORCA_ERROR_STRATEGY", "retry_forever")

        with pytest.raises(ValueError):
            OrcaSettings()
