"""Unit tests for LogthisSettings and the env loaders."""

from dataclasses import dataclass, field
from typing import ClassVar

import pytest

from logthis.config import (
    ConfigError,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    InvalidSettingValueError,
    LogthisSettings,
    MissingRequiredSettingError,
    Settings,
)
from logthis.kernel.errors import ConfigurationError


# ---------------------------------------------------------------------------
# Generic settings class used for loader behaviour
# ---------------------------------------------------------------------------


@dataclass
class SinkSettings(Settings):
    _prefix: ClassVar[str] = "SINK"

    endpoint: str
    port: int = 8080
    verbose: bool = False
    topics: list[str] = field(default_factory=list)


class TestEnvSettingsLoader:
    def test_reads_prefixed_variables(self) -> None:
        env = {"SINK_ENDPOINT": "db.local", "SINK_PORT": "5432", "SINK_VERBOSE": "yes"}
        settings = EnvSettingsLoader(env).load(SinkSettings)
        assert settings.endpoint == "db.local"
        assert settings.port == 5432
        assert settings.verbose is True

    def test_list_values_are_split(self) -> None:
        env = {"SINK_ENDPOINT": "x", "SINK_TOPICS": "audit, billing ,"}
        assert EnvSettingsLoader(env).load(SinkSettings).topics == ["audit", "billing"]

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader({}).load(SinkSettings)
        assert exc_info.value.setting_name == "SINK_ENDPOINT"

    def test_uncoercible_value(self) -> None:
        env = {"SINK_ENDPOINT": "x", "SINK_PORT": "eighty"}
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader(env).load(SinkSettings)
        assert exc_info.value.setting_name == "SINK_PORT"

    def test_reads_process_environment_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SINK_ENDPOINT", "from-env")
        assert EnvSettingsLoader().load(SinkSettings).endpoint == "from-env"


class TestErrorsAreConfigurationErrors:
    def test_hierarchy(self) -> None:
        assert issubclass(ConfigError, ConfigurationError)
        assert issubclass(InvalidSettingValueError, ConfigError)
        assert issubclass(MissingRequiredSettingError, ConfigError)

    def test_invalid_value_detail(self) -> None:
        err = InvalidSettingValueError("port", -1, "must be positive")
        assert err.code == "invalid_setting_value"
        assert err.detail["reason"] == "must be positive"


# ---------------------------------------------------------------------------
# LogthisSettings
# ---------------------------------------------------------------------------


class TestLogthisSettings:
    def test_defaults(self) -> None:
        settings = LogthisSettings()
        assert settings.flush_threshold == 100
        assert settings.max_queue_size == 10_000
        assert settings.flush_interval == 0.0
        assert settings.backpressure == "block"
        assert settings.async_workers == 0

    def test_loads_from_environment(self) -> None:
        env = {
            "LOGTHIS_FLUSH_THRESHOLD": "50",
            "LOGTHIS_FLUSH_INTERVAL": "2.5",
            "LOGTHIS_BACKPRESSURE": "DROP_NEWEST",
            "LOGTHIS_ASYNC_WORKERS": "2",
            "LOGTHIS_LOWER": "warning",
            "LOGTHIS_UPPER": "90",
        }
        settings = EnvSettingsLoader(env).load(LogthisSettings)
        assert settings.flush_threshold == 50
        assert settings.flush_interval == 2.5
        assert settings.backpressure == "drop_newest"
        assert settings.async_workers == 2
        assert settings.lower == "warning"
        assert settings.upper == "90"

    @pytest.mark.parametrize(
        ("kwargs", "setting"),
        [
            ({"flush_threshold": 0}, "flush_threshold"),
            ({"flush_threshold": 20, "max_queue_size": 10}, "max_queue_size"),
            ({"flush_interval": -1.0}, "flush_interval"),
            ({"async_workers": -1}, "async_workers"),
            ({"backpressure": "explode"}, "backpressure"),
            ({"lower": "VERBOSE"}, "lower"),
            ({"lower": "100"}, "lower"),
            ({"upper": "0"}, "upper"),
            ({"lower": "ERROR", "upper": "NOTE"}, "lower"),
            ({"diagnostics_level": "LOUD"}, "diagnostics_level"),
        ],
    )
    def test_invalid_values(self, kwargs: dict, setting: str) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            LogthisSettings(**kwargs)
        assert exc_info.value.setting_name == setting

    def test_invalid_env_value_is_a_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            EnvSettingsLoader({"LOGTHIS_BACKPRESSURE": "nope"}).load(LogthisSettings)


class TestDotenvSettingsLoader:
    def test_loads_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOGTHIS_FLUSH_THRESHOLD", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("LOGTHIS_FLUSH_THRESHOLD=7\n")
        try:
            settings = DotenvSettingsLoader(str(env_file)).load(LogthisSettings)
            assert settings.flush_threshold == 7
        finally:
            monkeypatch.delenv("LOGTHIS_FLUSH_THRESHOLD", raising=False)
