"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from envolvechat.config.settings import (
    EmbedConfig,
    LoggingConfig,
    Settings,
    SigningConfig,
    load_settings,
)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run each test in an empty directory with no envolvechat env vars."""
    monkeypatch.chdir(tmp_path)
    for var in ("ENVOLVE_API_KEY", "ENVOLVECHAT_API_KEY", "ENVOLVECHAT_CLIENT_IP"):
        # Recorded first so values written by the .env loader are undone too.
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)


class TestSettings:
    def test_default_settings(self) -> None:
        settings = Settings()
        assert settings.api_key.get_secret_value() == ""
        assert settings.client_ip == "none"
        assert settings.signing.clock == "local"
        assert settings.embed.escape is False
        assert settings.logging.level == "INFO"

    def test_section_defaults(self) -> None:
        assert SigningConfig().clock == "local"
        assert EmbedConfig().escape is False
        assert LoggingConfig().file is None

    def test_invalid_clock_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SigningConfig(clock="martian")  # type: ignore[arg-type]

    def test_api_key_hidden(self) -> None:
        settings = Settings(api_key="1-topsecret")
        assert "topsecret" not in repr(settings)

    def test_prefixed_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVOLVECHAT_API_KEY", "77-abc")
        monkeypatch.setenv("ENVOLVECHAT_SIGNING__CLOCK", "utc")
        settings = Settings()
        assert settings.api_key.get_secret_value() == "77-abc"
        assert settings.signing.clock == "utc"


class TestLoadSettings:
    def test_missing_file_falls_back_to_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.client_ip == "none"

    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "envolvechat.yaml"
        path.write_text(
            "api_key: 123-abc\n"
            "client_ip: 10.0.0.1\n"
            "signing:\n"
            "  clock: utc\n"
            "embed:\n"
            "  escape: true\n"
            "logging:\n"
            "  level: DEBUG\n"
        )
        settings = load_settings(path)
        assert settings.api_key.get_secret_value() == "123-abc"
        assert settings.client_ip == "10.0.0.1"
        assert settings.signing.clock == "utc"
        assert settings.embed.escape is True
        assert settings.logging.level == "DEBUG"

    def test_empty_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(path).client_ip == "none"

    def test_unprefixed_api_key(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVOLVE_API_KEY", "42-fromenv")
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.api_key.get_secret_value() == "42-fromenv"

    def test_yaml_key_wins_over_unprefixed_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVOLVE_API_KEY", "42-fromenv")
        path = tmp_path / "envolvechat.yaml"
        path.write_text("api_key: 1-fromyaml\n")
        assert load_settings(path).api_key.get_secret_value() == "1-fromyaml"

    def test_dotenv_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("# comment\nENVOLVE_API_KEY=9-dotenv\n")
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.api_key.get_secret_value() == "9-dotenv"
