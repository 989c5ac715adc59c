"""Tests for environment configuration."""

import pytest
from pydantic import ValidationError

from loyverse_proxy.settings import Settings


def _settings(monkeypatch: pytest.MonkeyPatch, **env: str) -> Settings:
    for key in ("LOYVERSE_API_TOKEN", "CORS_ORIGINS", "ALLOWED_ORIGINS", "PORT", "LOYVERSE_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return Settings(_env_file=None)


def test_token_is_required(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(ValidationError):
        _settings(monkeypatch)


def test_blank_token_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(ValidationError):
        _settings(monkeypatch, LOYVERSE_API_TOKEN="   ")


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = _settings(monkeypatch, LOYVERSE_API_TOKEN="secret")

    assert settings.loyverse_api_token.get_secret_value() == "secret"
    assert "secret" not in repr(settings)
    assert settings.loyverse_api_base == "https://api.loyverse.com/v1.0"
    assert settings.loyverse_timeout is None
    assert settings.port == 3000
    assert settings.cors_origins == ["*"]


def test_port_and_base_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = _settings(
        monkeypatch,
        LOYVERSE_API_TOKEN="secret",
        PORT="8080",
        LOYVERSE_API_BASE="https://proxy.internal/v1.0/",
        LOYVERSE_TIMEOUT="2.5",
    )

    assert settings.port == 8080
    assert settings.loyverse_api_base == "https://proxy.internal/v1.0"
    assert settings.loyverse_timeout == 2.5


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('["https://a.com","http://localhost:3000"]', ["https://a.com", "http://localhost:3000"]),
        ("https://a.com, http://localhost:3000", ["https://a.com", "http://localhost:3000"]),
    ],
)
def test_cors_origins_parsing(monkeypatch: pytest.MonkeyPatch, raw: str, expected: list[str]) -> None:
    settings = _settings(monkeypatch, LOYVERSE_API_TOKEN="secret", CORS_ORIGINS=raw)
    assert settings.cors_origins == expected


def test_allowed_origins_alias(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = _settings(monkeypatch, LOYVERSE_API_TOKEN="secret", ALLOWED_ORIGINS="https://pos.example.com")
    assert settings.cors_origins == ["https://pos.example.com"]
