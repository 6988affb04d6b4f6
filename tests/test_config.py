import pytest
from pydantic import ValidationError

from app.core.config import Settings


def _settings(**values) -> Settings:
    return Settings(_env_file=None, **values)


def _settings_with_cors(value: str) -> Settings:
    return _settings(TMDB_API_KEY="test-key", CORS_ORIGINS=value)


def test_cors_origin_list_supports_comma_separated_values() -> None:
    settings = _settings_with_cors("http://localhost:5173,http://localhost:3000")
    assert settings.cors_origin_list() == [
        "http://localhost:5173",
        "http://localhost:3000",
    ]


def test_cors_origin_list_normalizes_quotes_and_trailing_slashes() -> None:
    settings = _settings_with_cors("'http://localhost:5173/'")
    assert settings.cors_origin_list() == ["http://localhost:5173"]


def test_cors_origin_list_supports_json_array_format() -> None:
    settings = _settings_with_cors(
        '["http://localhost:5173", "http://127.0.0.1:5173/"]'
    )
    assert settings.cors_origin_list() == [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]


def test_cors_origin_list_keeps_wildcard() -> None:
    assert _settings_with_cors("*").cors_origin_list() == ["*"]


def test_missing_api_key_is_allowed_at_startup() -> None:
    settings = _settings(TMDB_API_KEY=None)
    assert settings.tmdb_api_key is None
    assert settings.has_tmdb_credentials() is False


def test_blank_api_key_is_treated_as_missing() -> None:
    settings = _settings(TMDB_API_KEY="  ")
    assert settings.tmdb_api_key is None
    assert settings.has_tmdb_credentials() is False


def test_api_key_is_stripped() -> None:
    settings = _settings(TMDB_API_KEY=" abc123 \n")
    assert settings.tmdb_api_key == "abc123"
    assert settings.has_tmdb_credentials() is True


def test_defaults() -> None:
    settings = _settings(TMDB_API_KEY="k", TMDB_BASE_URL="https://api.themoviedb.org/3")
    assert settings.port == 5000
    assert settings.web_port == 3000
    assert settings.tmdb_base_url == "https://api.themoviedb.org/3"
    assert settings.tmdb_timeout_seconds > 0


def test_base_urls_drop_trailing_slash() -> None:
    settings = _settings(
        TMDB_BASE_URL="https://api.themoviedb.org/3/",
        PROXY_BASE_URL="http://localhost:5000/api/",
    )
    assert settings.tmdb_base_url == "https://api.themoviedb.org/3"
    assert settings.proxy_base_url == "http://localhost:5000/api"


def test_port_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("TMDB_API_KEY", "from-env")
    settings = Settings(_env_file=None)
    assert settings.port == 8080
    assert settings.tmdb_api_key == "from-env"


def test_timeout_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        _settings(TMDB_TIMEOUT_SECONDS=0)
