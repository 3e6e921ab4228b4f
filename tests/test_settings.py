import pytest
from pydantic import ValidationError

from infra.settings import Settings, get_settings

ARENA_VARIABLES = (
    "ARENA_HOST",
    "ARENA_PORT",
    "ARENA_LOG_LEVEL",
    "ARENA_LOG_JSON",
    "ARENA_LOG_FILE",
    "ARENA_GRID_SIZE",
    "ARENA_LOGFIRE",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ARENA_VARIABLES:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.port == 3000
    assert settings.grid_size == 9
    assert settings.log_level == "INFO"
    assert not settings.logfire


def test_values_are_read_from_arena_variables(monkeypatch):
    monkeypatch.setenv("ARENA_HOST", "127.0.0.1")
    monkeypatch.setenv("ARENA_PORT", "8080")
    monkeypatch.setenv("ARENA_LOG_LEVEL", "debug")
    monkeypatch.setenv("ARENA_LOG_JSON", "yes")
    monkeypatch.setenv("ARENA_LOG_FILE", "")
    monkeypatch.setenv("ARENA_GRID_SIZE", "13")
    monkeypatch.setenv("ARENA_LOGFIRE", "0")

    settings = Settings(_env_file=None)
    assert settings.host == "127.0.0.1"
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"
    assert settings.log_json
    assert settings.log_file is None
    assert settings.grid_size == 13
    assert not settings.logfire


def test_values_are_read_from_an_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("ARENA_PORT=4000\nARENA_GRID_SIZE=11\nUNRELATED=1\n", encoding="utf-8")

    settings = Settings(_env_file=env_file)
    assert settings.port == 4000
    assert settings.grid_size == 11


def test_configured_grid_size_becomes_the_default():
    rules = Settings(_env_file=None, grid_size=11).game_rules()
    assert rules.default_grid_size == 11
    assert rules.player_hp == 10


@pytest.mark.parametrize("name, value", [("ARENA_GRID_SIZE", "10"), ("ARENA_PORT", "0")])
def test_invalid_values_are_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_built_once(monkeypatch):
    monkeypatch.setattr("infra.settings._settings", None)
    monkeypatch.setenv("ARENA_PORT", "5000")

    first = get_settings()
    monkeypatch.setenv("ARENA_PORT", "6000")
    assert get_settings() is first
    assert first.port == 5000
