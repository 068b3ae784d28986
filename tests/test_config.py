from importlib import util
from pathlib import Path

import pytest

CONFIG_PATH = Path(__file__).resolve().parents[1] / "cyberfort" / "config.py"


def load_config():
    spec = util.spec_from_file_location("config", CONFIG_PATH)
    module = util.module_from_spec(spec)
    spec.loader.exec_module(module)  # type: ignore
    return module


def test_defaults(monkeypatch):
    for name in (
        "VIRUSTOTAL_API_KEY",
        "ABSTRACTAPI_API_KEY",
        "HISTORY_BACKEND",
        "RANDOM_SEED",
        "CORS_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)
    config = load_config()
    assert config.settings.virustotal_api_key == ""
    assert config.settings.abstractapi_api_key == ""
    assert config.settings.history_backend == "memory"
    assert config.settings.history_limit == 10
    assert config.settings.cors_origin_list == ["http://localhost:5173"]
    assert config.settings.random_seed is None
    assert 10 <= config.settings.request_timeout <= 30


def test_settings_env(monkeypatch):
    monkeypatch.setenv("VIRUSTOTAL_API_KEY", "vt")
    monkeypatch.setenv("ABSTRACTAPI_API_KEY", "abs")
    monkeypatch.setenv("HISTORY_BACKEND", "SQLite")
    monkeypatch.setenv("RANDOM_SEED", "42")
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("PG_HOST", "db")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example.com, https://b.example.com")
    config = load_config()
    assert config.settings.virustotal_api_key == "vt"
    assert config.settings.abstractapi_api_key == "abs"
    assert config.settings.history_backend == "sqlite"
    assert config.settings.random_seed == 42
    assert config.settings.is_production is True
    assert config.settings.cors_origin_list == [
        "https://a.example.com",
        "https://b.example.com",
    ]
    assert config.settings.pg_dsn == "postgresql+psycopg2://postgres:postgres@db:5432/cyberfort"


def test_empty_seed_is_none(monkeypatch):
    monkeypatch.setenv("RANDOM_SEED", "")
    assert load_config().settings.random_seed is None


def test_unknown_backend(monkeypatch):
    monkeypatch.setenv("HISTORY_BACKEND", "mongo")
    with pytest.raises(RuntimeError):
        load_config()
