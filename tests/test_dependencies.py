import pytest
from fastapi import FastAPI

from cyberfort.config import Settings
from cyberfort.dependencies import (
    create_history_repository,
    create_verdict_engine,
    init_app,
)
from cyberfort.exceptions import ConfigurationError
from cyberfort.history_store import (
    HistoryStore,
    InMemoryHistoryRepository,
    SQLAlchemyHistoryRepository,
    SQLiteHistoryRepository,
)
from cyberfort.infrastructure import AbstractApiClient, VirusTotalClient


def test_engine_without_keys_is_offline():
    engine = create_verdict_engine(Settings(virustotal_api_key="", abstractapi_api_key=""))
    assert engine.url_service is None
    assert engine.phone_service is None


def test_engine_with_keys():
    cfg = Settings(virustotal_api_key="vt", abstractapi_api_key="abs", request_timeout=12)
    engine = create_verdict_engine(cfg)
    assert isinstance(engine.url_service, VirusTotalClient)
    assert isinstance(engine.phone_service, AbstractApiClient)
    assert engine.url_service.timeout == 12
    assert engine.phone_service.api_key == "abs"


def test_seeded_engines_agree():
    cfg = Settings(random_seed=9, virustotal_api_key="", abstractapi_api_key="")
    first = create_verdict_engine(cfg).evaluate_phone("4155551234")
    second = create_verdict_engine(cfg).evaluate_phone("4155551234")
    assert first == second


def test_history_backends(tmp_path):
    assert isinstance(
        create_history_repository(Settings(history_backend="memory")),
        InMemoryHistoryRepository,
    )
    sqlite_cfg = Settings(history_backend="sqlite", history_db_path=str(tmp_path / "h.db"))
    assert isinstance(create_history_repository(sqlite_cfg), SQLiteHistoryRepository)


def test_sql_backend_uses_dsn(monkeypatch):
    seen = {}

    class FakeRepo(SQLAlchemyHistoryRepository):
        def __init__(self, dsn):
            seen["dsn"] = dsn

    monkeypatch.setattr("cyberfort.dependencies.SQLAlchemyHistoryRepository", FakeRepo)
    create_history_repository(Settings(history_backend="sql", pg_host="db"))
    assert seen["dsn"] == "postgresql+psycopg2://postgres:postgres@db:5432/cyberfort"


def test_init_app_sets_state():
    app = FastAPI()
    init_app(app, Settings(history_limit=5, virustotal_api_key="", abstractapi_api_key=""))
    assert isinstance(app.state.history_store, HistoryStore)
    assert app.state.history_store.default_limit == 5
    assert app.state.verdict_engine.url_service is None


def test_sql_backend_requires_host():
    with pytest.raises(ConfigurationError):
        create_history_repository(Settings(history_backend="sql", pg_host=""))
