import random

from fastapi import FastAPI, Request

from .config import Settings, settings
from .exceptions import ConfigurationError
from .history_store import (
    HistoryRepository,
    HistoryStore,
    InMemoryHistoryRepository,
    SQLAlchemyHistoryRepository,
    SQLiteHistoryRepository,
)
from .infrastructure import AbstractApiClient, VirusTotalClient
from .verdict_engine import VerdictEngine


def create_history_repository(cfg: Settings) -> HistoryRepository:
    if cfg.history_backend == "sqlite":
        return SQLiteHistoryRepository(cfg.history_db_path)
    if cfg.history_backend == "sql":
        if not cfg.pg_host:
            raise ConfigurationError("PG_HOST is required for the sql history backend")
        return SQLAlchemyHistoryRepository(cfg.pg_dsn)
    return InMemoryHistoryRepository()


def create_verdict_engine(cfg: Settings) -> VerdictEngine:
    url_service = None
    if cfg.virustotal_api_key:
        url_service = VirusTotalClient(
            cfg.virustotal_api_key,
            base_url=cfg.virustotal_base_url,
            timeout=cfg.request_timeout,
        )
    phone_service = None
    if cfg.abstractapi_api_key:
        phone_service = AbstractApiClient(
            cfg.abstractapi_api_key,
            base_url=cfg.abstractapi_base_url,
            timeout=cfg.request_timeout,
        )
    return VerdictEngine(url_service, phone_service, rng=random.Random(cfg.random_seed))


def init_app(app: FastAPI, cfg: Settings = settings) -> None:
    """Create and store shared dependencies on the application."""
    app.state.history_store = HistoryStore(
        create_history_repository(cfg), default_limit=cfg.history_limit
    )
    app.state.verdict_engine = create_verdict_engine(cfg)


def get_history_store(request: Request) -> HistoryStore:
    return request.app.state.history_store


def get_verdict_engine(request: Request) -> VerdictEngine:
    return request.app.state.verdict_engine
