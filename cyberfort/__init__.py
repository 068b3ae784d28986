from .domain.models import (
    PhoneCheck,
    PhoneVerdict,
    UrlCheck,
    UrlVerdict,
    VendorStats,
    VerdictSource,
)
from .exceptions import (
    ConfigurationError,
    CyberfortError,
    InvalidInput,
    StorageFailure,
    UpstreamUnavailable,
)
from .history_store import (
    HistoryStore,
    InMemoryHistoryRepository,
    SQLAlchemyHistoryRepository,
    SQLiteHistoryRepository,
)
from .verdict_engine import VerdictEngine
from .logging_config import configure_logging

__all__ = [
    "PhoneCheck",
    "PhoneVerdict",
    "UrlCheck",
    "UrlVerdict",
    "VendorStats",
    "VerdictSource",
    "ConfigurationError",
    "CyberfortError",
    "InvalidInput",
    "StorageFailure",
    "UpstreamUnavailable",
    "HistoryStore",
    "InMemoryHistoryRepository",
    "SQLAlchemyHistoryRepository",
    "SQLiteHistoryRepository",
    "VerdictEngine",
    "configure_logging",
]
