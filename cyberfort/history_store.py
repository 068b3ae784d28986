import json
import sqlite3
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    insert,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .domain.models import PhoneCheck, UrlCheck
from .exceptions import StorageFailure


def _as_utc(value: datetime) -> datetime:
    # Backends without timezone support hand back naive UTC values.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class HistoryRepository(Protocol):
    """Interface for check history backends."""

    def add_url_check(self, url: str, is_safe: bool, result: str) -> UrlCheck:
        """Store a URL check and return it with its id and timestamp."""

    def recent_url_checks(self, limit: int) -> List[UrlCheck]:
        """Return at most ``limit`` URL checks, newest first."""

    def add_phone_check(
        self,
        phone_number: str,
        is_safe: bool,
        *,
        country: Optional[str] = None,
        carrier: Optional[str] = None,
        line_type: Optional[str] = None,
        risk_score: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> PhoneCheck:
        """Store a phone check and return it with its id and timestamp."""

    def recent_phone_checks(self, limit: int) -> List[PhoneCheck]:
        """Return at most ``limit`` phone checks, newest first."""


class BaseHistoryRepository(HistoryRepository, ABC):
    """Shared locking, clock and error handling for history backends.

    Every insert runs under one lock so ids and timestamps are assigned in
    the same order.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last_checked_at: Optional[datetime] = None

    def _now(self) -> datetime:
        # Must be called with the lock held.
        now = datetime.now(timezone.utc)
        if self._last_checked_at is not None and now < self._last_checked_at:
            now = self._last_checked_at
        self._last_checked_at = now
        return now

    @abstractmethod
    def _insert_url(self, url: str, is_safe: bool, result: str, checked_at: datetime) -> int:
        """Insert a URL check row and return its id."""

    @abstractmethod
    def _select_urls(self, limit: int) -> List[UrlCheck]:
        """Return newest URL checks."""

    @abstractmethod
    def _insert_phone(self, record: Dict[str, Any]) -> int:
        """Insert a phone check row and return its id."""

    @abstractmethod
    def _select_phones(self, limit: int) -> List[PhoneCheck]:
        """Return newest phone checks."""

    def add_url_check(self, url: str, is_safe: bool, result: str) -> UrlCheck:
        try:
            with self._lock:
                checked_at = self._now()
                check_id = self._insert_url(url, is_safe, result, checked_at)
        except (sqlite3.Error, SQLAlchemyError) as exc:
            raise StorageFailure(f"Failed to store URL check: {exc}") from exc
        return UrlCheck(
            id=check_id, url=url, is_safe=is_safe, result=result, checked_at=checked_at
        )

    def recent_url_checks(self, limit: int) -> List[UrlCheck]:
        if limit <= 0:
            return []
        try:
            with self._lock:
                return self._select_urls(limit)
        except (sqlite3.Error, SQLAlchemyError) as exc:
            raise StorageFailure(f"Failed to read URL history: {exc}") from exc

    def add_phone_check(
        self,
        phone_number: str,
        is_safe: bool,
        *,
        country: Optional[str] = None,
        carrier: Optional[str] = None,
        line_type: Optional[str] = None,
        risk_score: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> PhoneCheck:
        record: Dict[str, Any] = {
            "phone_number": phone_number,
            "is_safe": is_safe,
            "country": country,
            "carrier": carrier,
            "line_type": line_type,
            "risk_score": risk_score,
            "details": details,
        }
        try:
            with self._lock:
                record["checked_at"] = self._now()
                record["id"] = self._insert_phone(record)
        except (sqlite3.Error, SQLAlchemyError) as exc:
            raise StorageFailure(f"Failed to store phone check: {exc}") from exc
        return PhoneCheck(**record)

    def recent_phone_checks(self, limit: int) -> List[PhoneCheck]:
        if limit <= 0:
            return []
        try:
            with self._lock:
                return self._select_phones(limit)
        except (sqlite3.Error, SQLAlchemyError) as exc:
            raise StorageFailure(f"Failed to read phone history: {exc}") from exc


class InMemoryHistoryRepository(BaseHistoryRepository):
    """History kept in process memory; lost on restart."""

    def __init__(self) -> None:
        super().__init__()
        self._url_checks: Dict[int, UrlCheck] = {}
        self._phone_checks: Dict[int, PhoneCheck] = {}
        self._url_id = 0
        self._phone_id = 0

    def _insert_url(self, url: str, is_safe: bool, result: str, checked_at: datetime) -> int:
        self._url_id += 1
        self._url_checks[self._url_id] = UrlCheck(
            id=self._url_id,
            url=url,
            is_safe=is_safe,
            result=result,
            checked_at=checked_at,
        )
        return self._url_id

    def _select_urls(self, limit: int) -> List[UrlCheck]:
        rows = sorted(
            self._url_checks.values(),
            key=lambda c: (c.checked_at, c.id),
            reverse=True,
        )
        return rows[:limit]

    def _insert_phone(self, record: Dict[str, Any]) -> int:
        self._phone_id += 1
        self._phone_checks[self._phone_id] = PhoneCheck(**{**record, "id": self._phone_id})
        return self._phone_id

    def _select_phones(self, limit: int) -> List[PhoneCheck]:
        rows = sorted(
            self._phone_checks.values(),
            key=lambda c: (c.checked_at, c.id),
            reverse=True,
        )
        return rows[:limit]


class SQLiteHistoryRepository(BaseHistoryRepository):
    """History backed by a SQLite database."""

    def __init__(self, db_path: str) -> None:
        super().__init__()
        self._db = sqlite3.connect(db_path, check_same_thread=False)
        self._db.execute(
            "CREATE TABLE IF NOT EXISTS url_checks ("
            "id INTEGER PRIMARY KEY AUTOINCREMENT,"
            "url TEXT NOT NULL,"
            "is_safe INTEGER NOT NULL,"
            "result TEXT NOT NULL,"
            "checked_at TEXT NOT NULL"
            ")"
        )
        self._db.execute(
            "CREATE TABLE IF NOT EXISTS phone_checks ("
            "id INTEGER PRIMARY KEY AUTOINCREMENT,"
            "phone_number TEXT NOT NULL,"
            "is_safe INTEGER NOT NULL,"
            "country TEXT,"
            "carrier TEXT,"
            "line_type TEXT,"
            "risk_score INTEGER,"
            "details TEXT,"
            "checked_at TEXT NOT NULL"
            ")"
        )
        self._db.commit()

    def _insert_url(self, url: str, is_safe: bool, result: str, checked_at: datetime) -> int:
        cur = self._db.execute(
            "INSERT INTO url_checks(url, is_safe, result, checked_at) VALUES(?,?,?,?)",
            (url, int(is_safe), result, checked_at.isoformat(timespec="microseconds")),
        )
        self._db.commit()
        return cur.lastrowid

    def _select_urls(self, limit: int) -> List[UrlCheck]:
        rows = self._db.execute(
            "SELECT id, url, is_safe, result, checked_at FROM url_checks "
            "ORDER BY checked_at DESC, id DESC LIMIT ?",
            (limit,),
        ).fetchall()
        return [
            UrlCheck(
                id=row[0],
                url=row[1],
                is_safe=bool(row[2]),
                result=row[3],
                checked_at=_as_utc(datetime.fromisoformat(row[4])),
            )
            for row in rows
        ]

    def _insert_phone(self, record: Dict[str, Any]) -> int:
        details = record["details"]
        cur = self._db.execute(
            "INSERT INTO phone_checks(phone_number, is_safe, country, carrier, "
            "line_type, risk_score, details, checked_at) VALUES(?,?,?,?,?,?,?,?)",
            (
                record["phone_number"],
                int(record["is_safe"]),
                record["country"],
                record["carrier"],
                record["line_type"],
                record["risk_score"],
                json.dumps(details) if details is not None else None,
                record["checked_at"].isoformat(timespec="microseconds"),
            ),
        )
        self._db.commit()
        return cur.lastrowid

    def _select_phones(self, limit: int) -> List[PhoneCheck]:
        rows = self._db.execute(
            "SELECT id, phone_number, is_safe, country, carrier, line_type, "
            "risk_score, details, checked_at FROM phone_checks "
            "ORDER BY checked_at DESC, id DESC LIMIT ?",
            (limit,),
        ).fetchall()
        return [
            PhoneCheck(
                id=row[0],
                phone_number=row[1],
                is_safe=bool(row[2]),
                country=row[3],
                carrier=row[4],
                line_type=row[5],
                risk_score=row[6],
                details=json.loads(row[7]) if row[7] else None,
                checked_at=_as_utc(datetime.fromisoformat(row[8])),
            )
            for row in rows
        ]


class SQLAlchemyHistoryRepository(BaseHistoryRepository):
    """History backed by any SQLAlchemy database, PostgreSQL in production."""

    def __init__(self, dsn: str) -> None:
        super().__init__()
        self._engine: Engine = create_engine(dsn)
        metadata = MetaData()
        self._url_table = Table(
            "url_checks",
            metadata,
            Column("id", Integer, primary_key=True, autoincrement=True),
            Column("url", Text, nullable=False),
            Column("is_safe", Boolean, nullable=False),
            Column("result", Text, nullable=False),
            Column("checked_at", DateTime(timezone=True), nullable=False),
        )
        self._phone_table = Table(
            "phone_checks",
            metadata,
            Column("id", Integer, primary_key=True, autoincrement=True),
            Column("phone_number", String, nullable=False),
            Column("is_safe", Boolean, nullable=False),
            Column("country", String),
            Column("carrier", String),
            Column("line_type", String),
            Column("risk_score", Integer),
            Column("details", JSON),
            Column("checked_at", DateTime(timezone=True), nullable=False),
        )
        metadata.create_all(self._engine)

    def _insert_url(self, url: str, is_safe: bool, result: str, checked_at: datetime) -> int:
        with self._engine.begin() as conn:
            res = conn.execute(
                insert(self._url_table).values(
                    url=url, is_safe=is_safe, result=result, checked_at=checked_at
                )
            )
            return res.inserted_primary_key[0]

    def _select_urls(self, limit: int) -> List[UrlCheck]:
        t = self._url_table
        with self._engine.begin() as conn:
            rows = conn.execute(
                select(t.c.id, t.c.url, t.c.is_safe, t.c.result, t.c.checked_at)
                .order_by(t.c.checked_at.desc(), t.c.id.desc())
                .limit(limit)
            ).all()
        return [
            UrlCheck(
                id=row.id,
                url=row.url,
                is_safe=row.is_safe,
                result=row.result,
                checked_at=_as_utc(row.checked_at),
            )
            for row in rows
        ]

    def _insert_phone(self, record: Dict[str, Any]) -> int:
        with self._engine.begin() as conn:
            res = conn.execute(insert(self._phone_table).values(**record))
            return res.inserted_primary_key[0]

    def _select_phones(self, limit: int) -> List[PhoneCheck]:
        t = self._phone_table
        with self._engine.begin() as conn:
            rows = conn.execute(
                select(t).order_by(t.c.checked_at.desc(), t.c.id.desc()).limit(limit)
            ).all()
        return [
            PhoneCheck(**{**row._asdict(), "checked_at": _as_utc(row.checked_at)})
            for row in rows
        ]


class HistoryStore:
    """Thin wrapper delegating to a repository with a default page size."""

    def __init__(self, repo: HistoryRepository, default_limit: int = 10) -> None:
        self._repo = repo
        self.default_limit = default_limit

    def add_url_check(self, url: str, is_safe: bool, result: str) -> UrlCheck:
        return self._repo.add_url_check(url, is_safe, result)

    def recent_url_checks(self, limit: Optional[int] = None) -> List[UrlCheck]:
        return self._repo.recent_url_checks(
            self.default_limit if limit is None else limit
        )

    def add_phone_check(self, phone_number: str, is_safe: bool, **fields: Any) -> PhoneCheck:
        return self._repo.add_phone_check(phone_number, is_safe, **fields)

    def recent_phone_checks(self, limit: Optional[int] = None) -> List[PhoneCheck]:
        return self._repo.recent_phone_checks(
            self.default_limit if limit is None else limit
        )
