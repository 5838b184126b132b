# src/eurofx/adapters/persistence/sql_store.py
"""
SQL Rate Repository - Relational Storage via SQLAlchemy

This module persists the currency catalog and daily rates in a relational
database. The exchange_rates table carries a unique constraint on
(currency_code, rate_date); inserts use the dialect's ON CONFLICT DO NOTHING
(SQLite, PostgreSQL) or a savepoint that swallows the constraint violation
(other dialects), so a concurrent refresh can never double-insert or
overwrite a stored rate.

Files that USE this module:
- eurofx.app (default repository, configured by DATABASE_URL)
- tests.test_sql_store (unit tests against a temporary SQLite file)

Files that this module USES:
- eurofx.adapters.persistence.base (RateRepository interface)
- eurofx.config (settings for database URL)
- eurofx.shared.validators (currency code normalization)
"""
from __future__ import annotations

import logging
import threading
from contextlib import nullcontext
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import (
    Column,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    create_engine,
    event,
    func,
    select,
)
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from eurofx.adapters.persistence.base import RateRepository
from eurofx.config import settings
from eurofx.domain.models import Currency, RatePoint
from eurofx.shared.validators import normalize_currency_code

log = logging.getLogger(__name__)

Base = declarative_base()


class CurrencyRecord(Base):
    """Supported currency."""
    __tablename__ = "currencies"

    code = Column(String(3), primary_key=True)
    name = Column(String(100), nullable=False)


class ExchangeRateRecord(Base):
    """Daily rate of one currency: units of that currency per 1 EUR."""
    __tablename__ = "exchange_rates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    currency_code = Column(String(3), ForeignKey("currencies.code"), nullable=False, index=True)
    rate_date = Column(Date, nullable=False, index=True)
    rate = Column(Numeric(18, 6), nullable=False)

    # One rate per currency per date
    __table_args__ = (
        UniqueConstraint("currency_code", "rate_date", name="uq_currency_rate_date"),
    )


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite connections are shared across refresh worker threads, and an
    in-memory SQLite database is pinned to a single connection so the
    schema survives between sessions. The repository serializes
    sessions on such an engine.

    Args:
        database_url: SQLAlchemy database URL
        echo: Log emitted SQL

    Returns:
        Configured Engine
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(url, echo=echo, pool_pre_ping=True, pool_recycle=3600)

    connect_args = {"check_same_thread": False, "timeout": 30}
    if not url.database or url.database == ":memory:":
        engine = create_engine(url, echo=echo, connect_args=connect_args, poolclass=StaticPool)
    else:
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(url, echo=echo, connect_args=connect_args)

    # pysqlite defers BEGIN; take the write lock up front so concurrent
    # writers queue on the busy timeout and SAVEPOINTs work
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def _to_point(record: ExchangeRateRecord) -> RatePoint:
    return RatePoint(currency_code=record.currency_code, rate_date=record.rate_date, rate=record.rate)


class SqlRateRepository(RateRepository):
    """RateRepository backed by a SQLAlchemy engine."""

    def __init__(
        self,
        database_url: Optional[str] = None,
        echo: Optional[bool] = None,
        engine: Optional[Engine] = None,
    ):
        """
        Initialize the repository and create tables if missing.

        Args:
            database_url: Optional database URL (defaults to settings.database_url)
            echo: Optional SQL echo flag (defaults to settings.db_echo)
            engine: Optional pre-built engine (overrides database_url)
        """
        if engine is None:
            engine = create_db_engine(
                database_url or settings.database_url,
                echo=settings.db_echo if echo is None else echo,
            )
        self.engine = engine
        # A StaticPool hands every thread the same connection
        self._guard = threading.RLock() if isinstance(engine.pool, StaticPool) else nullcontext()
        self._sessions = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
        Base.metadata.create_all(engine)
        log.info("SQL repository ready (dialect=%s)", engine.dialect.name)

    # --- Currency catalog ---

    def seed_currency(self, code: str, name: str) -> bool:
        code = normalize_currency_code(code)
        with self._guard, self._sessions.begin() as session:
            if session.get(CurrencyRecord, code) is not None:
                return False
            try:
                with session.begin_nested():
                    session.add(CurrencyRecord(code=code, name=name))
            except IntegrityError:
                return False
            return True

    def has_currency(self, code: str) -> bool:
        with self._guard, self._sessions() as session:
            return session.get(CurrencyRecord, normalize_currency_code(code)) is not None

    def list_currencies(self) -> List[Currency]:
        with self._guard, self._sessions() as session:
            records = session.execute(
                select(CurrencyRecord).order_by(CurrencyRecord.code)
            ).scalars().all()
            return [Currency(code=r.code, name=r.name) for r in records]

    # --- Rates ---

    def exists_for(self, currency_code: str, rate_date: date) -> bool:
        with self._guard, self._sessions() as session:
            stmt = select(ExchangeRateRecord.id).where(
                ExchangeRateRecord.currency_code == normalize_currency_code(currency_code),
                ExchangeRateRecord.rate_date == rate_date,
            )
            return session.execute(stmt).first() is not None

    def _insert_if_absent(self, session: Session, point: RatePoint) -> bool:
        values: Dict[str, Any] = {
            "currency_code": normalize_currency_code(point.currency_code),
            "rate_date": point.rate_date,
            "rate": point.rate,
        }
        dialect = self.engine.dialect.name
        if dialect in ("sqlite", "postgresql"):
            insert = sqlite.insert if dialect == "sqlite" else postgresql.insert
            stmt = insert(ExchangeRateRecord).values(**values).on_conflict_do_nothing(
                index_elements=["currency_code", "rate_date"]
            )
            return session.execute(stmt).rowcount == 1

        try:
            with session.begin_nested():
                session.add(ExchangeRateRecord(**values))
        except IntegrityError:
            return False
        return True

    def insert(self, point: RatePoint) -> bool:
        with self._guard, self._sessions.begin() as session:
            return self._insert_if_absent(session, point)

    def insert_many(self, points: Iterable[RatePoint]) -> int:
        added = 0
        with self._guard, self._sessions.begin() as session:
            for point in points:
                if self._insert_if_absent(session, point):
                    added += 1
        return added

    def find(self, currency_code: str, rate_date: date) -> Optional[RatePoint]:
        with self._guard, self._sessions() as session:
            record = session.execute(
                select(ExchangeRateRecord).where(
                    ExchangeRateRecord.currency_code == normalize_currency_code(currency_code),
                    ExchangeRateRecord.rate_date == rate_date,
                )
            ).scalar_one_or_none()
            return _to_point(record) if record is not None else None

    def list_all(self) -> List[RatePoint]:
        with self._guard, self._sessions() as session:
            records = session.execute(
                select(ExchangeRateRecord).order_by(
                    ExchangeRateRecord.rate_date.desc(),
                    ExchangeRateRecord.currency_code,
                )
            ).scalars().all()
            return [_to_point(r) for r in records]

    def list_by_date(self, rate_date: date) -> List[RatePoint]:
        with self._guard, self._sessions() as session:
            records = session.execute(
                select(ExchangeRateRecord)
                .where(ExchangeRateRecord.rate_date == rate_date)
                .order_by(ExchangeRateRecord.currency_code)
            ).scalars().all()
            return [_to_point(r) for r in records]

    def count(self) -> int:
        with self._guard, self._sessions() as session:
            return session.execute(select(func.count(ExchangeRateRecord.id))).scalar_one()

    def dispose(self) -> None:
        """Release pooled database connections."""
        self.engine.dispose()
