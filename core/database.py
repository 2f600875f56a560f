from __future__ import annotations
import sqlite3
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from core.config_loader import settings
from core.exceptions import Conflict, TransientStorageFailure


class Base(DeclarativeBase):
    pass


# pysqlite defers BEGIN on its own, which breaks SAVEPOINT and row-level
# isolation. Take over transaction control and turn on FK enforcement.
@event.listens_for(Engine, "connect")
def _sqlite_on_connect(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@event.listens_for(Engine, "begin")
def _sqlite_on_begin(conn):
    if conn.dialect.name == "sqlite":
        conn.exec_driver_sql("BEGIN")


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.SQL_ECHO,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(bind=engine, autoflush=True, expire_on_commit=False)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_raise(db: Session, *, conflict_detail: str) -> None:
    """
    Commit the current transaction, translating storage errors:
    IntegrityError -> Conflict, OperationalError -> TransientStorageFailure.
    """
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict(conflict_detail)
    except OperationalError as exc:
        db.rollback()
        raise TransientStorageFailure(f"storage unavailable: {exc.orig}")
