# app/db/session.py
import threading
from datetime import datetime, timezone

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings

_LOCK_KEY = "shared_connection_lock"


def is_memory_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite") and (
        database_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in database_url
    )


def build_engine(database_url: str):
    """
    Создает движок SQLAlchemy.
    Для SQLite в памяти все сессии должны делить одно соединение,
    иначе каждый поток увидит свою пустую базу.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, pool_pre_ping=True)


def serialize_transactions(session_factory: sessionmaker) -> sessionmaker:
    """
    Сессии на общем соединении выполняют транзакции строго по очереди.
    Блокировка берется при начале транзакции и отпускается после commit/rollback/close,
    поэтому читатель не видит чужих незакоммиченных изменений, а чужой rollback
    не откатывает незавершенную работу.
    """
    lock = threading.Lock()

    @event.listens_for(session_factory, "after_begin")
    def _acquire(session, transaction, connection):
        if not session.info.get(_LOCK_KEY):
            lock.acquire()
            session.info[_LOCK_KEY] = True

    @event.listens_for(session_factory, "after_transaction_end")
    def _release(session, transaction):
        # Вложенные транзакции (savepoint) блокировку не отпускают
        if transaction.parent is None and session.info.pop(_LOCK_KEY, False):
            lock.release()

    return session_factory


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
if is_memory_sqlite(settings.DATABASE_URL):
    serialize_transactions(SessionLocal)

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
