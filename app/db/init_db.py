# app/db/init_db.py
import logging

from sqlalchemy.engine import Engine

from app.db.session import Base, SessionLocal
from app.services.seed import seed_catalog

# Модели нужно импортировать, чтобы их таблицы попали в Base.metadata
from app.models import cart, catalog, content, order, user  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(engine: Engine, seed: bool = False) -> None:
    """Создает таблицы и, если нужно, заполняет пустой магазин начальными данными."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created.")

    if seed:
        with SessionLocal() as db:
            seed_catalog(db)
