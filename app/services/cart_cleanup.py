# app/services/cart_cleanup.py
import logging
from datetime import timedelta

from app.core.config import settings
from app.crud import cart as crud_cart
from app.db.session import utcnow
from app.dependencies import get_db_context

logger = logging.getLogger(__name__)


def cleanup_abandoned_carts_task() -> int:
    """Фоновая задача: удаляет корзины, которые не менялись ABANDONED_CART_DAYS дней."""
    logger.info("--- Starting scheduled job: Cleanup of Abandoned Carts ---")
    deleted_count = 0
    with get_db_context() as db:
        try:
            cutoff = utcnow() - timedelta(days=settings.ABANDONED_CART_DAYS)
            deleted_count = crud_cart.delete_carts_untouched_since(db, cutoff)
            if deleted_count > 0:
                logger.info(f"Successfully deleted {deleted_count} abandoned carts.")
            else:
                logger.info("No abandoned carts to delete.")
        except Exception:
            logger.error("An error occurred during abandoned cart cleanup task", exc_info=True)
            db.rollback()
    logger.info("--- Finished scheduled job: Cleanup of Abandoned Carts ---")
    return deleted_count
