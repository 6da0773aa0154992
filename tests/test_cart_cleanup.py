# tests/test_cart_cleanup.py

from datetime import timedelta

from sqlalchemy.orm import Session, sessionmaker

from app.db.session import utcnow
from app.models.cart import Cart, CartItem
from app.services import cart as cart_service
from app.services.cart_cleanup import cleanup_abandoned_carts_task


def test_abandoned_carts_are_removed(db_session: Session, sample_catalog: dict, mocker):
    # Фоновая задача открывает свою сессию - направляем ее в тестовую базу
    mocker.patch("app.dependencies.SessionLocal", sessionmaker(bind=db_session.get_bind()))
    cart_service.add_item(db_session, "stale-session", sample_catalog["glow-serum"].id, 1)
    cart_service.add_item(db_session, "fresh-session", sample_catalog["glow-serum"].id, 1)

    stale = db_session.query(Cart).filter_by(session_id="stale-session").one()
    stale.updated_at = utcnow() - timedelta(days=45)
    db_session.commit()

    assert cleanup_abandoned_carts_task() == 1

    db_session.expire_all()
    assert [c.session_id for c in db_session.query(Cart).all()] == ["fresh-session"]
    assert db_session.query(CartItem).count() == 1


def test_nothing_to_clean(db_session: Session, mocker):
    mocker.patch("app.dependencies.SessionLocal", sessionmaker(bind=db_session.get_bind()))
    cart_service.get_cart_summary(db_session, "fresh-session")

    assert cleanup_abandoned_carts_task() == 0
