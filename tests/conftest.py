# tests/conftest.py
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import sessionmaker, Session

from app.core.limiter import limiter
from app.crud import catalog as crud_catalog
from app.db.session import Base, build_engine
from app.dependencies import get_db
from app.main import app
from app.models import cart, catalog, content, order, user # Импортируем все модели для создания таблиц
from app.models.catalog import Brand, Category, SkinConcern, SkinType
from app.models.user import User
from app.services.auth import create_access_token, hash_password

# Используем in-memory SQLite для тестов - это быстро и изолированно.
# StaticPool внутри build_engine: потоки FastAPI видят ту же базу, что и тест.
engine = build_engine("sqlite://")
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "glow-up-2024"


@pytest.fixture(scope="function")
def db_session() -> Session:
    """
    Фикстура для создания чистой базы данных для каждого теста.
    """
    Base.metadata.create_all(bind=engine) # Создаем все таблицы
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine) # Очищаем все после теста


@pytest.fixture
async def client(db_session: Session):
    """HTTP-клиент поверх приложения; get_db подменен на тестовую сессию."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False
    # raise_app_exceptions=False: проверяем ответ 500, а не проброшенное исключение
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as async_client:
        yield async_client
    app.dependency_overrides.clear()
    limiter.enabled = True


# --- Пользователи ---

@pytest.fixture
def test_user(db_session: Session) -> User:
    db_user = User(
        username="amara", email="amara@example.com",
        password_hash=hash_password(TEST_PASSWORD), full_name="Amara Owusu"
    )
    db_session.add(db_user)
    db_session.commit()
    return db_user


@pytest.fixture
def admin_user(db_session: Session) -> User:
    db_user = User(
        username="store-admin", email="admin@example.com",
        password_hash=hash_password(TEST_PASSWORD), is_admin=True
    )
    db_session.add(db_user)
    db_session.commit()
    return db_user


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    token = create_access_token(data={"sub": str(test_user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_auth_headers(admin_user: User) -> dict:
    token = create_access_token(data={"sub": str(admin_user.id)})
    return {"Authorization": f"Bearer {token}"}


# --- Каталог ---

@pytest.fixture
def sample_catalog(db_session: Session) -> dict:
    """
    Небольшой каталог: 3 категории, 2 бренда, 4 товара.
    Возвращает товары по slug.
    """
    serums = crud_catalog.create_taxonomy(db_session, Category, name="Serums", slug="serums")
    moisturizers = crud_catalog.create_taxonomy(db_session, Category, name="Moisturizers", slug="moisturizers")
    masks = crud_catalog.create_taxonomy(db_session, Category, name="Masks", slug="masks")
    radiant = crud_catalog.create_taxonomy(db_session, Brand, name="Radiant Skin", slug="radiant-skin")
    pure = crud_catalog.create_taxonomy(db_session, Brand, name="Pure Hydration", slug="pure-hydration")
    dry = crud_catalog.create_taxonomy(db_session, SkinType, name="Dry", slug="dry")
    oily = crud_catalog.create_taxonomy(db_session, SkinType, name="Oily", slug="oily")
    dullness = crud_catalog.create_taxonomy(db_session, SkinConcern, name="Dullness", slug="dullness")

    products = [
        crud_catalog.create_product(
            db_session, skin_types=[dry], skin_concerns=[dullness],
            name="Glow Serum", slug="glow-serum", price=45.99, original_price=59.99,
            description="Brightening serum for a radiant complexion",
            category_id=serums.id, brand_id=radiant.id, stock_quantity=10, is_best_seller=True,
        ),
        crud_catalog.create_product(
            db_session, skin_types=[dry],
            name="Hydrating Moisturizer", slug="hydrating-moisturizer", price=32.50,
            description="24-hour hydration for all skin types",
            category_id=moisturizers.id, brand_id=pure.id, stock_quantity=10, is_new=True,
        ),
        crud_catalog.create_product(
            db_session, skin_types=[oily],
            name="Charcoal Detox Mask", slug="charcoal-detox-mask", price=28.75,
            description="Deep cleansing mask for clear skin",
            category_id=masks.id, brand_id=pure.id, stock_quantity=10,
            is_best_seller=True, is_organic=True,
        ),
        crud_catalog.create_product(
            db_session, skin_concerns=[dullness],
            name="Vitamin C Booster", slug="vitamin-c-booster", price=52.99,
            description="Antioxidant-rich serum for brightening",
            category_id=serums.id, brand_id=radiant.id, stock_quantity=10,
            is_new=True, is_featured=True,
        ),
    ]
    return {product.slug: product for product in products}
