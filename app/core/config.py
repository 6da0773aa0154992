import json
from typing import Any, Dict, List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Настройки базы данных.
    # По умолчанию - SQLite в памяти процесса: состояние живет до перезапуска.
    DATABASE_URL: str = "sqlite://"

    # Настройки JWT токенов
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 # 1 день
    ADMIN_USERNAMES_STR: str = Field(default="", alias="ADMIN_USERNAMES")

    @property
    def ADMIN_USERNAMES(self) -> List[str]:
        return [name.strip() for name in self.ADMIN_USERNAMES_STR.split(',') if name.strip()]

    # Доставка и корзина
    FREE_SHIPPING_THRESHOLD: float = 200.0
    SHIPPING_FEE: float = 15.0
    MAX_CART_ITEM_QUANTITY: int = 99
    DEFAULT_PAGE_SIZE: int = 12
    ABANDONED_CART_DAYS: int = 30

    COUPONS_JSON: str = Field(default='{"GLOW10": {"percent": 10}}')

    # Это свойство будет автоматически парсить JSON в словарь
    COUPONS: Dict[str, Any] = {}

    SEED_CATALOG: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    CORS_ORIGINS_STR: str = Field(
        default="http://localhost,http://localhost:3000,http://localhost:5173",
        alias="CORS_ORIGINS"
    )

    @property
    def CORS_ORIGINS(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS_STR.split(',') if origin.strip()]

    @field_validator("COUPONS", mode="before")
    def parse_coupons(cls, v, values):
        # values.data содержит уже провалидированные поля, включая COUPONS_JSON
        json_str = values.data.get("COUPONS_JSON")
        if json_str:
            return {code.upper(): rule for code, rule in json.loads(json_str).items()}
        return v

    model_config = SettingsConfigDict(env_file=".env", populate_by_name=True, validate_default=True)

settings = Settings()
