# app/clients/local_cart.py

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class LocalCartItem(BaseModel):
    id: int
    name: str
    price: float
    image: str = ""
    quantity: int = 1


class LocalSavedItem(BaseModel):
    id: int
    name: str
    price: float
    image: str = ""
    saved_at: datetime


class LocalCartState(BaseModel):
    """Снимок корзины, который пишется в файл после каждого изменения."""
    items: List[LocalCartItem] = []
    saved_items: List[LocalSavedItem] = []


class LocalCart:
    """
    Гостевая корзина без обращений к серверу.
    Состояние хранится в JSON-файле и восстанавливается при создании.
    Для авторизованных покупателей используется SessionCart (app/clients/storefront.py).
    """
    def __init__(self, storage_path: str | Path):
        self.storage_path = Path(storage_path)
        self.items: List[LocalCartItem] = []
        self.saved_items: List[LocalSavedItem] = []
        self.is_open = False
        self._load()

    # --- Хранение ---

    def _load(self) -> None:
        if not self.storage_path.exists():
            return
        try:
            state = LocalCartState.model_validate_json(self.storage_path.read_text(encoding="utf-8"))
        except (OSError, ValidationError, ValueError):
            # Испорченный файл не должен ломать корзину: начинаем с пустой
            logger.warning(f"Failed to load cart from {self.storage_path}, starting with an empty cart.", exc_info=True)
            self.items, self.saved_items = [], []
            return
        self.items, self.saved_items = state.items, state.saved_items

    def _save(self) -> None:
        state = LocalCartState(items=self.items, saved_items=self.saved_items)
        try:
            self.storage_path.write_text(state.model_dump_json(), encoding="utf-8")
        except OSError:
            logger.error(f"Failed to persist cart to {self.storage_path}.", exc_info=True)

    # --- Корзина ---

    def _find_item(self, item_id: int) -> Optional[LocalCartItem]:
        return next((item for item in self.items if item.id == item_id), None)

    def add_to_cart(self, item: LocalCartItem | LocalSavedItem, quantity: int = 1) -> None:
        """
        Добавляет товар или увеличивает количество уже лежащего.
        Товар убирается из отложенных, панель корзины открывается.
        """
        existing = self._find_item(item.id)
        if existing:
            existing.quantity += quantity
        else:
            self.items.append(LocalCartItem(
                id=item.id, name=item.name, price=item.price, image=item.image, quantity=quantity
            ))
        self.saved_items = [saved for saved in self.saved_items if saved.id != item.id]
        self.is_open = True
        self._save()

    def remove_from_cart(self, item_id: int) -> None:
        self.items = [item for item in self.items if item.id != item_id]
        self._save()

    def update_quantity(self, item_id: int, quantity: int) -> None:
        """Количество меньше 1 игнорируется (позиция не удаляется)."""
        if quantity < 1:
            return
        item = self._find_item(item_id)
        if item:
            item.quantity = quantity
            self._save()

    def clear_cart(self) -> None:
        self.items = []
        self._save()

    # --- Отложенные ---

    def save_for_later(self, item_id: int) -> None:
        item = self._find_item(item_id)
        if not item:
            return
        self.items = [i for i in self.items if i.id != item_id]
        if not any(saved.id == item_id for saved in self.saved_items):
            self.saved_items.append(LocalSavedItem(
                id=item.id, name=item.name, price=item.price, image=item.image,
                saved_at=datetime.now(timezone.utc),
            ))
        self._save()

    def move_to_cart(self, saved_item: LocalSavedItem) -> None:
        self.saved_items = [saved for saved in self.saved_items if saved.id != saved_item.id]
        self.add_to_cart(saved_item, quantity=1)

    def remove_saved_item(self, item_id: int) -> None:
        self.saved_items = [saved for saved in self.saved_items if saved.id != item_id]
        self._save()

    # --- Панель корзины ---

    def open_cart(self) -> None:
        self.is_open = True

    def close_cart(self) -> None:
        self.is_open = False

    # --- Итоги ---

    @property
    def subtotal(self) -> float:
        return round(sum(item.price * item.quantity for item in self.items), 2)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)
