# app/utils/text.py
import re

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """'Vitamin C Serum 30ml' -> 'vitamin-c-serum-30ml'."""
    return _NON_SLUG_CHARS.sub("-", value.lower()).strip("-")


def escape_like(value: str) -> str:
    """Экранирует спецсимволы LIKE, чтобы '%' и '_' в поиске искались буквально."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
