# app/schemas/common.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Generic, List, TypeVar


class ApiModel(BaseModel):
    """
    Базовая схема API. Фронтенд работает с camelCase (sessionId, productId),
    поэтому наружу отдаем алиасы, но принимаем и snake_case.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


DataType = TypeVar('DataType')

class PaginatedResponse(ApiModel, Generic[DataType]):
    """
    Универсальная схема для пагинированных ответов.
    """
    items: List[DataType]
    total: int
    page: int
    limit: int
    total_pages: int
