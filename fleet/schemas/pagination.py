# fleet/schemas/pagination.py
from pydantic import BaseModel
from typing import Generic, TypeVar

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    data: list[T]
    current_page: int
    last_page: int
    per_page: int
    total: int
