from pydantic import BaseModel, Field
from typing import Generic, List, Optional, TypeVar

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    user_id: str
    email: str
    role: str
    name: Optional[str] = None
    exp: Optional[int] = None


class PageQueryParams(EmptyStringModel):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class PageResponse(BaseModel, Generic[T]):
    data: List[T]
    total: int
    page: int
    total_pages: int


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
