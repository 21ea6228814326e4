# 표준 응답 봉투 (Pydantic 모델)
# - 성공: {statusCode, message, data, success}
# - 실패: {statusCode, message, errors, data: null, success: false}

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[T]):
    status_code: int
    message: str = "Success"
    data: Optional[T] = None
    success: bool = True

    @classmethod
    def of(cls, status_code: int, data: Any, message: str = "Success") -> "ApiResponse":
        return cls(
            status_code=status_code,
            message=message,
            data=data,
            success=200 <= status_code < 300,
        )


class ApiErrorResponse(CamelModel):
    status_code: int
    message: str
    errors: List[Any] = []
    data: None = None
    success: bool = False
