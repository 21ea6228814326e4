# 요청/응답 스키마 정의 (Pydantic 모델)

from datetime import datetime
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, field_validator

from .response_schema import CamelModel

# 응답에서 절대 노출하면 안 되는 필드
SENSITIVE_FIELDS = ("password", "refresh_token")


class UserRegister(BaseModel):
    username: str = ""
    email: str = ""
    password: str = ""
    full_name: str = ""


class UserPublic(CamelModel):
    id: str
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str = ""
    watch_history: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> str:
        return str(value)

    @field_validator("watch_history", mode="before")
    @classmethod
    def _ids_to_str(cls, value: Any) -> List[str]:
        return [str(v) for v in value or []]

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "UserPublic":
        """Mongo 원본 문서(dict)에서 공개용 사용자 정보를 만듭니다."""
        data = {k: v for k, v in doc.items() if k not in SENSITIVE_FIELDS}
        if "_id" in data:
            data["id"] = data.pop("_id")
        return cls.model_validate(data)
