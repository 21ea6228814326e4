# User 도메인 모델 (Beanie Document)
# - username / email 은 unique 인덱스
# - 비밀번호 해시는 저장소(create/save)에서 apply_password_hash()로 명시적으로 수행
#   (set_password 로 변경 여부를 기록)

from datetime import datetime
from typing import List, Optional

from beanie import Document, Indexed, PydanticObjectId
from pydantic import Field, PrivateAttr


class User(Document):
    username: Indexed(str, unique=True)
    email: Indexed(str, unique=True)
    full_name: str
    password: str = Field(repr=False)
    avatar: str  # Cloudinary URL
    cover_image: str = ""
    watch_history: List[PydanticObjectId] = Field(default_factory=list)
    refresh_token: Optional[str] = Field(default=None, repr=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    _password_changed: bool = PrivateAttr(default=False)

    class Settings:
        name = "users"

    @staticmethod
    def normalize_username(username: str) -> str:
        return username.strip().lower()

    @staticmethod
    def normalize_email(email: str) -> str:
        return email.strip().lower()

    def set_password(self, raw_password: str) -> None:
        self.password = raw_password
        self._password_changed = True

    @property
    def password_changed(self) -> bool:
        return self._password_changed

    def mark_password_hashed(self) -> None:
        self._password_changed = False
