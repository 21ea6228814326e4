# Video 모델
# - 업로드된 영상 메타데이터 (HTTP 핸들러 없음, 페이지네이션은 video_repository 참고)

from datetime import datetime
from typing import Optional

from beanie import Document, Link
from pydantic import Field, field_validator

from .user import User


class Video(Document):
    title: str
    video_file: str  # Cloudinary public_id
    thumbnail: str
    description: Optional[str] = None
    duration: float  # 초 단위
    views: int = 0
    is_published: bool = True
    owner: Link[User]
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "videos"

    @field_validator("title", "description")
    @classmethod
    def _strip(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if isinstance(value, str) else value
