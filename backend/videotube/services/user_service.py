# 사용자 서비스 레이어
# - 회원가입 파이프라인
#   필드 검증 → 중복 체크(email OR username) → 아바타 확인 → Cloudinary 업로드
#   → DB 저장 → 민감 필드 제외 재조회
# - 어떤 단계도 재시도하지 않음 (실패 시 바로 ApiError)

import asyncio
import logging
from typing import Optional

from fastapi import Depends

from ..core.exceptions import ConflictError, InternalServerError, UploadFailedError, ValidationError
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.user_schema import UserPublic, UserRegister
from .media_service import MediaUploader, get_media_uploader

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, repo: UserRepository, uploader: MediaUploader):
        self.repo = repo
        self.uploader = uploader

    async def register(
        self,
        payload: UserRegister,
        avatar_local_path: Optional[str],
        cover_image_local_path: Optional[str] = None,
    ) -> UserPublic:
        required = [payload.full_name, payload.email, payload.password, payload.username]
        if any((field or "").strip() == "" for field in required):
            raise ValidationError("All fields are required")

        email = User.normalize_email(payload.email)
        username = User.normalize_username(payload.username)

        # 어느 필드가 겹쳤는지는 알려주지 않음
        if await self.repo.find_by_email_or_username(email, username):
            raise ConflictError("User already exists")

        if not avatar_local_path:
            raise ValidationError("Avatar is required")

        avatar, cover_image = await asyncio.gather(
            self.uploader.upload(avatar_local_path),
            self.uploader.upload(cover_image_local_path),
        )
        if not avatar:
            raise UploadFailedError("Avatar upload failed")

        user = await self.repo.create(
            username=username,
            email=email,
            full_name=payload.full_name.strip(),
            password=payload.password,
            avatar=avatar["url"],
            cover_image=(cover_image or {}).get("url") or "",
        )

        created = await self.repo.get_public(str(user.id))
        if not created:
            raise InternalServerError("User creation failed")

        logger.info(f"[register] 사용자 생성 완료: {created.username} ({created.id})")
        return created


def get_user_service(
    repo: UserRepository = Depends(UserRepository),
    uploader: MediaUploader = Depends(get_media_uploader),
) -> UserService:
    return UserService(repo, uploader)
