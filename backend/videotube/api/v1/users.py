# 사용자 라우터
# - 회원가입: POST /api/v1/users/register (multipart: avatar, coverImages)

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from ...core.config import Settings, get_app_settings
from ...schemas.response_schema import ApiResponse
from ...schemas.user_schema import UserPublic, UserRegister
from ...services.media_service import remove_file_quietly, save_upload_to_temp
from ...services.user_service import UserService, get_user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[UserPublic],
    summary="회원가입 (중복 체크 + 아바타/커버 이미지 업로드)",
)
async def register(
    username: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    full_name: str = Form("", alias="fullName"),
    avatar: Optional[UploadFile] = File(None),
    cover_images: Optional[UploadFile] = File(None, alias="coverImages"),
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_app_settings),
):
    payload = UserRegister(username=username, email=email, password=password, full_name=full_name)
    avatar_path = cover_path = None
    try:
        avatar_path = await run_in_threadpool(save_upload_to_temp, avatar, settings.UPLOAD_TEMP_DIR)
        cover_path = await run_in_threadpool(save_upload_to_temp, cover_images, settings.UPLOAD_TEMP_DIR)
        user = await service.register(payload, avatar_path, cover_path)
    finally:
        # 임시 저장 중 실패했거나 업로드 단계 전에 실패한 경우 남아 있는 임시 파일 정리
        remove_file_quietly(avatar_path)
        remove_file_quietly(cover_path)
    return ApiResponse[UserPublic].of(status.HTTP_201_CREATED, user, "User created successfully")
