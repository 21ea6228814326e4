# 미디어 업로드 서비스
# - 멀티파트 업로드 파일을 임시 디렉토리에 저장
# - 임시 파일을 Cloudinary로 업로드 후 로컬 파일 삭제 (성공/실패 모두)
# - 실패 시 예외 대신 None 반환 (호출 측에서 판단)

import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

import cloudinary.exceptions
import cloudinary.uploader
from fastapi import Depends, UploadFile
from fastapi.concurrency import run_in_threadpool

from ..core.config import Settings, get_app_settings
from ..core.retry import create_upload_retry_decorator, is_transient_error

logger = logging.getLogger(__name__)

# SDK는 소켓/HTTP 연결 오류를 메시지만 다른 cloudinary.exceptions.Error로 감싸서 던짐
_WRAPPED_NETWORK_ERROR_PREFIXES = ("Socket error", "Unexpected error")


def is_transient_upload_error(exc: BaseException) -> bool:
    """재시도해도 되는 업로드 오류인지 판단합니다 (연결 끊김, 타임아웃, 요청 제한, 서버 오류)."""
    if is_transient_error(exc):
        return True
    if isinstance(exc, (cloudinary.exceptions.RateLimited, cloudinary.exceptions.GeneralError)):
        return True
    return type(exc) is cloudinary.exceptions.Error and str(exc).startswith(_WRAPPED_NETWORK_ERROR_PREFIXES)


def remove_file_quietly(local_path: Optional[str]) -> None:
    if not local_path:
        return
    try:
        os.remove(local_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"[media] 임시 파일 삭제 실패 {local_path}: {e}")


def save_upload_to_temp(upload: Optional[UploadFile], temp_dir: str) -> Optional[str]:
    """업로드 파일을 temp_dir 아래 고유한 이름으로 저장하고 경로를 반환합니다.

    파일이 없거나 파일명이 비어 있으면 None.
    """
    if upload is None or not upload.filename:
        return None
    Path(temp_dir).mkdir(parents=True, exist_ok=True)
    suffix = Path(upload.filename).suffix
    local_path = os.path.join(temp_dir, f"{uuid.uuid4().hex}{suffix}")
    with open(local_path, "wb") as out:
        shutil.copyfileobj(upload.file, out)
    return local_path


class MediaUploader:
    def __init__(self, settings: Settings):
        self.settings = settings
        retrying = create_upload_retry_decorator(
            max_attempts=settings.UPLOAD_MAX_ATTEMPTS,
            is_retryable=is_transient_upload_error,
        )
        self._upload_with_retry = retrying(self._upload_once)

    def _upload_once(self, local_path: str) -> Dict[str, Any]:
        return cloudinary.uploader.upload(
            local_path,
            resource_type="auto",
            cloud_name=self.settings.CLOUDINARY_CLOUD_NAME,
            api_key=self.settings.CLOUDINARY_API_KEY,
            api_secret=self.settings.CLOUDINARY_API_SECRET,
        )

    async def upload(self, local_path: Optional[str]) -> Optional[Dict[str, Any]]:
        """
        로컬 파일을 Cloudinary에 업로드합니다.

        Args:
            local_path: 업로드할 로컬 파일 경로 (None이면 아무것도 하지 않음)

        Returns:
            Cloudinary 응답 (url, secure_url, public_id 등) 또는 실패 시 None
        """
        if not local_path:
            return None
        try:
            response = await run_in_threadpool(self._upload_with_retry, local_path)
        except Exception as e:
            logger.error(f"[cloudinary] 업로드 실패 {local_path}: {e}")
            remove_file_quietly(local_path)
            return None

        logger.info(f"[cloudinary] 업로드 성공: {response.get('url')}")
        remove_file_quietly(local_path)
        return response


def get_media_uploader(settings: Settings = Depends(get_app_settings)) -> MediaUploader:
    return MediaUploader(settings)
