# 설정 모듈
# - .env 값들을 한 곳에서 관리
# - 전역 인스턴스 없이 get_settings()로 생성 후 create_app()에 전달

from pathlib import Path
from typing import List

from fastapi import Request
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# backend/videotube/core/config.py 기준 3단계 상위가 프로젝트 루트
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    APP_NAME: str = "videotube"
    ENV: str = "dev"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    MONGODB_URI: str = "mongodb://localhost:27017"
    DB_NAME: str = "videotube"

    CORS_ORIGIN: str = "http://localhost:5173,http://localhost:3000"

    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_SECRET: str = Field(..., description="Access 토큰 서명 키")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    REFRESH_TOKEN_SECRET: str = Field(..., description="Refresh 토큰 서명 키 (Access 키와 달라야 함)")
    REFRESH_TOKEN_EXPIRE_DAYS: int = 10

    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""

    # 멀티파트 업로드 파일을 Cloudinary로 보내기 전 임시 저장 위치
    UPLOAD_TEMP_DIR: str = "./public/temp"
    UPLOAD_MAX_ATTEMPTS: int = 3

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH) if ENV_FILE_PATH.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGIN.split(",") if o.strip()]


def get_settings() -> Settings:
    return Settings()


def get_app_settings(request: Request) -> Settings:
    # create_app()에서 app.state에 넣어 둔 설정
    return request.app.state.settings
