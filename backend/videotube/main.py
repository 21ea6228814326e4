# FastAPI 진입점
# - create_app(settings): 설정을 명시적으로 받아 앱 생성 (전역 설정 없음)
# - lifespan에서 Beanie ODM 초기화 (MongoDB)
# - CORS, 라우터, 표준 에러 응답 핸들러 등록
# - 실행: `videotube` 또는 `uvicorn videotube.main:create_app --factory`

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

import uvicorn
from beanie import init_beanie
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient

from .api.v1.users import router as users_router
from .core.config import Settings, get_settings
from .core.exceptions import ApiError
from .models.user import User
from .models.video import Video
from .schemas.response_schema import ApiErrorResponse

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def _error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    body = ApiErrorResponse(status_code=status_code, message=message, errors=errors or [])
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body.model_dump(by_alias=True)))


def build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        Path(settings.UPLOAD_TEMP_DIR).mkdir(parents=True, exist_ok=True)
        client = AsyncIOMotorClient(settings.MONGODB_URI, serverSelectionTimeoutMS=5000)
        try:
            await client.admin.command("ping")
            await init_beanie(database=client[settings.DB_NAME], document_models=[User, Video])
            logger.info(f"MongoDB 연결 성공: {settings.DB_NAME}")
        except Exception as e:
            # 사용자 기능 전체가 DB에 의존하므로 시작을 중단
            logger.error(f"MongoDB 연결 실패: {e}")
            client.close()
            raise
        try:
            yield
        finally:
            client.close()

    return lifespan


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} -> {exc!r}")
        return _error_response(exc.status_code, exc.message, exc.errors)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", jsonable_encoder(exc.errors()))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        # 스택 트레이스는 서버 로그에만 남김
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="videotube API",
        description="영상 공유 서비스 백엔드 (회원가입 / 미디어 업로드)",
        version=VERSION,
        lifespan=build_lifespan(settings),
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/")
    async def root():
        return {"ok": True, "app": settings.APP_NAME, "time": datetime.utcnow().isoformat()}

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "app": settings.APP_NAME, "version": VERSION}

    app.include_router(users_router, prefix="/api/v1")
    return app


def run() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
