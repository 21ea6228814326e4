# 커스텀 예외 클래스 정의
# - 모든 API 오류는 ApiError 하나의 타입으로 전파되고
#   main.py의 예외 핸들러에서 표준 에러 응답으로 직렬화됨

from typing import Any, List, Optional


class ApiError(Exception):
    """API 요청 처리 중 발생하는 기본 예외 클래스

    Attributes:
        status_code: HTTP 상태 코드
        message: 클라이언트에게 전달되는 메시지
        errors: 세부 오류 목록 (없으면 빈 리스트)
        kind: 오류 종류 태그 (예: "validation", "conflict")
    """
    kind: str = "error"
    default_status_code: int = 500

    def __init__(
        self,
        message: str = "Something went wrong",
        status_code: Optional[int] = None,
        errors: Optional[List[Any]] = None,
    ):
        self.status_code = status_code or self.default_status_code
        self.message = message
        self.errors = list(errors) if errors else []
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, message={self.message!r})"


class ValidationError(ApiError):
    """필수 값 누락 등 요청 검증 실패"""
    kind = "validation"
    default_status_code = 400


class ConflictError(ApiError):
    """이미 존재하는 리소스와 충돌"""
    kind = "conflict"
    default_status_code = 409


class UploadFailedError(ApiError):
    """외부 스토리지 업로드 실패"""
    kind = "upload-failure"
    default_status_code = 400


class UnauthorizedError(ApiError):
    kind = "unauthorized"
    default_status_code = 401


class InternalServerError(ApiError):
    """저장 후 재조회 실패처럼 서버 내부 불일치를 나타냄"""
    kind = "internal"
    default_status_code = 500
