# 재시도 로직 유틸리티
# - 미디어 업로드처럼 외부 서비스 호출에만 사용
# - 등록 파이프라인 자체는 재시도하지 않음
# - 일시적인 오류(연결 끊김, 타임아웃 등)만 재시도

import logging
from typing import Callable

from tenacity import (
    after_log,
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)


def is_transient_error(exc: BaseException) -> bool:
    return isinstance(exc, (ConnectionError, TimeoutError))


def create_upload_retry_decorator(
    max_attempts: int = 3,
    initial_wait: float = 1.0,
    max_wait: float = 10.0,
    is_retryable: Callable[[BaseException], bool] = is_transient_error,
):
    """
    외부 업로드 호출용 재시도 데코레이터를 생성합니다.

    지수 백오프: initial_wait 기준 1초 → 2초 → 4초 ... (max_wait에서 멈춤).
    is_retryable이 False를 돌려주는 오류(잘못된 인증 정보, 지원하지 않는 파일 등)는
    바로 다시 던집니다. 모든 시도가 실패해도 마지막 예외를 그대로 던집니다 (reraise=True).

    Args:
        max_attempts: 총 시도 횟수 (1이면 재시도 없음)
        initial_wait: 첫 재시도 전 대기 시간 (초)
        max_wait: 최대 대기 시간 (초)
        is_retryable: 재시도 대상 오류인지 판단하는 함수
    """
    return retry(
        stop=stop_after_attempt(max(1, max_attempts)),
        wait=wait_exponential(multiplier=initial_wait, min=initial_wait, max=max_wait),
        retry=retry_if_exception(is_retryable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        after=after_log(logger, logging.ERROR),
        reraise=True,
    )
