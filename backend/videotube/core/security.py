# 보안/인증 유틸리티
# - 비밀번호 해싱/검증 (bcrypt, cost 10)
# - 저장 전 명시적 해싱 (apply_password_hash)
# - Access/Refresh JWT 생성/검증 (토큰 종류별로 별도 비밀키)

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from passlib.context import CryptContext

from .config import Settings
from .exceptions import UnauthorizedError

ACCESS = "access"
REFRESH = "refresh"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def apply_password_hash(user) -> None:
    """변경된 비밀번호만 해시로 교체합니다.

    user.password_changed 가 False 이면 아무것도 하지 않습니다.
    이미 저장된 해시를 다시 해싱하는 일을 막기 위함입니다.
    """
    if not user.password_changed:
        return
    user.password = get_password_hash(user.password)
    user.mark_password_hashed()


def _user_claims(user) -> Dict[str, Any]:
    return {
        "sub": str(user.id),
        "email": user.email,
        "username": user.username,
        "fullName": user.full_name,
    }


def _secret_for(token_type: str, settings: Settings) -> str:
    if token_type == ACCESS:
        return settings.ACCESS_TOKEN_SECRET
    if token_type == REFRESH:
        return settings.REFRESH_TOKEN_SECRET
    raise ValueError(f"unknown token type: {token_type}")


def create_token(subject: dict, secret: str, algorithm: str, expires_delta: timedelta) -> str:
    now = datetime.now(tz=timezone.utc)
    payload = {
        "exp": now + expires_delta,
        "iat": now,
        "nbf": now,
        **subject,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def create_access_token(user, settings: Settings) -> str:
    return create_token(
        {**_user_claims(user), "type": ACCESS},
        settings.ACCESS_TOKEN_SECRET,
        settings.JWT_ALGORITHM,
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_refresh_token(user, settings: Settings) -> str:
    return create_token(
        {**_user_claims(user), "type": REFRESH},
        settings.REFRESH_TOKEN_SECRET,
        settings.JWT_ALGORITHM,
        timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


def decode_token(token: str, token_type: str, settings: Settings) -> Dict[str, Any]:
    # 서명/만료/토큰 종류 검증
    try:
        payload = jwt.decode(token, _secret_for(token_type, settings), algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError:
        raise UnauthorizedError("Invalid or expired token")
    if payload.get("type") != token_type or payload.get("sub") is None:
        raise UnauthorizedError("Invalid or expired token")
    return payload
