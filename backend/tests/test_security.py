# 보안 유닛 테스트 (DB 의존성 없음)
from datetime import timedelta
from types import SimpleNamespace

import jwt
import pytest

from videotube.core.exceptions import UnauthorizedError
from videotube.core.security import (
    ACCESS,
    REFRESH,
    apply_password_hash,
    create_access_token,
    create_refresh_token,
    create_token,
    decode_token,
    get_password_hash,
    verify_password,
)


class _PasswordHolder:
    def __init__(self, password, changed):
        self.password = password
        self.password_changed = changed

    def mark_password_hashed(self):
        self.password_changed = False


def _user():
    return SimpleNamespace(id="652f1c0a9b1e8a3f4c2d1e0f", email="a@x.com", username="alice", full_name="Alice A")


def test_password_hash_and_verify():
    pw = "S3cure!"
    hashed = get_password_hash(pw)
    assert hashed != pw
    assert hashed.startswith("$2b$10$")
    assert verify_password(pw, hashed)
    assert not verify_password("wrong", hashed)


def test_apply_password_hash_only_when_changed():
    holder = _PasswordHolder("secret", changed=True)
    apply_password_hash(holder)
    assert holder.password != "secret"
    assert verify_password("secret", holder.password)
    assert holder.password_changed is False

    hashed = holder.password
    apply_password_hash(holder)
    assert holder.password == hashed


def test_create_access_token(settings):
    token = create_access_token(_user(), settings)
    decoded = jwt.decode(token, settings.ACCESS_TOKEN_SECRET, algorithms=[settings.JWT_ALGORITHM])
    assert decoded["sub"] == "652f1c0a9b1e8a3f4c2d1e0f"
    assert decoded["email"] == "a@x.com"
    assert decoded["username"] == "alice"
    assert decoded["fullName"] == "Alice A"
    assert decoded["type"] == ACCESS


def test_refresh_token_uses_its_own_secret(settings):
    token = create_refresh_token(_user(), settings)
    assert decode_token(token, REFRESH, settings)["type"] == REFRESH
    with pytest.raises(jwt.InvalidSignatureError):
        jwt.decode(token, settings.ACCESS_TOKEN_SECRET, algorithms=[settings.JWT_ALGORITHM])


def test_refresh_token_outlives_access_token(settings):
    access = jwt.decode(create_access_token(_user(), settings), options={"verify_signature": False})
    refresh = jwt.decode(create_refresh_token(_user(), settings), options={"verify_signature": False})
    assert refresh["exp"] > access["exp"]


def test_decode_token_rejects_wrong_type(settings):
    token = create_token(
        {"sub": "user123", "type": REFRESH},
        settings.ACCESS_TOKEN_SECRET,
        settings.JWT_ALGORITHM,
        timedelta(minutes=5),
    )
    with pytest.raises(UnauthorizedError) as exc_info:
        decode_token(token, ACCESS, settings)
    assert exc_info.value.status_code == 401


def test_decode_token_rejects_expired(settings):
    token = create_token(
        {"sub": "user123", "type": ACCESS},
        settings.ACCESS_TOKEN_SECRET,
        settings.JWT_ALGORITHM,
        timedelta(seconds=-10),
    )
    with pytest.raises(UnauthorizedError):
        decode_token(token, ACCESS, settings)
