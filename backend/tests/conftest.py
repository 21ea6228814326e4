# 공통 픽스처
# - DB/Cloudinary 없이 동작하도록 저장소/업로더를 메모리 구현으로 대체

import os
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from videotube.core.config import Settings
from videotube.core.exceptions import ConflictError
from videotube.core.security import get_password_hash
from videotube.main import create_app
from videotube.repositories.user_repository import UserRepository
from videotube.schemas.user_schema import UserPublic
from videotube.services.media_service import get_media_uploader


class InMemoryUserRepository:
    def __init__(self):
        self.users = {}
        self.lose_created = False
        self.conflict_on_create = False

    async def find_by_email_or_username(self, email, username):
        for user in self.users.values():
            if user["email"] == email or user["username"] == username:
                return user
        return None

    async def create(self, *, username, email, full_name, password, avatar, cover_image=""):
        if self.conflict_on_create:
            # 중복 체크 통과 후 unique 인덱스에 걸린 경우 (UserRepository.create와 동일)
            raise ConflictError("User already exists")
        user_id = ObjectId()
        now = datetime.utcnow()
        self.users[str(user_id)] = {
            "_id": user_id,
            "username": username,
            "email": email,
            "full_name": full_name,
            "password": get_password_hash(password),
            "avatar": avatar,
            "cover_image": cover_image,
            "watch_history": [],
            "refresh_token": None,
            "created_at": now,
            "updated_at": now,
        }
        return SimpleNamespace(id=user_id)

    async def get_public(self, user_id):
        doc = None if self.lose_created else self.users.get(user_id)
        return UserPublic.from_document(doc) if doc else None


class FakeUploader:
    def __init__(self):
        self.fail = False
        self.uploaded = []

    async def upload(self, local_path):
        if not local_path:
            return None
        self.uploaded.append(local_path)
        os.remove(local_path)
        if self.fail:
            return None
        return {"url": f"http://res.cloudinary.com/demo/{Path(local_path).name}"}


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        ACCESS_TOKEN_SECRET="test-access-secret",
        REFRESH_TOKEN_SECRET="test-refresh-secret",
        UPLOAD_TEMP_DIR=str(tmp_path / "temp"),
        UPLOAD_MAX_ATTEMPTS=1,
    )


@pytest.fixture
def repo():
    return InMemoryUserRepository()


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def client(settings, repo, uploader):
    app = create_app(settings)
    app.dependency_overrides[UserRepository] = lambda: repo
    app.dependency_overrides[get_media_uploader] = lambda: uploader
    # lifespan(MongoDB 연결)은 실행하지 않음
    return TestClient(app)
