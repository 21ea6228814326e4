# 사용자 저장소 레이어
# - 데이터 접근(조회/생성/저장)만 담당 (서비스 로직 분리)
# - 저장 직전에 apply_password_hash()를 명시적으로 호출

from datetime import datetime
from typing import Optional

from beanie import PydanticObjectId
from beanie.operators import Or
from pymongo.errors import DuplicateKeyError

from ..core.exceptions import ConflictError
from ..core.security import apply_password_hash
from ..models.user import User
from ..schemas.user_schema import SENSITIVE_FIELDS, UserPublic


class UserRepository:
    async def find_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        return await User.find_one(Or(User.email == email, User.username == username))

    async def create(
        self,
        *,
        username: str,
        email: str,
        full_name: str,
        password: str,
        avatar: str,
        cover_image: str = "",
    ) -> User:
        user = User(
            username=User.normalize_username(username),
            email=User.normalize_email(email),
            full_name=full_name.strip(),
            password=password,
            avatar=avatar,
            cover_image=cover_image,
        )
        user.set_password(password)
        apply_password_hash(user)
        try:
            return await user.insert()
        except DuplicateKeyError:
            # 중복 체크 이후 동시에 가입한 요청이 unique 인덱스에 걸린 경우
            raise ConflictError("User already exists")

    async def save(self, user: User) -> User:
        apply_password_hash(user)
        user.updated_at = datetime.utcnow()
        await user.save()
        return user

    async def get_public(self, user_id: str) -> Optional[UserPublic]:
        # password / refresh_token 은 DB 조회 단계에서 제외
        doc = await User.get_motor_collection().find_one(
            {"_id": PydanticObjectId(user_id)},
            projection={field: 0 for field in SENSITIVE_FIELDS},
        )
        if doc is None:
            return None
        return UserPublic.from_document(doc)
