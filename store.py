import logging
import threading
from dataclasses import asdict, dataclass, replace
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

# 启动时的种子数据（重启会丢，不做持久化）
SEED_USERS = [
    ("Alice Smith", "alice@example.com"),
    ("Bob Johnson", "bob@example.com"),
    ("Charlie Brown", "charlie@example.com"),
]


class StoreError(Exception):
    """存储层错误基类，message 直接返回给客户端"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(StoreError):
    def __init__(self, user_id):
        super().__init__(f"User with ID {user_id} not found.")
        self.user_id = user_id


class InvalidInput(StoreError):
    pass


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class UserPatch:
    """
    PUT 的部分更新：None 表示没传该字段。
    注意空字符串和没传一样处理，客户端无法把字段清空。
    """
    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_body(cls, body: Dict) -> "UserPatch":
        return cls(name=body.get("name"), email=body.get("email"))


class UserStore:
    def __init__(self, users: Optional[List[User]] = None):
        self._users: List[User] = list(users or [])
        # id 只增不减，删除后也不复用
        self._next_id = max((u.id for u in self._users), default=0) + 1
        self._lock = threading.Lock()

    @classmethod
    def seeded(cls) -> "UserStore":
        return cls([User(i, name, email) for i, (name, email) in enumerate(SEED_USERS, start=1)])

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    def list(self) -> List[User]:
        with self._lock:
            return list(self._users)

    def get(self, user_id) -> User:
        with self._lock:
            return self._users[self._index(user_id)]

    def create(self, name, email) -> User:
        if not name or not email:
            raise InvalidInput("Name and email are required for a new user.")
        with self._lock:
            user = User(id=self._next_id, name=name, email=email)
            self._next_id += 1
            self._users.append(user)
        logger.info("created user %s", user.id)
        return user

    def update(self, user_id, patch: UserPatch) -> User:
        with self._lock:
            idx = self._index(user_id)
            current = self._users[idx]
            # 只覆盖真值字段，其余保留原值
            user = replace(
                current,
                name=patch.name or current.name,
                email=patch.email or current.email,
            )
            self._users[idx] = user
        logger.info("updated user %s", user.id)
        return user

    def delete(self, user_id) -> bool:
        with self._lock:
            del self._users[self._index(user_id)]
        logger.info("deleted user %s", user_id)
        return True

    def _index(self, user_id) -> int:
        # 调用方必须持有 self._lock
        for i, u in enumerate(self._users):
            if u.id == user_id:
                return i
        raise NotFound(user_id)

    def __len__(self):
        with self._lock:
            return len(self._users)
