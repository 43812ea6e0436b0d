"""In-memory user repository for testing."""

from typing import Optional, Sequence

from querynet.domain.model.user import User, UserPreferences
from querynet.domain.repository.user import UserRepository
from querynet.domain.value import Email, UserId, Username, UserStat


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        return [self._users[uid] for uid in set(user_ids) if uid in self._users]

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username (case-insensitive)."""
        wanted = username.root.lower()
        for user in self._users.values():
            if user.username.root.lower() == wanted:
                return user
        return None

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user; stats only change through increment_stat."""
        existing = self._users.get(user.id)
        if existing:
            user = user.model_copy(update={"stats": existing.stats})
        self._users[user.id] = user
        return user

    async def count(self) -> int:
        return len(self._users)

    async def increment_stat(self, user_id: UserId, stat: UserStat, delta: int) -> None:
        """Adjust a stats counter (minimum 0)."""
        user = self._users.get(user_id)
        if user:
            value = max(0, user.stats.get(stat) + delta)
            stats = user.stats.model_copy(update={stat.value: value})
            self._users[user_id] = user.model_copy(update={"stats": stats})

    async def update_preferences(
        self, user_id: UserId, preferences: UserPreferences
    ) -> Optional[User]:
        user = self._users.get(user_id)
        if not user:
            return None
        updated = user.model_copy(update={"preferences": preferences})
        self._users[user_id] = updated
        return updated
