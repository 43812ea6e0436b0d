"""PostgreSQL implementation of User repository."""

from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from querynet.domain.model import User, UserPreferences
from querynet.domain.repository import UserRepository
from querynet.domain.value import Email, UserId, Username, UserStat
from querynet.persistence.mappers import row_to_user, user_to_dict
from querynet.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users in one query."""
        if not user_ids:
            return []
        stmt = select(users_table).where(users_table.c.id.in_(list(user_ids)))
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username (case-insensitive)."""
        stmt = select(users_table).where(
            func.lower(users_table.c.username) == username.root.lower()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.email == email.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Stats columns are never overwritten on update; they only change
        through ``increment_stat``.

        Args:
            user: User to save

        Returns:
            Saved user
        """
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            for stat in UserStat:
                user_dict.pop(stat.value)
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = users_table.insert().values(**user_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return user

    async def count(self) -> int:
        stmt = select(func.count()).select_from(users_table)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def increment_stat(self, user_id: UserId, stat: UserStat, delta: int) -> None:
        """Atomically adjust one stats counter (minimum 0).

        Args:
            user_id: User ID to update
            stat: Counter column
            delta: Signed amount
        """
        column = users_table.c[stat.value]
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values({column: func.greatest(column + delta, 0)})
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def update_preferences(
        self, user_id: UserId, preferences: UserPreferences
    ) -> Optional[User]:
        """Replace a user's preferences."""
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(
                email_notifications=preferences.email_notifications,
                push_notifications=preferences.push_notifications,
                theme=preferences.theme.value,
                updated_at=func.now(),
            )
            .returning(*users_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_user(dict(row)) if row else None
