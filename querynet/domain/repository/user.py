"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from querynet.domain.model.user import User, UserPreferences
from querynet.domain.value import Email, UserId, Username, UserStat


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once (batch query for author lookups).

        Args:
            user_ids: User IDs to load

        Returns:
            The users that exist, in no particular order
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username.

        Args:
            username: The user's username

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all users."""
        pass

    @abstractmethod
    async def increment_stat(self, user_id: UserId, stat: UserStat, delta: int) -> None:
        """Atomically adjust one stats counter.

        Uses a database-level increment so concurrent adjustments do not
        overwrite each other. The counter never drops below zero.

        Args:
            user_id: The user whose counter changes
            stat: Which counter
            delta: Signed amount to add
        """
        pass

    @abstractmethod
    async def update_preferences(
        self, user_id: UserId, preferences: UserPreferences
    ) -> Optional[User]:
        """Replace a user's preferences.

        Returns:
            The updated user, or None if the user doesn't exist
        """
        pass
