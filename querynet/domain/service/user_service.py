"""User domain service."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import uuid4

import logfire

from querynet.config import AuthSettings
from querynet.domain.error import AuthenticationError, NotFoundError, ValidationError
from querynet.domain.model import User, UserPreferences
from querynet.domain.repository import UserRepository
from querynet.domain.value import Email, UserId, Username, UserStat
from querynet.util.password import hash_password, is_password_too_long, verify_password

from .base import Service

MIN_PASSWORD_LENGTH = 6


class UserService(Service):
    """Domain service for user operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            auth_settings: Authentication settings (bcrypt work factor)
        """
        self.user_repository = user_repository
        self.auth_settings = auth_settings

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_by_ids(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        """Load several users keyed by ID (missing users are left out)."""
        if not user_ids:
            return {}
        users = await self.user_repository.find_by_ids(list(set(user_ids)))
        return {user.id: user for user in users}

    async def register(self, username: str, email: str, password: str) -> User:
        """Create a new account.

        Args:
            username: Requested username
            email: Email address
            password: Plain-text password

        Returns:
            The created user

        Raises:
            ValidationError: If a field is invalid or the user already exists
        """
        with logfire.span("user_service.register", username=username):
            _check_password(password)

            try:
                username_value = Username(username)
                email_value = Email(email)
            except ValueError as e:
                raise ValidationError(_first_error(e))

            if await self.user_repository.find_by_email(email_value):
                logfire.warn("Registration with existing email", username=username)
                raise ValidationError("User already exists")
            if await self.user_repository.find_by_username(username_value):
                logfire.warn("Registration with existing username", username=username)
                raise ValidationError("User already exists")

            now = datetime.now()
            user = User(
                id=UserId(uuid4()),
                username=username_value,
                email=email_value,
                password_hash=hash_password(password, self.auth_settings.bcrypt_rounds),
                last_active=now,
                created_at=now,
                updated_at=now,
            )
            saved = await self.user_repository.save(user)
            logfire.info("User registered", user_id=str(saved.id), username=username)
            return saved

    async def authenticate(self, email: str, password: str) -> User:
        """Check credentials and record activity.

        Raises:
            AuthenticationError: If the email is unknown or the password is wrong
        """
        with logfire.span("user_service.authenticate"):
            try:
                email_value = Email(email)
            except ValueError:
                raise AuthenticationError("Invalid credentials")

            user = await self.user_repository.find_by_email(email_value)
            if not user or not verify_password(password, user.password_hash):
                logfire.warn("Failed login attempt")
                raise AuthenticationError("Invalid credentials")

            updated = await self.user_repository.save(
                user.model_copy(update={"last_active": datetime.now()})
            )
            logfire.info("User authenticated", user_id=str(user.id))
            return updated

    async def adjust_stat(self, user_id: UserId, stat: UserStat, delta: int) -> None:
        """Atomically adjust one of a user's activity counters.

        Args:
            user_id: User ID
            stat: Counter to change
            delta: Signed amount (usually +1 or -1)
        """
        with logfire.span(
            "user_service.adjust_stat",
            user_id=str(user_id),
            stat=stat.value,
            delta=delta,
        ):
            await self.user_repository.increment_stat(user_id, stat, delta)

    async def update_preferences(
        self, user_id: UserId, preferences: UserPreferences
    ) -> User:
        """Replace a user's notification and display preferences.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.update_preferences", user_id=str(user_id)):
            user = await self.user_repository.update_preferences(user_id, preferences)
            if not user:
                raise NotFoundError("User", str(user_id))
            logfire.info("Preferences updated", user_id=str(user_id))
            return user

    async def update_profile(
        self,
        user_id: UserId,
        username: Optional[str] = None,
        bio: Optional[str] = None,
        location: Optional[str] = None,
        website: Optional[str] = None,
        preferences: Optional[UserPreferences] = None,
    ) -> User:
        """Change the public profile fields of an account.

        Fields left as ``None`` keep their current value.

        Raises:
            NotFoundError: If user not found
            ValidationError: If a field is invalid or the username is taken
        """
        with logfire.span("user_service.update_profile", user_id=str(user_id)):
            user = await self.get_by_id(user_id)
            changes: dict = {
                key: value
                for key, value in (
                    ("bio", bio),
                    ("location", location),
                    ("website", website),
                    ("preferences", preferences),
                )
                if value is not None
            }

            if username is not None:
                try:
                    username_value = Username(username)
                except ValueError as e:
                    raise ValidationError(_first_error(e))
                holder = await self.user_repository.find_by_username(username_value)
                if holder and holder.id != user_id:
                    logfire.warn("Username already taken", username=username)
                    raise ValidationError("Username already taken")
                changes["username"] = username_value

            changes["updated_at"] = datetime.now()
            try:
                updated = User.model_validate({**user.model_dump(), **changes})
            except ValueError as e:
                raise ValidationError(_first_error(e))

            saved = await self.user_repository.save(updated)
            logfire.info(
                "Profile updated",
                user_id=str(user_id),
                fields=sorted(k for k in changes if k != "updated_at"),
            )
            return saved

    async def change_password(
        self, user_id: UserId, current_password: str, new_password: str
    ) -> None:
        """Replace the password after checking the current one.

        Raises:
            NotFoundError: If user not found
            ValidationError: If either password is missing, the current one
                is wrong, or the new one breaks the length rules
        """
        with logfire.span("user_service.change_password", user_id=str(user_id)):
            if not current_password or not new_password:
                raise ValidationError(
                    "Please provide current password and new password"
                )

            user = await self.get_by_id(user_id)
            if not verify_password(current_password, user.password_hash):
                logfire.warn("Password change with wrong password", user_id=str(user_id))
                raise ValidationError("Current password is incorrect")

            _check_password(new_password)
            await self.user_repository.save(
                user.model_copy(
                    update={
                        "password_hash": hash_password(
                            new_password, self.auth_settings.bcrypt_rounds
                        ),
                        "updated_at": datetime.now(),
                    }
                )
            )
            logfire.info("Password changed", user_id=str(user_id))

    async def count_users(self) -> int:
        return await self.user_repository.count()


def _check_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if is_password_too_long(password):
        raise ValidationError("Password must be at most 72 bytes")


def _first_error(error: ValueError) -> str:
    """Human-readable message from a pydantic validation error."""
    errors = getattr(error, "errors", None)
    if callable(errors):
        details = errors()
        if details:
            return str(details[0].get("msg", error)).removeprefix("Value error, ")
    return str(error)
