"""Base service class for domain services."""

from querynet.domain.error import NotAuthorizedError
from querynet.domain.value import UserId, UserRole


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    @staticmethod
    def ensure_owner_or_admin(
        owner_id: UserId, user_id: UserId, role: UserRole, message: str
    ) -> None:
        """Allow the action only for the owner of an entity or an admin.

        Raises:
            NotAuthorizedError: If the caller is neither
        """
        if owner_id != user_id and role is not UserRole.ADMIN:
            raise NotAuthorizedError(message)
