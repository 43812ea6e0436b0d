"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class AuthenticationError(DomainError):
    """Raised when the caller identity is missing or invalid."""

    def __init__(self, message: str = "Not authorized to access this route"):
        super().__init__(message)


class NotAuthorizedError(DomainError):
    """Raised when a user attempts an action reserved for someone else."""

    def __init__(self, message: str):
        super().__init__(message)


class ConflictError(DomainError):
    """Raised when a concurrent write invalidated the observed state."""

    def __init__(self, message: str):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found")
