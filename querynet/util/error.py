"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Settings that must not be used in the current environment."""

    pass


class JWTError(UtilError):
    """Token could not be verified."""

    pass
