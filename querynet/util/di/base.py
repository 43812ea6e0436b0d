"""Shared base for QueryNet's dishka providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with an in-memory stand-in for tests
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Provider with mock-selection metadata.

    Attributes:
        __mock_component__: Name of the swappable component this provider
            serves, or None for providers with a single implementation
        __is_mock__: True for the in-memory implementation
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
