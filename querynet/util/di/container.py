"""Production container assembly."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from querynet.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container QueryNet serves requests from.

    Every mockable component resolves to its Postgres-backed provider;
    ``Settings`` is read from the environment by the core provider.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container so routes can resolve ``FromDishka`` parameters."""
    setup_dishka(container, app)
