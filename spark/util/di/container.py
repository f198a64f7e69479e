"""Production container and FastAPI integration."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from spark.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container with the production side of every component.

    PostgreSQL repositories and the realtime sink chosen from
    ``RealtimeSettings`` are resolved lazily, so building the container
    never touches the network.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach ``container`` to ``app``; the last call wins."""
    setup_dishka(container, app)
