"""Dependency injection container for job matchers."""

from __future__ import annotations

from typing import Any

from dependency_injector import containers, providers

from .queue import ArgumentSerializer, InlineQueueAdapter, QueueAdapterRegistry, TestQueueAdapter
from .queue.global_id import default_locator
from .schemas import MatcherSettings, load_settings


class MatchersContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    serializer = providers.Singleton(
        ArgumentSerializer,
        locator=providers.Object(default_locator),
    )

    test_adapter = providers.Factory(
        TestQueueAdapter,
        default_queue_name=config.default_queue_name,
        serializer=serializer,
    )
    inline_adapter = providers.Factory(
        InlineQueueAdapter,
        default_queue_name=config.default_queue_name,
        serializer=serializer,
    )

    queue_adapter = providers.Selector(
        config.queue_adapter,
        test=test_adapter,
        inline=inline_adapter,
    )

    adapter_registry = providers.Singleton(
        QueueAdapterRegistry,
        factories=providers.Dict(
            test=test_adapter.provider,
            inline=inline_adapter.provider,
        ),
    )


def create_container(*, settings: MatcherSettings | dict[str, Any] | None = None) -> MatchersContainer:
    """Instantiate container with optional overrides."""

    container = MatchersContainer()
    container.config.from_dict(load_settings(settings).model_dump())
    return container
