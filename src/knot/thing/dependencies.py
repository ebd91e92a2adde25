"""Dependency wiring for the thing use cases.

Lifecycle Management:
- ThingsClient session and AMQP channel are opened once and shared by
  every use case
- Both are closed when the context exits

Usage:
    config = AppConfig.from_env()
    async with create_use_cases(config) as use_cases:
        await use_cases.unregister.execute(token, thing_id)
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from ..api.client import ThingsClient
from ..config import AppConfig
from .adapters import (
    AMQPChannel,
    AMQPClientPublisher,
    AMQPConnectorPublisher,
    HTTPThingProxy,
)
from .domain.ports import IClientPublisher, IConnectorPublisher, IThingProxy
from .use_cases import (
    RequestDataUseCase,
    UnregisterThingUseCase,
    UpdateDataUseCase,
    UpdateSchemaUseCase,
)

logger = logging.getLogger(__name__)


@dataclass
class ThingUseCases:
    """Every thing command, wired to the same adapters."""

    update_schema: UpdateSchemaUseCase
    request_data: RequestDataUseCase
    update_data: UpdateDataUseCase
    unregister: UnregisterThingUseCase


def build_use_cases(
    thing_proxy: IThingProxy,
    client_publisher: IClientPublisher,
    connector_publisher: IConnectorPublisher,
) -> ThingUseCases:
    """Create the use cases from already constructed ports."""
    return ThingUseCases(
        update_schema=UpdateSchemaUseCase(thing_proxy, client_publisher, connector_publisher),
        request_data=RequestDataUseCase(thing_proxy, client_publisher),
        update_data=UpdateDataUseCase(thing_proxy, client_publisher),
        unregister=UnregisterThingUseCase(thing_proxy, client_publisher, connector_publisher),
    )


@asynccontextmanager
async def create_use_cases(config: AppConfig) -> AsyncIterator[ThingUseCases]:
    """Open the things service client and AMQP channel, yield the use cases."""
    client = ThingsClient(config.things.url, timeout_seconds=config.things.timeout_seconds)
    channel = AMQPChannel(
        config.amqp.url,
        exchanges=[config.amqp.client_exchange, config.amqp.connector_exchange],
    )

    async with client, channel:
        logger.info("Thing use cases ready")
        yield build_use_cases(
            thing_proxy=HTTPThingProxy(client),
            client_publisher=AMQPClientPublisher(channel, config.amqp.client_exchange),
            connector_publisher=AMQPConnectorPublisher(channel, config.amqp.connector_exchange),
        )
