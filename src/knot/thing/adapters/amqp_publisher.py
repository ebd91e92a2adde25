"""AMQP adapters for the client and connector publisher ports.

Both publishers share one AMQPChannel and publish JSON bodies to a direct
exchange. Errors reported to clients are sanitized before publishing.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from ...api.error_sanitizer import sanitize_error_message
from ...api.exceptions import KnotError
from ..domain.entities import Data, Schema
from ..domain.ports import IClientPublisher, IConnectorPublisher
from .amqp_channel import AMQPChannel
from .schemas import (
    CommandResultMessage,
    DataDTO,
    DeviceRemovedMessage,
    RequestDataMessage,
    SchemaChangedMessage,
    SchemaDTO,
    UpdateDataMessage,
)

logger = logging.getLogger(__name__)


def error_text(error: Optional[Exception]) -> Optional[str]:
    """Text of an error as published to clients, or None on success."""
    if error is None:
        return None
    message = error.message if isinstance(error, KnotError) else str(error)
    return sanitize_error_message(message)


class AMQPClientPublisher(IClientPublisher):
    """Publishes command results and commands toward the client layer."""

    DEFAULT_EXCHANGE = "device"

    SCHEMA_UPDATED_KEY = "device.schema.updated"
    UNREGISTERED_KEY = "device.unregistered"
    REQUEST_DATA_KEY = "data.request"
    UPDATE_DATA_KEY = "data.update"

    def __init__(self, channel: AMQPChannel, exchange: str = DEFAULT_EXCHANGE):
        self.channel = channel
        self.exchange = exchange

    async def _publish(self, routing_key: str, message: BaseModel) -> None:
        body = message.model_dump_json(by_alias=True).encode("utf-8")
        await self.channel.publish(self.exchange, routing_key, body)

    async def send_schema_updated(
        self,
        thing_id: str,
        error: Optional[Exception] = None,
    ) -> None:
        await self._publish(
            self.SCHEMA_UPDATED_KEY,
            CommandResultMessage(id=thing_id, error=error_text(error)),
        )

    async def send_unregistered(
        self,
        thing_id: str,
        error: Optional[Exception] = None,
    ) -> None:
        await self._publish(
            self.UNREGISTERED_KEY,
            CommandResultMessage(id=thing_id, error=error_text(error)),
        )

    async def send_request_data(self, thing_id: str, sensor_ids: list[int]) -> None:
        await self._publish(
            self.REQUEST_DATA_KEY,
            RequestDataMessage(id=thing_id, sensor_ids=list(sensor_ids)),
        )

    async def send_update_data(self, thing_id: str, data: list[Data]) -> None:
        await self._publish(
            self.UPDATE_DATA_KEY,
            UpdateDataMessage(id=thing_id, data=[DataDTO.from_entity(item) for item in data]),
        )


class AMQPConnectorPublisher(IConnectorPublisher):
    """Publishes thing state changes toward the connector layer."""

    DEFAULT_EXCHANGE = "connector"

    SCHEMA_UPDATE_KEY = "schema.update"
    DEVICE_UNREGISTER_KEY = "device.unregister"

    def __init__(self, channel: AMQPChannel, exchange: str = DEFAULT_EXCHANGE):
        self.channel = channel
        self.exchange = exchange

    async def _publish(self, routing_key: str, message: BaseModel) -> None:
        body = message.model_dump_json(by_alias=True).encode("utf-8")
        await self.channel.publish(self.exchange, routing_key, body)

    async def send_schema_changed(self, thing_id: str, schema: list[Schema]) -> None:
        await self._publish(
            self.SCHEMA_UPDATE_KEY,
            SchemaChangedMessage(
                id=thing_id,
                schema_=[SchemaDTO.from_entity(entry) for entry in schema],
            ),
        )

    async def send_device_removed(self, thing_id: str) -> None:
        await self._publish(self.DEVICE_UNREGISTER_KEY, DeviceRemovedMessage(id=thing_id))
