"""Adapters layer - Infrastructure implementations for thing commands.

This layer contains concrete implementations of the ports defined in the domain layer:
- HTTPThingProxy: Things service implementation of IThingProxy
- AMQPClientPublisher: AMQP implementation of IClientPublisher
- AMQPConnectorPublisher: AMQP implementation of IConnectorPublisher
- AMQPChannel: Shared pika channel used by both publishers
"""

from .amqp_channel import AMQPChannel
from .amqp_publisher import AMQPClientPublisher, AMQPConnectorPublisher
from .http_thing_proxy import HTTPThingProxy

__all__ = [
    "AMQPChannel",
    "AMQPClientPublisher",
    "AMQPConnectorPublisher",
    "HTTPThingProxy",
]
