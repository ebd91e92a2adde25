"""Port interfaces for thing commands.

Ports define the contracts between the use cases and the infrastructure.
These are abstract base classes that adapters must implement.

Following the Hexagonal Architecture (Ports and Adapters) pattern:
- Ports are interfaces defined in the domain layer
- Adapters implement these ports in the adapters layer
- Use cases depend only on ports, not concrete implementations

Every port method signals failure by raising a KnotError subclass
(RegistryError for the thing proxy, PublishError for the publishers).
"""

from abc import ABC, abstractmethod
from typing import Optional

from .entities import Data, Schema, Thing


class IThingProxy(ABC):
    """Port for the things service, the authoritative device registry.

    The authorization token is forwarded as-is; the proxy never caches
    records between calls.
    """

    @abstractmethod
    async def get(self, authorization: str, thing_id: str) -> Thing:
        """Fetch a thing's current record.

        Args:
            authorization: Token of the thing
            thing_id: Thing identifier

        Returns:
            Thing with its registered schema (None if never registered)
        """
        ...

    @abstractmethod
    async def update_schema(
        self,
        authorization: str,
        thing_id: str,
        schema: list[Schema],
    ) -> None:
        """Persist a new schema for a thing.

        Args:
            authorization: Token of the thing
            thing_id: Thing identifier
            schema: Validated schema list
        """
        ...

    @abstractmethod
    async def remove(self, authorization: str, thing_id: str) -> None:
        """Remove a thing from the registry.

        Args:
            authorization: Token of the thing
            thing_id: Thing identifier
        """
        ...


class IClientPublisher(ABC):
    """Port for messages sent back to the end-user/application layer."""

    @abstractmethod
    async def send_schema_updated(
        self,
        thing_id: str,
        error: Optional[Exception] = None,
    ) -> None:
        """Send the result of a schema update command.

        Args:
            thing_id: Thing identifier
            error: Error that ended the command, None on success
        """
        ...

    @abstractmethod
    async def send_unregistered(
        self,
        thing_id: str,
        error: Optional[Exception] = None,
    ) -> None:
        """Send the result of an unregister command.

        Args:
            thing_id: Thing identifier
            error: Error that ended the command, None on success
        """
        ...

    @abstractmethod
    async def send_request_data(self, thing_id: str, sensor_ids: list[int]) -> None:
        """Send a command asking the thing to report the given sensors.

        Args:
            thing_id: Thing identifier
            sensor_ids: Validated sensor ids, forwarded as received
        """
        ...

    @abstractmethod
    async def send_update_data(self, thing_id: str, data: list[Data]) -> None:
        """Send a command writing values to the thing's actuators.

        Args:
            thing_id: Thing identifier
            data: Validated data items
        """
        ...


class IConnectorPublisher(ABC):
    """Port for device state changes sent to the field connector layer."""

    @abstractmethod
    async def send_schema_changed(self, thing_id: str, schema: list[Schema]) -> None:
        """Announce that a thing's schema changed.

        Args:
            thing_id: Thing identifier
            schema: The schema now stored on the registry
        """
        ...

    @abstractmethod
    async def send_device_removed(self, thing_id: str) -> None:
        """Announce that a thing was removed from the registry.

        Args:
            thing_id: Thing identifier
        """
        ...
