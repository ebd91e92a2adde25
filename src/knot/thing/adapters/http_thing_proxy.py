"""Things service adapter for the thing registry port.

This adapter implements IThingProxy and wraps ThingsClient to provide
thing-specific registry operations.
"""

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from ...api.exceptions import RegistryError
from ..domain.entities import Schema, Thing
from ..domain.ports import IThingProxy
from .schemas import ThingDTO, UpdateSchemaRequest

if TYPE_CHECKING:
    from ...api.client import ThingsClient

logger = logging.getLogger(__name__)


class HTTPThingProxy(IThingProxy):
    """Things service adapter for registry operations."""

    ENDPOINT = "/things"

    def __init__(self, client: "ThingsClient"):
        """Initialize the adapter.

        Args:
            client: ThingsClient, already entered as a context manager
        """
        self.client = client

    def _thing_endpoint(self, thing_id: str) -> str:
        return f"{self.ENDPOINT}/{thing_id}"

    async def get(self, authorization: str, thing_id: str) -> Thing:
        """Fetch a thing and map it to the domain entity.

        Raises:
            RegistryError: If the request fails or the body is not a thing record
        """
        endpoint = self._thing_endpoint(thing_id)
        body = await self.client.get(endpoint, authorization=authorization)

        try:
            dto = ThingDTO.model_validate(body)
        except ValidationError as e:
            raise RegistryError(
                f"Malformed thing record for {thing_id}",
                endpoint=endpoint,
                cause=e,
            )

        logger.debug(
            f"Fetched thing {thing_id} with "
            f"{len(dto.schema_) if dto.schema_ is not None else 'no'} schema entries"
        )
        return dto.to_entity()

    async def update_schema(
        self,
        authorization: str,
        thing_id: str,
        schema: list[Schema],
    ) -> None:
        """Replace the thing's schema on the things service."""
        body = UpdateSchemaRequest.from_entities(schema).model_dump(by_alias=True)
        await self.client.put(
            f"{self._thing_endpoint(thing_id)}/schema",
            authorization=authorization,
            json_body=body,
        )

    async def remove(self, authorization: str, thing_id: str) -> None:
        """Delete the thing from the things service."""
        await self.client.delete(self._thing_endpoint(thing_id), authorization=authorization)
