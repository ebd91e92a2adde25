"""Request Data Use Case - Asks a thing to report some of its sensors.

Workflow:
1. Fetch the thing's current record (via IThingProxy)
2. Require a registered schema
3. Check every requested sensor id against that schema
4. Send the request data command (via IClientPublisher)

The first failing step ends the command; nothing is sent unless every
sensor id is valid.
"""

import logging
from typing import Optional

from ...api.exceptions import KnotError, SensorsNotProvidedError
from ..domain.entities import StepOutcome, WorkflowResult
from ..domain.ports import IClientPublisher, IThingProxy
from .guards import require_credentials, require_schema, validate_sensors

logger = logging.getLogger(__name__)


class RequestDataUseCase:
    """Orchestrates the data request workflow."""

    OPERATION = "request_data"

    def __init__(
        self,
        thing_proxy: IThingProxy,
        client_publisher: IClientPublisher,
    ):
        self.thing_proxy = thing_proxy
        self.client_publisher = client_publisher

    async def execute(
        self,
        authorization: str,
        thing_id: str,
        sensor_ids: Optional[list[int]],
    ) -> WorkflowResult:
        """Execute the data request workflow.

        An empty sensor_ids list passes validation and an empty request is
        sent; only None is rejected.

        Raises:
            MissingInputError: If authorization, thing_id or sensor_ids is missing
            RegistryError: If the thing could not be fetched
            NoSchemaError: If the thing has no schema yet
            SensorInvalidError: If a sensor id is not in the schema
            PublishError: If the command could not be sent
        """
        require_credentials(authorization, thing_id)
        if sensor_ids is None:
            raise SensorsNotProvidedError()

        try:
            thing = await self.thing_proxy.get(authorization, thing_id)
        except KnotError as e:
            logger.error(f"requestData: failed to fetch thing {thing_id}: {e}")
            raise

        try:
            require_schema(thing, thing_id)
            validate_sensors(sensor_ids, thing)
        except KnotError as e:
            logger.error(f"requestData: {e}")
            raise

        if not sensor_ids:
            logger.debug(f"requestData: empty sensor selection for thing {thing_id}")

        try:
            await self.client_publisher.send_request_data(thing_id, sensor_ids)
        except KnotError as e:
            logger.error(f"requestData: failed to send command to thing {thing_id}: {e}")
            raise

        logger.info("data request command successfully sent")
        return WorkflowResult(
            operation=self.OPERATION,
            thing_id=thing_id,
            steps=(
                StepOutcome(name="fetch_thing"),
                StepOutcome(name="validate_sensors"),
                StepOutcome(name="send_request_data"),
            ),
        )
