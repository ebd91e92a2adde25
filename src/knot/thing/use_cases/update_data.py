"""Update Data Use Case - Writes values to a thing's actuators.

Same shape as RequestDataUseCase, with one extra check: each value must
match the value type its sensor declared in the schema.
"""

import logging
from typing import Optional

from ...api.exceptions import DataNotProvidedError, KnotError
from ..domain.entities import Data, StepOutcome, WorkflowResult
from ..domain.ports import IClientPublisher, IThingProxy
from .guards import require_credentials, require_schema, validate_data

logger = logging.getLogger(__name__)


class UpdateDataUseCase:
    """Orchestrates the data update workflow."""

    OPERATION = "update_data"

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
        data: Optional[list[Data]],
    ) -> WorkflowResult:
        """Execute the data update workflow.

        Raises:
            MissingInputError: If authorization, thing_id or data is missing
            RegistryError: If the thing could not be fetched
            NoSchemaError: If the thing has no schema yet
            SensorInvalidError: If a data item targets an unknown sensor
            DataInvalidError: If a value does not match its sensor's value type
            PublishError: If the command could not be sent
        """
        require_credentials(authorization, thing_id)
        if data is None:
            raise DataNotProvidedError()

        try:
            thing = await self.thing_proxy.get(authorization, thing_id)
            require_schema(thing, thing_id)
            validate_data(data, thing)
        except KnotError as e:
            logger.error(f"updateData: {e}")
            raise

        try:
            await self.client_publisher.send_update_data(thing_id, data)
        except KnotError as e:
            logger.error(f"updateData: failed to send command to thing {thing_id}: {e}")
            raise

        logger.info("update data command successfully sent")
        return WorkflowResult(
            operation=self.OPERATION,
            thing_id=thing_id,
            steps=(
                StepOutcome(name="fetch_thing"),
                StepOutcome(name="validate_data"),
                StepOutcome(name="send_update_data"),
            ),
        )
