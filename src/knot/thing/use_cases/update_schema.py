"""Update Schema Use Case - Validates and stores a thing's new schema.

Workflow:
1. Validate the schema list against the KNoT typing rules
2. Persist the schema on the things service (via IThingProxy)
3. Report the result to the client (via IClientPublisher)
4. Announce the change to the connector (via IConnectorPublisher, best-effort)

The connector only hears about schemas the registry accepted, and only
after the client was told. A failed client notification after a successful
registry write is reported as a failure even though the write is kept.
"""

import logging
from typing import Optional

from ...api.exceptions import KnotError, SchemaInvalidError, SchemaNotProvidedError
from ..domain.entities import Schema, StepOutcome, WorkflowResult
from ..domain.ports import IClientPublisher, IConnectorPublisher, IThingProxy
from ..domain.schema_rules import find_invalid_schema
from .guards import require_credentials
from .notifications import notify_client, run_best_effort

logger = logging.getLogger(__name__)


class UpdateSchemaUseCase:
    """Orchestrates the schema update workflow.

    Example:
        use_case = UpdateSchemaUseCase(
            thing_proxy=HTTPThingProxy(client),
            client_publisher=AMQPClientPublisher(channel),
            connector_publisher=AMQPConnectorPublisher(channel),
        )
        result = await use_case.execute(token, "19cf40c23012ce1c", schema_list)
    """

    OPERATION = "update_schema"

    def __init__(
        self,
        thing_proxy: IThingProxy,
        client_publisher: IClientPublisher,
        connector_publisher: IConnectorPublisher,
    ):
        self.thing_proxy = thing_proxy
        self.client_publisher = client_publisher
        self.connector_publisher = connector_publisher

    async def execute(
        self,
        authorization: str,
        thing_id: str,
        schema_list: Optional[list[Schema]],
    ) -> WorkflowResult:
        """Execute the schema update workflow.

        Args:
            authorization: Token of the thing
            thing_id: Thing identifier
            schema_list: New schema; an empty list is accepted, None is not

        Returns:
            WorkflowResult; a failed connector notification shows up in
            ``result.degraded`` instead of being raised

        Raises:
            MissingInputError: If authorization, thing_id or schema_list is missing
            SchemaInvalidError: If the schema breaks the typing rules
            RegistryError: If the things service refused the update
            PublishError: If the client could not be notified
        """
        require_credentials(authorization, thing_id)
        if schema_list is None:
            raise SchemaNotProvidedError()

        steps: list[StepOutcome] = []

        # Step 1: Validate before anything leaves the service
        invalid = find_invalid_schema(schema_list)
        if invalid is not None:
            schema, field = invalid
            logger.warning(
                f"updateSchema: invalid {field} on sensor {schema.sensor_id} "
                f"of thing {thing_id}"
            )
            error = SchemaInvalidError(sensor_id=schema.sensor_id, field=field)
            raise await notify_client(
                self.client_publisher.send_schema_updated, thing_id, error
            )
        steps.append(StepOutcome(name="validate_schema"))
        logger.info("updateSchema: schema validated")

        # Step 2: Persist on the registry
        try:
            await self.thing_proxy.update_schema(authorization, thing_id, schema_list)
        except KnotError as e:
            logger.error(f"updateSchema: failed to update schema of thing {thing_id}: {e}")
            raise await notify_client(
                self.client_publisher.send_schema_updated, thing_id, e
            )
        steps.append(StepOutcome(name="update_registry"))
        logger.info("updateSchema: schema updated")

        # Step 3: Tell the client
        error = await notify_client(self.client_publisher.send_schema_updated, thing_id)
        if error is not None:
            raise error
        steps.append(StepOutcome(name="notify_client"))
        logger.info("updateSchema: message sent to client")

        # Step 4: Tell the connector (best-effort)
        outcome = await run_best_effort(
            "notify_connector",
            self.connector_publisher.send_schema_changed(thing_id, schema_list),
        )
        steps.append(outcome)
        if outcome.succeeded:
            logger.info("updateSchema: message sent to connector")

        return WorkflowResult(
            operation=self.OPERATION,
            thing_id=thing_id,
            steps=tuple(steps),
        )
