"""Unregister Thing Use Case - Removes a thing from the registry.

Workflow:
1. Remove the thing from the things service (via IThingProxy)
2. On failure: report the error to the client and stop
3. On success: announce the removal to the connector (best-effort)
4. Report success to the client

A thing that failed to unregister is never announced to the connector.
"""

import logging

from ...api.exceptions import KnotError
from ..domain.entities import StepOutcome, WorkflowResult
from ..domain.ports import IClientPublisher, IConnectorPublisher, IThingProxy
from .guards import require_credentials
from .notifications import notify_client, run_best_effort

logger = logging.getLogger(__name__)


class UnregisterThingUseCase:
    """Orchestrates the unregister workflow.

    Holds no state between calls: unregistering an already removed thing
    takes the same registry-failure path every time.
    """

    OPERATION = "unregister"

    def __init__(
        self,
        thing_proxy: IThingProxy,
        client_publisher: IClientPublisher,
        connector_publisher: IConnectorPublisher,
    ):
        self.thing_proxy = thing_proxy
        self.client_publisher = client_publisher
        self.connector_publisher = connector_publisher

    async def execute(self, authorization: str, thing_id: str) -> WorkflowResult:
        """Execute the unregister workflow.

        Raises:
            MissingInputError: If authorization or thing_id is missing
            RegistryError: If removal failed and the client was notified
            NotificationError: If removal failed and the client notification failed too
            PublishError: If removal succeeded but the final client notification failed
        """
        logger.debug("executing unregister thing use case")
        require_credentials(authorization, thing_id)

        try:
            await self.thing_proxy.remove(authorization, thing_id)
        except KnotError as e:
            logger.error(f"unregister: failed to remove thing {thing_id}: {e}")
            raise await notify_client(
                self.client_publisher.send_unregistered, thing_id, e
            )
        logger.info(f"unregister: thing {thing_id} removed")

        connector = await run_best_effort(
            "notify_connector",
            self.connector_publisher.send_device_removed(thing_id),
        )

        error = await notify_client(self.client_publisher.send_unregistered, thing_id)
        if error is not None:
            raise error
        logger.info("unregister: message sent to client")

        return WorkflowResult(
            operation=self.OPERATION,
            thing_id=thing_id,
            steps=(
                StepOutcome(name="remove_thing"),
                connector,
                StepOutcome(name="notify_client"),
            ),
        )
