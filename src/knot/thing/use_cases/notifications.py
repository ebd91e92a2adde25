"""Client notification and best-effort step helpers shared by the use cases.

Two failure shapes occur in every command workflow:

- A client notification that reports an error can itself fail. The two
  errors are folded into one so a use case always ends with a single error.
- Some steps (connector notifications after the registry already changed)
  are best-effort. Their failure is logged and recorded as a non-fatal
  StepOutcome instead of being raised.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Optional

from ...api.exceptions import KnotError, NotificationError
from ..domain.entities import StepOutcome

logger = logging.getLogger(__name__)

ClientSend = Callable[[str, Optional[Exception]], Awaitable[None]]


def fold_notification_error(
    original: Optional[Exception],
    send_error: Optional[Exception],
) -> Optional[Exception]:
    """Combine an operation error with the error of the notification describing it.

    Returns:
        - NotificationError carrying both, if both are present
        - send_error, if only the notification failed
        - original (possibly None), if the notification was sent
    """
    if send_error is None:
        return original
    if original is None:
        return send_error
    return NotificationError(send_error=send_error, original=original)


async def notify_client(
    send: ClientSend,
    thing_id: str,
    original: Optional[Exception] = None,
) -> Optional[Exception]:
    """Send a command result to the client and fold any send failure.

    Args:
        send: Client publisher method (e.g., send_schema_updated)
        thing_id: Thing the result belongs to
        original: Error that ended the command, None on success

    Returns:
        The single error the caller must report, or None
    """
    try:
        await send(thing_id, original)
    except KnotError as send_error:
        logger.error(f"Failed to send response to client for thing {thing_id}: {send_error}")
        return fold_notification_error(original, send_error)
    return original


async def run_best_effort(name: str, step: Awaitable[None]) -> StepOutcome:
    """Await a non-fatal step, recording instead of raising its failure."""
    try:
        await step
    except KnotError as e:
        logger.warning(f"{name} failed, continuing: {e}")
        return StepOutcome(name=name, fatal=False, error=e)
    return StepOutcome(name=name, fatal=False)
