"""Use cases layer - Orchestration of the thing commands.

Each use case represents a single client command and sequences the
registry and publisher ports:
- UpdateSchemaUseCase: validate, persist, notify client, notify connector
- RequestDataUseCase: fetch, check sensors, send request data command
- UpdateDataUseCase: fetch, check sensors and values, send update data command
- UnregisterThingUseCase: remove, notify connector, notify client

Use cases depend only on ports, not concrete implementations.
"""

from .notifications import fold_notification_error, notify_client, run_best_effort
from .request_data import RequestDataUseCase
from .unregister_thing import UnregisterThingUseCase
from .update_data import UpdateDataUseCase
from .update_schema import UpdateSchemaUseCase

__all__ = [
    "RequestDataUseCase",
    "UnregisterThingUseCase",
    "UpdateDataUseCase",
    "UpdateSchemaUseCase",
    # Helpers
    "fold_notification_error",
    "notify_client",
    "run_best_effort",
]
