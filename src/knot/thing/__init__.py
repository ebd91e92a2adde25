"""Thing module - Clean Architecture implementation of the thing commands.

This module validates client commands against the KNoT typing rules and
sequences them against the things registry and the client/connector
message channels.

Architecture:
    domain/     - Pure domain entities, typing rules and port interfaces
    use_cases/  - Command orchestration
    adapters/   - Infrastructure implementations (things service, AMQP)
"""

from .domain.entities import (
    Data,
    Schema,
    StepOutcome,
    Thing,
    ValueType,
    WorkflowResult,
)
from .domain.ports import IClientPublisher, IConnectorPublisher, IThingProxy
from .use_cases import (
    RequestDataUseCase,
    UnregisterThingUseCase,
    UpdateDataUseCase,
    UpdateSchemaUseCase,
)

__all__ = [
    # Entities
    "Data",
    "Schema",
    "Thing",
    "ValueType",
    # Result Entities
    "StepOutcome",
    "WorkflowResult",
    # Ports
    "IClientPublisher",
    "IConnectorPublisher",
    "IThingProxy",
    # Use Cases
    "RequestDataUseCase",
    "UnregisterThingUseCase",
    "UpdateDataUseCase",
    "UpdateSchemaUseCase",
]
