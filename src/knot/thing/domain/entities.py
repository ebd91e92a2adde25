"""Domain entities for thing commands.

These are pure data structures with no infrastructure dependencies.
They represent the core business objects used by the thing use cases.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional, Union

# Maximum length of a schema's display name
MAX_SCHEMA_NAME_LENGTH = 23

DataValue = Union[int, float, bool, str, bytes]


class ValueType(IntEnum):
    """Representation of a sensor value on the wire."""

    INT = 1
    FLOAT = 2
    BOOL = 3
    RAW = 4


@dataclass
class Schema:
    """One sensor/actuator channel declared by a thing.

    ``value_type`` and ``unit`` are kept as plain integers so that codes
    outside the known set can still be represented and rejected.
    """

    sensor_id: int
    type_id: int
    value_type: int
    unit: int
    name: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging and message payloads."""
        return {
            "sensor_id": self.sensor_id,
            "type_id": self.type_id,
            "value_type": self.value_type,
            "unit": self.unit,
            "name": self.name,
        }


@dataclass
class Thing:
    """A thing as registered on the things service.

    ``schema`` is None until the thing sends its first schema update.
    """

    id: str
    name: Optional[str] = None
    schema: Optional[list[Schema]] = None

    @property
    def has_schema(self) -> bool:
        """Check if the thing has registered at least one sensor."""
        return bool(self.schema)

    def find_sensor(self, sensor_id: int) -> Optional[Schema]:
        """Return the schema entry for sensor_id, if registered."""
        for schema in self.schema or []:
            if schema.sensor_id == sensor_id:
                return schema
        return None


@dataclass
class Data:
    """A value to be written to a thing's sensor or actuator."""

    sensor_id: int
    value: DataValue


@dataclass(frozen=True)
class StepOutcome:
    """Outcome of one step of a command workflow.

    Fatal steps that fail end the workflow with an exception, so a recorded
    failed outcome always belongs to a non-fatal (best-effort) step.
    """

    name: str
    fatal: bool = True
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "fatal": self.fatal,
            "succeeded": self.succeeded,
            "error": str(self.error) if self.error else None,
        }


@dataclass(frozen=True)
class WorkflowResult:
    """Result of a successful command workflow.

    Attributes:
        operation: Name of the command (e.g., "update_schema")
        thing_id: Thing the command was applied to
        steps: Outcome of every step that ran, in order
    """

    operation: str
    thing_id: str
    steps: tuple[StepOutcome, ...] = field(default_factory=tuple)

    @property
    def degraded(self) -> list[StepOutcome]:
        """Best-effort steps that failed."""
        return [step for step in self.steps if not step.succeeded]

    @property
    def is_degraded(self) -> bool:
        return bool(self.degraded)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API responses and logging."""
        return {
            "operation": self.operation,
            "thing_id": self.thing_id,
            "degraded": self.is_degraded,
            "steps": [step.to_dict() for step in self.steps],
        }
