"""Domain layer - Pure domain entities, typing rules and port interfaces.

This layer contains:
- Entities: Pure data structures representing business objects
- Schema rules: The KNoT type/value/unit rule table and its validators
- Ports: Abstract interfaces defining contracts for adapters

No infrastructure dependencies allowed in this layer.
"""

from .entities import (
    MAX_SCHEMA_NAME_LENGTH,
    Data,
    Schema,
    StepOutcome,
    Thing,
    ValueType,
    WorkflowResult,
)
from .ports import IClientPublisher, IConnectorPublisher, IThingProxy
from .schema_rules import (
    RULES,
    Exact,
    Range,
    SchemaRule,
    find_invalid_schema,
    is_valid_schema,
    is_valid_unit,
    is_valid_value_type,
    validate_schema,
)

__all__ = [
    # Entities
    "MAX_SCHEMA_NAME_LENGTH",
    "Data",
    "Schema",
    "Thing",
    "ValueType",
    # Result Entities
    "StepOutcome",
    "WorkflowResult",
    # Schema Rules
    "RULES",
    "Exact",
    "Range",
    "SchemaRule",
    "find_invalid_schema",
    "is_valid_schema",
    "is_valid_unit",
    "is_valid_value_type",
    "validate_schema",
    # Ports
    "IClientPublisher",
    "IConnectorPublisher",
    "IThingProxy",
]
