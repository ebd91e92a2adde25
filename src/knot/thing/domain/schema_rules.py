"""Schema typing rules for KNoT things.

Every sensor type id admits a fixed value type and unit. The registry and
the connectors decode readings using these codes, so the table must match
the KNoT device typing protocol exactly:
https://knot-devel.cesar.org.br/doc/thing/unit-type-value.html

The table is built once at import time and exposed read-only.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

from .entities import MAX_SCHEMA_NAME_LENGTH, Schema


@dataclass(frozen=True)
class Exact:
    """Constraint satisfied by a single code."""

    value: int

    def matches(self, candidate: int) -> bool:
        return candidate == self.value


@dataclass(frozen=True)
class Range:
    """Constraint satisfied by any code in [min, max], inclusive."""

    min: int
    max: int

    def matches(self, candidate: int) -> bool:
        return self.min <= candidate <= self.max


Constraint = Union[Exact, Range]


@dataclass(frozen=True)
class SchemaRule:
    """Legal value type and unit for one type id."""

    value_type: Constraint
    unit: Constraint


def _rule(value_type: int, unit: Union[int, tuple[int, int]]) -> SchemaRule:
    unit_constraint = Range(*unit) if isinstance(unit, tuple) else Exact(unit)
    return SchemaRule(value_type=Exact(value_type), unit=unit_constraint)


RULES: Mapping[int, SchemaRule] = MappingProxyType({
    0x0000: _rule(4, 0),         # RAW   => NONE
    0x0001: _rule(1, (1, 3)),    # INT   => VOLTAGE
    0x0002: _rule(1, (1, 2)),    # INT   => CURRENT
    0x0003: _rule(1, 1),         # INT   => RESISTENCE
    0x0004: _rule(1, (1, 3)),    # INT   => POWER
    0x0005: _rule(1, (1, 3)),    # INT   => TEMPERATURE
    0x0006: _rule(1, 1),         # INT   => RELATIVE_HUMIDITY
    0x0007: _rule(1, (1, 3)),    # INT   => LUMINOSITY
    0x0008: _rule(1, (1, 3)),    # INT   => TIME
    0x0009: _rule(1, (1, 4)),    # INT   => MASS
    0x000A: _rule(1, (1, 3)),    # INT   => PRESSURE
    0x000B: _rule(1, (1, 4)),    # INT   => DISTANCE
    0x000C: _rule(2, (1, 2)),    # FLOAT => ANGLE
    0x000D: _rule(2, (1, 4)),    # FLOAT => VOLUME
    0x000E: _rule(2, (1, 3)),    # FLOAT => AREA
    0x000F: _rule(2, 1),         # FLOAT => RAIN
    0x0010: _rule(2, 1),         # FLOAT => DENSITY
    0x0011: _rule(2, 1),         # FLOAT => LATITUDE
    0x0012: _rule(2, 1),         # FLOAT => LONGITUDE
    0x0013: _rule(1, (1, 4)),    # INT   => SPEED
    0x0014: _rule(2, (1, 6)),    # FLOAT => VOLUMEFLOW
    0x0015: _rule(1, (1, 6)),    # INT   => ENERGY
    0xFFF0: _rule(3, 0),         # BOOL  => PRESENCE
    0xFFF1: _rule(3, 0),         # BOOL  => SWITCH
    0xFFF2: _rule(4, 0),         # RAW   => COMMAND
    0xFF10: _rule(1, 0),         # INT   => ANALOG
    0xFFFF: _rule(4, 0),         # RAW   => INVALID
})


def is_valid_value_type(type_id: int, value_type: int) -> bool:
    """Check value_type against the rule for type_id. Unknown type ids are invalid."""
    rule = RULES.get(type_id)
    if rule is None:
        return False
    return rule.value_type.matches(value_type)


def is_valid_unit(type_id: int, unit: int) -> bool:
    """Check unit against the rule for type_id. Unknown type ids are invalid."""
    rule = RULES.get(type_id)
    if rule is None:
        return False
    return rule.unit.matches(unit)


def validate_schema(schema: Schema) -> Optional[str]:
    """Validate a single schema entry.

    Returns:
        None if the entry is valid, otherwise the name of the first field
        that violates the rules ("type_id", "value_type", "unit" or "name")
    """
    if schema.type_id not in RULES:
        return "type_id"
    if not is_valid_value_type(schema.type_id, schema.value_type):
        return "value_type"
    if not is_valid_unit(schema.type_id, schema.unit):
        return "unit"
    if len(schema.name) > MAX_SCHEMA_NAME_LENGTH:
        return "name"
    return None


def find_invalid_schema(schema_list: Iterable[Schema]) -> Optional[tuple[Schema, str]]:
    """Return the first invalid entry and its violated field, or None."""
    for schema in schema_list:
        violated = validate_schema(schema)
        if violated is not None:
            return schema, violated
    return None


def is_valid_schema(schema_list: Iterable[Schema]) -> bool:
    """Check every entry of a schema list, stopping at the first violation."""
    return find_invalid_schema(schema_list) is None
