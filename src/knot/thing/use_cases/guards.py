"""Input and schema checks shared by the thing use cases."""

from collections.abc import Iterable

from ...api.exceptions import (
    AuthNotProvidedError,
    DataInvalidError,
    IDNotProvidedError,
    NoSchemaError,
    SensorInvalidError,
)
from ..domain.entities import Data, DataValue, Thing, ValueType


def require_credentials(authorization: str, thing_id: str) -> None:
    """Raise if the authorization token or the thing id is empty."""
    if not authorization:
        raise AuthNotProvidedError()
    if not thing_id:
        raise IDNotProvidedError()


def require_schema(thing: Thing, thing_id: str) -> None:
    """Raise NoSchemaError if the thing has not registered any sensor."""
    if not thing.has_schema:
        raise NoSchemaError(thing_id)


def validate_sensors(sensor_ids: Iterable[int], thing: Thing) -> None:
    """Check every sensor id against the thing's registered schema.

    Raises:
        SensorInvalidError: For the first id not in the schema
    """
    for sensor_id in sensor_ids:
        if thing.find_sensor(sensor_id) is None:
            raise SensorInvalidError(sensor_id=sensor_id)


def matches_value_type(value: DataValue, value_type: int) -> bool:
    """Check a data value against a schema value type code.

    bool is a subclass of int, so it is excluded from the numeric types.
    """
    if value_type == ValueType.INT:
        return isinstance(value, int) and not isinstance(value, bool)
    if value_type == ValueType.FLOAT:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if value_type == ValueType.BOOL:
        return isinstance(value, bool)
    if value_type == ValueType.RAW:
        return isinstance(value, (str, bytes))
    return False


def validate_data(data: Iterable[Data], thing: Thing) -> None:
    """Check every data item targets a registered sensor with a matching value.

    Raises:
        SensorInvalidError: For the first item whose sensor is not registered
        DataInvalidError: For the first item whose value has the wrong type
    """
    for item in data:
        schema = thing.find_sensor(item.sensor_id)
        if schema is None:
            raise SensorInvalidError(sensor_id=item.sensor_id)
        if not matches_value_type(item.value, schema.value_type):
            raise DataInvalidError(
                sensor_id=item.sensor_id,
                value_type=schema.value_type,
            )
