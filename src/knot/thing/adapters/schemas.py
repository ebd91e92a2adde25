"""Pydantic schemas for things service responses and bus messages.

Field names follow the KNoT JSON conventions (camelCase). The typing rules
are not checked here: a record that parses is handed to the domain, which
owns validation.
"""

import base64
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from ..domain.entities import Data, DataValue, Schema, Thing


class SchemaDTO(BaseModel):
    """One schema entry as exchanged with the things service and connectors.

    Codes are strict integers: a JSON boolean or string is rejected rather
    than coerced into a code.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sensor_id: StrictInt = Field(alias="sensorId")
    type_id: StrictInt = Field(alias="typeId")
    value_type: StrictInt = Field(alias="valueType")
    unit: StrictInt
    name: str

    @classmethod
    def from_entity(cls, schema: Schema) -> "SchemaDTO":
        return cls(
            sensor_id=int(schema.sensor_id),
            type_id=int(schema.type_id),
            value_type=int(schema.value_type),
            unit=int(schema.unit),
            name=schema.name,
        )

    def to_entity(self) -> Schema:
        return Schema(
            sensor_id=self.sensor_id,
            type_id=self.type_id,
            value_type=self.value_type,
            unit=self.unit,
            name=self.name,
        )


class ThingDTO(BaseModel):
    """A thing record returned by GET /things/{id}."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: Optional[str] = None
    schema_: Optional[list[SchemaDTO]] = Field(default=None, alias="schema")

    def to_entity(self) -> Thing:
        schema = None
        if self.schema_ is not None:
            schema = [entry.to_entity() for entry in self.schema_]
        return Thing(id=self.id, name=self.name, schema=schema)


class UpdateSchemaRequest(BaseModel):
    """Body of PUT /things/{id}/schema."""

    model_config = ConfigDict(populate_by_name=True)

    schema_: list[SchemaDTO] = Field(alias="schema")

    @classmethod
    def from_entities(cls, schema: list[Schema]) -> "UpdateSchemaRequest":
        return cls(schema_=[SchemaDTO.from_entity(entry) for entry in schema])


class DataDTO(BaseModel):
    """One value of an update data command. Bytes travel base64-encoded."""

    model_config = ConfigDict(populate_by_name=True)

    sensor_id: int = Field(alias="sensorId")
    value: Union[bool, int, float, str]

    @classmethod
    def from_entity(cls, data: Data) -> "DataDTO":
        return cls(sensor_id=data.sensor_id, value=encode_value(data.value))


def encode_value(value: DataValue) -> Union[bool, int, float, str]:
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    return value


# ============================================
# Bus messages
# ============================================


class CommandResultMessage(BaseModel):
    """Result of a client command (schema updated, unregistered)."""

    id: str
    error: Optional[str] = None


class RequestDataMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    sensor_ids: list[int] = Field(alias="sensorIds")


class UpdateDataMessage(BaseModel):
    id: str
    data: list[DataDTO]


class SchemaChangedMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    schema_: list[SchemaDTO] = Field(alias="schema")


class DeviceRemovedMessage(BaseModel):
    id: str
