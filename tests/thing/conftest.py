"""Mock ports shared by the thing use case tests.

Every mock appends to one shared call log so tests can assert the order
in which the registry and the two message channels were used.
"""

from typing import Optional

import pytest

from src.knot.thing.domain.entities import Data, Schema, Thing
from src.knot.thing.domain.ports import IClientPublisher, IConnectorPublisher, IThingProxy


class MockThingProxy(IThingProxy):
    """Mock implementation of IThingProxy for testing."""

    def __init__(self, calls: list):
        self.calls = calls
        self.thing: Optional[Thing] = None
        self.get_error: Optional[Exception] = None
        self.update_error: Optional[Exception] = None
        self.remove_error: Optional[Exception] = None

    async def get(self, authorization: str, thing_id: str) -> Thing:
        self.calls.append(("get", thing_id))
        if self.get_error:
            raise self.get_error
        return self.thing or Thing(id=thing_id)

    async def update_schema(self, authorization: str, thing_id: str, schema: list[Schema]) -> None:
        self.calls.append(("update_schema", thing_id, list(schema)))
        if self.update_error:
            raise self.update_error

    async def remove(self, authorization: str, thing_id: str) -> None:
        self.calls.append(("remove", thing_id))
        if self.remove_error:
            raise self.remove_error


class MockClientPublisher(IClientPublisher):
    """Mock implementation of IClientPublisher for testing."""

    def __init__(self, calls: list):
        self.calls = calls
        self.raise_error: Optional[Exception] = None

    async def send_schema_updated(self, thing_id: str, error: Optional[Exception] = None) -> None:
        self.calls.append(("send_schema_updated", thing_id, error))
        if self.raise_error:
            raise self.raise_error

    async def send_unregistered(self, thing_id: str, error: Optional[Exception] = None) -> None:
        self.calls.append(("send_unregistered", thing_id, error))
        if self.raise_error:
            raise self.raise_error

    async def send_request_data(self, thing_id: str, sensor_ids: list[int]) -> None:
        self.calls.append(("send_request_data", thing_id, list(sensor_ids)))
        if self.raise_error:
            raise self.raise_error

    async def send_update_data(self, thing_id: str, data: list[Data]) -> None:
        self.calls.append(("send_update_data", thing_id, list(data)))
        if self.raise_error:
            raise self.raise_error


class MockConnectorPublisher(IConnectorPublisher):
    """Mock implementation of IConnectorPublisher for testing."""

    def __init__(self, calls: list):
        self.calls = calls
        self.raise_error: Optional[Exception] = None

    async def send_schema_changed(self, thing_id: str, schema: list[Schema]) -> None:
        self.calls.append(("send_schema_changed", thing_id, list(schema)))
        if self.raise_error:
            raise self.raise_error

    async def send_device_removed(self, thing_id: str) -> None:
        self.calls.append(("send_device_removed", thing_id))
        if self.raise_error:
            raise self.raise_error


@pytest.fixture
def calls():
    return []


@pytest.fixture
def thing_proxy(calls):
    return MockThingProxy(calls)


@pytest.fixture
def client_publisher(calls):
    return MockClientPublisher(calls)


@pytest.fixture
def connector_publisher(calls):
    return MockConnectorPublisher(calls)


@pytest.fixture
def sample_schema():
    """Three valid sensors: a switch, a thermometer and a raw blob."""
    return [
        Schema(sensor_id=0, type_id=0xFFF1, value_type=3, unit=0, name="LED"),
        Schema(sensor_id=1, type_id=0x0005, value_type=1, unit=1, name="Temperature"),
        Schema(sensor_id=2, type_id=0xFFF2, value_type=4, unit=0, name="Blob"),
    ]


def operations(calls: list) -> list[str]:
    """Names of the recorded calls, in order."""
    return [call[0] for call in calls]


@pytest.fixture
def call_names():
    return operations
