"""Tests for the UpdateDataUseCase."""

import pytest

from src.knot.api.exceptions import (
    DataInvalidError,
    DataNotProvidedError,
    NoSchemaError,
    SensorInvalidError,
)
from src.knot.thing.domain.entities import Data, Thing
from src.knot.thing.use_cases.guards import matches_value_type
from src.knot.thing.use_cases.update_data import UpdateDataUseCase

THING_ID = "19cf40c23012ce1c"
TOKEN = "authorization-token"


@pytest.fixture
def use_case(thing_proxy, client_publisher):
    return UpdateDataUseCase(thing_proxy=thing_proxy, client_publisher=client_publisher)


@pytest.fixture
def registered_thing(thing_proxy, sample_schema):
    thing_proxy.thing = Thing(id=THING_ID, schema=sample_schema)
    return thing_proxy.thing


class TestMatchesValueType:
    """Tests for value type matching."""

    @pytest.mark.parametrize(
        "value,value_type,expected",
        [
            (1, 1, True),
            (True, 1, False),
            (1.5, 1, False),
            (1.5, 2, True),
            (2, 2, True),
            (False, 2, False),
            (True, 3, True),
            (1, 3, False),
            ("text", 4, True),
            (b"\x01\x02", 4, True),
            (1, 4, False),
            (1, 99, False),
        ],
    )
    def test_matches(self, value, value_type, expected):
        assert matches_value_type(value, value_type) is expected


class TestUpdateData:
    """Tests for the update data workflow."""

    @pytest.mark.asyncio
    async def test_sends_valid_data(self, use_case, registered_thing, calls, call_names):
        data = [Data(sensor_id=0, value=True), Data(sensor_id=1, value=21)]

        result = await use_case.execute(TOKEN, THING_ID, data)

        assert call_names(calls) == ["get", "send_update_data"]
        assert calls[-1] == ("send_update_data", THING_ID, data)
        assert result.operation == "update_data"

    @pytest.mark.asyncio
    async def test_wrong_value_type_sends_nothing(self, use_case, registered_thing, calls, call_names):
        with pytest.raises(DataInvalidError) as exc_info:
            await use_case.execute(TOKEN, THING_ID, [Data(sensor_id=0, value=1)])

        assert exc_info.value.sensor_id == 0
        assert exc_info.value.value_type == 3
        assert call_names(calls) == ["get"]

    @pytest.mark.asyncio
    async def test_unknown_sensor(self, use_case, registered_thing):
        with pytest.raises(SensorInvalidError):
            await use_case.execute(TOKEN, THING_ID, [Data(sensor_id=9, value=1)])

    @pytest.mark.asyncio
    async def test_thing_without_schema(self, use_case, thing_proxy):
        thing_proxy.thing = Thing(id=THING_ID)

        with pytest.raises(NoSchemaError):
            await use_case.execute(TOKEN, THING_ID, [Data(sensor_id=0, value=True)])

    @pytest.mark.asyncio
    async def test_missing_data(self, use_case, calls):
        with pytest.raises(DataNotProvidedError):
            await use_case.execute(TOKEN, THING_ID, None)

        assert calls == []
