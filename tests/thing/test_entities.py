"""Tests for thing domain entities."""

from src.knot.api.exceptions import PublishError
from src.knot.thing.domain.entities import (
    Schema,
    StepOutcome,
    Thing,
    ValueType,
    WorkflowResult,
)


class TestThing:
    """Tests for Thing entity."""

    def test_thing_without_schema(self):
        thing = Thing(id="19cf40c23012ce1c")

        assert thing.schema is None
        assert thing.has_schema is False
        assert thing.find_sensor(0) is None

    def test_thing_with_empty_schema_has_no_schema(self):
        assert Thing(id="19cf40c23012ce1c", schema=[]).has_schema is False

    def test_find_sensor(self):
        led = Schema(sensor_id=2, type_id=0xFFF1, value_type=3, unit=0, name="LED")
        thing = Thing(id="19cf40c23012ce1c", schema=[led])

        assert thing.has_schema is True
        assert thing.find_sensor(2) is led
        assert thing.find_sensor(3) is None


class TestValueType:
    def test_codes(self):
        assert ValueType.INT == 1
        assert ValueType.FLOAT == 2
        assert ValueType.BOOL == 3
        assert ValueType.RAW == 4


class TestWorkflowResult:
    """Tests for WorkflowResult and StepOutcome."""

    def test_result_without_failures_is_not_degraded(self):
        result = WorkflowResult(
            operation="unregister",
            thing_id="abc",
            steps=(StepOutcome(name="remove_thing"), StepOutcome(name="notify_client")),
        )

        assert result.is_degraded is False
        assert result.degraded == []

    def test_failed_best_effort_step_is_degraded(self):
        error = PublishError("broker down")
        connector = StepOutcome(name="notify_connector", fatal=False, error=error)
        result = WorkflowResult(operation="unregister", thing_id="abc", steps=(connector,))

        assert result.is_degraded is True
        assert result.degraded == [connector]

    def test_to_dict(self):
        result = WorkflowResult(
            operation="update_schema",
            thing_id="abc",
            steps=(StepOutcome(name="notify_connector", fatal=False, error=PublishError("down")),),
        )

        data = result.to_dict()

        assert data["operation"] == "update_schema"
        assert data["degraded"] is True
        assert data["steps"][0]["name"] == "notify_connector"
        assert data["steps"][0]["succeeded"] is False
        assert "down" in data["steps"][0]["error"]
