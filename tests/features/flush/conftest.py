"""BDD step definitions for flush.feature."""

import io
import json
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from emfmetrics import LoggerConfig, MetricsLogger, StorageResolution


@dataclass
class FlushScenarioContext:
    """Shared state between steps in a flush scenario."""

    sink: io.StringIO = field(default_factory=io.StringIO)
    env: dict[str, str] = field(default_factory=dict)
    logger: MetricsLogger | None = None

    def get_logger(self) -> MetricsLogger:
        """Create the logger on first use, after the environment is set up."""
        if self.logger is None:
            config = LoggerConfig(sink=self.sink, omit_timestamp=True)
            self.logger = MetricsLogger(config, env=self.env)
        return self.logger

    def document(self) -> dict[str, Any]:
        """Parse the single document written so far."""
        return json.loads(self.sink.getvalue())

    def directive(self) -> dict[str, Any]:
        return self.document()["_aws"]["CloudWatchMetrics"][0]


@pytest.fixture
def ctx() -> FlushScenarioContext:
    """Fresh scenario context for each test."""
    return FlushScenarioContext()


def _literal(raw: str) -> Any:
    """Parse a step argument: quoted strings stay strings, the rest is JSON."""
    return json.loads(raw)


# === Given ===
@given("a metrics logger writing to memory without timestamps")
def step_logger(ctx: FlushScenarioContext) -> None:
    ctx.logger = None


@given(
    parsers.parse(
        'the Lambda function "{name}" with version "{version}" and memory "{memory}"'
    )
)
def step_lambda_env(
    ctx: FlushScenarioContext, name: str, version: str, memory: str
) -> None:
    ctx.env.update(
        {
            "AWS_LAMBDA_FUNCTION_NAME": name,
            "AWS_LAMBDA_FUNCTION_VERSION": version,
            "AWS_LAMBDA_FUNCTION_MEMORY_SIZE": memory,
        }
    )


@given(parsers.parse('the trace id "{trace_id}"'))
def step_trace_id(ctx: FlushScenarioContext, trace_id: str) -> None:
    ctx.env["_X_AMZN_TRACE_ID"] = trace_id


# === When ===
@when(parsers.parse('a count "{name}" of {count:d} is recorded'))
def step_count(ctx: FlushScenarioContext, name: str, count: int) -> None:
    ctx.get_logger().add_count(name, count)


@when(parsers.parse('a high resolution count "{name}" of {count:d} is recorded'))
def step_count_high(ctx: FlushScenarioContext, name: str, count: int) -> None:
    ctx.get_logger().add_count(name, count, StorageResolution.HIGH)


@when(parsers.parse('a metric "{name}" of {value:d} with unit "{unit}" is recorded'))
def step_metric(ctx: FlushScenarioContext, name: str, value: int, unit: str) -> None:
    ctx.get_logger().add_metric(name, value, unit)


@when(
    parsers.parse(
        'a high resolution metric "{name}" of {value:d} with unit "{unit}" is recorded'
    )
)
def step_metric_high(
    ctx: FlushScenarioContext, name: str, value: int, unit: str
) -> None:
    ctx.get_logger().add_metric(name, value, unit, StorageResolution.HIGH)


@when(parsers.parse('the dimension "{key}" is set to "{value}"'))
def step_dimension(ctx: FlushScenarioContext, key: str, value: str) -> None:
    ctx.get_logger().add_dimension(key, value)


@when(parsers.parse('the namespace is set to "{namespace}"'))
def step_namespace(ctx: FlushScenarioContext, namespace: str) -> None:
    ctx.get_logger().set_namespace(namespace)


@when("the logger is flushed")
def step_flush(ctx: FlushScenarioContext) -> None:
    ctx.get_logger().flush()


# === Then ===
@then("nothing is written")
def step_nothing_written(ctx: FlushScenarioContext) -> None:
    assert ctx.sink.getvalue() == ""


@then(parsers.parse('the field "{key}" equals {raw}'))
def step_field_equals(ctx: FlushScenarioContext, key: str, raw: str) -> None:
    assert ctx.document()[key] == _literal(raw)


@then("the metric definitions are:")
def step_metric_definitions(
    ctx: FlushScenarioContext, datatable: list[list[str]]
) -> None:
    header, *rows = datatable
    expected = []
    for row in rows:
        cells = dict(zip(header, row, strict=True))
        definition: dict[str, Any] = {"Name": cells["Name"], "Unit": cells["Unit"]}
        if cells["StorageResolution"]:
            definition["StorageResolution"] = int(cells["StorageResolution"])
        expected.append(definition)
    assert ctx.directive()["Metrics"] == expected


@then(parsers.parse('the dimension sets are "{groups}"'))
def step_dimension_sets(ctx: FlushScenarioContext, groups: str) -> None:
    expected = [group.split(",") for group in groups.split(";")]
    assert ctx.directive()["Dimensions"] == expected


@then(parsers.parse('the namespace is "{namespace}"'))
def step_namespace_is(ctx: FlushScenarioContext, namespace: str) -> None:
    assert ctx.directive()["Namespace"] == namespace
