"""Discovery of AWS Lambda deployment properties.

Lambda exposes its runtime configuration through environment variables:
https://docs.aws.amazon.com/lambda/latest/dg/configuration-envvars.html#configuration-envvars-runtime
"""

from typing import Any

from emfmetrics.core.models import Dimension
from emfmetrics.core.ports import EnvironmentPort

DEFAULT_NAMESPACE = "aws-embedded-metrics"
SERVICE_TYPE = "AWS::Lambda::Function"
DEFAULT_DIMENSION: Dimension = ("ServiceName", "ServiceType")

OMIT_TIMESTAMP_VAR = "METRICS_OMIT_TIMESTAMP"
TRACE_ID_VAR = "_X_AMZN_TRACE_ID"
SAMPLED_MARKER = "Sampled=1"

# Environment variable -> root field name
_LAMBDA_PROPERTIES = {
    "AWS_LAMBDA_FUNCTION_NAME": "functionName",
    "AWS_EXECUTION_ENV": "executionEnvironment",
    "AWS_LAMBDA_FUNCTION_MEMORY_SIZE": "memorySize",
    "AWS_LAMBDA_FUNCTION_VERSION": "functionVersion",
    "AWS_LAMBDA_LOG_STREAM_NAME": "logStreamId",
}


def discover_lambda_properties(env: EnvironmentPort) -> dict[str, Any]:
    """Read the Lambda runtime properties that seed every document.

    Args:
        env: Source of environment variables.

    Returns:
        Root fields for the document. Unset variables map to "". The
        trace id is only included when the trace is sampled.
    """
    properties: dict[str, Any] = {
        field: env.get(var) or "" for var, field in _LAMBDA_PROPERTIES.items()
    }

    trace_id = env.get(TRACE_ID_VAR) or ""
    if SAMPLED_MARKER in trace_id:
        properties["traceId"] = trace_id

    properties["ServiceName"] = properties["functionName"]
    properties["ServiceType"] = SERVICE_TYPE
    return properties


def timestamp_disabled(env: EnvironmentPort) -> bool:
    """Return True if the environment asks for timestamps to be omitted."""
    return bool(env.get(OMIT_TIMESTAMP_VAR))
