"""emfmetrics - CloudWatch Embedded Metric Format for Python services."""

from emfmetrics.adapters.logging import LoggingSink
from emfmetrics.core.config import LoggerConfig
from emfmetrics.core.errors import EmfError, EncodingError
from emfmetrics.core.logger import MetricsLogger
from emfmetrics.core.models import (
    Dimension,
    Metadata,
    MetricDefinition,
    MetricDirective,
    StorageResolution,
)
from emfmetrics.core.ports import EnvironmentPort, SinkPort
from emfmetrics.core.units import Unit

__all__ = [
    "Dimension",
    "EmfError",
    "EncodingError",
    "EnvironmentPort",
    "LoggerConfig",
    "LoggingSink",
    "Metadata",
    "MetricDefinition",
    "MetricDirective",
    "MetricsLogger",
    "SinkPort",
    "StorageResolution",
    "Unit",
]
