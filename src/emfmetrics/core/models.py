"""Core domain models for the Embedded Metric Format envelope."""

from dataclasses import dataclass, field
from enum import IntEnum

from emfmetrics.core.units import Unit


class StorageResolution(IntEnum):
    """Granularity at which CloudWatch stores a metric.

    Attributes:
        HIGH: 1 second resolution, for high precision metrics.
        STANDARD: 1 minute resolution, suitable for most metrics.
    """

    HIGH = 1
    STANDARD = 60


# One dimension set: the flat field names that jointly identify a series.
Dimension = tuple[str, ...]


@dataclass(frozen=True)
class MetricDefinition:
    """A single EMF metric definition.

    Attributes:
        name: Name of the metric, also the key of its flat value.
        unit: Unit of measurement. If unset, CloudWatch assumes None.
        resolution: Storage resolution. If unset, standard is assumed.
    """

    name: str
    unit: Unit | str | None = None
    resolution: StorageResolution | int | None = StorageResolution.STANDARD


@dataclass
class MetricDirective:
    """The EMF MetricDirective object.

    A logger owns exactly one directive and mutates it in place, so
    anything leaving the logger should go through snapshot().

    Attributes:
        namespace: The CloudWatch namespace for the metrics.
        dimensions: Dimension sets, in insertion order.
        metrics: Metric definitions, in insertion order.
    """

    namespace: str
    dimensions: list[Dimension] = field(default_factory=list)
    metrics: list[MetricDefinition] = field(default_factory=list)

    def snapshot(self) -> "MetricDirective":
        """Return a copy that shares no mutable state with this directive."""
        return MetricDirective(
            namespace=self.namespace,
            dimensions=list(self.dimensions),
            metrics=list(self.metrics),
        )


@dataclass(frozen=True)
class Metadata:
    """The EMF Metadata object stored under the ``_aws`` key.

    Attributes:
        metrics: Metric directives (a logger always emits exactly one).
        timestamp: UNIX timestamp in milliseconds, or None to omit it.
        log_group_name: Optional CloudWatch log group name.
    """

    metrics: list[MetricDirective]
    timestamp: int | None = None
    log_group_name: str = ""
