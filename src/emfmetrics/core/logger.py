"""MetricsLogger: accumulates metrics and flushes them as EMF documents."""

import logging
import os
import sys
import threading
import time
from collections.abc import Generator
from contextlib import contextmanager
from types import TracebackType
from typing import Any, Self

from emfmetrics.core.config import LoggerConfig
from emfmetrics.core.encoding.emf import METADATA_KEY, encode_document
from emfmetrics.core.environment import (
    DEFAULT_DIMENSION,
    DEFAULT_NAMESPACE,
    discover_lambda_properties,
    timestamp_disabled,
)
from emfmetrics.core.errors import EncodingError
from emfmetrics.core.models import (
    Metadata,
    MetricDefinition,
    MetricDirective,
    StorageResolution,
)
from emfmetrics.core.ports import EnvironmentPort, SinkPort
from emfmetrics.core.units import Unit

logger = logging.getLogger(__name__)


class MetricsLogger:
    """Records metrics and writes them in the CloudWatch Embedded Metric Format.

    Create one logger per unit of work (a request, a Lambda invocation),
    record metrics and dimensions in any order, then flush once. Every
    operation takes the same lock, so a logger is safe to share between
    threads.

    Recording the same name twice overwrites the flat value and adds a
    second definition; names are not deduplicated.

    Example:
        ```python
        from emfmetrics import MetricsLogger, Unit

        with MetricsLogger() as metrics:
            metrics.add_dimension("Operation", "Checkout")
            metrics.add_count("OrdersPlaced", 1)
            metrics.add_metric("BasketSize", 256, Unit.KILOBYTES)
        ```
    """

    def __init__(
        self,
        config: LoggerConfig | None = None,
        env: EnvironmentPort | None = None,
    ) -> None:
        """Initialise the logger and seed it from the environment.

        Args:
            config: Logger options. Defaults to LoggerConfig().
            env: Source of Lambda environment variables, read once here.
                Defaults to os.environ.
        """
        config = config or LoggerConfig()
        env = os.environ if env is None else env

        self._lock = threading.Lock()
        self._sink: SinkPort = config.sink if config.sink is not None else sys.stdout
        self._indent = config.indent
        self._log_group_name = config.log_group_name
        self._omit_timestamp = config.omit_timestamp or timestamp_disabled(env)

        self._values: dict[str, Any] = discover_lambda_properties(env)
        self._directive = MetricDirective(
            namespace=DEFAULT_NAMESPACE,
            dimensions=[DEFAULT_DIMENSION],
        )

    def add_count(
        self,
        name: str,
        count: int,
        resolution: StorageResolution = StorageResolution.STANDARD,
    ) -> Self:
        """Record a simple count metric.

        Args:
            name: Metric name (e.g., "UserLogIn")
            count: Number of occurrences
            resolution: Storage resolution (default: standard)

        Returns:
            This logger, for chaining.
        """
        with self._lock:
            self._store(name, count, Unit.COUNT, resolution)
        return self

    def add_metric(
        self,
        name: str,
        value: Any,
        unit: Unit | str | None = None,
        resolution: StorageResolution = StorageResolution.STANDARD,
    ) -> Self:
        """Record a generic metric.

        Args:
            name: Metric name (e.g., "FileSize")
            value: Metric value, anything JSON-serialisable
            unit: Unit of measurement, omitted from the output if None
            resolution: Storage resolution (default: standard)

        Returns:
            This logger, for chaining.
        """
        with self._lock:
            self._store(name, value, unit, resolution)
        return self

    def add_dimension(self, key: str, value: str) -> Self:
        """Add a dimension set containing only key.

        Each call adds a new, independent dimension set.

        Returns:
            This logger, for chaining.
        """
        with self._lock:
            self._directive.dimensions.append((key,))
            self._values[key] = value
        return self

    def set_namespace(self, namespace: str) -> Self:
        """Set the CloudWatch namespace for all metrics."""
        with self._lock:
            self._directive.namespace = namespace
        return self

    def set_log_group_name(self, name: str) -> Self:
        """Set the CloudWatch log group name, omitted from the output if empty."""
        with self._lock:
            self._log_group_name = name
        return self

    def flush(self) -> None:
        """Write the recorded metrics to the sink as one EMF document.

        Does nothing if no metrics have been recorded. State is kept, so
        a second flush writes the same metrics with a fresh timestamp.

        Raises:
            EncodingError: If the metrics cannot be serialised or the
                sink write fails.
        """
        with self._lock:
            if not self._directive.metrics:
                logger.debug("No metrics recorded, skipping flush")
                return

            self._values[METADATA_KEY] = Metadata(
                metrics=[self._directive.snapshot()],
                timestamp=None if self._omit_timestamp else _now_millis(),
                log_group_name=self._log_group_name,
            )

            try:
                document = encode_document(self._values, indent=self._indent)
            except EncodingError as e:
                logger.warning("Failed to encode metrics: %s", e.__cause__)
                raise

            try:
                self._sink.write(document)
                flush = getattr(self._sink, "flush", None)
                if callable(flush):
                    flush()
            except Exception as e:
                logger.warning("Failed to write metrics: %s", e)
                raise EncodingError(f"could not write metrics: {e}") from e

            logger.debug(
                "Flushed %d metrics to namespace %s",
                len(self._directive.metrics),
                self._directive.namespace,
            )

    @contextmanager
    def timer(
        self,
        name: str,
        resolution: StorageResolution = StorageResolution.STANDARD,
    ) -> Generator[None]:
        """Context manager that records the elapsed time of its block.

        The elapsed wall time is recorded in milliseconds when the block
        exits, whether or not it raised.

        Args:
            name: Metric name (e.g., "Latency")
            resolution: Storage resolution (default: standard)
        """
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self.add_metric(name, elapsed_ms, Unit.MILLISECONDS, resolution)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.flush()
            return
        # The block's exception takes precedence over a failed flush
        try:
            self.flush()
        except EncodingError as e:
            logger.warning(
                "Failed to flush metrics while handling %s: %s", exc_type.__name__, e
            )

    def _store(
        self,
        name: str,
        value: Any,
        unit: Unit | str | None,
        resolution: StorageResolution,
    ) -> None:
        """Register a metric definition and its flat value. Caller holds the lock."""
        self._directive.metrics.append(
            MetricDefinition(name=name, unit=unit, resolution=resolution)
        )
        self._values[name] = value


def _now_millis() -> int:
    """Current UTC time as milliseconds since the epoch."""
    return time.time_ns() // 1_000_000
