"""Configuration for MetricsLogger."""

from dataclasses import dataclass

from emfmetrics.core.ports import SinkPort


@dataclass(frozen=True)
class LoggerConfig:
    """Options recognised by MetricsLogger.

    Attributes:
        sink: Where documents are written. Defaults to standard output.
        log_group_name: CloudWatch log group name, omitted when empty.
        indent: Pretty-print documents with two-space indentation.
        omit_timestamp: Leave ``Timestamp`` out of the metadata, for
            deterministic output in tests.
    """

    sink: SinkPort | None = None
    log_group_name: str = ""
    indent: bool = False
    omit_timestamp: bool = False
