"""Python logging sink adapter for emfmetrics.

This adapter bridges MetricsLogger output to the standard library
logging module, so EMF documents reach whatever handlers the
application has configured instead of being written to stdout.
"""

import logging


class LoggingSink:
    """Sink that emits each EMF document as a log record.

    The record message is the JSON document without its trailing
    newline. Handlers should use a bare ``%(message)s`` format, since
    CloudWatch only extracts metrics from lines that are pure JSON. For
    the same reason keep ``LoggerConfig.indent`` off with this sink: an
    indented document becomes one multi-line record.

    Example:
        ```python
        import logging

        from emfmetrics import LoggerConfig, LoggingSink, MetricsLogger

        sink = LoggingSink(logging.getLogger("metrics"))
        metrics = MetricsLogger(LoggerConfig(sink=sink))
        ```
    """

    def __init__(self, logger: logging.Logger, level: int = logging.INFO) -> None:
        """Initialize the sink with a target logger.

        Args:
            logger: Logger that receives the documents.
            level: Level of the emitted records. Defaults to INFO.
        """
        self._logger = logger
        self._level = level

    def write(self, data: str, /) -> int:
        """Emit data as a single log record.

        Args:
            data: An encoded document.

        Returns:
            Number of characters written, as for a text stream.
        """
        message = data.rstrip("\n")
        if message:
            self._logger.log(self._level, message)
        return len(data)
