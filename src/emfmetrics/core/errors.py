"""Exceptions raised by emfmetrics."""


class EmfError(Exception):
    """Base class for all emfmetrics errors."""


class EncodingError(EmfError):
    """Metrics could not be serialised to JSON or written to the sink.

    The underlying exception is available as ``__cause__``. Accumulated
    state is left intact, so the flush can be retried.
    """
