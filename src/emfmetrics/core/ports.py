"""Port interfaces for the logger's external collaborators.

The core depends only on these protocols: where the environment comes
from and where documents go are decided by the caller.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class EnvironmentPort(Protocol):
    """Port for reading deployment configuration.

    ``os.environ`` and any ``dict[str, str]`` satisfy this protocol.
    """

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for key, or default if it is not set."""
        ...


@runtime_checkable
class SinkPort(Protocol):
    """Port for writing encoded documents.

    Any text stream (``sys.stdout``, ``io.StringIO``, an open file)
    satisfies this protocol. Adapters: LoggingSink.
    """

    def write(self, data: str, /) -> object:
        """Write a chunk of text to the sink."""
        ...
