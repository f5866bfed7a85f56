"""exceptions raised by storage backends"""
from clanstats.utils.enums import ErrorKind


class StorageError(Exception):
    """The one failure signal of a storage backend.

    Callers only need to know that the operation failed. ``kind`` and the
    chained ``__cause__`` are kept for logging.
    """

    def __init__(self, kind: ErrorKind, message: str = ""):
        self.kind = kind
        self.message = message
        super().__init__(f"{kind}: {message}" if message else str(kind))


class ReplicationError(StorageError):
    """Every replica of a replicated backend failed"""

    def __init__(self, operation: str, failures: list[tuple[str, BaseException]]):
        self.operation = operation
        self.failures = failures
        names = ", ".join(name for name, _ in failures)
        super().__init__(ErrorKind.ALL_REPLICAS_FAILED,
                         f"{operation} failed on every backend: {names}")
