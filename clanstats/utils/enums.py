"""usefull enums for error reporting"""
from enum import Enum

class ErrorKind(Enum):
    """Why a storage operation failed"""
    NOT_FOUND = "not found"
    BACKEND_UNREACHABLE = "backend unreachable"
    MALFORMED_CONTENT = "malformed content"
    VALIDATION_FAILED = "validation failed"
    ALL_REPLICAS_FAILED = "all replicas failed"

    def __str__(self):
        return str(self.value)
