"""Operation status enumeration.

Status codes for Graph operation results, used to decide whether a failed
directory call is retried, treated as a missing object, or surfaced.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (network, timeout, throttling)
        PERMANENT_ERROR: Non-retryable error (bad request, invalid input)
        UNAUTHORIZED: Token acquisition, authentication or consent failure
        NOT_FOUND: Directory object not found
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
