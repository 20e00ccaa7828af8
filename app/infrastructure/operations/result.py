"""Operation result dataclass.

Uniform result returned by the Microsoft Graph integration: a status, a
payload on success and error details otherwise. Integration functions never
raise for HTTP failures, they return one of these.
"""

from typing import Optional, Any
from dataclasses import dataclass

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Result of a single Graph operation.

    Attributes:
        status: OperationStatus -- outcome used to branch (retry, missing, fail)
        message: str -- text for logs and error messages
        data: Optional[Any] -- a Graph object, or the item list of a collection
        error_code: Optional[str] -- Graph error code (``error.code``) or a
            local code such as TIMEOUT
        retry_after: Optional[int] -- seconds to wait before retrying a
            throttled call
        http_status: Optional[int] -- HTTP status of the failed response
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    retry_after: Optional[int] = None
    http_status: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    @property
    def is_retryable(self) -> bool:
        """True for transient failures that may succeed on a later attempt."""
        return self.status == OperationStatus.TRANSIENT_ERROR

    @classmethod
    def success(
        cls, data: Optional[Any] = None, message: str = "ok"
    ) -> "OperationResult":
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
        http_status: Optional[int] = None,
    ) -> "OperationResult":
        """Create a failed result with an explicit status."""
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            retry_after=retry_after,
            http_status=http_status,
        )

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
        http_status: Optional[int] = None,
    ) -> "OperationResult":
        """Create a retryable error result.

        Use for throttling (429), Graph service errors (5xx), timeouts and
        dropped connections.
        """
        return cls.error(
            OperationStatus.TRANSIENT_ERROR,
            message,
            error_code,
            retry_after,
            http_status,
        )

    @classmethod
    def permanent_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        http_status: Optional[int] = None,
    ) -> "OperationResult":
        """Create a non-retryable error result (bad request, invalid payload)."""
        return cls.error(
            OperationStatus.PERMANENT_ERROR, message, error_code, http_status=http_status
        )

    @classmethod
    def unauthorized(
        cls,
        message: str,
        error_code: Optional[str] = "UNAUTHORIZED",
        http_status: Optional[int] = None,
    ) -> "OperationResult":
        """Token acquisition failed or the app lacks the Graph permission."""
        return cls.error(
            OperationStatus.UNAUTHORIZED, message, error_code, http_status=http_status
        )

    @classmethod
    def not_found(
        cls,
        message: str,
        error_code: Optional[str] = "NOT_FOUND",
        http_status: Optional[int] = None,
    ) -> "OperationResult":
        """The directory object does not exist (deleted or never existed)."""
        return cls.error(
            OperationStatus.NOT_FOUND, message, error_code, http_status=http_status
        )
