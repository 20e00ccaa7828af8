"""Error classifiers for Microsoft Graph HTTP calls.

Converts `requests` exceptions and non-2xx Graph responses into standardized
OperationResult objects, so callers branch on a status instead of catching
transport exceptions.

Key Functions:
- classify_http_response(): non-2xx `requests.Response` → OperationResult
- classify_http_error(): `requests` exception → OperationResult

Usage:
    from infrastructure.operations.classifiers import (
        classify_http_error,
        classify_http_response,
    )

    try:
        response = session.get(url, timeout=60)
    except requests.RequestException as exc:
        return classify_http_error(exc)
    if not response.ok:
        return classify_http_response(response)
"""

from typing import Optional

import requests

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

DEFAULT_RETRY_AFTER = 60


def _extract_graph_error(response: requests.Response) -> tuple[Optional[str], str]:
    """Return the Graph error code and message from an error response body.

    Graph errors look like ``{"error": {"code": "...", "message": "..."}}``.
    Falls back to the (truncated) raw text when the body is not JSON.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        error = body["error"]
        return error.get("code"), str(error.get("message") or error.get("code"))

    text = response.text or ""
    return None, text[:200] if text else f"HTTP {response.status_code}"


def _parse_retry_after(response: requests.Response) -> int:
    header_value = response.headers.get("Retry-After")
    if header_value:
        try:
            return int(header_value)
        except (ValueError, TypeError):
            pass
    return DEFAULT_RETRY_AFTER


def classify_http_response(response: requests.Response) -> OperationResult:
    """Classify a non-2xx Microsoft Graph response into OperationResult.

    Status Code Mapping:
    - 429: Throttled → TRANSIENT_ERROR with retry_after
    - 401/403: Unauthorized or missing consent → UNAUTHORIZED
    - 404: Not found → NOT_FOUND
    - 5xx: Server error → TRANSIENT_ERROR (retry_after when provided)
    - Other 4xx: Bad request → PERMANENT_ERROR

    Args:
        response: The `requests.Response` returned by Graph

    Returns:
        OperationResult with appropriate status, message, error_code and
        retry_after (if applicable)
    """
    status_code = response.status_code
    graph_code, message = _extract_graph_error(response)

    if status_code == 429:
        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            f"Graph API throttled: {message}",
            error_code="RATE_LIMITED",
            http_status=status_code,
            retry_after=_parse_retry_after(response),
        )

    if status_code in (401, 403):
        return OperationResult.unauthorized(
            f"Graph API authorization failed ({status_code}): {message}",
            error_code=graph_code or f"HTTP_{status_code}",
            http_status=status_code,
        )

    if status_code == 404:
        return OperationResult.not_found(
            f"Graph resource not found: {message}",
            error_code=graph_code or "NOT_FOUND",
            http_status=status_code,
        )

    if 500 <= status_code < 600:
        retry_after = (
            _parse_retry_after(response)
            if response.headers.get("Retry-After")
            else None
        )
        return OperationResult.transient_error(
            f"Graph API server error ({status_code}): {message}",
            error_code=graph_code or "SERVER_ERROR",
            http_status=status_code,
            retry_after=retry_after,
        )

    return OperationResult.permanent_error(
        f"Graph API client error ({status_code}): {message}",
        error_code=graph_code or f"HTTP_{status_code}",
        http_status=status_code,
    )


def classify_http_error(exc: Exception) -> OperationResult:
    """Classify an exception raised while calling Graph into OperationResult.

    - ``requests.HTTPError`` carrying a response is classified by its status
    - timeouts and connection errors are transient
    - anything else is treated as transient, network issues are usually
      temporary

    Args:
        exc: Exception raised by `requests` (or the code around it)

    Returns:
        OperationResult describing the failure
    """
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return classify_http_response(exc.response)

    if isinstance(exc, requests.Timeout):
        return OperationResult.transient_error(
            f"Graph API timeout: {str(exc)}",
            error_code="TIMEOUT",
        )

    if isinstance(exc, requests.ConnectionError):
        return OperationResult.transient_error(
            f"Connection error: {str(exc)}",
            error_code="CONNECTION_ERROR",
        )

    return OperationResult.transient_error(
        f"Connection error: {type(exc).__name__}: {str(exc)}",
        error_code="UNEXPECTED_ERROR",
    )
