"""
Microsoft Graph API Integration Utilities

This module provides the streamlined, standardized helpers every Graph call
goes through:

- Client-credentials token acquisition through MSAL
- Centralized error classification and retry logic for all Graph calls
- Standardized response modeling via OperationResult objects
- Transparent pagination over ``@odata.nextLink``

Key Functions:
    - get_access_token() -> str:
        Returns an application access token for the configured tenant.

    - execute_graph_call(func_name: str, path: str, params: Optional[dict], paginate: bool, max_retries: Optional[int]) -> OperationResult:
        Executes a GET against Graph with retry, returning the object or, for
        paginated collections, the concatenated ``value`` list of every page.

    - paginate_all_results(func_name: str, url: str, params: Optional[dict]) -> OperationResult:
        Follows ``@odata.nextLink`` until the collection is exhausted.
"""

import time
from functools import lru_cache
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import msal
import requests

from core.config import settings
from core.logging import get_module_logger
from infrastructure.operations import (
    OperationResult,
    OperationStatus,
    classify_http_error,
    classify_http_response,
)

GRAPH_API_ENDPOINT = settings.entra.GRAPH_API_ENDPOINT

logger = get_module_logger()

ERROR_CONFIG = {
    "default_backoff_factor": 1.0,
    "max_retry_delay": 60,
}


class GraphAuthenticationError(Exception):
    """Raised when an application token cannot be acquired for Graph."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


@lru_cache(maxsize=1)
def _get_msal_app(
    client_id: str, authority: str, client_secret: str
) -> msal.ConfidentialClientApplication:
    """Cached MSAL app instance; MSAL keeps its own token cache per app."""
    return msal.ConfidentialClientApplication(
        client_id,
        authority=authority,
        client_credential=client_secret,
    )


def get_access_token() -> str:
    """Acquire an application token for Microsoft Graph.

    Returns:
        str: The bearer token.

    Raises:
        GraphAuthenticationError: if credentials are missing or MSAL refuses
            to issue a token.
    """
    entra = settings.entra
    if not (
        entra.AZURE_TENANT_ID and entra.AZURE_CLIENT_ID and entra.AZURE_CLIENT_SECRET
    ):
        logger.error("graph_credentials_missing")
        raise GraphAuthenticationError(
            "AZURE_TENANT_ID, AZURE_CLIENT_ID and AZURE_CLIENT_SECRET must be configured",
            error_code="CREDENTIALS_MISSING",
        )

    app = _get_msal_app(
        entra.AZURE_CLIENT_ID, entra.authority, entra.AZURE_CLIENT_SECRET
    )
    result = app.acquire_token_for_client(scopes=entra.scopes)

    if not result or "access_token" not in result:
        error = (result or {}).get("error")
        description = (result or {}).get("error_description", "unknown error")
        logger.error("graph_token_acquisition_failed", error=error)
        raise GraphAuthenticationError(
            f"Token acquisition failed: {description}", error_code=error
        )

    return result["access_token"]


@lru_cache(maxsize=1)
def get_graph_session() -> requests.Session:
    """Shared HTTP session so connections to Graph are pooled."""
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    return session


def _calculate_retry_delay(attempt: int, result: OperationResult) -> float:
    """Calculate retry delay from Retry-After, or exponential backoff."""
    max_delay = float(ERROR_CONFIG["max_retry_delay"])
    if result.retry_after is not None:
        return min(float(result.retry_after), max_delay)
    return min(float(ERROR_CONFIG["default_backoff_factor"]) * (2**attempt), max_delay)


def _send_request(url: str, params: Optional[Dict[str, Any]]) -> OperationResult:
    """Send one authenticated GET and classify the outcome."""
    try:
        token = get_access_token()
    except GraphAuthenticationError as e:
        return OperationResult.unauthorized(e.message, error_code=e.error_code)
    except requests.RequestException as e:
        # MSAL calls the login endpoint with requests
        return classify_http_error(e)

    try:
        response = get_graph_session().get(
            url,
            params=params,
            headers={"Authorization": f"Bearer {token}"},
            timeout=settings.entra.GRAPH_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        return classify_http_error(e)

    if not response.ok:
        return classify_http_response(response)

    try:
        payload = response.json() if response.content else {}
    except ValueError as e:
        return OperationResult.permanent_error(
            f"Invalid JSON in Graph response: {str(e)}", error_code="INVALID_JSON"
        )
    return OperationResult.success(data=payload)


def execute_request_with_retry(
    func_name: str,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    max_retries: Optional[int] = None,
) -> OperationResult:
    """Send a GET to Graph, retrying throttling and transient server errors.

    Args:
        func_name (str): Name of the calling function for logging
        url (str): Absolute Graph URL
        params (Optional[dict]): Query parameters ($select, $top, ...)
        max_retries (Optional[int]): Override the configured retry count

    Returns:
        OperationResult: the final result once it succeeds, fails
        permanently or retries are exhausted.
    """
    max_retry_attempts = (
        max_retries if isinstance(max_retries, int) else settings.entra.GRAPH_MAX_RETRIES
    )
    attempt = 0
    while True:
        logger.debug(
            "graph_api_call_start",
            function=func_name,
            attempt=attempt + 1,
            max_attempts=max_retry_attempts + 1,
        )
        result = _send_request(url, params)

        if result.is_success:
            if attempt > 0:
                logger.info(
                    "graph_api_retry_success", function=func_name, attempt=attempt + 1
                )
            return result

        should_retry = result.is_retryable and attempt < max_retry_attempts
        if not should_retry:
            log = (
                logger.warning
                if result.status == OperationStatus.NOT_FOUND
                else logger.error
            )
            log(
                "graph_api_error_final",
                function=func_name,
                status=result.status.value,
                error=result.message,
                error_code=result.error_code,
                http_status=result.http_status,
            )
            return result

        delay = _calculate_retry_delay(attempt, result)
        logger.warning(
            "graph_api_retrying",
            function=func_name,
            attempt=attempt + 1,
            error_code=result.error_code,
            delay=delay,
            error=result.message,
        )
        time.sleep(delay)
        attempt += 1


def paginate_all_results(
    func_name: str,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    max_retries: Optional[int] = None,
) -> OperationResult:
    """Collect every page of a Graph collection.

    Graph returns ``{"value": [...], "@odata.nextLink": "<absolute url>"}``;
    the next link already carries the original query, so params are only
    sent with the first request.

    Returns:
        OperationResult: on success ``data`` is the concatenated list.
    """
    all_results: List[Any] = []
    next_url: Optional[str] = url
    next_params = params
    page_number = 0

    while next_url:
        page_number += 1
        result = execute_request_with_retry(
            func_name, next_url, next_params, max_retries
        )
        if not result.is_success:
            return result

        page = result.data if isinstance(result.data, dict) else {}
        items = page.get("value") or []
        all_results.extend(items)
        next_url = page.get("@odata.nextLink")
        next_params = None

        logger.debug(
            "pagination_page_processed",
            function=func_name,
            page_number=page_number,
            page_items=len(items),
            total_items=len(all_results),
            has_next_page=bool(next_url),
        )

    logger.debug(
        "pagination_completed",
        function=func_name,
        total_results=len(all_results),
        total_pages=page_number,
    )
    return OperationResult.success(data=all_results)


def execute_graph_call(
    func_name: str,
    path: str,
    params: Optional[Dict[str, Any]] = None,
    paginate: bool = False,
    max_retries: Optional[int] = None,
) -> OperationResult:
    """
    Execute a Graph GET with standardized error handling and response modeling.

    Args:
        func_name (str): Name of the calling function for logging
        path (str): Resource path relative to the Graph endpoint, e.g.
            "groups/{id}/members"
        params (Optional[dict]): Query parameters passed through unchanged
        paginate (bool): Follow ``@odata.nextLink`` and return the whole
            collection as a list
        max_retries (Optional[int]): Override the configured retry count

    Returns:
        OperationResult: Standardized result. ``data`` is the Graph object, or
        the full list of items when ``paginate`` is set.
    """
    url = urljoin(GRAPH_API_ENDPOINT.rstrip("/") + "/", path.lstrip("/"))
    if paginate:
        return paginate_all_results(func_name, url, params, max_retries)
    return execute_request_with_retry(func_name, url, params, max_retries)
