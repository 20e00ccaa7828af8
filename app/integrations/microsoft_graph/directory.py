"""
Microsoft Graph directory module using the simplified Graph service functions.

"""

from typing import Optional

from core.config import settings
from core.logging import get_module_logger
from infrastructure.operations import OperationResult
from integrations.microsoft_graph.graph_service import execute_graph_call

GROUP_SELECT_FIELDS = "id,displayName,groupTypes,description,mail"
MEMBER_SELECT_FIELDS = "id,displayName,userPrincipalName,mail"
USER_SELECT_FIELDS = "id,displayName,userPrincipalName,mail"

logger = get_module_logger()


def _page_size() -> int:
    return settings.entra.GRAPH_PAGE_SIZE


def list_groups(select: Optional[str] = None, **kwargs) -> OperationResult:
    """List all groups in the tenant with auto-pagination.

    Args:
        select: Comma separated ``$select`` fields, defaults to
            GROUP_SELECT_FIELDS.
        **kwargs: Additional query parameters passed through unchanged,
            e.g. ``{"$filter": "startswith(displayName,'eng-')"}``.

    Returns:
        OperationResult. On success ``data`` is the list of group objects.

    Example:
        result = list_groups()
        if result.is_success:
            groups = result.data
    """
    params = {"$select": select or GROUP_SELECT_FIELDS, "$top": _page_size()}
    params.update(kwargs)
    return execute_graph_call("list_groups", "groups", params=params, paginate=True)


def list_group_members(
    group_id: str, select: Optional[str] = None, **kwargs
) -> OperationResult:
    """List all direct members of a group with auto-pagination.

    Every member carries ``@odata.type`` (``#microsoft.graph.user``,
    ``#microsoft.graph.group``, ``#microsoft.graph.device``, ...) regardless of
    ``$select``. Properties that do not exist on a member's type are absent.

    Args:
        group_id: The group's object id.
        select: Comma separated ``$select`` fields, defaults to
            MEMBER_SELECT_FIELDS.
        **kwargs: Additional query parameters passed through unchanged.

    Returns:
        OperationResult. On success ``data`` is the list of member objects.
    """
    params = {"$select": select or MEMBER_SELECT_FIELDS, "$top": _page_size()}
    params.update(kwargs)
    return execute_graph_call(
        "list_group_members",
        f"groups/{group_id}/members",
        params=params,
        paginate=True,
    )


def get_user(user_id: str, select: Optional[str] = None) -> OperationResult:
    """Get a user by id or user principal name.

    Returns an OperationResult; a missing user yields status NOT_FOUND.
    """
    return execute_graph_call(
        "get_user",
        f"users/{user_id}",
        params={"$select": select or USER_SELECT_FIELDS},
    )
