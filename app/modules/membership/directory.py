"""Directory adapters for membership resolution.

The resolver and expander only see the MemberDirectory interface. The Graph
implementation wraps the Microsoft Graph integration, validates payloads with
the Graph schemas and types every member once, here, at the boundary.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from pydantic import ValidationError

from core.logging import get_module_logger
from infrastructure.operations import OperationResult, OperationStatus
from integrations.microsoft_graph import directory as graph_directory
from integrations.microsoft_graph.schemas import (
    GraphDirectoryObject,
    GraphGroup,
    GraphUser,
)
from modules.membership.domain.errors import DirectoryLookupError
from modules.membership.domain.models import MemberRef, MemberType, UserRecord
from modules.membership.domain.schemas import DirectoryGroup

logger = get_module_logger()


class MemberDirectory(ABC):
    """Read-only view of the directory used by the membership core.

    Implementations must return complete results (pagination handled
    internally) and raise DirectoryLookupError for failed calls.
    """

    @abstractmethod
    def list_groups(self) -> List[DirectoryGroup]:
        """Return every group in the directory."""

    @abstractmethod
    def list_group_members(self, group_id: str) -> List[MemberRef]:
        """Return the direct members of a group in listing order."""

    @abstractmethod
    def get_user_details(self, user_id: str) -> Optional[UserRecord]:
        """Return the identity attributes of a user, None if it does not exist."""


def _raise_for_result(operation: str, object_id: str, resp: OperationResult) -> None:
    if not resp.is_success:
        raise DirectoryLookupError(
            f"graph {operation} failed for {object_id}: {resp.message}",
            operation=operation,
            object_id=object_id,
            response=resp,
        )


class GraphMemberDirectory(MemberDirectory):
    """MemberDirectory backed by Microsoft Graph."""

    def list_groups(self) -> List[DirectoryGroup]:
        resp = graph_directory.list_groups()
        _raise_for_result("list_groups", "tenant", resp)

        groups: List[DirectoryGroup] = []
        for raw in resp.data or []:
            if not isinstance(raw, dict):
                continue
            try:
                g = GraphGroup.model_validate(raw)
            except ValidationError as exc:
                logger.warning("graph_group_validation_failed", error=str(exc))
                continue
            if not g.id:
                continue
            groups.append(
                DirectoryGroup(
                    id=g.id,
                    display_name=g.displayName or "",
                    group_types=list(g.groupTypes),
                    description=g.description,
                    mail=g.mail,
                )
            )
        return groups

    def list_group_members(self, group_id: str) -> List[MemberRef]:
        resp = graph_directory.list_group_members(group_id)
        _raise_for_result("list_group_members", group_id, resp)

        members: List[MemberRef] = []
        for raw in resp.data or []:
            if not isinstance(raw, dict):
                continue
            member = self._member_from_graph(raw)
            if member is not None:
                members.append(member)
        return members

    def get_user_details(self, user_id: str) -> Optional[UserRecord]:
        resp = graph_directory.get_user(user_id)
        if resp.status == OperationStatus.NOT_FOUND:
            logger.info("graph_user_not_found", user_id=user_id)
            return None
        _raise_for_result("get_user", user_id, resp)

        try:
            user = GraphUser.model_validate(resp.data or {})
        except ValidationError as exc:
            raise DirectoryLookupError(
                f"graph get_user returned an invalid user for {user_id}",
                operation="get_user",
                object_id=user_id,
                response=resp,
            ) from exc

        return UserRecord(
            user_id=user_id,
            display_name=user.displayName or "",
            user_principal_name=user.userPrincipalName or "",
            mail=user.mail or "",
        )

    def _member_from_graph(self, raw: Dict) -> Optional[MemberRef]:
        """Validate a members entry and type it; entries without an id are dropped."""
        try:
            obj = GraphDirectoryObject.model_validate(raw)
        except ValidationError as exc:
            logger.warning("graph_member_validation_failed", error=str(exc))
            return None
        if not obj.id:
            return None
        return MemberRef(
            id=obj.id,
            type=MemberType.from_odata_type(obj.odata_type),
            display_name=obj.displayName or "",
            user_principal_name=obj.userPrincipalName or "",
            mail=obj.mail or "",
        )
