"""Errors for the membership module."""

from typing import Any, Optional, Sequence


class MembershipError(Exception):
    """Base class for failures while resolving group membership."""


class DirectoryLookupError(MembershipError):
    """Raised when the directory reports an error for a lookup.

    Attributes:
        operation: the directory call that failed (e.g. "list_group_members")
        object_id: the group or user id the call was made for
        response: the original OperationResult returned by the integration
    """

    def __init__(
        self,
        message: str,
        operation: str,
        object_id: str,
        response: Any = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.object_id = object_id
        self.response = response


class CycleDetectedError(MembershipError):
    """Raised when a group is reached again while it is still being expanded.

    Attributes:
        group_id: the group that closes the cycle
        path: the recursion path from the top-level group, ending with
            ``group_id``
    """

    def __init__(self, group_id: str, path: Optional[Sequence[str]] = None):
        self.group_id = group_id
        self.path = list(path or [group_id])
        super().__init__(
            f"Group membership cycle detected: {' -> '.join(self.path)}"
        )
