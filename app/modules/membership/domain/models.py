"""Internal data models for membership resolution.

Lightweight dataclasses (not Pydantic) used while walking the membership
graph. Output contracts live in schemas.py.

Key distinctions:
  - MemberRef: one entry of a group's direct member listing, typed once at
    the directory boundary and consumed immediately
  - UserRecord: a resolved, valid user; the unit of deduplication
  - DedupCache: UserId -> UserRecord for one top-level traversal
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Set

GRAPH_USER_TYPE = "#microsoft.graph.user"
GRAPH_GROUP_TYPE = "#microsoft.graph.group"


class MemberType(Enum):
    """Closed classification of a group member."""

    USER = "user"
    GROUP = "group"
    OTHER = "other"

    @classmethod
    def from_odata_type(cls, odata_type: Optional[str]) -> "MemberType":
        """Map a Graph ``@odata.type`` to a MemberType.

        Devices, service principals, org contacts and anything unknown map
        to OTHER.
        """
        normalized = (odata_type or "").strip().lower()
        if normalized == GRAPH_USER_TYPE:
            return cls.USER
        if normalized == GRAPH_GROUP_TYPE:
            return cls.GROUP
        return cls.OTHER


@dataclass(frozen=True)
class UserRecord:
    """A directory user that can be reported.

    Attributes:
        user_id: stable object id, the deduplication key
        display_name: the user's display name
        user_principal_name: the login name
        mail: primary SMTP address, may be empty
    """

    user_id: str
    display_name: str
    user_principal_name: str
    mail: str = ""

    @property
    def is_complete(self) -> bool:
        """True when both display name and user principal name are set."""
        return bool(self.display_name) and bool(self.user_principal_name)


@dataclass(frozen=True)
class MemberRef:
    """One direct member of a group as returned by the listing call.

    Attributes:
        id: object id of the member
        type: USER, GROUP or OTHER
        display_name: may be empty in the listing
        user_principal_name: may be empty in the listing, never set for groups
        mail: may be empty
    """

    id: str
    type: MemberType
    display_name: str = ""
    user_principal_name: str = ""
    mail: str = ""

    @property
    def needs_enrichment(self) -> bool:
        """A user listed without display name or user principal name."""
        return self.type == MemberType.USER and not (
            self.display_name and self.user_principal_name
        )

    def to_user_record(self) -> UserRecord:
        return UserRecord(
            user_id=self.id,
            display_name=self.display_name,
            user_principal_name=self.user_principal_name,
            mail=self.mail,
        )


class DedupCache:
    """UserId -> UserRecord mapping scoped to one top-level traversal.

    One instance is owned by the caller of the expander and passed by
    reference through every recursive call. It is cleared before each
    top-level group so the same user is reported once per top-level group
    that contains them.

    The cache also carries the traversal bookkeeping that shares its scope:
    the groups on the active recursion path and the groups already fully
    expanded. ``clear`` resets all three together.
    """

    def __init__(self) -> None:
        self._users: Dict[str, UserRecord] = {}
        self._path: List[str] = []
        self._expanded: Set[str] = set()

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def __len__(self) -> int:
        return len(self._users)

    def get(self, user_id: str) -> Optional[UserRecord]:
        return self._users.get(user_id)

    def add(self, user: UserRecord) -> bool:
        """Insert a user; returns False if its id was already cached."""
        if user.user_id in self._users:
            return False
        self._users[user.user_id] = user
        return True

    @property
    def path(self) -> List[str]:
        """Copy of the active recursion path, top-level group first."""
        return list(self._path)

    def is_on_path(self, group_id: str) -> bool:
        return group_id in self._path

    def is_expanded(self, group_id: str) -> bool:
        return group_id in self._expanded

    def enter_group(self, group_id: str) -> None:
        self._path.append(group_id)

    def leave_group(self, group_id: str, completed: bool = True) -> None:
        """Pop ``group_id`` off the path; mark it expanded when it completed."""
        if self._path and self._path[-1] == group_id:
            self._path.pop()
        if completed:
            self._expanded.add(group_id)

    def clear(self) -> None:
        self._users.clear()
        self._path.clear()
        self._expanded.clear()
