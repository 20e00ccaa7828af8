"""Domain layer - data models, report schemas, and errors."""

from modules.membership.domain.errors import (
    CycleDetectedError,
    DirectoryLookupError,
    MembershipError,
)
from modules.membership.domain.models import (
    DedupCache,
    MemberRef,
    MemberType,
    UserRecord,
)
from modules.membership.domain.schemas import (
    DirectoryGroup,
    GroupResult,
    MembershipReport,
    UserRecordResponse,
)

__all__ = [
    "CycleDetectedError",
    "DedupCache",
    "DirectoryGroup",
    "DirectoryLookupError",
    "GroupResult",
    "MemberRef",
    "MemberType",
    "MembershipError",
    "MembershipReport",
    "UserRecord",
    "UserRecordResponse",
]
