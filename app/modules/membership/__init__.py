"""Nested group membership resolution.

Resolves, for every directory group selected by display-name prefix, the
distinct users reachable through any depth of group nesting.

Components:
- resolver.MemberResolver: direct members of a group, user enrichment
- expander.GroupMembershipExpander: recursive expansion with a DedupCache
  scoped to one top-level group
- report.generate_membership_report: prefix selection and per-group results
- export.export_report: CSV / JSON output
"""

from modules.membership.domain import (
    CycleDetectedError,
    DedupCache,
    DirectoryLookupError,
    GroupResult,
    MembershipError,
    MembershipReport,
    MemberRef,
    MemberType,
    UserRecord,
)
from modules.membership.expander import GroupMembershipExpander
from modules.membership.report import generate_membership_report
from modules.membership.resolver import MemberResolver

__all__ = [
    "CycleDetectedError",
    "DedupCache",
    "DirectoryLookupError",
    "GroupMembershipExpander",
    "GroupResult",
    "MemberRef",
    "MemberResolver",
    "MemberType",
    "MembershipError",
    "MembershipReport",
    "UserRecord",
    "generate_membership_report",
]
