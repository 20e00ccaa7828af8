"""Group membership report driver.

Selects the top-level groups by display-name prefix, expands each one with a
freshly reset cache and finalises the distinct member list per group.
"""

from typing import Iterable, List, Optional

from core.config import settings
from core.logging import get_module_logger
from modules.membership.directory import GraphMemberDirectory, MemberDirectory
from modules.membership.domain.errors import MembershipError
from modules.membership.domain.models import DedupCache, UserRecord
from modules.membership.domain.schemas import (
    DirectoryGroup,
    GroupResult,
    MembershipReport,
    UserRecordResponse,
)
from modules.membership.expander import GroupMembershipExpander
from modules.membership.resolver import MemberResolver

logger = get_module_logger()


def filter_groups_by_prefix(
    groups: Iterable[DirectoryGroup], prefix: str
) -> List[DirectoryGroup]:
    """Keep groups whose display name starts with ``prefix``.

    The comparison is case-insensitive, as directory name matching is; an
    empty prefix keeps every group. Enumeration order is preserved.
    """
    needle = (prefix or "").casefold()
    return [g for g in groups if (g.display_name or "").casefold().startswith(needle)]


def finalize_members(users: Iterable[UserRecord]) -> List[UserRecord]:
    """Sort expanded users by user id, keeping the first record per id."""
    distinct = {}
    for user in users:
        distinct.setdefault(user.user_id, user)
    return [distinct[user_id] for user_id in sorted(distinct)]


def build_group_result(
    group: DirectoryGroup, users: Iterable[UserRecord]
) -> GroupResult:
    members = [
        UserRecordResponse(
            user_id=u.user_id,
            display_name=u.display_name,
            user_principal_name=u.user_principal_name,
            mail=u.mail,
        )
        for u in finalize_members(users)
    ]
    return GroupResult(
        group_id=group.id,
        display_name=group.display_name,
        group_types=list(group.group_types),
        description=group.description,
        mail=group.mail,
        distinct_members=members,
        distinct_member_count=len(members),
    )


def generate_membership_report(
    prefix: Optional[str] = None,
    directory: Optional[MemberDirectory] = None,
) -> MembershipReport:
    """Resolve the distinct members of every group matching ``prefix``.

    Args:
        prefix: display-name prefix; defaults to the configured
            GROUP_NAME_PREFIX.
        directory: directory collaborator; defaults to Microsoft Graph.

    Returns:
        MembershipReport with one GroupResult per selected group, in
        enumeration order.

    Raises:
        MembershipError: a directory call failed or a membership cycle was
            found. There is no partial report.
    """
    if prefix is None:
        prefix = settings.membership_report.GROUP_NAME_PREFIX
    if directory is None:
        directory = GraphMemberDirectory()

    logger.info("membership_report_started", prefix=prefix)

    groups = filter_groups_by_prefix(directory.list_groups(), prefix)
    logger.info("groups_selected", prefix=prefix, count=len(groups))

    expander = GroupMembershipExpander(MemberResolver(directory))
    cache = DedupCache()
    results: List[GroupResult] = []

    for group in groups:
        logger.info(
            "processing_group", group_id=group.id, group_name=group.display_name
        )
        try:
            users = expander.expand(group.id, cache, is_top_level=True)
        except MembershipError as e:
            logger.error(
                "group_expansion_failed",
                group_id=group.id,
                group_name=group.display_name,
                error=str(e),
            )
            raise
        result = build_group_result(group, users)
        results.append(result)
        logger.info(
            "group_processed",
            group_id=group.id,
            distinct_member_count=result.distinct_member_count,
        )

    report = MembershipReport(prefix=prefix, groups=results)
    logger.info(
        "membership_report_completed",
        prefix=prefix,
        groups=report.group_count,
        total_members=report.total_member_count,
    )
    return report
