"""Group Membership Expander.

Walks the membership graph depth-first from a top-level group and returns
every distinct, valid user reachable from it.

Cache discipline:
  - the DedupCache is cleared when (and only when) ``is_top_level`` is set,
    so its scope is one top-level traversal including all nested groups
  - a user is appended to a result only when it is inserted into the cache,
    so a traversal never returns the same user id twice
  - a nested group's result is already disjoint from everything cached
    before it, the parent appends it as is

Termination:
  - re-entering a group that is on the active recursion path raises
    CycleDetectedError
  - a group already fully expanded in this traversal is not listed again;
    all of its valid users are in the cache, so it contributes nothing
"""

from typing import List, Optional

from core.logging import get_module_logger
from modules.membership.domain.errors import CycleDetectedError
from modules.membership.domain.models import (
    DedupCache,
    MemberRef,
    MemberType,
    UserRecord,
)
from modules.membership.resolver import MemberResolver

logger = get_module_logger()


class GroupMembershipExpander:
    """Recursive, cache-deduplicated expansion of nested group membership.

    Attributes:
        resolver: MemberResolver used at every node
        excluded_count: users dropped for incomplete identity since the last
            top-level expansion (telemetry only)
    """

    def __init__(self, resolver: MemberResolver):
        self.resolver = resolver
        self.excluded_count = 0

    @staticmethod
    def clear(cache: DedupCache) -> None:
        """Reset a cache before a new top-level traversal."""
        cache.clear()

    def expand(
        self, group_id: str, cache: DedupCache, is_top_level: bool = True
    ) -> List[UserRecord]:
        """Return the users newly reached from ``group_id`` in traversal order.

        Args:
            group_id: group to expand
            cache: the traversal's DedupCache, mutated in place
            is_top_level: True for a group selected by the caller, False for
                recursive calls on nested groups

        Returns:
            Users found at or below ``group_id`` that were not already in the
            cache, in the order they were discovered.

        Raises:
            CycleDetectedError: ``group_id`` contains itself, directly or
                transitively.
            DirectoryLookupError: a directory call failed.
        """
        if is_top_level:
            self.clear(cache)
            self.excluded_count = 0
            logger.info("group_expansion_started", group_id=group_id)

        if cache.is_on_path(group_id):
            path = cache.path + [group_id]
            logger.error("group_membership_cycle_detected", path=path)
            raise CycleDetectedError(group_id, path)

        if cache.is_expanded(group_id):
            logger.debug("group_already_expanded", group_id=group_id)
            return []

        cache.enter_group(group_id)
        completed = False
        try:
            results = self._expand_members(group_id, cache)
            completed = True
        finally:
            cache.leave_group(group_id, completed=completed)

        if is_top_level:
            logger.info(
                "group_expansion_completed",
                group_id=group_id,
                distinct_members=len(results),
                excluded_members=self.excluded_count,
            )
        return results

    def _expand_members(self, group_id: str, cache: DedupCache) -> List[UserRecord]:
        results: List[UserRecord] = []

        for member in self.resolver.resolve_members(group_id):
            if member.type == MemberType.USER:
                # a cached id is already a complete user, no lookup needed
                if member.id in cache:
                    logger.debug(
                        "duplicate_member_skipped",
                        group_id=group_id,
                        user_id=member.id,
                    )
                    continue
                user = self._resolve_user(member)
                if user is not None and cache.add(user):
                    results.append(user)
            elif member.type == MemberType.GROUP:
                results.extend(self.expand(member.id, cache, is_top_level=False))
            else:
                logger.debug(
                    "unsupported_member_skipped", group_id=group_id, member_id=member.id
                )

        return results

    def _resolve_user(self, member: MemberRef) -> Optional[UserRecord]:
        """Return a complete UserRecord for a user member, or None to exclude it."""
        user = (
            self.resolver.enrich_user(member)
            if member.needs_enrichment
            else member.to_user_record()
        )
        if not user.is_complete:
            self.excluded_count += 1
            logger.debug("incomplete_member_excluded", user_id=member.id)
            return None
        return user
