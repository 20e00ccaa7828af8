"""Member Resolver.

Lists the direct members of a group and fills in the identity attributes of
users the listing returned incomplete.
"""

from typing import List

from core.logging import get_module_logger
from modules.membership.directory import MemberDirectory
from modules.membership.domain.models import MemberRef, MemberType, UserRecord

logger = get_module_logger()


class MemberResolver:
    """Resolves group members through a MemberDirectory.

    Args:
        directory: the directory collaborator; failures it raises
            (DirectoryLookupError) propagate unchanged.
    """

    def __init__(self, directory: MemberDirectory):
        self.directory = directory

    def resolve_members(self, group_id: str) -> List[MemberRef]:
        """Return the complete list of direct members of ``group_id``."""
        members = self.directory.list_group_members(group_id)
        logger.debug(
            "group_members_resolved",
            group_id=group_id,
            count=len(members),
            users=sum(1 for m in members if m.type == MemberType.USER),
            groups=sum(1 for m in members if m.type == MemberType.GROUP),
        )
        return members

    def enrich_user(self, member: MemberRef) -> UserRecord:
        """Look up a user's display name, user principal name and mail.

        A non-empty value from the lookup wins; a value the listing already
        had is kept when the lookup returns nothing for it. A user that no
        longer exists yields the listing values unchanged, so the caller sees
        it as incomplete.
        """
        details = self.directory.get_user_details(member.id)
        if details is None:
            return member.to_user_record()

        return UserRecord(
            user_id=member.id,
            display_name=details.display_name or member.display_name,
            user_principal_name=details.user_principal_name
            or member.user_principal_name,
            mail=details.mail or member.mail,
        )
