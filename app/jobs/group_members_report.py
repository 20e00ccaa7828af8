from typing import Optional

from core.config import settings
from core.logging import get_module_logger
from modules.membership.directory import MemberDirectory
from modules.membership.domain.schemas import MembershipReport
from modules.membership.export import export_report
from modules.membership.report import generate_membership_report

logger = get_module_logger()


def run_group_members_report(
    prefix: Optional[str] = None,
    output: Optional[str] = None,
    directory: Optional[MemberDirectory] = None,
) -> MembershipReport:
    """Generate the nested group members report and export it when asked to."""
    if output is None:
        output = settings.membership_report.REPORT_OUTPUT_PATH or None

    report = generate_membership_report(prefix=prefix, directory=directory)

    for group in report.groups:
        logger.info(
            "group_distinct_members",
            group_name=group.display_name,
            group_id=group.group_id,
            distinct_member_count=group.distinct_member_count,
        )

    if output:
        export_report(report, output)

    return report
