import argparse
import sys
import time

from dotenv import load_dotenv

from core.config import settings
from core.logging import get_module_logger
from jobs import scheduled_tasks
from jobs.group_members_report import run_group_members_report
from modules.membership.domain.errors import MembershipError

logger = get_module_logger()

load_dotenv()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Report the distinct users of Entra groups, including nested groups."
    )
    parser.add_argument(
        "--prefix",
        default=None,
        help="Group display-name prefix (default: GROUP_NAME_PREFIX)",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write the report to this .csv or .json file (default: REPORT_OUTPUT_PATH)",
    )
    parser.add_argument(
        "--schedule",
        action="store_true",
        help="Keep running and generate the report daily at REPORT_SCHEDULE_TIME",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main function to run the report."""
    args = parse_args(argv)
    logger.info(
        "application_startup",
        git_sha=settings.GIT_SHA,
        production=settings.is_production,
    )

    if args.schedule:
        if not scheduled_tasks.init():
            return 1
        stop_run_continuously = scheduled_tasks.run_continuously()
        try:
            while True:
                time.sleep(60)
        except KeyboardInterrupt:
            stop_run_continuously.set()
        return 0

    try:
        report = run_group_members_report(prefix=args.prefix, output=args.output)
    except (MembershipError, ValueError) as e:
        logger.error("membership_report_failed", error=str(e))
        return 1

    if not args.output and not settings.membership_report.REPORT_OUTPUT_PATH:
        sys.stdout.write(report.model_dump_json(indent=2) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
