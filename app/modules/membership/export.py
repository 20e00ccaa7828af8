"""Export of membership reports to CSV and JSON."""

from pathlib import Path
from typing import Iterable, Union

import pandas as pd

from core.logging import get_module_logger
from modules.membership.domain.schemas import GroupResult, MembershipReport

logger = get_module_logger()

REPORT_COLUMNS = [
    "group_id",
    "group_name",
    "group_types",
    "group_description",
    "group_mail",
    "distinct_member_count",
    "user_id",
    "display_name",
    "user_principal_name",
    "mail",
]


def convert_group_results_to_dataframe(results: Iterable[GroupResult]) -> pd.DataFrame:
    """Flatten group results to one row per (group, member).

    A group without members still yields one row, with empty member columns,
    so it appears in the export with a count of zero.

    Args:
        results: GroupResult objects, typically ``report.groups``.

    Returns:
        DataFrame with REPORT_COLUMNS.
    """
    flattened_data = []
    for group in results:
        group_record = {
            "group_id": group.group_id,
            "group_name": group.display_name,
            "group_types": ";".join(group.group_types),
            "group_description": group.description,
            "group_mail": group.mail,
            "distinct_member_count": group.distinct_member_count,
        }
        if not group.distinct_members:
            flattened_data.append(
                {
                    **group_record,
                    "user_id": None,
                    "display_name": None,
                    "user_principal_name": None,
                    "mail": None,
                }
            )
            continue

        for member in group.distinct_members:
            flattened_data.append(
                {
                    **group_record,
                    "user_id": member.user_id,
                    "display_name": member.display_name,
                    "user_principal_name": member.user_principal_name,
                    "mail": member.mail,
                }
            )

    return pd.DataFrame(flattened_data, columns=REPORT_COLUMNS)


def export_report(report: MembershipReport, path: Union[str, Path]) -> Path:
    """Write a report to ``path``; the suffix picks the format.

    Raises:
        ValueError: the suffix is neither ``.csv`` nor ``.json``.
    """
    output = Path(path)
    suffix = output.suffix.lower()

    if suffix == ".csv":
        df = convert_group_results_to_dataframe(report.groups)
        df.to_csv(output, index=False)
    elif suffix == ".json":
        output.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    else:
        raise ValueError(f"Unsupported report format: {output.suffix or '(none)'}")

    logger.info(
        "membership_report_exported",
        path=str(output),
        format=suffix.lstrip("."),
        groups=report.group_count,
    )
    return output
