"""Unit tests for the group members report job."""

from unittest.mock import patch

from jobs.group_members_report import run_group_members_report


class TestRunGroupMembersReport:
    def test_returns_report_without_export(self, eng_directory) -> None:
        with patch("jobs.group_members_report.export_report") as mock_export, patch(
            "jobs.group_members_report.settings"
        ) as mock_settings:
            mock_settings.membership_report.REPORT_OUTPUT_PATH = ""
            report = run_group_members_report(prefix="Eng", directory=eng_directory)

        assert [g.distinct_member_count for g in report.groups] == [2, 2]
        mock_export.assert_not_called()

    def test_exports_to_given_output(self, eng_directory) -> None:
        with patch("jobs.group_members_report.export_report") as mock_export:
            report = run_group_members_report(
                prefix="Ops", output="report.csv", directory=eng_directory
            )

        mock_export.assert_called_once_with(report, "report.csv")

    def test_exports_to_configured_output(self, eng_directory) -> None:
        with patch("jobs.group_members_report.export_report") as mock_export, patch(
            "jobs.group_members_report.settings"
        ) as mock_settings:
            mock_settings.membership_report.REPORT_OUTPUT_PATH = "/tmp/report.json"
            report = run_group_members_report(prefix="Ops", directory=eng_directory)

        mock_export.assert_called_once_with(report, "/tmp/report.json")

    @patch("jobs.group_members_report.logger")
    def test_logs_each_group(self, mock_logger, eng_directory) -> None:
        with patch("jobs.group_members_report.export_report"):
            run_group_members_report(
                prefix="Eng", output="x.csv", directory=eng_directory
            )

        events = [c.args[0] for c in mock_logger.info.call_args_list]
        assert events.count("group_distinct_members") == 2
