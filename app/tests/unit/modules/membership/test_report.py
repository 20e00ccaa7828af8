"""Unit tests for the membership report driver."""

from unittest.mock import patch

import pytest

from modules.membership.domain.errors import CycleDetectedError, DirectoryLookupError
from modules.membership.domain.models import UserRecord
from modules.membership.domain.schemas import DirectoryGroup
from modules.membership.report import (
    build_group_result,
    filter_groups_by_prefix,
    finalize_members,
    generate_membership_report,
)
from tests.factories.directory import FakeMemberDirectory, group_ref, user_ref


@pytest.mark.unit
class TestFilterGroupsByPrefix:
    def setup_method(self):
        self.groups = [
            DirectoryGroup(id="1", display_name="Eng-Platform"),
            DirectoryGroup(id="2", display_name="Ops"),
            DirectoryGroup(id="3", display_name="eng-data"),
            DirectoryGroup(id="4", display_name=""),
        ]

    def test_matches_prefix_case_insensitively(self):
        result = filter_groups_by_prefix(self.groups, "ENG-")
        assert [g.id for g in result] == ["1", "3"]

    def test_empty_prefix_keeps_all_groups(self):
        assert filter_groups_by_prefix(self.groups, "") == self.groups

    def test_no_match(self):
        assert filter_groups_by_prefix(self.groups, "Finance") == []


@pytest.mark.unit
class TestFinalizeMembers:
    def test_sorts_by_user_id(self):
        users = [
            UserRecord("c", "C", "c@test.com"),
            UserRecord("a", "A", "a@test.com"),
            UserRecord("b", "B", "b@test.com"),
        ]
        assert [u.user_id for u in finalize_members(users)] == ["a", "b", "c"]

    def test_keeps_first_record_per_id(self):
        users = [
            UserRecord("a", "First", "a@test.com"),
            UserRecord("a", "Second", "a@test.com"),
        ]
        result = finalize_members(users)
        assert len(result) == 1
        assert result[0].display_name == "First"


@pytest.mark.unit
class TestBuildGroupResult:
    def test_copies_group_attributes_and_counts_members(self):
        group = DirectoryGroup(
            id="g",
            display_name="Eng",
            group_types=["Unified"],
            description="Engineering",
            mail="eng@test.com",
        )
        users = [
            UserRecord("b", "B", "b@test.com"),
            UserRecord("a", "A", "a@test.com", "a@mail.test"),
        ]

        result = build_group_result(group, users)

        assert result.group_id == "g"
        assert result.display_name == "Eng"
        assert result.group_types == ["Unified"]
        assert result.description == "Engineering"
        assert result.mail == "eng@test.com"
        assert [m.user_id for m in result.distinct_members] == ["a", "b"]
        assert result.distinct_members[0].mail == "a@mail.test"
        assert result.distinct_member_count == 2


@pytest.mark.unit
class TestGenerateMembershipReport:
    def test_scenario_eng(self, eng_directory):
        report = generate_membership_report(prefix="Eng", directory=eng_directory)

        assert report.prefix == "Eng"
        assert [g.group_id for g in report.groups] == ["eng", "eng-sub"]
        eng = report.groups[0]
        assert [m.user_id for m in eng.distinct_members] == ["user-a", "user-b"]
        assert eng.distinct_member_count == 2

    def test_cache_reset_between_top_level_groups(self, eng_directory):
        report = generate_membership_report(prefix="", directory=eng_directory)

        by_id = {g.group_id: g for g in report.groups}
        for group_id in ("eng", "eng-sub", "ops"):
            assert "user-a" in [m.user_id for m in by_id[group_id].distinct_members]
        assert report.total_member_count == 6

    def test_group_without_valid_members_is_reported_empty(self):
        directory = FakeMemberDirectory(
            members={"g": [user_ref("u", display_name="", upn="")]},
            groups=[DirectoryGroup(id="g", display_name="Team")],
        )

        report = generate_membership_report(prefix="Team", directory=directory)

        assert report.groups[0].distinct_members == []
        assert report.groups[0].distinct_member_count == 0

    def test_no_matching_groups(self, eng_directory):
        report = generate_membership_report(prefix="Finance", directory=eng_directory)

        assert report.groups == []
        assert eng_directory.member_calls == []

    def test_uses_configured_prefix_by_default(self, eng_directory):
        with patch(
            "modules.membership.report.settings.membership_report.GROUP_NAME_PREFIX",
            "Ops",
        ):
            report = generate_membership_report(directory=eng_directory)

        assert report.prefix == "Ops"
        assert [g.group_id for g in report.groups] == ["ops"]

    def test_directory_failure_aborts_report(self):
        directory = FakeMemberDirectory(
            members={"a": [user_ref("u")]},
            groups=[
                DirectoryGroup(id="a", display_name="Team A"),
                DirectoryGroup(id="b", display_name="Team B"),
            ],
            failing_groups=["b"],
        )

        with pytest.raises(DirectoryLookupError):
            generate_membership_report(prefix="Team", directory=directory)

    def test_cycle_aborts_report(self):
        directory = FakeMemberDirectory(
            members={"a": [group_ref("b")], "b": [group_ref("a")]},
            groups=[DirectoryGroup(id="a", display_name="Team A")],
        )

        with pytest.raises(CycleDetectedError):
            generate_membership_report(prefix="Team", directory=directory)

    @patch("modules.membership.report.GraphMemberDirectory")
    def test_defaults_to_graph_directory(self, mock_graph_directory, eng_directory):
        mock_graph_directory.return_value = eng_directory

        report = generate_membership_report(prefix="Ops")

        mock_graph_directory.assert_called_once_with()
        assert report.groups[0].group_id == "ops"
