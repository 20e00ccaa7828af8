"""Unit tests for MemberResolver."""

from unittest.mock import MagicMock

import pytest

from modules.membership.directory import MemberDirectory
from modules.membership.domain.errors import DirectoryLookupError
from modules.membership.domain.models import MemberType, UserRecord
from modules.membership.resolver import MemberResolver
from tests.factories.directory import (
    FakeMemberDirectory,
    group_ref,
    other_ref,
    user_ref,
)


@pytest.mark.unit
class TestResolveMembers:
    def test_returns_members_in_listing_order(self):
        members = [user_ref("u1"), group_ref("g1"), other_ref("d1"), user_ref("u2")]
        directory = FakeMemberDirectory(members={"g": members})

        result = MemberResolver(directory).resolve_members("g")

        assert result == members
        assert [m.type for m in result] == [
            MemberType.USER,
            MemberType.GROUP,
            MemberType.OTHER,
            MemberType.USER,
        ]

    def test_propagates_directory_errors(self):
        directory = FakeMemberDirectory(failing_groups=["g"])

        with pytest.raises(DirectoryLookupError):
            MemberResolver(directory).resolve_members("g")


@pytest.mark.unit
class TestEnrichUser:
    def test_fills_missing_fields_from_lookup(self):
        directory = FakeMemberDirectory(
            users={"u": UserRecord("u", "User U", "u@test.com", "u@mail.test")}
        )
        member = user_ref("u", display_name="", upn="")

        result = MemberResolver(directory).enrich_user(member)

        assert result == UserRecord("u", "User U", "u@test.com", "u@mail.test")

    def test_keeps_listing_value_when_lookup_is_empty(self):
        directory = FakeMemberDirectory(users={"u": UserRecord("u", "", "u@test.com")})
        member = user_ref("u", display_name="Listed Name", upn="", mail="listed@test")

        result = MemberResolver(directory).enrich_user(member)

        assert result.display_name == "Listed Name"
        assert result.user_principal_name == "u@test.com"
        assert result.mail == "listed@test"

    def test_lookup_value_wins_over_listing_value(self):
        directory = FakeMemberDirectory(
            users={"u": UserRecord("u", "Directory Name", "u@test.com")}
        )
        member = user_ref("u", display_name="Listed Name", upn="")

        result = MemberResolver(directory).enrich_user(member)

        assert result.display_name == "Directory Name"

    def test_missing_user_returns_listing_values(self):
        directory = FakeMemberDirectory()
        member = user_ref("u", display_name="", upn="")

        result = MemberResolver(directory).enrich_user(member)

        assert result == UserRecord("u", "", "", "")
        assert not result.is_complete

    def test_enrichment_is_idempotent(self):
        directory = FakeMemberDirectory(
            users={"u": UserRecord("u", "User U", "u@test.com")}
        )
        resolver = MemberResolver(directory)
        member = user_ref("u", display_name="", upn="")

        assert resolver.enrich_user(member) == resolver.enrich_user(member)
        assert directory.user_calls == ["u", "u"]

    def test_propagates_lookup_errors(self):
        directory = MagicMock(spec=MemberDirectory)
        directory.get_user_details.side_effect = DirectoryLookupError(
            "boom", operation="get_user", object_id="u"
        )

        with pytest.raises(DirectoryLookupError):
            MemberResolver(directory).enrich_user(user_ref("u", upn=""))
