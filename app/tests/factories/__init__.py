"""Test data factories for deterministic test data generation."""

from tests.factories.directory import (
    FakeMemberDirectory,
    group_ref,
    other_ref,
    user_ref,
)
from tests.factories.graph import (
    make_graph_groups,
    make_graph_member,
    make_graph_page,
    make_graph_users,
)

__all__ = [
    "FakeMemberDirectory",
    "group_ref",
    "other_ref",
    "user_ref",
    "make_graph_groups",
    "make_graph_member",
    "make_graph_page",
    "make_graph_users",
]
