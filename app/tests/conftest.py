import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `core.config`) works during pytest collection.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest  # noqa: E402
from modules.membership.domain.models import DedupCache  # noqa: E402
from modules.membership.domain.schemas import DirectoryGroup  # noqa: E402
from tests.factories.directory import (  # noqa: E402
    FakeMemberDirectory,
    group_ref,
    user_ref,
)


@pytest.fixture
def cache():
    return DedupCache()


@pytest.fixture
def eng_directory():
    """Eng -> [A, Eng-Sub -> [A, B]] plus an unrelated Ops group sharing A."""
    return FakeMemberDirectory(
        members={
            "eng": [user_ref("user-a"), group_ref("eng-sub")],
            "eng-sub": [user_ref("user-a"), user_ref("user-b")],
            "ops": [user_ref("user-c"), user_ref("user-a")],
        },
        groups=[
            DirectoryGroup(id="eng", display_name="Eng", group_types=["Unified"]),
            DirectoryGroup(id="eng-sub", display_name="Eng-Sub"),
            DirectoryGroup(id="ops", display_name="Ops"),
        ],
    )
