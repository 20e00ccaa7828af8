"""Report contracts for group membership results.

Pydantic models handed to the export layer and serialized to JSON. They are
frozen: a GroupResult does not change once the driver has built it.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class UserRecordResponse(BaseModel):
    user_id: str
    display_name: str
    user_principal_name: str
    mail: str = ""

    model_config = ConfigDict(frozen=True)


class DirectoryGroup(BaseModel):
    """Summary of a group as returned by the group enumeration."""

    id: str
    display_name: str = ""
    group_types: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    mail: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class GroupResult(BaseModel):
    """Distinct members of one top-level group.

    ``distinct_members`` is sorted by user id and holds one entry per user;
    ``distinct_member_count`` always equals its length.
    """

    group_id: str
    display_name: str = ""
    group_types: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    mail: Optional[str] = None
    distinct_members: List[UserRecordResponse] = Field(default_factory=list)
    distinct_member_count: int = 0

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_count(self):
        if self.distinct_member_count != len(self.distinct_members):
            raise ValueError(
                "distinct_member_count must equal the number of distinct members"
            )
        return self


class MembershipReport(BaseModel):
    prefix: str
    groups: List[GroupResult] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def group_count(self) -> int:
        return len(self.groups)

    @computed_field
    @property
    def total_member_count(self) -> int:
        """Sum of per-group distinct counts; a user in two groups counts twice."""
        return sum(group.distinct_member_count for group in self.groups)
