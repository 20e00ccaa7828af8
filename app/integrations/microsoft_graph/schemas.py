from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class GraphUser(BaseModel):
    id: Optional[str] = None
    displayName: Optional[str] = None
    userPrincipalName: Optional[str] = None
    mail: Optional[str] = None

    model_config = {"extra": "ignore"}


class GraphGroup(BaseModel):
    id: Optional[str] = None
    displayName: Optional[str] = None
    # null for security groups created before groupTypes existed
    groupTypes: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    mail: Optional[str] = None

    model_config = {"extra": "ignore"}

    @field_validator("groupTypes", mode="before")
    @classmethod
    def _coerce_group_types(cls, v):
        if v is None:
            return []
        return v


class GraphDirectoryObject(BaseModel):
    """A member entry of ``/groups/{id}/members``.

    The object type comes back as ``@odata.type``; users and groups share
    ``id`` and ``displayName``, only users carry ``userPrincipalName``.
    """

    odata_type: Optional[str] = Field(default=None, alias="@odata.type")
    id: Optional[str] = None
    displayName: Optional[str] = None
    userPrincipalName: Optional[str] = None
    mail: Optional[str] = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
