"""
Pydantic schemas for ACL API requests and responses.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class BaseAPISchema(BaseModel):
    """Base schema with common configuration"""
    model_config = ConfigDict(extra="forbid")


class SetACLRequest(BaseAPISchema):
    """Body of PUT /{name}"""
    users: Optional[List[str]] = Field(None, description="New members of the ACL")


class ModifyACLRequest(BaseAPISchema):
    """Body of POST /{name}; at most one of add and remove may be non-empty"""
    add: Optional[List[str]] = Field(None, description="Users to add")
    remove: Optional[List[str]] = Field(None, description="Users to remove")


class GetACLResponse(BaseAPISchema):
    """Body returned by GET /{name}"""
    users: List[str] = Field(default_factory=list, description="Members sorted ascending")


class GetACLsResponse(BaseAPISchema):
    """Body returned by GET /"""
    acls: List[str] = Field(default_factory=list, description="ACL names sorted ascending")

