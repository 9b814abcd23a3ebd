from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping
from pydantic import BaseModel, ConfigDict, Field

class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    uuid: str = Field(..., description="User id")
    handle: str = Field(..., description="Short handle, used as directory name")
    name: str = Field(..., description="Display name")
    created: int = Field(0, description="Creation timestamp (ms)")
    password: str = Field("", description="SHA256 hash of the password")


@dataclass(frozen=True)
class UserContext:
    """What UserDataMiddleware attaches to request.state.user."""
    profile: UserProfile
    directories: Mapping[str, str]
