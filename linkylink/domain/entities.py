from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# --- Enums / Literals ---
RoleType = Literal["USER", "ADMIN"]

ROLE_USER: RoleType = "USER"
ROLE_ADMIN: RoleType = "ADMIN"


class WireModel(BaseModel):
    """Base for records exchanged with the go-links API (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True)


# --- Session ---

class SessionUser(WireModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    username: str
    role: RoleType


class Session(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: SessionUser | None = None
    credential: str | None = None

    @model_validator(mode="after")
    def _both_or_neither(self) -> "Session":
        if (self.user is None) != (self.credential is None):
            raise ValueError("user and credential must both be set or both be empty")
        return self

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


ANONYMOUS = Session()

# --- Links ---

class Link(WireModel):
    keyword: str
    url: str
    description: str | None = None
    owner_username: str = Field(alias="ownerUsername")
    click_count: int = Field(default=0, alias="clickCount", ge=0)
    created_at: datetime | None = Field(default=None, alias="createdAt")


# --- Users ---

class UserAccount(WireModel):
    username: str
    role: RoleType
    # The role-change endpoint answers without a timestamp.
    created_at: datetime | None = Field(default=None, alias="createdAt")


# --- Request / response bodies ---

class Credentials(WireModel):
    username: str
    password: str


class AuthResponse(WireModel):
    token: str
    username: str
    role: RoleType


class LinkCreate(WireModel):
    keyword: str
    url: str
    description: str | None = None


class LinkUpdate(WireModel):
    keyword: str
    url: str
    description: str | None = None


class RoleUpdate(WireModel):
    role: RoleType


class ErrorBody(WireModel):
    error: str | None = None
