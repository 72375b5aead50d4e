from dataclasses import dataclass, field

from linkylink.components.common import ActionOutput
from linkylink.domain.entities import Link, UserAccount


@dataclass
class AdminDataOutput:
    """Backing lists of the two admin tabs."""

    users: list[UserAccount] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    success: bool = False
    error: str | None = None
    unauthenticated: bool = False


@dataclass
class AdminOperationOutput(ActionOutput):
    user: UserAccount | None = None
