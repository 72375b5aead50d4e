from dataclasses import dataclass, field

from linkylink.components.common import ActionOutput
from linkylink.domain.entities import Link


@dataclass
class LinkFormInput:
    """The create/edit form. `editing` holds the keyword of the link being edited."""

    keyword: str
    url: str
    description: str = ""
    editing: str | None = None


@dataclass
class LinkListsOutput:
    """Both lists the dashboard can toggle between."""

    mine: list[Link] = field(default_factory=list)
    all: list[Link] = field(default_factory=list)
    success: bool = False
    error: str | None = None
    unauthenticated: bool = False


@dataclass
class LinkOperationOutput(ActionOutput):
    link: Link | None = None
