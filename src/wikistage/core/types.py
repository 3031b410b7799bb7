"""Core data types shared by routing, storage and rendering."""

from dataclasses import dataclass
from enum import Enum

TITLE_PATTERN = "[a-zA-Z0-9]+"


class Action(Enum):
    """Operation requested on a page."""

    VIEW = "view"
    EDIT = "edit"
    SAVE = "save"


@dataclass(frozen=True)
class Page:
    """A wiki page for the duration of one request.

    Identity is the title. The prefix is the mount path used to build links
    when rendering and is never persisted.
    """

    title: str
    body: bytes = b""
    prefix: str = ""

    @property
    def text(self) -> str:
        """Body decoded as UTF-8, with undecodable bytes replaced."""
        return self.body.decode("utf-8", errors="replace")
