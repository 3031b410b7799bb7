"""Request path grammar.

Paths have the form ``<prefix>/<action>/<title>`` where action is one of
``view``, ``edit`` or ``save`` and title is one or more ASCII alphanumerics.
The pattern is compiled once per router and shared by all requests.
"""

import re
from dataclasses import dataclass

from wikistage.core.types import TITLE_PATTERN, Action


@dataclass(frozen=True)
class RouteMatch:
    """Action and title extracted from a valid path."""

    action: Action
    title: str


def normalize_prefix(prefix: str) -> str:
    """Normalize a mount prefix to ``""`` or ``/segment[/segment...]``.

    Args:
        prefix: Raw prefix, e.g. "wiki/", "/wiki" or ""

    Returns:
        Prefix with a single leading slash and no trailing slash
    """
    prefix = prefix.strip().rstrip("/")
    if prefix and not prefix.startswith("/"):
        prefix = f"/{prefix}"
    return prefix


class PathRouter:
    """Validates request paths and extracts the action and title."""

    def __init__(self, prefix: str = "") -> None:
        self._prefix = normalize_prefix(prefix)
        actions = "|".join(action.value for action in Action)
        self._pattern = re.compile(
            f"{re.escape(self._prefix)}/({actions})/({TITLE_PATTERN})"
        )

    @property
    def prefix(self) -> str:
        """Normalized mount prefix."""
        return self._prefix

    def match(self, path: str) -> RouteMatch | None:
        """Match a request path against the grammar.

        Args:
            path: Decoded request path, e.g. "/wiki/view/FrontPage"

        Returns:
            RouteMatch on success, None if any part of the path is invalid
        """
        m = self._pattern.fullmatch(path)
        if m is None:
            return None
        return RouteMatch(action=Action(m.group(1)), title=m.group(2))

    def build_path(self, action: Action, title: str) -> str:
        """Build the path for an action on a title under this prefix."""
        return f"{self._prefix}/{action.value}/{title}"
