"""Exception hierarchy for Wikistage."""


class WikiError(Exception):
    """Base class for all wiki errors."""


class ConfigError(WikiError):
    """Configuration could not be loaded or is invalid."""


class InvalidTitleError(WikiError):
    """Title does not satisfy the title grammar."""

    def __init__(self, title: str) -> None:
        super().__init__(f"Invalid page title: {title!r}")
        self.title = title


class PageNotFoundError(WikiError):
    """No readable page exists for a title."""

    def __init__(self, title: str) -> None:
        super().__init__(f"Page not found: {title}")
        self.title = title


class PageWriteError(WikiError):
    """Page body could not be written to storage."""

    def __init__(self, title: str, cause: OSError) -> None:
        super().__init__(f"Failed to save page {title}: {cause}")
        self.title = title


class RenderError(WikiError):
    """Template could not be loaded or rendered."""
