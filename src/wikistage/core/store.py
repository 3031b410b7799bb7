"""File-per-page storage.

Storage layout:
    pages/
    ├── FrontPage.txt
    └── test.txt

Each file holds the full current body of one page. Saves replace the file
wholesale; the last save to complete wins.
"""

import logging
import os
import re
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from wikistage.core.types import TITLE_PATTERN, Page
from wikistage.errors import InvalidTitleError, PageNotFoundError, PageWriteError

logger = logging.getLogger(__name__)

PAGE_SUFFIX = ".txt"
FILE_MODE = 0o600

_TITLE_RE = re.compile(TITLE_PATTERN)


@dataclass
class _TitleLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class PageStore:
    """Maps page titles to ``<pages_dir>/<title>.txt`` files."""

    def __init__(self, pages_dir: Path, *, prefix: str = "") -> None:
        """Initialize store.

        Args:
            pages_dir: Directory holding one file per page
            prefix: Mount prefix attached to loaded pages for link building
        """
        self._pages_dir = pages_dir
        self._prefix = prefix
        self._locks: dict[str, _TitleLock] = {}
        self._locks_guard = threading.Lock()

    @property
    def pages_dir(self) -> Path:
        """Directory holding page files."""
        return self._pages_dir

    def ensure_dir(self) -> None:
        """Create the pages directory and its parents if missing."""
        self._pages_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, title: str) -> Path:
        """Return the file path for a title.

        Raises:
            InvalidTitleError: If title is not alphanumeric
        """
        if _TITLE_RE.fullmatch(title) is None:
            raise InvalidTitleError(title)
        return self._pages_dir / f"{title}{PAGE_SUFFIX}"

    def load(self, title: str) -> Page:
        """Load a page from disk.

        Any read failure is reported as a missing page. Failures other than
        an absent file are logged so real I/O faults are not lost.

        Raises:
            PageNotFoundError: If the page file cannot be read
        """
        path = self.path_for(title)
        try:
            body = path.read_bytes()
        except FileNotFoundError:
            logger.debug(f"No page file for {title}")
            raise PageNotFoundError(title) from None
        except OSError as e:
            logger.warning(f"Treating unreadable page {title} as missing: {e}")
            raise PageNotFoundError(title) from e
        return Page(title=title, body=body, prefix=self._prefix)

    def save(self, page: Page) -> None:
        """Write the page body, replacing any previous content.

        The body is written to a temp file next to the target and then moved
        into place, so readers see either the old or the new body.

        Raises:
            PageWriteError: If the file cannot be written
        """
        path = self.path_for(page.title)
        with self._title_lock(page.title):
            try:
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{page.title}.", suffix=".tmp", dir=self._pages_dir
                )
            except OSError as e:
                raise PageWriteError(page.title, e) from e
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(page.body)
                    f.flush()
                    os.fsync(f.fileno())
                os.chmod(tmp_name, FILE_MODE)
                os.replace(tmp_name, path)
            except OSError as e:
                Path(tmp_name).unlink(missing_ok=True)
                raise PageWriteError(page.title, e) from e
        logger.info(f"Saved page {page.title} ({len(page.body)} bytes)")

    def list_titles(self) -> list[str]:
        """Return sorted titles of all stored pages."""
        if not self._pages_dir.is_dir():
            return []
        return sorted(
            path.stem
            for path in self._pages_dir.glob(f"*{PAGE_SUFFIX}")
            if _TITLE_RE.fullmatch(path.stem)
        )

    @contextmanager
    def _title_lock(self, title: str) -> Iterator[None]:
        """Hold the lock for one title; the entry is dropped when unused."""
        with self._locks_guard:
            entry = self._locks.get(title)
            if entry is None:
                entry = _TitleLock()
                self._locks[title] = entry
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[title]
