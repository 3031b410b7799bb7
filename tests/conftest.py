"""Shared test fixtures."""

from pathlib import Path

import pytest
from wikistage.config import Config, ServerConfig, StorageConfig
from wikistage.core.types import Page
from wikistage.errors import RenderError

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


class StubRenderer:
    """Renderer that records calls and returns a plain-text summary.

    Output format is ``<template>|<prefix>|<title>|<body>``.
    """

    def __init__(self, error: str | None = None) -> None:
        self.calls: list[tuple[str, Page]] = []
        self._error = error

    def render(self, template_name: str, page: Page) -> bytes:
        self.calls.append((template_name, page))
        if self._error is not None:
            raise RenderError(self._error)
        return f"{template_name}|{page.prefix}|{page.title}|{page.text}".encode()


@pytest.fixture
def pages_dir(tmp_path: Path) -> Path:
    return tmp_path / "pages"


@pytest.fixture
def test_config(pages_dir: Path) -> Config:
    """Create a test configuration with an empty prefix and tmp_path storage."""
    return Config(
        server=ServerConfig(),
        storage=StorageConfig(pages_dir=pages_dir, templates_dir=TEMPLATES_DIR),
    )


@pytest.fixture
def renderer() -> StubRenderer:
    return StubRenderer()
