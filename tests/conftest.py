"""Shared pytest fixtures and test helpers for shelfctl tests."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from click.testing import CliRunner

from shelfctl.config.settings import ShelfSettings
from shelfctl.infrastructure.library import Library

ISBN_13 = "9783161484100"
ISBN_10 = "080442957X"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def library() -> Library:
    """Process-local library backed by the in-memory repositories."""
    return Library.in_memory()


@pytest.fixture
def sql_library(tmp_path: Path) -> Iterator[Library]:
    """Library backed by a SQLite database under ``tmp_path``."""
    settings = ShelfSettings.from_cli(root=tmp_path)
    lib = Library.from_settings(settings)
    try:
        yield lib
    finally:
        lib.close()


@pytest.fixture(params=["memory", "sqlite"])
def any_library(request: pytest.FixtureRequest, tmp_path: Path) -> Iterator[Library]:
    """Run a test once per storage backend."""
    if request.param == "memory":
        yield Library.in_memory()
        return
    lib = Library.from_settings(ShelfSettings.from_cli(root=tmp_path))
    try:
        yield lib
    finally:
        lib.close()


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    monkeypatch.delenv("SHELFCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced clock for services that take ``clock=``."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 3, 1, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)
