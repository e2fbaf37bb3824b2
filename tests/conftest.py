"""Shared pytest fixtures for sanitize tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest
from click.testing import CliRunner

from sanitize.transformers.registry import DEFAULT_REGISTRY, TransformerRegistry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> TransformerRegistry:
    """Independent registry seeded with the built-ins."""
    from sanitize.transformers.registry import new_registry

    return new_registry()


@pytest.fixture
def _restore_default_registry() -> Generator[None]:
    """Undo any registrations a test makes on the process-wide registry.

    Use via ``@pytest.mark.usefixtures("_restore_default_registry")``.
    """
    snapshot = {name: DEFAULT_REGISTRY.lookup(name) for name in DEFAULT_REGISTRY}
    yield
    DEFAULT_REGISTRY._transformers.clear()
    DEFAULT_REGISTRY._transformers.update(snapshot)


@pytest.fixture
def _isolated_project(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty directory with no config discovery leaking in."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SANITIZE_CONFIG", raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test.

    CLI invocations call configure_logging(), which replaces the root
    handlers with one bound to the runner's temporary stderr.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("sanitize")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
