"""Shared test fixtures for specfields.

Provides the petstore document fixture, an isolated working directory with
no config leaking in from the environment, output-state management, and a
CLI runner.  pytest discovers these automatically.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from specfields.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager caches sys.stdout/sys.stderr at creation time; CliRunner
    swaps those streams, so a manager created inside one test must not leak
    into the next.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def _petstore_pristine() -> dict[str, Any]:
    with open(FIXTURES_DIR / "petstore.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def petstore(_petstore_pristine: dict[str, Any]) -> dict[str, Any]:
    """A fresh copy of the petstore document for each test."""
    return copy.deepcopy(_petstore_pristine)


@pytest.fixture
def petstore_path() -> Path:
    return FIXTURES_DIR / "petstore.json"


def _make_document(
    paths: dict[str, Any] | None = None,
    components: dict[str, Any] | None = None,
    tags: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    document: dict[str, Any] = {
        "openapi": "3.0.3",
        "info": {"title": "Test API", "version": "1.0.0"},
    }
    if paths is not None:
        document["paths"] = paths
    if components is not None:
        document["components"] = components
    if tags is not None:
        document["tags"] = tags
    return document


@pytest.fixture
def make_document():
    """Factory building a minimal OpenAPI 3 document around the given sections."""
    return _make_document


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty temporary directory with SPECFIELDS_* variables cleared."""
    for var in ["SPECFIELDS_SKIP_DEPRECATED", "SPECFIELDS_DEFAULT_TAG"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def verbose_output() -> OutputManager:
    """Install a plain, colourless, verbose OutputManager."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
