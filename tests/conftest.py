"""Shared pytest fixtures and test helpers for shapecheck tests."""

from __future__ import annotations

import textwrap
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from shapecheck.config.settings import ShapecheckSettings

VALID_UUID = "123e4567-e89b-12d3-a456-426614174000"

SCHEMA_SOURCE = textwrap.dedent(
    """\
    from shapecheck import RuleSet, Schema

    user = Schema.is_object(
        {
            "id": Schema.is_uuid,
            "name": Schema.is_string.length_is_between(1, 50),
            "tags": Schema.is_optional.is_array(Schema.is_string),
        }
    )
    event = Schema.is_object({"title": Schema.is_string, "when": Schema.is_date})
    shorthand = {"name": Schema.is_string}
    raw_rules = RuleSet(kind="number")
    broken = Schema.with_rules(kind="unknown")
    nested_broken = Schema.is_object({"inner": Schema.with_rules(kind="unknown")})
    exploding = Schema.coerce(int).is_integer
    not_a_schema = 42
    """
)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary project with a schema module and a shapecheck.toml.

    The config declares the ``user`` alias for ``schemas.py:user``.
    """
    monkeypatch.delenv("SHAPECHECK_CONFIG", raising=False)
    (tmp_path / "schemas.py").write_text(SCHEMA_SOURCE, encoding="utf-8")
    (tmp_path / "shapecheck.toml").write_text(
        '[schemas]\nuser = "schemas.py:user"\n', encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> ShapecheckSettings:
    """Settings rooted at the temporary project."""
    return ShapecheckSettings.from_cli(project_root=project_root)


@pytest.fixture
def _in_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Run with the temporary project as the working directory."""
    monkeypatch.chdir(project_root)
    yield
