"""Tests for ShapecheckSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from shapecheck.config.settings import ShapecheckSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SHAPECHECK_CONFIG", raising=False)
    monkeypatch.delenv("SHAPECHECK_QUIET", raising=False)
    monkeypatch.delenv("SHAPECHECK_CHECK__DEEP", raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = ShapecheckSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.schemas == {}
        assert settings.check.deep is False
        assert settings.documents.encoding == "utf-8"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = ShapecheckSettings.from_cli(project_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "shapecheck.toml").write_text(
            '[schemas]\nuser = "app.schemas:user"\n[check]\ndeep = true\n'
        )
        settings = ShapecheckSettings.from_cli(project_root=tmp_path)
        assert settings.schemas == {"user": "app.schemas:user"}
        assert settings.check.deep is True
        assert settings.documents.encoding == "utf-8"

    def test_project_root_from_config_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "shapecheck.toml").write_text("")
        child = tmp_path / "src"
        child.mkdir()
        monkeypatch.chdir(child)
        settings = ShapecheckSettings.from_cli()
        assert settings.project_root == tmp_path.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[documents]\nencoding = \"latin-1\"\n")
        settings = ShapecheckSettings.from_cli(config_path=str(custom), project_root=tmp_path)
        assert settings.documents.encoding == "latin-1"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "shapecheck.toml").write_text("[check\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ShapecheckSettings.from_cli(project_root=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "shapecheck.toml").write_text("[check]\ndeep = false\n")
        monkeypatch.setenv("SHAPECHECK_CHECK__DEEP", "true")
        settings = ShapecheckSettings.from_cli(project_root=tmp_path)
        assert settings.check.deep is True

    def test_cli_flags_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHAPECHECK_QUIET", "true")
        settings = ShapecheckSettings.from_cli(project_root=tmp_path, quiet=False)
        assert settings.quiet is False

    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = ShapecheckSettings.from_cli(
            project_root=tmp_path, json_output=True, verbose=True, log_json=True
        )
        assert settings.json_output is True
        assert settings.verbose is True
        assert settings.log_json is True
