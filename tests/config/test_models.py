"""Tests for config section models."""

import pytest
from pydantic import ValidationError

from shapecheck.config.models import CheckConfig, DocumentConfig


class TestCheckConfig:
    def test_defaults(self) -> None:
        assert CheckConfig().deep is False

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            CheckConfig().deep = True  # type: ignore[misc]


class TestDocumentConfig:
    def test_defaults(self) -> None:
        config = DocumentConfig()
        assert config.encoding == "utf-8"
        assert config.yaml_suffixes == (".yaml", ".yml")

    def test_list_coerced_to_tuple(self) -> None:
        assert DocumentConfig(yaml_suffixes=[".yaml"]).yaml_suffixes == (".yaml",)
