"""Tests for loading a provider registry from YAML."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from reasonbridge.core.interface.config import Provider
from reasonbridge.core.registry import RegistryLoader
from reasonbridge.errors import ConfigurationError

if TYPE_CHECKING:
    from pathlib import Path

_VALID = """\
providers:
  openai:
    api_key: ${TEST_OPENAI_KEY}
    reasoning_options:
      reasoning_effort: medium
    tool_options:
      parallel_tool_calls: true
    models:
      default: {name: gpt-4o-mini}
      smart: {name: o4-mini, reasoning: true}
  anthropic:
    models:
      smart: {name: claude-sonnet-4, reasoning: true}
"""


def _write(tmp_path: Path, text: str) -> Path:
    f = tmp_path / "providers.yaml"
    f.write_text(text, encoding="utf-8")
    return f


class TestRegistryLoader:
    def test_load_valid(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEST_OPENAI_KEY", "sk-test")
        registry = RegistryLoader(_write(tmp_path, _VALID)).load()

        assert registry.providers == (Provider.OPENAI, Provider.ANTHROPIC)
        resolved = registry.resolve("openai:smart")
        assert resolved.descriptor.name == "o4-mini"
        assert resolved.request_options == {"reasoning_effort": "medium"}
        assert resolved.tool_options == {"parallel_tool_calls": True}
        assert registry.resolve("openai:default").tool_options == {}
        assert resolved.api_key == "sk-test"

    def test_omitted_model_class(self, tmp_path: Path) -> None:
        registry = RegistryLoader(_write(tmp_path, _VALID)).load()
        with pytest.raises(ConfigurationError):
            registry.resolve("anthropic:default")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="cannot read"):
            RegistryLoader(tmp_path / "missing.yaml").load()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="YAML parse error"):
            RegistryLoader(_write(tmp_path, "providers: [unclosed")).load()

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            RegistryLoader(_write(tmp_path, "- a\n- b\n")).load()

    def test_unknown_provider(self, tmp_path: Path) -> None:
        text = "providers:\n  gemini:\n    models:\n      default: {name: gemini-pro}\n"
        with pytest.raises(ConfigurationError, match="unknown provider 'gemini'"):
            RegistryLoader(_write(tmp_path, text)).load()

    def test_unknown_model_class(self, tmp_path: Path) -> None:
        text = "providers:\n  openai:\n    models:\n      turbo: {name: gpt-4o}\n"
        with pytest.raises(ConfigurationError):
            RegistryLoader(_write(tmp_path, text)).load()

    def test_empty_providers(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="at least one provider"):
            RegistryLoader(_write(tmp_path, "providers: {}\n")).load()
