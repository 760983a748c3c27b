"""Tests for ``reasonbridge models``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from click.testing import CliRunner

from reasonbridge.cli import main

if TYPE_CHECKING:
    from pathlib import Path


class TestModels:
    def test_lists_builtin_models(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["models"])

        assert result.exit_code == 0
        assert "Models" in result.output
        for model_id in ("openai:default", "openai:smart", "anthropic:default", "anthropic:smart"):
            assert model_id in result.output

    def test_json_catalog(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["models", "--json"])

        assert result.exit_code == 0
        assert '"openai"' in result.output
        assert '"smart": "o3"' in result.output

    def test_custom_registry(self, tmp_path: Path) -> None:
        path = tmp_path / "providers.yaml"
        path.write_text(
            "providers:\n  anthropic:\n    models:\n      default: {name: claude-haiku}\n",
            encoding="utf-8",
        )
        runner = CliRunner()
        result = runner.invoke(main, ["models", "--registry", str(path)])

        assert result.exit_code == 0
        assert "anthropic:default" in result.output
        assert "openai" not in result.output

    def test_invalid_registry(self, tmp_path: Path) -> None:
        path = tmp_path / "providers.yaml"
        path.write_text("providers:\n  gemini:\n    models: {}\n", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["models", "--registry", str(path)])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
