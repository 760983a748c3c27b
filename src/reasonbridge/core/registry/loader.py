"""Load a provider registry from a YAML file.

The file mirrors the built-in data::

    providers:
      openai:
        api_key: ${OPENAI_API_KEY}
        reasoning_options:
          reasoning_effort: {effort: high, summary: detailed}
        tool_options:
          parallel_tool_calls: true
        models:
          default: {name: gpt-4o}
          smart: {name: o3, reasoning: true, litellm_prefix: openai/responses}

Providers that are omitted are not available. Environment variables are
expanded before parsing.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError, model_validator

from reasonbridge.core.interface.config import Provider
from reasonbridge.core.registry.capabilities import ModelDef, ProviderDef, ProviderRegistry
from reasonbridge.errors import ConfigurationError


class ProviderSpec(BaseModel):
    """One provider entry of the registry YAML."""

    models: dict[str, ModelDef]
    reasoning_options: dict[str, Any] = {}
    tool_options: dict[str, Any] = {}
    litellm_prefix: str | None = None
    api_key: str | None = None
    api_base: str | None = None


class RegistrySpec(BaseModel):
    """Top-level registry YAML document."""

    providers: dict[str, ProviderSpec]

    @model_validator(mode="after")
    def _validate_providers(self) -> RegistrySpec:
        if not self.providers:
            msg = "at least one provider must be configured"
            raise ValueError(msg)
        known = {p.value for p in Provider}
        for name in self.providers:
            if name not in known:
                msg = f"unknown provider '{name}' (known: {', '.join(sorted(known))})"
                raise ValueError(msg)
        return self

    def build(self) -> ProviderRegistry:
        """Turn the validated document into an immutable registry."""
        defs: dict[Provider, ProviderDef] = {}
        for name, spec in self.providers.items():
            provider = Provider(name)
            defs[provider] = ProviderDef(
                provider=provider,
                models=spec.models,  # type: ignore[arg-type]
                reasoning_options=spec.reasoning_options,
                tool_options=spec.tool_options,
                litellm_prefix=spec.litellm_prefix,
                api_key=spec.api_key or None,
                api_base=spec.api_base or None,
            )
        return ProviderRegistry(defs)


class RegistryLoader:
    """Load and validate a registry YAML file into a :class:`ProviderRegistry`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> ProviderRegistry:
        """Read YAML, interpolate env vars, validate and build.

        Raises:
            ConfigurationError: On read errors, YAML errors or schema failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"YAML parse error: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("registry YAML must be a mapping")

        try:
            spec = RegistrySpec.model_validate(data)
            return spec.build()
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc
