"""Provider capability registry.

Maps ``<provider>:<modelClass>`` identifiers to model descriptors and the
request options a call to that model needs. The registry is built once at
startup and never changes afterwards; components receive it explicitly.
"""

import copy
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from reasonbridge.core.interface.config import (
    MODEL_CLASSES,
    ModelClass,
    ModelDescriptor,
    Provider,
    ResolvedModel,
)
from reasonbridge.errors import ConfigurationError


class ModelDef(BaseModel):
    """A model variant as configured for one model class of a provider."""

    model_config = ConfigDict(frozen=True)

    name: str
    reasoning: bool = False
    litellm_prefix: str | None = None


class ProviderDef(BaseModel):
    """Everything known about one provider family."""

    model_config = ConfigDict(frozen=True)

    provider: Provider
    models: dict[ModelClass, ModelDef]
    reasoning_options: dict[str, Any] = {}
    tool_options: dict[str, Any] = {}
    litellm_prefix: str | None = None
    api_key: str | None = None
    api_base: str | None = None

    def prefix_for(self, model: ModelDef) -> str:
        """LiteLLM routing prefix for *model* (defaults to the provider name)."""
        return model.litellm_prefix or self.litellm_prefix or self.provider.value


def parse_model_id(model_id: str) -> tuple[Provider, ModelClass]:
    """Split ``<provider>:<modelClass>`` into its typed halves.

    Raises:
        ConfigurationError: If the identifier is malformed or names an unknown
            provider or model class.
    """
    provider_name, sep, model_class = model_id.partition(":")
    if not sep or not provider_name or not model_class:
        raise ConfigurationError(
            f"model identifier {model_id!r} must have the form '<provider>:<modelClass>'"
        )
    try:
        provider = Provider(provider_name)
    except ValueError:
        raise ConfigurationError(f"unknown provider {provider_name!r}") from None
    if model_class not in MODEL_CLASSES:
        raise ConfigurationError(f"unknown model class {model_class!r}")
    return provider, model_class  # type: ignore[return-value]


class ProviderRegistry:
    """Immutable lookup table of providers and their models."""

    def __init__(self, providers: Mapping[Provider, ProviderDef]) -> None:
        self._providers: dict[Provider, ProviderDef] = dict(providers)

    @property
    def providers(self) -> tuple[Provider, ...]:
        return tuple(self._providers)

    def provider_def(self, provider: Provider) -> ProviderDef:
        try:
            return self._providers[provider]
        except KeyError:
            raise ConfigurationError(f"provider {provider.value!r} is not configured") from None

    def resolve(self, model_id: str) -> ResolvedModel:
        """Resolve *model_id* to a descriptor and its call options.

        Reasoning and tool options are only included for reasoning-capable
        models. Tool options are applied by the client only when a call
        carries tools.

        Raises:
            ConfigurationError: If the provider or model class is unknown.
        """
        provider, model_class = parse_model_id(model_id)
        pdef = self.provider_def(provider)
        model = pdef.models.get(model_class)
        if model is None:
            raise ConfigurationError(
                f"provider {provider.value!r} has no {model_class!r} model"
            )

        descriptor = ModelDescriptor(
            provider=provider,
            model_class=model_class,
            name=model.name,
            reasoning_capable=model.reasoning,
        )
        options = copy.deepcopy(pdef.reasoning_options) if model.reasoning else {}
        tool_options = copy.deepcopy(pdef.tool_options) if model.reasoning else {}
        return ResolvedModel(
            descriptor=descriptor,
            litellm_model=f"{pdef.prefix_for(model)}/{model.name}",
            request_options=options,
            tool_options=tool_options,
            api_key=pdef.api_key,
            api_base=pdef.api_base,
        )

    def descriptor_for(self, model_id: str) -> ModelDescriptor:
        """Resolve *model_id* to its descriptor only."""
        return self.resolve(model_id).descriptor

    def descriptors(self) -> list[ModelDescriptor]:
        """All configured model descriptors, in registration order."""
        result: list[ModelDescriptor] = []
        for provider, pdef in self._providers.items():
            for model_class in pdef.models:
                result.append(self.descriptor_for(f"{provider.value}:{model_class}"))
        return result

    def catalog(self) -> dict[str, dict[str, str]]:
        """``{provider: {model_class: model_name}}`` for model-selection UIs."""
        return {
            provider.value: {model_class: model.name for model_class, model in pdef.models.items()}
            for provider, pdef in self._providers.items()
        }
