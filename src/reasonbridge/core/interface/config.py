"""Model identity — provider, model class and the resolved descriptor."""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

ModelClass = Literal["default", "smart"]

MODEL_CLASSES: tuple[str, ...] = ("default", "smart")


class Provider(str, Enum):
    """Known provider families. Each member has a reasoning codec."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"

    def __str__(self) -> str:
        return self.value


class ModelDescriptor(BaseModel):
    """A concrete model variant of a provider.

    Doubles as the provenance record of an assistant message: once attached
    it identifies which provider (and therefore which reasoning wire shape)
    produced the message.
    """

    model_config = ConfigDict(frozen=True)

    provider: Provider
    model_class: ModelClass
    name: str
    reasoning_capable: bool = False

    @property
    def model_id(self) -> str:
        """The ``<provider>:<modelClass>`` identifier used by the UI."""
        return f"{self.provider.value}:{self.model_class}"


class ResolvedModel(BaseModel):
    """A descriptor plus everything needed to call the model via LiteLLM."""

    model_config = ConfigDict(frozen=True)

    descriptor: ModelDescriptor
    litellm_model: str
    request_options: dict[str, Any] = {}
    tool_options: dict[str, Any] = {}
    api_key: str | None = None
    api_base: str | None = None

    @property
    def provider(self) -> Provider:
        return self.descriptor.provider

    @property
    def model_id(self) -> str:
        return self.descriptor.model_id
