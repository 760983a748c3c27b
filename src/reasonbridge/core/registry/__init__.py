"""Provider capability registry."""

from reasonbridge.core.registry.capabilities import (
    ModelDef,
    ProviderDef,
    ProviderRegistry,
    parse_model_id,
)
from reasonbridge.core.registry.loader import RegistryLoader, RegistrySpec
from reasonbridge.core.registry.registry_data import KNOWN_PROVIDERS, build_default_registry

__all__ = [
    "KNOWN_PROVIDERS",
    "ModelDef",
    "ProviderDef",
    "ProviderRegistry",
    "RegistryLoader",
    "RegistrySpec",
    "build_default_registry",
    "parse_model_id",
]
