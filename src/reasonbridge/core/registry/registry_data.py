"""Static provider data and a helper to build the default registry."""

from reasonbridge.core.interface.config import Provider
from reasonbridge.core.registry.capabilities import ModelDef, ProviderDef, ProviderRegistry

# ---------------------------------------------------------------------------
# Known providers
# ---------------------------------------------------------------------------

KNOWN_PROVIDERS: dict[Provider, ProviderDef] = {
    Provider.OPENAI: ProviderDef(
        provider=Provider.OPENAI,
        reasoning_options={
            "reasoning_effort": {"effort": "high", "summary": "detailed"},
        },
        tool_options={"parallel_tool_calls": True},
        models={
            "default": ModelDef(name="gpt-4o"),
            "smart": ModelDef(name="o3", reasoning=True, litellm_prefix="openai/responses"),
        },
    ),
    Provider.ANTHROPIC: ProviderDef(
        provider=Provider.ANTHROPIC,
        reasoning_options={
            "thinking": {"type": "enabled", "budget_tokens": 12_000},
        },
        models={
            "default": ModelDef(name="claude-3-5-sonnet-20240620"),
            "smart": ModelDef(name="claude-3-7-sonnet-20250219", reasoning=True),
        },
    ),
}


def build_default_registry() -> ProviderRegistry:
    """Return a ``ProviderRegistry`` loaded with the known providers."""
    return ProviderRegistry(KNOWN_PROVIDERS)
