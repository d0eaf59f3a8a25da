from config.models import ModelConfig
from core.contracts.provider import CompletionClient
from core.registry import provider_registry
from utils.errors import AICommandError, GenerationError

import core.llm.providers  # noqa: F401


def get_provider(config: ModelConfig) -> CompletionClient:
    """
    Builds the completion client named by ``config.provider``.

    Raises:
        GenerationError: If no such provider is registered or it cannot be set up.
    """
    if config.provider not in provider_registry:
        raise GenerationError(
            f"Unknown provider '{config.provider}'. "
            f"Available providers: {sorted(provider_registry.keys())}"
        )
    try:
        return provider_registry.create(config.provider, config=config)
    except AICommandError:
        raise
    except Exception as e:
        raise GenerationError(f"Failed to create provider '{config.provider}': {e}") from e
