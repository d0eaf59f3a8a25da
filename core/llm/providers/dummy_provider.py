import asyncio

from core.contracts.models import CompletionChoice, CompletionRequest, CompletionResponse
from core.contracts.provider import CompletionClient
from config.models import ModelConfig
from core.registry import provider_registry


@provider_registry.register("dummy")
class DummyProvider(CompletionClient):
    """A provider that answers every request with a fixed message, without network access."""

    def __init__(self, config: ModelConfig, response: str = "chore: update files"):
        self.config = config
        self._response = response
        self.requests = []

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        self.requests.append(request)
        await asyncio.sleep(0)
        return CompletionResponse(choices=[CompletionChoice(text=self._response)])
