from typing import Protocol

from .models import CompletionRequest, CompletionResponse


class CompletionClient(Protocol):
    """A protocol for chat-completion services."""

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """
        Sends a single completion request.

        Args:
            request: The model identifier, role-tagged messages and output limit.

        Returns:
            The response holding one or more candidate completions.
        """
        ...
