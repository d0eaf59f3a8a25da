import os
import httpx
import json

from core.contracts.models import CompletionChoice, CompletionRequest, CompletionResponse
from core.contracts.provider import CompletionClient
from config.models import ModelConfig
from core.registry import provider_registry
from utils.errors import GenerationError
from utils.logger import logger

DEFAULT_BASE_URL = "https://api.openai.com/v1"
API_KEY_ENV_VARS = ("AICOMMAND_OPEN_AI_TOKEN", "OPENAI_API_KEY")


@provider_registry.register("openai")
class OpenAIProvider(CompletionClient):
    """
    A client for OpenAI's chat completions API, or any endpoint compatible with it.
    """

    def __init__(self, config: ModelConfig):
        self.config = config
        self._api_key = config.api_key or next(
            (os.getenv(name) for name in API_KEY_ENV_VARS if os.getenv(name)), None
        )
        if not self._api_key:
            raise GenerationError(
                "OpenAI API key not found. Please set it in the config or as an environment "
                f"variable ({' or '.join(API_KEY_ENV_VARS)})."
            )
        self._base_url = config.base_url or DEFAULT_BASE_URL

    def _build_payload(self, request: CompletionRequest) -> dict:
        return {
            "model": request.model,
            "messages": [m.model_dump() for m in request.messages],
            "max_tokens": request.max_tokens,
            **request.parameters,
        }

    async def _request(self, payload: dict) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.config.timeout_sec,
        ) as client:
            try:
                response = await client.post("/chat/completions", json=payload)
                response.raise_for_status()
                return response
            except httpx.TimeoutException as e:
                raise GenerationError(f"Request to OpenAI timed out: {e}") from e
            except httpx.HTTPStatusError as e:
                try:
                    error_details = e.response.json()
                    error_message = error_details.get("error", {}).get("message", e.response.text)
                except (json.JSONDecodeError, AttributeError):
                    error_message = e.response.text
                raise GenerationError(f"OpenAI API error ({e.response.status_code}): {error_message}") from e
            except httpx.RequestError as e:
                raise GenerationError(f"An unexpected network error occurred: {e}") from e

    def _parse_response(self, response: httpx.Response) -> CompletionResponse:
        try:
            data = response.json()
            choices = [
                CompletionChoice(text=choice["message"]["content"] or "")
                for choice in data["choices"]
            ]
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise GenerationError(f"Invalid response from OpenAI: {e}") from e
        return CompletionResponse(choices=choices)

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """
        Sends one chat completion request. No retry is attempted.
        """
        payload = self._build_payload(request)
        logger.debug(f"Sending {len(payload['messages'])} message(s) to {self._base_url} using model '{request.model}'.")
        response = await self._request(payload)
        return self._parse_response(response)
