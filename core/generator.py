from config.models import ModelConfig
from core.contracts.models import ChangeReport, CompletionRequest
from core.contracts.provider import CompletionClient
from core.prompt import PromptBuilder
from utils.errors import GenerationError
from utils.logger import logger


class MessageGenerator:
    """
    Asks a completion service for a semantic commit message describing a change report.
    """

    def __init__(self, client: CompletionClient, model: ModelConfig, prompts: PromptBuilder):
        self.client = client
        self.model = model
        self.prompts = prompts

    def build_request(self, report: ChangeReport) -> CompletionRequest:
        return CompletionRequest(
            model=self.model.name,
            messages=self.prompts.build(report),
            max_tokens=self.model.max_tokens,
            parameters=self.model.parameters,
        )

    async def generate(self, report: ChangeReport) -> str:
        """
        Returns the trimmed text of the first candidate completion.

        Raises:
            GenerationError: If the request fails or the response holds no usable text.
        """
        request = self.build_request(report)
        logger.info(f"Requesting commit message from model '{request.model}'...")
        logger.debug(f"User prompt:\n{request.messages[-1].content}")

        response = await self.client.complete(request)
        if not response.choices:
            raise GenerationError("Could not generate commit message: the response contained no choices.")

        message = response.choices[0].text.strip()
        if not message:
            raise GenerationError("Could not generate commit message: the first choice was empty.")

        logger.info("Commit message generated.")
        return message
