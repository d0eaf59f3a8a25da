from typing import Optional

from git import Repo

from config.models import Config
from core.applier import commit_changes, resolve_identity
from core.contracts.models import ChangedFileSet, ChangeReport, CommitRecord, Proposal
from core.contracts.provider import CompletionClient
from core.describer import ChangeDescriber
from core.generator import MessageGenerator
from core.inspector import RepositoryInspector
from core.llm.router import get_provider
from core.prompt import PromptBuilder
from utils.errors import CommitError, DiffError, GenerationError, RepositoryError
from utils.logger import logger


class CommitPipeline:
    """
    The main pipeline for committing working-tree changes with a generated message.
    It runs inspection, description and generation, then applies the commit
    once the caller has confirmed the message.
    """

    def __init__(self, config: Config, repo_path: str = ".", client: Optional[CompletionClient] = None):
        """
        Initializes the pipeline with the given configuration.

        Args:
            config: The configuration object.
            repo_path: A path inside the repository to work on.
            client: The completion client. Resolved from ``config.model`` when omitted.
        """
        self.config = config
        self.repo_path = repo_path
        self._client = client
        self.repo: Optional[Repo] = None

    @property
    def client(self) -> CompletionClient:
        if self._client is None:
            self._client = get_provider(self.config.model)
        return self._client

    async def propose(self) -> Optional[Proposal]:
        """
        Inspects the repository, describes the changes and generates a commit message.

        Returns:
            The proposal, or None if the working tree has no changes.
        """
        logger.info("Starting commit message generation pipeline...")
        # 1. Inspect
        try:
            self.repo, files = RepositoryInspector(self.repo_path).inspect()
        except RepositoryError as e:
            logger.error(f"Failed to inspect repository: {e}")
            raise

        if not files:
            logger.warning("Working tree is clean; nothing to describe.")
            return None

        # 2. Describe
        report = self._describe(files)

        # 3. Generate
        try:
            message = await self._generator().generate(report)
        except GenerationError as e:
            logger.error(f"Failed to generate message from provider: {e}")
            raise

        return Proposal(files=files, report=report, message=message)

    def apply(self, message: str) -> CommitRecord:
        """
        Stages all changes and commits them. Only call after the user confirmed ``message``.
        """
        if self.repo is None:
            raise CommitError("Could not commit changes: no repository has been inspected.")
        try:
            identity = resolve_identity(self.repo, self.config.commit)
            return commit_changes(self.repo, message, identity)
        except CommitError as e:
            logger.error(f"Failed to commit changes: {e}")
            raise

    def _describe(self, files: ChangedFileSet) -> ChangeReport:
        describer = ChangeDescriber(
            self.repo,
            max_size=self.config.diff.max_size,
            style=self.config.diff.style,
        )
        try:
            report = describer.describe(files)
        except DiffError as e:
            logger.error(f"Failed to describe changes: {e}")
            raise
        logger.debug(f"Change report is {len(report.text)} characters long.")
        return report

    def _generator(self) -> MessageGenerator:
        prompts = PromptBuilder(
            template_dir=self.config.prompt.template_dir,
            system_template=self.config.prompt.system_template,
            user_template=self.config.prompt.user_template,
        )
        return MessageGenerator(self.client, self.config.model, prompts)
