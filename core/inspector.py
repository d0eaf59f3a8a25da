from typing import Tuple

from git import Repo

from core.contracts.models import ChangedFileSet
from utils.git import get_status, open_repository
from utils.logger import logger


class RepositoryInspector:
    """Opens a repository and lists the files changed in its working tree."""

    def __init__(self, path: str = "."):
        self.path = path

    def inspect(self) -> Tuple[Repo, ChangedFileSet]:
        """
        Returns the repository handle and its changed files.

        Raises:
            RepositoryError: If the repository cannot be opened or queried.
        """
        repo = open_repository(self.path)
        logger.debug(f"Opened repository at {repo.working_tree_dir}")

        files = ChangedFileSet(files=get_status(repo))
        logger.info(f"Found {len(files)} changed file(s).")
        for entry in files.files:
            logger.debug(f"  [{entry.index}{entry.worktree}] {entry.path}")
        return repo, files
