from typing import Callable, Optional

from git import Actor, Repo

from config.models import CommitConfig
from core.contracts.models import CommitIdentity, CommitRecord
from utils.git import commit, read_user_config, stage_all
from utils.logger import logger


def resolve_identity(repo: Repo, config: Optional[CommitConfig] = None) -> CommitIdentity:
    """
    Returns the committer identity, preferring configured values over Git configuration.

    Raises:
        ConfigError: If a value is neither configured nor set in Git configuration.
    """
    config = config or CommitConfig()
    return CommitIdentity(
        name=config.author_name or read_user_config(repo, "name"),
        email=config.author_email or read_user_config(repo, "email"),
    )


def confirm(prompt_fn: Callable[[str], str], token: str = "yes") -> bool:
    """
    Asks the user to approve the message.

    The answer is stripped and compared case-insensitively, so ``YES`` approves
    too. Any other answer declines.
    """
    answer = prompt_fn(f"Is this commit message okay? ({token}/no)")
    return (answer or "").strip().lower() == token.lower()


def commit_changes(repo: Repo, message: str, identity: CommitIdentity) -> CommitRecord:
    """
    Stages every change in the working tree and commits it with ``message``.

    Raises:
        CommitError: If staging or committing fails.
    """
    logger.info("Staging all changes...")
    stage_all(repo)

    author = Actor(identity.name, identity.email)
    new_commit = commit(repo, message, author)
    logger.success(f"Created commit {new_commit.hexsha}")

    return CommitRecord(
        hexsha=new_commit.hexsha,
        author_name=identity.name,
        author_email=identity.email,
        timestamp=new_commit.authored_datetime,
    )
