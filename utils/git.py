import configparser
from pathlib import Path
from typing import List, Optional

import git
from git import Actor, Repo

from core.contracts.models import FileStatus
from utils.errors import CommitError, ConfigError, DiffError, RepositoryError


def open_repository(path: str = ".", search_parent_directories: bool = True) -> Repo:
    """
    Opens the Git repository containing ``path``.

    Raises:
        RepositoryError: If the path does not exist, is not inside a Git
            repository, or the repository has no working tree.
    """
    try:
        repo = Repo(path, search_parent_directories=search_parent_directories)
    except git.NoSuchPathError as e:
        raise RepositoryError(f"Could not open repository: path '{path}' does not exist.") from e
    except git.InvalidGitRepositoryError as e:
        raise RepositoryError(f"Could not open repository: '{path}' is not a Git repository.") from e

    if repo.bare or not repo.working_tree_dir:
        raise RepositoryError(f"Could not get worktree: repository at '{path}' is bare.")
    return repo


def get_status(repo: Repo) -> List[FileStatus]:
    """
    Lists the paths that differ from HEAD or are untracked.

    Entries are returned in the order ``git status`` reports them. For renames
    and copies only the destination path is reported.

    Raises:
        RepositoryError: If the status query fails.
    """
    try:
        output = repo.git.status(porcelain=True, z=True, untracked_files="all")
    except git.GitCommandError as e:
        raise RepositoryError(f"Could not get status: {e.stderr.strip() or e}") from e

    entries = output.split("\0")
    files: List[FileStatus] = []
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        if len(entry) < 4:
            continue
        index, worktree, path = entry[0], entry[1], entry[3:]
        if index in "RC":
            # -z puts the source path of a rename or copy in the next field.
            i += 1
        files.append(FileStatus(path=path, index=index, worktree=worktree))
    return files


def get_head_commit(repo: Repo) -> Optional[git.Commit]:
    """Returns the HEAD commit, or None if the repository has no commits yet."""
    try:
        return repo.head.commit
    except ValueError:
        return None


def read_committed_file(commit: Optional[git.Commit], path: str) -> Optional[str]:
    """
    Reads ``path`` as recorded in ``commit``.

    Returns:
        The decoded content, or None if the file did not exist in the commit.

    Raises:
        DiffError: If the blob exists but cannot be read.
    """
    if commit is None:
        return None
    try:
        blob = commit.tree / path
    except KeyError:
        return None
    if blob.type != "blob":
        return None
    try:
        return blob.data_stream.read().decode("utf-8", errors="replace")
    except (OSError, ValueError) as e:
        raise DiffError(f"Could not read '{path}' at HEAD: {e}") from e


def read_worktree_file(repo: Repo, path: str) -> str:
    """
    Reads the current on-disk content of ``path``.

    Raises:
        DiffError: If the file is missing or unreadable.
    """
    full_path = Path(repo.working_tree_dir) / path
    try:
        with open(full_path, "r", encoding="utf-8", errors="replace", newline="") as f:
            return f.read()
    except OSError as e:
        raise DiffError(f"Could not read '{path}' from the working tree: {e}") from e


def read_user_config(repo: Repo, option: str) -> str:
    """
    Reads a single ``user.<option>`` value from Git configuration.

    Raises:
        ConfigError: If the value is missing or empty.
    """
    try:
        value = str(repo.config_reader().get_value("user", option)).strip()
    except (configparser.NoSectionError, configparser.NoOptionError) as e:
        raise ConfigError(f"Could not get author {option} from git config: user.{option} is not set.") from e
    if not value:
        raise ConfigError(f"Could not get author {option} from git config: user.{option} is empty.")
    return value


def stage_all(repo: Repo) -> None:
    """
    Stages every change in the working tree, like ``git add --all``.

    Raises:
        CommitError: If staging fails.
    """
    try:
        repo.git.add(all=True)
    except git.GitCommandError as e:
        raise CommitError(f"Could not add changes: {e.stderr.strip() or e}") from e


def commit(repo: Repo, message: str, author: Actor) -> git.Commit:
    """
    Creates a commit from the current index.

    Args:
        repo: The repository.
        message: The commit message.
        author: Used as both author and committer.

    Raises:
        CommitError: If the commit cannot be created.
    """
    try:
        return repo.index.commit(message, author=author, committer=author)
    except (git.GitError, OSError, ValueError) as e:
        raise CommitError(f"Could not commit changes: {e}") from e
