from pathlib import Path

import git
import pytest
import yaml

from config.models import Config, LoggingConfig, ModelConfig

TEST_AUTHOR = git.Actor("Test User", "test@example.com")


def commit_file(repo: git.Repo, path: str, content: str, message: str = "Initial commit") -> git.Commit:
    """Writes ``path`` in the working tree and commits it."""
    full_path = Path(repo.working_tree_dir) / path
    full_path.parent.mkdir(parents=True, exist_ok=True)
    full_path.write_text(content, encoding="utf-8")
    repo.index.add([path])
    return repo.index.commit(message, author=TEST_AUTHOR, committer=TEST_AUTHOR)


@pytest.fixture
def empty_repo(tmp_path) -> git.Repo:
    """A repository without commits whose local config carries a user identity."""
    repo = git.Repo.init(tmp_path / "repo")
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
    return repo


@pytest.fixture
def git_repo(empty_repo) -> git.Repo:
    """A repository whose HEAD holds a.txt containing 'Hello, World!'."""
    commit_file(empty_repo, "a.txt", "Hello, World!")
    return empty_repo


@pytest.fixture
def test_config() -> Config:
    return Config(
        model=ModelConfig(provider="dummy"),
        logging=LoggingConfig(level="WARNING", file=None),
    )


@pytest.fixture
def config_file(tmp_path) -> Path:
    """A configuration file pointing at the OpenAI provider with a fake key."""
    path = tmp_path / "aicommand.yaml"
    path.write_text(yaml.safe_dump({
        "model": {"provider": "openai", "name": "gpt-4-turbo", "api_key": "test_api_key"},
        "logging": {"level": "WARNING", "file": None},
    }))
    return path
