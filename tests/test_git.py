import configparser
from pathlib import Path

import git
import pytest

from tests.conftest import commit_file
from utils.errors import CommitError, ConfigError, DiffError, RepositoryError
from utils.git import (
    get_head_commit,
    get_status,
    open_repository,
    read_committed_file,
    read_user_config,
    read_worktree_file,
    stage_all,
)


def test_open_repository_from_subdirectory(git_repo):
    subdir = Path(git_repo.working_tree_dir) / "pkg"
    subdir.mkdir()
    repo = open_repository(str(subdir))
    assert Path(repo.working_tree_dir) == Path(git_repo.working_tree_dir)


def test_open_repository_not_a_repo(tmp_path):
    plain = tmp_path / "plain"
    plain.mkdir()
    with pytest.raises(RepositoryError, match="not a Git repository"):
        open_repository(str(plain), search_parent_directories=False)


def test_open_repository_missing_path(tmp_path):
    with pytest.raises(RepositoryError, match="does not exist"):
        open_repository(str(tmp_path / "missing"))


def test_get_status_reports_modified_and_untracked(git_repo):
    root = Path(git_repo.working_tree_dir)
    (root / "a.txt").write_text("Hello, Go!")
    (root / "docs").mkdir()
    (root / "docs" / "new.md").write_text("# New\n")

    files = get_status(git_repo)

    assert [(f.path, f.index, f.worktree) for f in files] == [
        ("a.txt", " ", "M"),
        ("docs/new.md", "?", "?"),
    ]


def test_get_status_reports_rename_destination(git_repo):
    git_repo.git.mv("a.txt", "b.txt")

    files = get_status(git_repo)

    assert [f.path for f in files] == ["b.txt"]
    assert files[0].index == "R"


def test_get_status_clean_tree(git_repo):
    assert get_status(git_repo) == []


def test_read_committed_file(git_repo):
    head = get_head_commit(git_repo)
    assert read_committed_file(head, "a.txt") == "Hello, World!"
    assert read_committed_file(head, "missing.txt") is None
    assert read_committed_file(None, "a.txt") is None


def test_get_head_commit_without_commits(empty_repo):
    assert get_head_commit(empty_repo) is None


def test_read_worktree_file_missing(git_repo):
    (Path(git_repo.working_tree_dir) / "a.txt").unlink()
    with pytest.raises(DiffError, match="Could not read 'a.txt' from the working tree"):
        read_worktree_file(git_repo, "a.txt")


def test_read_user_config(git_repo):
    assert read_user_config(git_repo, "name") == "Test User"
    assert read_user_config(git_repo, "email") == "test@example.com"


def test_read_user_config_missing(git_repo, mocker):
    reader = mocker.MagicMock()
    reader.get_value.side_effect = configparser.NoOptionError("name", "user")
    mocker.patch.object(type(git_repo), "config_reader", return_value=reader)

    with pytest.raises(ConfigError, match="Could not get author name from git config"):
        read_user_config(git_repo, "name")


def test_stage_all_includes_deletions(git_repo):
    commit_file(git_repo, "b.txt", "b")
    root = Path(git_repo.working_tree_dir)
    (root / "b.txt").unlink()
    (root / "c.txt").write_text("c")

    stage_all(git_repo)

    staged = {d.a_path or d.b_path: d.change_type for d in git_repo.head.commit.diff()}
    assert staged == {"b.txt": "D", "c.txt": "A"}


def test_stage_all_failure(git_repo, mocker):
    mocker.patch.object(git_repo, "git")
    git_repo.git.add.side_effect = git.GitCommandError("add", 128, stderr="fatal: index.lock exists")

    with pytest.raises(CommitError, match="Could not add changes"):
        stage_all(git_repo)
