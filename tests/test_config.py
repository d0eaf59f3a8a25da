import io
import unittest
from unittest import mock
from pathlib import Path

import pytest

from config import logic
from config.loader import load_config
from config.logic import apply_cli_overrides, deep_merge, find_project_root, load_and_merge_configs
from config.models import Config
from utils.errors import ConfigError


class TestLoadConfig(unittest.TestCase):

    def test_env_var_substitution(self):
        with mock.patch.dict("os.environ", {"AICOMMAND_TEST_KEY": "secret"}):
            data = load_config(io.StringIO("model:\n  api_key: ${AICOMMAND_TEST_KEY}\n"))
        self.assertEqual(data, {"model": {"api_key": "secret"}})

    def test_missing_env_var(self):
        with mock.patch.dict("os.environ", {}, clear=True):
            with self.assertRaises(ConfigError):
                load_config(io.StringIO("model:\n  api_key: ${AICOMMAND_UNSET_KEY}\n"))

    def test_invalid_yaml(self):
        with self.assertRaises(ConfigError):
            load_config(io.StringIO("model: [unclosed\n"))

    def test_empty_file(self):
        self.assertEqual(load_config(io.StringIO("")), {})

    def test_non_mapping(self):
        with self.assertRaises(ConfigError):
            load_config(io.StringIO("- a\n- b\n"))


class TestDeepMerge(unittest.TestCase):

    def test_nested_dicts_merge_and_lists_replace(self):
        target = {"model": {"name": "a", "parameters": {"temperature": 0.1}}, "tags": [1, 2]}
        source = {"model": {"parameters": {"top_p": 0.9}}, "tags": [3]}
        self.assertEqual(
            deep_merge(target, source),
            {"model": {"name": "a", "parameters": {"temperature": 0.1, "top_p": 0.9}}, "tags": [3]},
        )


@pytest.fixture
def isolated_user_config(tmp_path, monkeypatch):
    monkeypatch.setattr(logic, "USER_CONFIG_PATH", tmp_path / "home" / "config.yaml")


def test_defaults(isolated_user_config, tmp_path):
    config = load_and_merge_configs(start_dir=tmp_path)
    assert config.model.provider == "openai"
    assert config.model.name == "gpt-4-turbo"
    assert config.model.max_tokens == 1000
    assert config.model.timeout_sec is None
    assert config.diff.max_size == 4000
    assert config.commit.confirm_token == "yes"


def test_project_config_overrides_defaults(isolated_user_config, git_repo):
    root = Path(git_repo.working_tree_dir)
    (root / ".aicommand.yaml").write_text("diff:\n  max_size: 50\n  style: inline\n")
    subdir = root / "src"
    subdir.mkdir()

    assert find_project_root(subdir) == root
    config = load_and_merge_configs(start_dir=subdir)

    assert config.diff.max_size == 50
    assert config.diff.style == "inline"
    assert config.model.name == "gpt-4-turbo"


def test_custom_config_replaces_others(isolated_user_config, tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text("model:\n  provider: dummy\n")

    config = load_and_merge_configs(custom_config_path=str(path), start_dir=tmp_path)

    assert config.model.provider == "dummy"
    assert config.model.base_url is None


def test_custom_config_missing(isolated_user_config, tmp_path):
    with pytest.raises(ConfigError, match="Custom config file not found"):
        load_and_merge_configs(custom_config_path=str(tmp_path / "nope.yaml"))


def test_invalid_values(isolated_user_config, tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text("diff:\n  style: html\n")
    with pytest.raises(ConfigError, match="validation failed"):
        load_and_merge_configs(custom_config_path=str(path))


def test_cli_overrides():
    config = apply_cli_overrides(Config(), provider="dummy", model="gpt-4o")
    assert (config.model.provider, config.model.name) == ("dummy", "gpt-4o")
    config = apply_cli_overrides(Config(), provider=None, model=None)
    assert (config.model.provider, config.model.name) == ("openai", "gpt-4-turbo")
