import collections.abc
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from config.loader import load_config
from config.models import Config
from utils.errors import ConfigError
from utils.logger import logger

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"
USER_CONFIG_DIR = Path.home() / ".aicommand"
USER_CONFIG_PATH = USER_CONFIG_DIR / "config.yaml"
PROJECT_CONFIG_FILENAME = ".aicommand.yaml"


def deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merges two dictionaries.
    Arrays are replaced, not merged.
    """
    for key, value in source.items():
        if isinstance(value, collections.abc.Mapping) and key in target and isinstance(target[key], collections.abc.Mapping):
            target[key] = deep_merge(dict(target[key]), value)
        else:
            target[key] = value
    return target


def find_project_root(start_dir: Path = Path(".")) -> Optional[Path]:
    """
    Finds the repository root by searching upwards for a .git entry.
    """
    d = start_dir.resolve()
    while True:
        if (d / ".git").exists():
            return d
        if d == d.parent:
            return None
        d = d.parent


def find_project_config(start_dir: Path = Path(".")) -> Optional[Path]:
    """
    Finds the project-specific configuration file (.aicommand.yaml) in the repository root.
    """
    project_root = find_project_root(start_dir)
    if project_root:
        project_config_path = project_root / PROJECT_CONFIG_FILENAME
        if project_config_path.is_file():
            return project_config_path
    return None


def load_and_merge_configs(custom_config_path: Optional[str] = None, start_dir: Path = Path(".")) -> Config:
    """
    Loads all configurations (default, user, project) and merges them.
    A custom config path can be provided to override all others.

    Raises:
        ConfigError: If a file cannot be read or parsed, or the merged
            configuration does not validate.
    """
    config_paths: List[Path] = []

    # 1. Default config
    if DEFAULT_CONFIG_PATH.is_file():
        config_paths.append(DEFAULT_CONFIG_PATH)
    else:
        raise ConfigError("Default configuration file not found.")

    # 2. User config
    if USER_CONFIG_PATH.is_file():
        config_paths.append(USER_CONFIG_PATH)

    # 3. Project config
    project_config_path = find_project_config(start_dir)
    if project_config_path:
        config_paths.append(project_config_path)

    # If a custom config path is provided via CLI, it has the highest precedence.
    if custom_config_path:
        path = Path(custom_config_path)
        if not path.is_file():
            raise ConfigError(f"Custom config file not found at: {custom_config_path}")
        config_paths = [path] # It overrides all others
        logger.info(f"Using custom configuration from: {custom_config_path}")

    merged_config: Dict[str, Any] = {}
    for path in config_paths:
        logger.debug(f"Loading configuration from: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = load_config(f)
        except OSError as e:
            raise ConfigError(f"Could not read config at {path}: {e}") from e
        merged_config = deep_merge(merged_config, config_data)

    try:
        final_config = Config(**merged_config)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed: {e}") from e

    logger.debug(f"Final merged config: {final_config.model_dump_json(indent=2, exclude={'model': {'api_key'}})}")
    return final_config


def apply_cli_overrides(config: Config, provider: Optional[str], model: Optional[str]) -> Config:
    """Applies command-line options to the loaded configuration."""
    if provider:
        config.model.provider = provider
        logger.info(f"Overriding provider from command line: {provider}")
    if model:
        config.model.name = model
        logger.info(f"Overriding model from command line: {model}")
    return config
