"""Loading and saving of meshstack.yaml."""

import os
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import ValidationError

from meshstack.errors import ConfigInvalid, ConfigMissing
from meshstack.runtime.config.config_data import ProjectConfig
from meshstack.utils.paths import CONFIG_FILE_NAME

CONFIG_PATH = Path(CONFIG_FILE_NAME)


def _describe_validation_error(error: ValidationError) -> str:
    lines = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue["loc"]) or "<root>"
        lines.append(f"  • {location}: {issue['msg']}")
    return "\n".join(lines)


def build_config(fields: dict[str, Any], source: str = CONFIG_FILE_NAME) -> ProjectConfig:
    """Validate configuration fields into a ProjectConfig.

    Raises:
        ConfigInvalid: If a field is missing or empty
    """
    try:
        return ProjectConfig.model_validate(fields)
    except ValidationError as e:
        raise ConfigInvalid(
            f"Invalid configuration in {source}",
            details=_describe_validation_error(e),
        ) from e


def parse_config(content: str, source: str = CONFIG_FILE_NAME) -> ProjectConfig:
    """Parse and validate the YAML text of a configuration record.

    Raises:
        ConfigInvalid: If the YAML is malformed or a field is missing or empty
    """
    try:
        loaded: Any = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigInvalid(f"Error parsing {source}", details=str(e)) from e

    if not isinstance(loaded, dict):
        raise ConfigInvalid(
            f"Invalid {source}: expected a mapping of configuration fields",
            details="Required fields: project_name, language, service_mesh, ci_cd",
        )

    return build_config(loaded, source)


def load_config(file_path: Path = CONFIG_PATH) -> ProjectConfig:
    """Load and validate a meshstack.yaml file.

    Args:
        file_path: Path to the YAML file (default: meshstack.yaml)

    Returns:
        Validated ProjectConfig

    Raises:
        ConfigMissing: If the file doesn't exist
        ConfigInvalid: If the YAML is malformed or fails validation
    """
    if not file_path.is_file():
        raise ConfigMissing(
            f"{file_path.name} not found.",
            details="Run `meshstack init` to create a project configuration.",
        )

    logger.debug(f"Loading configuration from {file_path}")
    config = parse_config(file_path.read_text(), source=file_path.name)
    logger.debug(
        f"Loaded project '{config.project_name}' "
        f"(language={config.language}, mesh={config.service_mesh}, ci={config.ci_cd})"
    )
    return config


def load_config_if_present(file_path: Path = CONFIG_PATH) -> ProjectConfig | None:
    """Load the configuration when the file exists, otherwise return None.

    A file that exists but is invalid still raises ConfigInvalid.
    """
    if not file_path.is_file():
        logger.debug(f"No configuration at {file_path}, continuing without one")
        return None
    return load_config(file_path)


def save_config(config: ProjectConfig, file_path: Path = CONFIG_PATH) -> None:
    """Save the given configuration to a YAML file. In order to do it transactionally,
    it first writes to a temporary file and then renames it to the target path.

    Args:
        config: ProjectConfig instance to save
        file_path: Destination path (default: meshstack.yaml)
    """
    temp_path = file_path.with_suffix(".tmp")

    with open(temp_path, "w") as f:
        yaml.safe_dump(
            config.model_dump(),
            f,
            default_flow_style=False,
            sort_keys=False,
        )

    os.replace(temp_path, file_path)
    logger.debug(f"Saved configuration to {file_path}")
