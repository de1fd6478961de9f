from pathlib import Path

CONFIG_FILE_NAME = "meshstack.yaml"


def get_project_root(start: Path | None = None) -> Path:
    """Get the project root directory.

    Walks up from the working directory to find the project root,
    identified by the presence of meshstack.yaml.

    Args:
        start: Directory to start from (defaults to the working directory)

    Returns:
        Path to the project root directory
    """
    current = (start or Path.cwd()).resolve()

    # Walk up the directory tree looking for meshstack.yaml
    for parent in [current, *current.parents]:
        if (parent / CONFIG_FILE_NAME).exists():
            return parent

    # Not initialized yet: the working directory is the project root
    return current
