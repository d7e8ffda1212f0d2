"""Loading ReaderSettings from YAML files."""

from pathlib import Path

import yaml

from lazy_resources.exceptions import ConfigurationError
from lazy_resources.models import ReaderSettings


def load_settings(path: Path | str) -> ReaderSettings:
    """Read ReaderSettings from a YAML document.

    Example file:

        packages:
          - myapp.texts
        directories:
          - ./templates
        cache_mode: relaxed
        audit_log: ./logs/resources.jsonl

    An empty file yields the default settings.

    Args:
        path: Path to the YAML file

    Returns:
        ReaderSettings built from the file

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or
                            does not hold a mapping
    """
    path = Path(path).expanduser()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read settings file {path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in settings file {path}: {e}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Settings must be a YAML dictionary, got {type(data).__name__}"
        )

    for key in ("packages", "directories", "exclude_patterns", "skip_suffixes"):
        if key in data and not isinstance(data[key], list):
            raise ConfigurationError(f"Setting '{key}' must be a list")

    for key in ("encoding", "cache_mode", "audit_log"):
        if key in data and not isinstance(data[key], str):
            if key == "audit_log" and data[key] is None:
                continue
            raise ConfigurationError(f"Setting '{key}' must be a string")

    settings = ReaderSettings.from_dict(data)

    # Relative directories are relative to the settings file
    settings.directories = [
        str(path.parent / directory) if not Path(directory).expanduser().is_absolute()
        else directory
        for directory in settings.directories
    ]
    return settings
