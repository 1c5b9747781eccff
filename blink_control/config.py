"""
Configuration management for the blink command line tool.

Configuration is read only from a file passed explicitly with --config;
nothing is stored between invocations. Supports YAML and JSON formats.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class BlinkConfig:
    """Settings for one blink invocation."""

    # Device node to write to, None for standard output
    device: Optional[str] = None
    log_level: str = "WARNING"

    def __post_init__(self):
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, "
                f"got {self.log_level!r}"
            )


def load_config(config_path: Union[str, Path]) -> BlinkConfig:
    """
    Load configuration from file.

    Args:
        config_path: Path to a .yaml/.yml or .json file

    Returns:
        BlinkConfig instance

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be parsed or holds invalid values
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    logger.info(f"Loading config from {path}")

    try:
        with open(path, 'r') as f:
            if path.suffix in ('.yaml', '.yml'):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValueError(f"Failed to parse config file: {e}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping, got {type(data).__name__}")

    return _dict_to_config(data)


def save_config(
    config: BlinkConfig,
    config_path: Union[str, Path],
    format: str = "auto"
) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save
        config_path: Output file path
        format: "yaml", "json", or "auto" (detect from extension)
    """
    path = Path(config_path)

    if format == "auto":
        if path.suffix in ('.yaml', '.yml'):
            format = "yaml"
        else:
            format = "json"

    data = _config_to_dict(config)

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        if format == "yaml":
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)

    logger.info(f"Saved config to {path}")


def _dict_to_config(data: Dict[str, Any]) -> BlinkConfig:
    """Convert dictionary to BlinkConfig."""
    return BlinkConfig(
        device=data.get('device'),
        log_level=data.get('log_level', 'WARNING'),
    )


def _config_to_dict(config: BlinkConfig) -> Dict[str, Any]:
    """Convert BlinkConfig to dictionary."""
    return {
        'device': config.device,
        'log_level': config.log_level,
    }


def create_default_config(output_path: Union[str, Path]) -> None:
    """
    Create a default configuration file with comments.

    Args:
        output_path: Path to write the config file
    """
    path = Path(output_path)

    if path.suffix in ('.yaml', '.yml'):
        content = """# blink configuration
# ===================

# Device node to write reports to (null writes to standard output)
# e.g. /dev/hidraw0
device: null

# Log level: DEBUG, INFO, WARNING, ERROR or CRITICAL
log_level: WARNING
"""
    else:
        content = json.dumps(_config_to_dict(BlinkConfig()), indent=2)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        f.write(content)

    logger.info(f"Created default config at {path}")
