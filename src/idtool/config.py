"""Configuration loading for idtool."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".idtool"


@dataclass
class FormatConfig:
    """Settings for the fmt command.

    Attributes:
        indent: Spaces used to indent block members in canonical output.
        file_mode: Permission bits for files created by fmt.
    """
    indent: int = 4
    file_mode: int = 0o777


@dataclass
class ToolConfig:
    """Top-level idtool configuration."""
    format: FormatConfig = field(default_factory=FormatConfig)
    log_level: str = "WARNING"


def _parse_file_mode(value: Any) -> int:
    """Accept an integer or an octal string such as "0644" or "0o644"."""
    if isinstance(value, bool):
        raise ValueError(f"invalid file mode: {value!r}")
    if isinstance(value, int):
        mode = value
    else:
        text = str(value).strip().lower()
        if text.startswith("0o"):
            text = text[2:]
        mode = int(text, 8)
    if not 0 <= mode <= 0o7777:
        raise ValueError(f"file mode out of range: {value!r}")
    return mode


def _parse_indent(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 < value <= 16:
        raise ValueError(f"invalid indent: {value!r}")
    return value


def load_config(config_path: Path | None = None) -> ToolConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Explicit config file. If None, `.idtool` in the current
            directory is used when present.

    Returns:
        ToolConfig with loaded or default values.

    Notes:
        Missing files and unparseable content yield the defaults. Expected
        YAML structure:

        ```yaml
        format:
          indent: 4
          file_mode: "0777"
        log_level: INFO
        ```
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILE_NAME

    if not config_path.exists():
        return ToolConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            return ToolConfig()

        format_data = data.get("format", {})
        if not isinstance(format_data, dict):
            format_data = {}

        defaults = FormatConfig()
        format_config = FormatConfig(
            indent=_parse_indent(format_data.get("indent", defaults.indent)),
            file_mode=_parse_file_mode(format_data.get("file_mode", defaults.file_mode)),
        )
        return ToolConfig(
            format=format_config,
            log_level=str(data.get("log_level", ToolConfig.log_level)),
        )
    except (yaml.YAMLError, OSError, TypeError, ValueError) as e:
        logger.warning(f"Ignoring invalid config file {config_path}: {e}")
        return ToolConfig()
