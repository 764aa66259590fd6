"""
Editor configuration.

Settings can be built directly, from a dict, or from a YAML document:

    strict: true
    trace: false
    log_level: DEBUG
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict

import yaml


class ConfigError(Exception):
    """Raised when a configuration document is invalid."""
    pass


@dataclass
class EditorConfig:
    """
    Options for compiling and running a script.

    Properties:
        strict: Raise ScriptError on unparseable script text
        trace: Log every cycle at DEBUG level
        log_level: Root logging level used by the demo
    """

    strict: bool = False
    trace: bool = False
    log_level: str = "WARNING"

    def __post_init__(self):
        for name in ("strict", "trace"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"'{name}' must be a boolean, got {getattr(self, name)!r}")
        if not isinstance(self.log_level, str):
            raise ConfigError(f"'log_level' must be a string, got {self.log_level!r}")
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"Unknown log level: {self.log_level}")


def config_from_dict(d: Dict[str, Any] | None) -> EditorConfig:
    if d is None:
        return EditorConfig()
    if not isinstance(d, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(d).__name__}")

    known = {f.name for f in fields(EditorConfig)}
    unknown = set(d) - known
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
    return EditorConfig(**d)


def config_to_dict(config: EditorConfig) -> Dict[str, Any]:
    return {"strict": config.strict, "trace": config.trace, "log_level": config.log_level}


def config_from_yaml(text: str) -> EditorConfig:
    try:
        d = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML configuration: {e}")
    return config_from_dict(d)


def load_config(path: str) -> EditorConfig:
    """
    Load configuration from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the document is invalid
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Config file not found: {path}")
    return config_from_yaml(content)


__all__ = [
    "ConfigError",
    "EditorConfig",
    "config_from_dict",
    "config_to_dict",
    "config_from_yaml",
    "load_config",
]
