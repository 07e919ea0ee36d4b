"""Configuration loading for payloadmask."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .exceptions import ConfigError
from .models import LogLevel, MaskConfig
from .utils import RULE_SEPARATOR, escape_separator

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> MaskConfig:
    """
    Load a mask configuration from a YAML or JSON file.

    Example:
        rules:
          - "*"
          - "-user.password"
        redact:
          - "$.token"
        log_level: DEBUG

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If the file cannot be parsed or has wrong types
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, 'r') as f:
        content = f.read()

    # JSON is valid YAML
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file: {e}", str(path))

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping", str(path))

    config = config_from_dict(data, str(path))
    logger.debug("Loaded config from %s: %r", path, config)
    return config


def config_from_dict(data: dict, source: str = None) -> MaskConfig:
    """Build a MaskConfig from already-parsed data."""
    config = MaskConfig()

    rules = data.get("rules", "")
    if isinstance(rules, list):
        if not all(isinstance(r, str) for r in rules):
            raise ConfigError("'rules' entries must be strings", source)
        # Each list entry is one chain
        rules = RULE_SEPARATOR.join(escape_separator(r, RULE_SEPARATOR) for r in rules)
    elif rules is None:
        rules = ""
    elif not isinstance(rules, str):
        raise ConfigError("'rules' must be a string or a list of strings", source)
    config.rules = rules

    redact = data.get("redact", [])
    if isinstance(redact, str):
        redact = [redact]
    if not isinstance(redact, list) or not all(isinstance(r, str) for r in redact):
        raise ConfigError("'redact' must be a list of JSONPath strings", source)
    config.redact = redact

    if "redaction_value" in data:
        config.redaction_value = str(data["redaction_value"])

    if "log_level" in data:
        try:
            config.log_level = LogLevel(str(data["log_level"]).upper())
        except ValueError:
            raise ConfigError(f"Unknown log level: {data['log_level']}", source)

    return config
