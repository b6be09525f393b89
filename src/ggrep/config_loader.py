"""Configuration loading for ggrep.

Settings come from an optional YAML file.  Missing keys fall back to
``DEFAULTS``; command-line flags can only switch features on top of
what the file enables.
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    'recursive': False,
    'hidden': False,
    'encoding': 'utf-8',
    'log_level': 'WARNING',
}

_TYPES = {
    'recursive': bool,
    'hidden': bool,
    'encoding': str,
    'log_level': str,
}

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigurationError(Exception):
    """Raised when a configuration file cannot be read or is invalid."""


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load settings from ``path``, or return the defaults when ``path`` is ``None``.

    Raises:
        ConfigurationError: on unreadable files, bad YAML, unknown keys or
            values of the wrong type.
    """
    cfg = dict(DEFAULTS)
    if path is None:
        return cfg
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding='utf-8'))
    except OSError as exc:
        raise ConfigurationError(f'Cannot read configuration file {path}: {exc}') from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f'Invalid YAML syntax in {path}: {exc}') from exc
    if data is None:
        logger.info('Configuration file %s is empty, using defaults', path)
        return cfg
    if not isinstance(data, dict):
        raise ConfigurationError(f'Configuration file must contain a YAML mapping, got {type(data).__name__}')

    for key, value in data.items():
        if key not in _TYPES:
            raise ConfigurationError(f'Unknown configuration key: {key}')
        if not isinstance(value, _TYPES[key]):
            raise ConfigurationError(f'{key} must be of type {_TYPES[key].__name__}, got {type(value).__name__}')
        cfg[key] = value

    cfg['log_level'] = cfg['log_level'].upper()
    if cfg['log_level'] not in LOG_LEVELS:
        raise ConfigurationError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
    try:
        codecs.lookup(cfg['encoding'])
    except LookupError as exc:
        raise ConfigurationError(f"Unknown encoding: {cfg['encoding']}") from exc
    logger.debug('Loaded configuration from %s', path)
    return cfg
