"""sv_midi.config

Conversion settings and their YAML loader.

Settings come from, in increasing priority: the defaults below, a YAML file
(``config/export_config.yaml`` next to the package when no path is given),
and explicit overrides such as command-line flags.
"""
from dataclasses import dataclass, fields, replace
import logging
import os
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigurationError
from .tables import DEFAULT_MAX_POLYPHONY
from .validators import validate_max_polyphony, validate_tempo, validate_ticks_per_beat

logger = logging.getLogger(__name__)

DEFAULT_BPM = 120.0
DEFAULT_TICKS_PER_BEAT = 1024

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'config', 'export_config.yaml')


@dataclass(frozen=True)
class ExportConfig:
    """Settings consumed by the conversion engine."""

    bpm: float = DEFAULT_BPM
    ticks_per_beat: int = DEFAULT_TICKS_PER_BEAT
    trim_leading_silence: bool = False
    max_polyphony: int = DEFAULT_MAX_POLYPHONY

    def validate(self) -> 'ExportConfig':
        """Check every value, returning self so calls can be chained.

        Raises:
            ValidationError: If any value is out of range
        """
        validate_tempo(self.bpm)
        validate_ticks_per_beat(self.ticks_per_beat)
        validate_max_polyphony(self.max_polyphony)
        if not isinstance(self.trim_leading_silence, bool):
            raise ConfigurationError(
                f"trim_leading_silence must be a boolean, got {type(self.trim_leading_silence).__name__}")
        return self

    def with_overrides(self, **values: Any) -> 'ExportConfig':
        """Return a copy with every non-None value replaced."""
        known = {f.name for f in fields(self)}
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(f"unknown setting(s): {', '.join(sorted(unknown))}")
        return replace(self, **{k: v for k, v in values.items() if v is not None})

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_export_config(config_path: Optional[str] = None) -> ExportConfig:
    """Load settings from a YAML file.

    Args:
        config_path: YAML file path. If None, the default file is used when it
            exists, otherwise the built-in defaults are returned.

    Returns:
        Validated ExportConfig

    Raises:
        ConfigurationError: If the file cannot be read or parsed, is not a
            mapping, or holds invalid values
    """
    if config_path is None:
        if not os.path.exists(DEFAULT_CONFIG_PATH):
            return ExportConfig()
        config_path = DEFAULT_CONFIG_PATH

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            doc = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file {config_path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse config file {config_path}: {e}")

    if doc is None:
        return ExportConfig()
    if not isinstance(doc, dict):
        raise ConfigurationError(f"config file {config_path} must contain a mapping, got {type(doc).__name__}")

    known = {f.name for f in fields(ExportConfig)}
    for key in sorted(set(doc) - known):
        logger.warning("ignoring unknown setting '%s' in %s", key, config_path)

    config = ExportConfig().with_overrides(**{k: v for k, v in doc.items() if k in known})
    logger.debug("loaded config from %s: %s", config_path, config.to_dict())
    return config.validate()
