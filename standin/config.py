"""
Config system - settings for a standin store.

Sources, later wins:
defaults < config file (JSON/YAML) < ``STANDIN_*`` environment variables

    config = ConfigLoader.load("standin.yaml").get_config()
    schema = Schema(Db(), config=config)
    configure_logging(config.log_level)
"""

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union, get_args, get_origin

import yaml

from .faults.core import Fault, FaultDomain

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Fault):
    """A settings source could not be read or holds a bad value."""

    def __init__(self, message: str, **metadata: Any):
        super().__init__(
            code="CONFIG_INVALID",
            message=message,
            domain=FaultDomain.CONFIG,
            metadata=metadata,
        )


@dataclass
class StandinConfig:
    """
    Settings for a data layer instance.

    Attributes:
        strict_collections: Raise ``UnknownCollectionFault`` when a missing
            collection is looked up. When False the store logs a warning and
            creates an empty collection instead.
        log_level: Level handed to :func:`configure_logging`.
        fixtures_path: File or directory of seed data for the CLI.
    """
    strict_collections: bool = True
    log_level: str = "WARNING"
    fixtures_path: Optional[str] = None


class ConfigLoader:
    """
    Collects raw settings and turns them into a :class:`StandinConfig`.

    Keys that are not ``StandinConfig`` fields are ignored.
    """

    def __init__(self, env_prefix: str = "STANDIN_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(cls, path: Optional[str] = None, env_prefix: str = "STANDIN_") -> "ConfigLoader":
        """
        Read ``path`` (if given), then the environment.

        Raises:
            ConfigError: Unsupported or unreadable file
        """
        loader = cls(env_prefix=env_prefix)
        if path:
            loader._load_file(Path(path))
        loader._load_from_env()
        return loader

    def _load_file(self, path: Path):
        if path.suffix == ".json":
            parse = json.load
        elif path.suffix in (".yaml", ".yml"):
            parse = yaml.safe_load
        else:
            raise ConfigError(f"Unsupported config file type: {path}", path=str(path))

        try:
            with open(path) as f:
                data = parse(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read {path}: {e}", path=str(path)) from e

        if data is None:
            return
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must hold a mapping of settings", path=str(path))
        self.config_data.update(data)

    def _load_from_env(self):
        # STANDIN_STRICT_COLLECTIONS=no -> strict_collections: False
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                name = key[len(self.env_prefix):].lower()
                self.config_data[name] = self._parse_value(value)

    @staticmethod
    def _parse_value(value: str) -> Any:
        if value.lower() in ("true", "yes", "on", "1"):
            return True
        if value.lower() in ("false", "no", "off", "0"):
            return False
        return value

    def get_config(self) -> StandinConfig:
        """
        Validate the collected settings.

        Raises:
            ConfigError: A value of the wrong type, or an unknown log level
        """
        kwargs = {}
        for field_info in fields(StandinConfig):
            if field_info.name not in self.config_data:
                continue
            value = self.config_data[field_info.name]
            if not self._check_type(value, field_info.type):
                raise ConfigError(
                    f"Config field '{field_info.name}' expected {field_info.type}, "
                    f"got {type(value).__name__}",
                    field=field_info.name,
                )
            kwargs[field_info.name] = value

        config = StandinConfig(**kwargs)
        if config.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(
                f"Unknown log level '{config.log_level}'; use one of {', '.join(LOG_LEVELS)}",
                field="log_level",
            )
        return config

    @staticmethod
    def _check_type(value: Any, expected_type: Any) -> bool:
        if get_origin(expected_type) is Union:
            return value is None or isinstance(value, get_args(expected_type)[0])
        return isinstance(value, expected_type)


def configure_logging(level: str = "WARNING") -> None:
    """Route ``standin.*`` loggers to stderr at ``level``."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
    )
