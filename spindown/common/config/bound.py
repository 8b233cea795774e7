from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from spindown.common.config.config_validator import ConfigValidator
from spindown.common.config.unbound import Config
from spindown.common.exceptions import ConfigValidationError
from spindown.common.logger import LoggerFactory

LOG = LoggerFactory.get_logger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).parent.parent.parent / "config"


class BoundConfig(Config):
    base_path = DEFAULT_CONFIG_DIR

    def __init__(self, config_file_name: str) -> None:
        self._config_path: Path = self.base_path / config_file_name
        self._template_path: Path = DEFAULT_CONFIG_DIR / "templates" / config_file_name
        super().__init__({}, read_only=True, origin=str(self._config_path))
        self.reload()

    @property
    def config_path(self) -> Path:
        return self._config_path

    @property
    def template_path(self) -> Path:
        return self._template_path

    @classmethod
    def set_config_base_path(cls, base_dir: Path) -> None:
        cls.base_path = base_dir

    def reload(self) -> None:
        LOG.debug(f"loading config: {self._config_path}")
        try:
            with open(self._config_path, "r") as jf:
                content = json.load(jf)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigValidationError(f"Cannot read config file {self._config_path}: {e}") from e
        if not isinstance(content, dict):
            raise ConfigValidationError(f"Config file {self._config_path} does not contain a JSON object")
        self.update(content)

    def validate(self, config: Optional[Config] = None) -> None:
        """Validate this file, or a config derived from it, against the template."""
        with ConfigValidator() as validator:
            validator.validate(self if config is None else config, self._template_path)


def get_config(config_name: str) -> BoundConfig:
    return BoundConfig(config_name)
