from __future__ import annotations

import logging
import sys
from typing import Any, Optional

QUIET = logging.CRITICAL + 10


class SpindownConsoleHandler(logging.StreamHandler):
    def __init__(self, parent: logging.Logger, *args: Any, **kwargs: Any) -> None:
        super().__init__(sys.stdout, *args, **kwargs)
        self.setLevel(logging.DEBUG)
        formatter = logging.Formatter("%(asctime)s %(levelname)s: %(message)s")
        formatter.datefmt = "%Y-%m-%d %H:%M:%S"
        self.setFormatter(formatter)
        parent.addHandler(self)


class LoggerFactory:
    __instance: Optional[LoggerFactory] = None
    __project_logger: Optional[logging.Logger] = None
    __console_handler: Optional[SpindownConsoleHandler] = None

    def __init__(self, parent_logger_name: str, verbose: bool = False, quiet: bool = False) -> None:
        """Virtually private constructor."""
        if LoggerFactory.__instance is None:
            self._setup(parent_logger_name, self.level_for(verbose=verbose, quiet=quiet))
            LoggerFactory.__instance = self
        else:
            raise RuntimeError(f"{self.__class__.__name__} is a singleton and was already instantiated!")

    @staticmethod
    def level_for(verbose: bool, quiet: bool) -> int:
        if quiet:
            return QUIET
        return logging.DEBUG if verbose else logging.INFO

    @classmethod
    def is_initialized(cls) -> bool:
        return cls.__instance is not None

    @classmethod
    def configure(cls, verbose: bool, quiet: bool) -> None:
        """Adjust the verbosity of an already running factory."""
        assert isinstance(cls.__project_logger, logging.Logger)
        cls.__project_logger.setLevel(cls.level_for(verbose=verbose, quiet=quiet))

    @classmethod
    def project_logger(cls) -> logging.Logger:
        assert isinstance(cls.__project_logger, logging.Logger)
        return cls.__project_logger

    @classmethod
    def _setup(cls, parent_logger_name: str, level: int) -> None:
        cls.__project_logger = logging.getLogger(parent_logger_name)
        cls.__project_logger.setLevel(level)
        for handler in [h for h in cls.__project_logger.handlers if isinstance(h, SpindownConsoleHandler)]:
            cls.__project_logger.removeHandler(handler)
        cls.__console_handler = SpindownConsoleHandler(parent=cls.__project_logger)

    @classmethod
    def get_logger(cls, module_name: str) -> logging.Logger:
        if cls.__instance is None:
            cls(parent_logger_name="spindown", verbose=True)
            print("WARNING: Logger has been initialized with default values.")
        assert isinstance(cls.__project_logger, logging.Logger)
        project_name = cls.__project_logger.name
        if module_name == project_name or module_name.startswith(f"{project_name}."):
            return logging.getLogger(module_name)
        return logging.getLogger(f"{project_name}.{module_name}")
