# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""Configuration file loading.

A configuration file is a YAML mapping from long option names to values, plus an optional ``logging`` section:

.. code-block:: yaml

    log-format: COMBINED
    no-color: true
    exclude-ip:
      - 10.0.0.1
      - 192.168.0.1-192.168.0.10
    logging:
      levels:
        tty: INFO

Each option entry is turned back into command-line tokens (``--log-format=COMBINED``, ``--no-color``, ...) so the
file goes through exactly the same grammar and dispatch as the command line.
"""

from __future__ import annotations

import dataclasses
import os
import pathlib

from typing import TYPE_CHECKING, Any

import yaml

from ..util.config import IncludeLoader
from ..util.helpers.script_info import get_env_prefix, get_script_name
from ..util.logging.config import LoggingConfig
from ..util.mixins import LoggableMixin


if TYPE_CHECKING:
    from ..options.prescan import PreScanResult


LOGGING_SECTION = "logging"
DEFAULT_GLOBAL_CONFIG = pathlib.Path("/etc") / f"{get_script_name()}.yaml"


class ConfigFileError(ValueError):
    pass


@dataclasses.dataclass(frozen=True, slots=True)
class ConfigFileData:
    path: pathlib.Path | None
    tokens: tuple[str, ...] = ()
    logging: LoggingConfig | None = None


def user_config_path() -> pathlib.Path:
    return pathlib.Path.home() / f".{get_script_name()}rc.yaml"


def global_config_path() -> pathlib.Path:
    env = os.environ.get(f"{get_env_prefix()}_GLOBAL_CONFIG")
    if env:
        return pathlib.Path(env).expanduser()
    return DEFAULT_GLOBAL_CONFIG


class ConfigFileLoader(LoggableMixin):
    def __init__(self, user_path: pathlib.Path | None = None, global_path: pathlib.Path | None = None) -> None:
        self.user_path = user_config_path() if user_path is None else user_path
        self.global_path = global_config_path() if global_path is None else global_path

    def locate(self, prescan: PreScanResult) -> pathlib.Path | None:
        """Pick the configuration file to load.

        An explicit ``--config-file`` always wins and must exist. Otherwise the user file is used if present, then the
        global file, unless ``--no-global-config`` was given.

        Raises:
            ConfigFileError: If the explicit configuration file does not exist.

        """
        if prescan.config_file_path is not None:
            path = pathlib.Path(prescan.config_file_path).expanduser()
            if not path.is_file():
                msg = f"Configuration file not found: {prescan.config_file_path}"
                raise ConfigFileError(msg)
            return path.resolve()

        if self.user_path.is_file():
            return self.user_path

        if prescan.load_global_config and self.global_path.is_file():
            return self.global_path

        return None

    def open(self, path: pathlib.Path | str) -> ConfigFileData:
        path = pathlib.Path(path)
        self.log.debug("Loading configuration file %s", path)

        try:
            with path.open(encoding="UTF-8") as f:
                data = yaml.load(f, IncludeLoader)  # noqa: S506 as IncludeLoader extends yaml.SafeLoader
        except OSError as err:
            msg = f"Unable to read configuration file {path}: {err}"
            raise ConfigFileError(msg) from err
        except yaml.YAMLError as err:
            msg = f"Invalid configuration file {path}: {err}"
            raise ConfigFileError(msg) from err

        return self._convert(data, path)

    def load(self, data: str | dict[str, Any], path: pathlib.Path | None = None) -> ConfigFileData:
        if isinstance(data, str):
            try:
                data = yaml.load(data, IncludeLoader)  # noqa: S506 as IncludeLoader extends yaml.SafeLoader
            except yaml.YAMLError as err:
                msg = f"Invalid configuration: {err}"
                raise ConfigFileError(msg) from err
        return self._convert(data, path)

    def _convert(self, data: Any, path: pathlib.Path | None) -> ConfigFileData:
        if data is None:
            return ConfigFileData(path)

        if not isinstance(data, dict):
            msg = f"Invalid configuration file format. Expected a dictionary, got {type(data).__name__}"
            raise ConfigFileError(msg)

        logging_config = self._logging_config(data.get(LOGGING_SECTION))

        tokens: list[str] = []
        for name, value in data.items():
            if name == LOGGING_SECTION:
                continue
            tokens.extend(self._tokens(str(name), value))

        self.log.debug("Configuration file options: %s", tokens)
        return ConfigFileData(path, tuple(tokens), logging_config)

    @staticmethod
    def _logging_config(data: Any) -> LoggingConfig | None:
        if data is None:
            return None
        if not isinstance(data, dict):
            msg = f"The '{LOGGING_SECTION}' section must be a dictionary, got {type(data).__name__}"
            raise ConfigFileError(msg)

        try:
            return LoggingConfig.model_validate(data)
        except (ValueError, TypeError) as err:
            msg = f"Invalid '{LOGGING_SECTION}' section: {err}"
            raise ConfigFileError(msg) from err

    @classmethod
    def _tokens(cls, name: str, value: Any) -> list[str]:
        if value is None or value is False:
            return []
        if value is True:
            return [f"--{name}"]
        if isinstance(value, (list, tuple)):
            tokens = []
            for item in value:
                tokens.extend(cls._tokens(name, item))
            return tokens
        if isinstance(value, dict):
            msg = f"Option '{name}' cannot take a mapping as its value"
            raise ConfigFileError(msg)
        return [f"--{name}={cls._scalar(value)}"]

    @staticmethod
    def _scalar(value: Any) -> str:
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
