# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration flags and loading for Flagtree applications.

`config_handler(settings)` returns an app option that declares two string
flags on the root command, `--config` (path to a configuration file) and
`--json` (literal JSON configuration), and registers a before hook that copies
their values into the caller-owned `ConfigSettings`. The hook is inserted ahead
of every hook already registered, so those hooks keep running, in their
original order, and already see the stored values.

Once the app has run its hooks, `ConfigSettings.load()` reads the file (YAML,
TOML or JSON by suffix) and overlays the literal JSON on top of it, and
`ConfigSettings.parse(model)` validates the merged mapping into a pydantic
model.

Example:
    settings = ConfigSettings()
    app = App(name="server", options=[config_handler(settings)])

    @app.before
    def show(ctx):
        ctx.printf("port: %s\n", settings.parse(ServerConfig).port)
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

import toml
import yaml
from pydantic import BaseModel, ValidationError

from flagtree.app import App, Option
from flagtree.context import Context
from flagtree.exceptions import ConfigError
from flagtree.logger import logger

CONFIG_FLAG = "config"
JSON_FLAG = "json"

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigSettings(BaseModel):
    """
    Values of the `--config` and `--json` flags from the last run.

    Attributes:
        path (str): Path to the configuration file, or "" if not given.
        json_text (str): Literal JSON configuration, or "" if not given.
    """

    path: str = ""
    json_text: str = ""

    def store(self, ctx: Context) -> None:
        """Copy the flag values out of a context resolved for the root command."""
        self.path = ctx.string(CONFIG_FLAG)
        self.json_text = ctx.string(JSON_FLAG)
        logger.debug(
            "Stored config settings (path=%r, json=%s).",
            self.path,
            "set" if self.json_text else "unset",
        )

    def load(self) -> dict[str, Any]:
        """
        Read the configuration file and overlay the literal JSON on it.

        Top-level keys from `--json` replace the same keys from the file.

        Returns:
            dict[str, Any]: The merged configuration; empty if neither was given.

        Raises:
            ConfigError: If the file is missing, has an unsupported suffix,
                cannot be parsed, or either source is not a mapping.
        """
        config: dict[str, Any] = {}
        if self.path:
            config.update(load_file(self.path))
        if self.json_text:
            try:
                raw_json = json.loads(self.json_text)
            except json.JSONDecodeError as error:
                raise ConfigError(f"Invalid JSON configuration: {error}") from error
            if not isinstance(raw_json, dict):
                raise ConfigError("JSON configuration must be an object")
            config.update(raw_json)
        return config

    def parse(self, model: type[ModelT]) -> ModelT:
        """Validate the merged configuration into `model`."""
        try:
            return model.model_validate(self.load())
        except ValidationError as error:
            raise ConfigError(f"Invalid configuration: {error}") from error


def load_file(file_path: Path | str) -> dict[str, Any]:
    """
    Load a configuration mapping from a YAML, TOML or JSON file.

    Args:
        file_path (Path | str): Path to the file; the suffix picks the format.

    Raises:
        ConfigError: If the file cannot be read or does not hold a mapping.
    """
    path = Path(file_path)
    if not path.is_file():
        raise ConfigError(f"No such config file: {file_path}")

    suffix = path.suffix
    try:
        with path.open("r", encoding="UTF-8") as config_file:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            elif suffix == ".json":
                raw_config = json.load(config_file)
            else:
                raise ConfigError(f"Unsupported config format: {suffix}")
    except (yaml.YAMLError, toml.TomlDecodeError, json.JSONDecodeError) as error:
        raise ConfigError(f"Could not parse config file {file_path}: {error}") from error

    if raw_config is None:
        return {}
    if not isinstance(raw_config, dict):
        raise ConfigError(f"Config file {file_path} must contain a mapping")
    return raw_config


def config_handler(settings: ConfigSettings) -> Option:
    """
    Return an app option that wires the `--config` and `--json` flags into
    `settings`.

    Raises:
        DeclarationError: When applied to an app that already declares a
            `config` or `json` flag.
    """

    def apply(app: App) -> None:
        app.add_flag(CONFIG_FLAG, help="Path to configuration file")
        app.add_flag(JSON_FLAG, help="JSON configuration (provide as literal JSON)")
        app.before(settings.store, first=True)

    return apply
