# ==========================================
# CONFIGURATION
# ==========================================

import json
import os
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from recon_core.errors import ReconError
from recon_core.evaluator import LANGUAGE_VERSION

CONFIG_FILE = "recon.json"
USER_CONFIG_FILE = os.path.join("~", ".recon", "config.json")


class ConfigError(ReconError):
    """The configuration file is unreadable or does not validate."""


class InterpreterConfig(BaseModel):
    """Interpreter settings loaded from recon.json."""
    model_config = ConfigDict(extra="forbid")

    version: float = LANGUAGE_VERSION
    # None enables every builtin; a list enables exactly those names.
    value_functions: Optional[List[str]] = None
    record_functions: Optional[List[str]] = None
    indent: int = 2


def config_paths():
    """Candidate config locations, in lookup order."""
    return [CONFIG_FILE, os.path.expanduser(USER_CONFIG_FILE)]


def load_config(path=None):
    """
    Load interpreter configuration.

    An explicit ``path`` must exist. Otherwise the first existing file from
    ``config_paths()`` is used, falling back to defaults when there is none.

    Raises:
        ConfigError: If the file cannot be read, is not JSON, or fails validation.
    """
    if path is None:
        path = next((p for p in config_paths() if os.path.exists(p)), None)
        if path is None:
            return InterpreterConfig()
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    try:
        return InterpreterConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid config {path}: {e}") from e


def write_default_config(path=CONFIG_FILE):
    """Write a config file holding the default settings; returns the path."""
    with open(path, "w") as f:
        json.dump(InterpreterConfig().model_dump(), f, indent=2)
    return path
