"""Path management for hindsight-memory.

Local state (currently only the config file) lives under a single base
directory, overridable with the HINDSIGHT_HOME environment variable.
"""

import os
from pathlib import Path

ENV_VAR = "HINDSIGHT_HOME"


def get_hindsight_home() -> Path:
    """Get the base directory for local configuration.

    Resolution order:
    1. HINDSIGHT_HOME environment variable (if set)
    2. ~/.hindsight-memory
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser()
    return Path.home() / ".hindsight-memory"


def get_config_path() -> Path:
    return get_hindsight_home() / "config.toml"
