"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from docbuilder.deep_merge import deep_merge
from docbuilder.errors import ConfigError
from docbuilder.reference_loaders import DEFAULT_XREF_SERVICE

DEFAULT_CONFIG: dict[str, Any] = {
    "xref_service": DEFAULT_XREF_SERVICE,
    "remote": {
        "enabled": True,
        "timeout": 10.0,
        "connect_timeout": 5.0,
    },
    "cache_dir": "_cache",
    "page_extension": ".md",
    "site": {
        "title_suffix": "",
    },
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults.

    A missing file leaves the defaults in place.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            try:
                user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as e:
                msg = f"Cannot parse config file {p}: {e}"
                raise ConfigError(msg) from e
            if not isinstance(user_config, dict):
                msg = f"Config file {p} must contain a mapping"
                raise ConfigError(msg)
            config = deep_merge(config, user_config)
    return config
