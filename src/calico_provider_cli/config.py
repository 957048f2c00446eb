"""YAML loader for provider option files used by the check command."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import yaml


def _parse_options(section: dict) -> Dict[str, Optional[str]]:
    options: Dict[str, Optional[str]] = {}
    for key, value in section.items():
        if isinstance(value, (dict, list)):
            raise ValueError(f"provider option '{key}' must be a scalar")
        options[str(key)] = None if value is None else str(value)
    return options


def load_options(path: Path) -> Dict[str, Optional[str]]:
    """Return the provider options stored in ``path``.

    The file is either a flat mapping of option values or a mapping with a
    ``provider`` section holding them.  ``null`` values are kept as ``None``
    so the resolver falls back to the environment for them.
    """

    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Provider configuration must be a mapping")

    section = data.get("provider", data)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError("'provider' section must be a mapping")
    return _parse_options(section)
