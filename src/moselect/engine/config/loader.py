"""
Config loading for programmatic entrypoints.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from moselect.foundation.exceptions import ConfigurationError

from .selection import SelectionConfig, SelectionConfigData


def _read_mapping(path: str | Path) -> Dict[str, Any]:
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file '{config_path}' does not exist.")
    suffix = config_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise ImportError("YAML config requested but PyYAML is not installed. Install with 'pip install moselect[yaml]'.") from exc
        with config_path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh) or {}
    with config_path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def load_selection_config(path: str | Path) -> SelectionConfigData:
    """
    Load a selection configuration from a YAML or JSON file.

    The document may hold the settings at top level or under a ``selection`` key.
    """
    data = _read_mapping(path)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file '{path}' must contain a mapping, got {type(data).__name__}.")
    section = data.get("selection", data)
    if not isinstance(section, dict):
        raise ConfigurationError("The 'selection' section must be a mapping.")
    return SelectionConfig.from_dict(section)


__all__ = ["load_selection_config"]
