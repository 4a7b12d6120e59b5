"""Shared helpers for frozen configuration dataclasses."""

from __future__ import annotations

import json
from dataclasses import asdict, fields
from typing import Any, Dict, Iterable, Mapping, Tuple

from moselect.foundation.exceptions import ConfigurationError, MissingConfigError


class _SerializableConfig:
    """Mixin giving dataclass configs plain-dict and JSON views."""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)  # type: ignore[call-overload]

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, indent=indent)

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))  # type: ignore[arg-type]


def _require_fields(cfg: Mapping[str, Any], required: Iterable[str], name: str) -> None:
    """Raise MissingConfigError for the first required key absent from ``cfg``."""
    for key in required:
        if key not in cfg:
            raise MissingConfigError(key, config_class=name)


def _reject_unknown_keys(data: Mapping[str, Any], allowed: Iterable[str], name: str) -> None:
    allowed = tuple(allowed)
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise ConfigurationError(
            f"Unknown {name} keys: {', '.join(unknown)}.",
            f"Valid keys: {', '.join(allowed)}",
        )
