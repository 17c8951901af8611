from __future__ import annotations

from dataclasses import asdict, is_dataclass
from typing import Any, Iterable, Mapping
import json

def _plain(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return _plain(asdict(value))
    if isinstance(value, Mapping):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    # dates and other YAML scalars
    return str(value)

def _field(config: Any, name: str) -> Any:
    if isinstance(config, Mapping):
        return config.get(name)
    return getattr(config, name, None)

def config_hash(config: Any, fields: Iterable[str]) -> str:
    """Canonical key for the artifact-relevant fields of a widget config.

    Works with dataclass configs or plain mappings. Only ``fields`` are
    serialized, with sorted keys, so unrelated or reordered fields never
    change the key.
    """
    subset = {name: _plain(_field(config, name)) for name in fields}
    return json.dumps(subset, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
