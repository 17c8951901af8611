from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import yaml

from .endpoints import DEFAULT_BASE_URL
from .storage import DEFAULT_STORAGE_PATH

SUPPORTED_RENDERERS = ("markdown", "pillow")

def _expand(path: str) -> str:
    return os.path.expanduser(os.path.expandvars(path))

@dataclass(frozen=True)
class Config:
    raw: dict

    @property
    def base_url(self) -> str:
        return str(self.raw.get("base_url") or os.environ.get("PROFILEKIT_BASE_URL") or DEFAULT_BASE_URL)

    @property
    def output_path(self) -> Path:
        out = self.raw.get("output", {}).get("path", "README.md")
        return Path(_expand(out))

    @property
    def preview_path(self) -> Path:
        out = self.raw.get("output", {}).get("preview_path", "~/.cache/profilekit/preview.png")
        return Path(_expand(out))

    @property
    def renderer_kind(self) -> str:
        kind = str(self.raw.get("renderer", {}).get("kind", "markdown"))
        if kind not in SUPPORTED_RENDERERS:
            raise ValueError(f"Unsupported renderer {kind!r}. Supported: {list(SUPPORTED_RENDERERS)}")
        return kind

    @property
    def widget_order(self) -> list[str]:
        return list(self.raw.get("readme", {}).get("widgets", ["wave_animation", "stats_layout", "animated_progress"]))

    @property
    def header(self) -> str:
        return str(self.raw.get("readme", {}).get("header", ""))

    @property
    def debounce_seconds(self) -> float:
        return float(self.raw.get("generation", {}).get("debounce_ms", 300)) / 1000

    @property
    def max_retries(self) -> int | None:
        value = self.raw.get("generation", {}).get("max_retries")
        return None if value is None else int(value)

    @property
    def backoff_seconds(self) -> float:
        return float(self.raw.get("generation", {}).get("backoff_seconds", 1.0))

    @property
    def storage_path(self) -> Path:
        return Path(_expand(str(self.raw.get("storage", {}).get("path", DEFAULT_STORAGE_PATH))))

    @property
    def storage_enabled(self) -> bool:
        return bool(self.raw.get("storage", {}).get("enabled", True))

    @property
    def github_token(self) -> str:
        return str(self.raw.get("github", {}).get("token") or os.environ.get("GITHUB_TOKEN", ""))

    def widget_options(self, name: str) -> dict:
        opts = self.raw.get(name) or {}
        if not isinstance(opts, dict):
            raise ValueError(f"{name} options must be a YAML mapping.")
        return opts

def load_config(path: str | Path) -> Config:
    p = Path(_expand(str(path)))
    raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError("config.yaml must contain a YAML mapping at top level.")
    return Config(raw=raw)
