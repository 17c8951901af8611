from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlencode
import re

from ..endpoints import DEFAULT_BASE_URL, absolute_url
from .base import Services, flag, heading, integer, option, require, text

name = "typing_animation"
title = "Typing Animation"

TTL = 10 * 60
CACHE_CAPACITY = 100
KEY_FIELDS = (
    "text", "font", "size", "color", "duration", "loop", "cursor", "width", "height", "theme",
    "speed", "pause_after", "cursor_color", "background_color", "font_weight", "centered",
    "shadow", "gradient", "border_radius",
)
PLACEHOLDER = "<!-- Typing Animation: enter some text to animate -->"

DEFAULT_TEXT = "Hello, I am a developer!"
MAX_TEXT = 500

_HEX = re.compile(r"^#[0-9a-fA-F]{6}$")

@dataclass(frozen=True)
class TypingConfig:
    text: str = ""
    font: str | None = None
    size: int | None = None
    color: str | None = None
    duration: int | None = None
    loop: bool = True
    cursor: bool = True
    width: int | None = None
    height: int | None = None
    theme: str = "default"
    speed: int | None = None
    pause_after: int | None = None
    cursor_color: str | None = None
    background_color: str | None = None
    font_weight: str | None = None
    centered: bool = False
    shadow: bool = False
    gradient: str | None = None
    border_radius: int | None = None
    # markdown only
    hide_title: bool = False
    custom_title: str | None = None

def parse(raw: Mapping[str, Any]) -> TypingConfig:
    return TypingConfig(
        text=str(raw.get("text") or ""),
        font=text(raw.get("font")),
        size=integer(raw.get("size")),
        color=text(raw.get("color")),
        duration=integer(raw.get("duration")),
        loop=raw.get("loop") is not False,
        cursor=raw.get("cursor") is not False,
        width=integer(raw.get("width")),
        height=integer(raw.get("height")),
        theme=str(raw.get("theme") or "default"),
        speed=integer(raw.get("speed")),
        pause_after=integer(option(raw, "pause_after")),
        cursor_color=text(option(raw, "cursor_color")),
        background_color=text(option(raw, "background_color")),
        font_weight=text(option(raw, "font_weight")),
        centered=raw.get("centered") is True,
        shadow=raw.get("shadow") is True,
        gradient=text(raw.get("gradient")),
        border_radius=integer(option(raw, "border_radius")),
        hide_title=bool(option(raw, "hide_title", False)),
        custom_title=text(option(raw, "custom_title")),
    )

def validate(config: TypingConfig) -> None:
    require(bool(config.text.strip()), "Text is required for typing animation")

def _within(value: int | None, low: int, high: int) -> bool:
    return value is not None and low <= value <= high

def dimensions(config: TypingConfig) -> tuple[int, int]:
    width = config.width if _within(config.width, 100, 1200) else 600
    height = config.height if _within(config.height, 50, 400) else 100
    return width, height

def params(config: TypingConfig) -> dict[str, str]:
    p = {"text": config.text[:MAX_TEXT] if config.text.strip() else DEFAULT_TEXT}
    if config.font:
        p["fontFamily"] = config.font
    if _within(config.size, 8, 72):
        p["fontSize"] = str(config.size)
    if config.color and _HEX.match(config.color):
        p["color"] = config.color
    if config.cursor_color and _HEX.match(config.cursor_color):
        p["cursorColor"] = config.cursor_color
    if config.background_color:
        p["backgroundColor"] = config.background_color
    if _within(config.speed, 50, 2000):
        p["speed"] = str(config.speed)
    if config.duration and config.duration > 0:
        # total duration spread over the text, clamped to the per-char range
        per_char = config.duration // len(p["text"])
        p["speed"] = str(max(50, min(2000, per_char)))
    if _within(config.pause_after, 500, 10000):
        p["pauseAfter"] = str(config.pause_after)
    p["loop"] = flag(config.loop)
    p["cursor"] = flag(config.cursor)
    p["centered"] = flag(config.centered)
    p["shadow"] = flag(config.shadow)
    width, height = dimensions(config)
    p["width"] = str(width)
    p["height"] = str(height)
    if config.font_weight:
        p["fontWeight"] = config.font_weight
    if config.gradient:
        p["gradient"] = config.gradient
    if config.border_radius is not None:
        p["borderRadius"] = str(config.border_radius)
    p["theme"] = config.theme
    return p

def build_url(config: TypingConfig, base_url: str = DEFAULT_BASE_URL) -> str:
    return absolute_url(base_url, f"/api/typing-animation?{urlencode(params(config))}")

async def produce(config: TypingConfig, services: Services) -> str:
    return await services.endpoint.fetch(build_url(config, services.base_url), method="HEAD")

def synthesize(config: TypingConfig, arrangement: str | None = None, base_url: str = DEFAULT_BASE_URL) -> str:
    if not config.text.strip():
        return PLACEHOLDER
    width, height = dimensions(config)
    md = heading(config.custom_title or title, config.hide_title)
    md += '<div align="center">\n\n'
    md += f'<img src="{build_url(config, base_url)}" alt="{title}" width="{width}" height="{height}" />\n\n'
    md += "</div>\n"
    return md
