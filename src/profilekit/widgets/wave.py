from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlencode

from .. import svg
from ..endpoints import DEFAULT_BASE_URL, absolute_url
from .base import Services, heading, integer, option, text

name = "wave_animation"
title = "Wave Animation"

TTL = 5 * 60
KEY_FIELDS = ("color", "secondary_color", "speed", "count", "width", "height", "theme", "inline")
PLACEHOLDER = "<!-- Wave Animation: configure the wave to generate a banner -->"

SPEEDS = {"slow": 0.5, "medium": 1.0, "fast": 2.0}

@dataclass(frozen=True)
class WaveConfig:
    color: str = "#0099ff"
    secondary_color: str = "#00ccff"
    speed: str = "medium"
    count: int = 3
    width: int = 800
    height: int = 200
    theme: str = "light"
    inline: bool = False
    # markdown only
    hide_title: bool = False
    custom_title: str | None = None

def parse(raw: Mapping[str, Any]) -> WaveConfig:
    speed = str(option(raw, "wave_speed", raw.get("speed")) or "medium")
    return WaveConfig(
        color=str(option(raw, "wave_color", raw.get("color")) or "#0099ff"),
        secondary_color=str(option(raw, "wave_secondary_color", raw.get("secondary_color")) or "#00ccff"),
        speed=speed if speed in SPEEDS else "medium",
        count=integer(option(raw, "wave_count", raw.get("count")), 3) or 3,
        width=integer(raw.get("width"), 800) or 800,
        height=integer(raw.get("height"), 200) or 200,
        theme=str(raw.get("theme") or "light"),
        inline=bool(raw.get("inline", False)),
        hide_title=bool(option(raw, "hide_title", False)),
        custom_title=text(option(raw, "custom_title")),
    )

def validate(config: WaveConfig) -> None:
    # every field has a usable default
    return None

def params(config: WaveConfig) -> dict[str, str]:
    p = {
        "color": config.color,
        "waves": str(config.count),
        "speed": str(SPEEDS[config.speed]),
        "width": str(config.width),
        "height": str(config.height),
        "theme": config.theme,
    }
    if config.secondary_color and config.secondary_color != config.color:
        p["secondaryColor"] = config.secondary_color
    return p

def build_url(config: WaveConfig, base_url: str = DEFAULT_BASE_URL) -> str:
    return absolute_url(base_url, f"/api/wave-animation?{urlencode(params(config))}")

def render_svg(config: WaveConfig) -> str:
    secondary = config.secondary_color if config.secondary_color != config.color else None
    return svg.wave_svg(
        width=config.width,
        height=config.height,
        color=config.color,
        secondary_color=secondary,
        waves=config.count,
        speed=SPEEDS[config.speed],
        theme=config.theme,
    )

async def produce(config: WaveConfig, services: Services) -> str:
    if config.inline:
        return render_svg(config)
    return await services.endpoint.fetch(build_url(config, services.base_url))

def synthesize(config: WaveConfig, arrangement: str | None = None, base_url: str = DEFAULT_BASE_URL) -> str:
    if config.width <= 0 or config.height <= 0:
        return PLACEHOLDER
    md = heading(config.custom_title or title, config.hide_title)
    md += '<div align="center">\n\n'
    if config.inline:
        md += render_svg(config) + "\n\n"
    else:
        md += (
            f'<img src="{build_url(config, base_url)}" alt="{title}" '
            f'width="{config.width}" height="{config.height}" />\n\n'
        )
    md += "</div>\n"
    return md
