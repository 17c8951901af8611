from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlencode

from .. import svg
from ..endpoints import DEFAULT_BASE_URL, absolute_url
from .base import Services, flag, integer, option, require, text

name = "animated_progress"
title = "Skills"

TTL = 5 * 60
KEY_FIELDS = (
    "skills", "animation_duration", "show_progress_text", "bar_height", "hide_title",
    "custom_title", "hide_border", "width", "height", "theme", "inline",
)
PLACEHOLDER = "<!-- Animated Progress: add at least one skill -->"

@dataclass(frozen=True)
class Skill:
    name: str
    level: int
    color: str | None = None

    def encode(self) -> str:
        if self.color:
            return f"{self.name}:{self.level}:{self.color}"
        return f"{self.name}:{self.level}"

@dataclass(frozen=True)
class ProgressConfig:
    skills: tuple[Skill, ...] = ()
    animation_duration: float | None = None
    show_progress_text: bool = True
    bar_height: int | None = None
    hide_title: bool = False
    custom_title: str | None = None
    hide_border: bool = False
    width: int = 400
    height: int = 300
    theme: str = "light"
    inline: bool = False
    # markdown only
    align: str = "left"

def _skill(item: Any) -> Skill:
    if isinstance(item, Mapping):
        return Skill(str(item.get("name", "")).strip(), int(item.get("level", 0)), item.get("color") or None)
    name_, _, rest = str(item).partition(":")
    level, _, color = rest.partition(":")
    return Skill(name_.strip(), int(level or 0), color.strip() or None)

def parse(raw: Mapping[str, Any]) -> ProgressConfig:
    skills = tuple(s for s in (_skill(i) for i in (raw.get("skills") or [])) if s.name)
    return ProgressConfig(
        skills=skills,
        animation_duration=option(raw, "animation_duration"),
        show_progress_text=bool(option(raw, "show_progress_text", True)),
        bar_height=option(raw, "progress_bar_height", option(raw, "bar_height")),
        hide_title=bool(option(raw, "hide_title", False)),
        custom_title=text(option(raw, "custom_title")),
        hide_border=bool(option(raw, "hide_border", False)),
        width=integer(raw.get("width"), 400) or 400,
        height=integer(raw.get("height"), 300) or 300,
        theme=str(raw.get("theme") or "light"),
        inline=bool(raw.get("inline", False)),
        align=str(raw.get("align", "left")),
    )

def validate(config: ProgressConfig) -> None:
    require(bool(config.skills), "No skills configured")

def params(config: ProgressConfig) -> dict[str, str]:
    p = {
        "skills": ",".join(s.encode() for s in config.skills),
        "animated": "true",
        "showPercentage": flag(config.show_progress_text),
        "theme": config.theme,
        "width": str(config.width),
        "height": str(config.height),
        "title": config.custom_title or title,
    }
    if config.animation_duration:
        p["animationDuration"] = str(config.animation_duration)
    if config.bar_height:
        p["barHeight"] = str(config.bar_height)
    if config.hide_title:
        p["hideTitle"] = "true"
    if config.hide_border:
        p["hideBorder"] = "true"
    return p

def build_url(config: ProgressConfig, base_url: str = DEFAULT_BASE_URL) -> str:
    return absolute_url(base_url, f"/api/animated-progress?{urlencode(params(config))}")

def render_svg(config: ProgressConfig) -> str:
    return svg.progress_svg(
        [(s.name, s.level, s.color) for s in config.skills],
        width=config.width,
        height=config.height,
        theme=config.theme,
        title=config.custom_title or title,
        hide_title=config.hide_title,
        show_percentage=config.show_progress_text,
        bar_height=config.bar_height or 20,
        duration=config.animation_duration or 2.0,
    )

async def produce(config: ProgressConfig, services: Services) -> str:
    if config.inline:
        return render_svg(config)
    return await services.endpoint.fetch(build_url(config, services.base_url))

def synthesize(config: ProgressConfig, arrangement: str | None = None, base_url: str = DEFAULT_BASE_URL) -> str:
    if not config.skills:
        return PLACEHOLDER
    label = config.custom_title or title
    body = render_svg(config) if config.inline else f"![{label}]({build_url(config, base_url)})"
    if config.align == "center":
        return f'<div align="center">\n\n{body}\n\n</div>'
    return body
