"""Social badges plus a GitHub profile card.

Badges and the card URL come from the config alone. The store fetches the
GitHub user record so the follower and repository counts can be shown.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlencode
import math

from ..endpoints import DEFAULT_BASE_URL, absolute_url
from ..github import GitHubUser
from .base import Services, integer, option, require, text

name = "social_stats"
title = "Connect with Me"

TTL = 5 * 60
# the user-stats call is a single attempt
MAX_RETRIES = 0
KEY_FIELDS = ("github",)
PLACEHOLDER = "<!-- Social Stats: add at least one social account -->"

DISPLAY_LAYOUTS = ("grid", "horizontal", "inline")
BADGE_STYLES = ("flat", "flat-square", "plastic", "for-the-badge")

# (label, badge colour, logo, profile url prefix)
NETWORKS = {
    "twitter": ("Twitter", "1DA1F2", "twitter", "https://twitter.com/"),
    "linkedin": ("LinkedIn", "0077B5", "linkedin", "https://linkedin.com/in/"),
    "instagram": ("Instagram", "E4405F", "instagram", "https://instagram.com/"),
    "youtube": ("YouTube", "FF0000", "youtube", "https://youtube.com/c/"),
    "medium": ("Medium", "12100E", "medium", "https://medium.com/@"),
    "dev": ("dev.to", "0A0A0A", "devdotto", "https://dev.to/"),
}

CARD_THEMES = ("light", "dark", "radical", "tokyonight", "merko", "gruvbox", "github")
THEME_ALIASES = {
    "default": "light",
    "auto": "light",
    "bright": "light",
    "night": "dark",
    "black": "dark",
    "midnight": "dark",
    "tokyo": "tokyonight",
    "purple": "radical",
    "green": "merko",
    "orange": "gruvbox",
}

@dataclass(frozen=True)
class SocialStatsConfig:
    github: str = ""
    twitter: str | None = None
    linkedin: str | None = None
    instagram: str | None = None
    youtube: str | None = None
    medium: str | None = None
    dev: str | None = None
    display_layout: str = "horizontal"
    grid_columns: int = 3
    badge_style: str = "for-the-badge"
    theme: str = "default"
    compact_mode: bool = False
    hide_border: bool = False
    hide_title: bool = False
    custom_title: str | None = None
    hide_followers: bool = False
    hide_following: bool = False
    hide_repos: bool = False

def parse(raw: Mapping[str, Any]) -> SocialStatsConfig:
    socials = raw.get("socials")
    if not isinstance(socials, Mapping):
        socials = raw
    handles = {key: (text(socials.get(key)) or "").strip() or None for key in NETWORKS}
    layout = str(option(raw, "display_layout") or "horizontal")
    style = str(option(raw, "badge_style") or "for-the-badge")
    return SocialStatsConfig(
        github=(text(socials.get("github")) or "").strip(),
        display_layout=layout if layout in DISPLAY_LAYOUTS else "horizontal",
        grid_columns=min(max(integer(option(raw, "grid_columns"), 3) or 3, 2), 4),
        badge_style=style if style in BADGE_STYLES else "for-the-badge",
        theme=str(raw.get("theme") or "default"),
        compact_mode=bool(option(raw, "compact_mode", False)),
        hide_border=bool(option(raw, "hide_border", False)),
        hide_title=bool(option(raw, "hide_title", False)),
        custom_title=text(option(raw, "custom_title")),
        hide_followers=bool(option(raw, "hide_followers", False)),
        hide_following=bool(option(raw, "hide_following", False)),
        hide_repos=bool(option(raw, "hide_repos", False)),
        **handles,
    )

def validate(config: SocialStatsConfig) -> None:
    require(bool(config.github), "GitHub username is required")

def card_theme(theme: str | None) -> str:
    if theme in CARD_THEMES:
        return theme
    return THEME_ALIASES.get((theme or "").lower(), "light")

def badges(config: SocialStatsConfig) -> list[str]:
    out = []
    for key, (label, color, logo, prefix) in NETWORKS.items():
        handle = getattr(config, key)
        if handle:
            query = urlencode({"style": config.badge_style, "logo": logo, "logoColor": "white"})
            out.append(f"[![{label}](https://img.shields.io/badge/{label}-{color}?{query})]({prefix}{handle})")
    return out

def card_url(config: SocialStatsConfig, base_url: str = DEFAULT_BASE_URL) -> str:
    p = {
        "username": config.github,
        "theme": card_theme(config.theme),
        "layout": "compact" if config.compact_mode else "default",
    }
    if config.hide_border:
        p["hideBorder"] = "true"
    if config.hide_title:
        p["hideTitle"] = "true"
    if config.custom_title:
        p["customTitle"] = config.custom_title
    return absolute_url(base_url, f"/api/github-stats-svg?{urlencode(p)}")

async def produce(config: SocialStatsConfig, services: Services) -> GitHubUser:
    return await services.github.fetch_user(config.github)

def summarize(config: SocialStatsConfig, user: GitHubUser) -> str:
    parts = []
    if not config.hide_followers:
        parts.append(f"👥 {user.followers} followers")
    if not config.hide_following:
        parts.append(f"➡️ {user.following} following")
    if not config.hide_repos:
        parts.append(f"📦 {user.public_repos} repositories")
    if not parts:
        return ""
    return '<p align="center">' + " | ".join(parts) + "</p>\n"

def _badge_block(config: SocialStatsConfig, icons: list[str], layout: str) -> str:
    if layout == "grid":
        cols = config.grid_columns
        rows = [icons[i * cols:(i + 1) * cols] for i in range(math.ceil(len(icons) / cols))]
        return '<div align="center">\n\n' + "".join(" ".join(r) + "\n\n" for r in rows) + "</div>\n\n"
    if layout == "horizontal":
        return '<div align="center">\n\n' + " ".join(icons) + "\n\n</div>\n\n"
    return "\n".join(icons) + "\n\n"

def synthesize(config: SocialStatsConfig, arrangement: str | None = None, base_url: str = DEFAULT_BASE_URL) -> str:
    icons = badges(config)
    if not icons and not config.github:
        return PLACEHOLDER
    md = f"## 🌐 {config.custom_title or title}\n\n"
    if icons:
        layout = arrangement if arrangement in DISPLAY_LAYOUTS else config.display_layout
        md += _badge_block(config, icons, layout)
    if config.github:
        md += f'<div align="center">\n\n![GitHub Stats]({card_url(config, base_url)})\n\n</div>\n'
    return md
