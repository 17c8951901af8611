from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlencode
import html

from ..endpoints import DEFAULT_BASE_URL
from ..github import GitHubUser
from .base import Services, option, require, text

name = "github_stats"
title = "GitHub Stats"

TTL = 5 * 60
# the user-stats call is a single attempt
MAX_RETRIES = 0
KEY_FIELDS = ("username",)
PLACEHOLDER = "<!-- GitHub Stats: Please configure username -->"

STATS_API = "https://github-readme-stats.vercel.app/api"
TROPHY_API = "https://github-profile-trophy.vercel.app/"
STREAK_API = "https://github-readme-streak-stats.herokuapp.com/"

LAYOUT_STYLES = ("side-by-side", "grid", "stacked")

@dataclass(frozen=True)
class GitHubStatsConfig:
    username: str = ""
    theme: str = "default"
    layout_type: str = "stats"
    layout_style: str = "side-by-side"
    show_stats: bool | None = None
    show_trophies: bool | None = None
    show_streaks: bool | None = None
    trophy_theme: str = "flat"
    streak_theme: str | None = None
    hide_border: bool = False
    hide_title: bool = False
    custom_title: str | None = None
    compact_mode: bool = False
    show_icons: bool = False
    include_private: bool = False
    include_all_commits: bool = False

    @property
    def stats_on(self) -> bool:
        if self.show_stats is not None:
            return self.show_stats
        return self.layout_type in ("stats", "combined", "full")

    @property
    def trophies_on(self) -> bool:
        if self.show_trophies is not None:
            return self.show_trophies
        return self.layout_type in ("trophies", "full")

    @property
    def streaks_on(self) -> bool:
        if self.show_streaks is not None:
            return self.show_streaks
        return self.layout_type in ("streaks", "full")

def parse(raw: Mapping[str, Any]) -> GitHubStatsConfig:
    return GitHubStatsConfig(
        username=str(raw.get("username") or "").strip(),
        theme=str(raw.get("theme") or "default"),
        layout_type=str(option(raw, "layout_type") or "stats"),
        layout_style=str(option(raw, "layout_style") or "side-by-side"),
        show_stats=option(raw, "show_stats"),
        show_trophies=option(raw, "show_trophies"),
        show_streaks=option(raw, "show_streaks"),
        trophy_theme=str(option(raw, "trophy_theme") or "flat"),
        streak_theme=text(option(raw, "streak_theme")),
        hide_border=bool(option(raw, "hide_border", False)),
        hide_title=bool(option(raw, "hide_title", False)),
        custom_title=text(option(raw, "custom_title")),
        compact_mode=bool(option(raw, "compact_mode", False)),
        show_icons=bool(option(raw, "show_icons", False)),
        include_private=bool(option(raw, "include_private", False)),
        include_all_commits=bool(option(raw, "include_all_commits", False)),
    )

def validate(config: GitHubStatsConfig) -> None:
    require(bool(config.username), "GitHub username is required")

def urls(config: GitHubStatsConfig) -> dict[str, str]:
    """Card image URLs for the enabled sections; empty strings for disabled ones."""
    if not config.username:
        return {"stats": "", "trophies": "", "streaks": ""}

    p = {"username": config.username, "theme": config.theme}
    if config.hide_border:
        p["hide_border"] = "true"
    if config.hide_title:
        p["hide_title"] = "true"
    if config.compact_mode:
        p["layout"] = "compact"
    if config.show_icons:
        p["show_icons"] = "true"
    if config.include_private:
        p["count_private"] = "true"
    if config.include_all_commits:
        p["include_all_commits"] = "true"

    trophy = {"username": config.username, "theme": config.trophy_theme, "margin-w": "10", "margin-h": "10"}
    streak = {
        "user": config.username,
        "theme": config.streak_theme or config.theme,
        "hide_border": "true" if config.hide_border else "false",
    }
    return {
        "stats": f"{STATS_API}?{urlencode(p)}" if config.stats_on else "",
        "trophies": f"{TROPHY_API}?{urlencode(trophy)}" if config.trophies_on else "",
        "streaks": f"{STREAK_API}?{urlencode(streak)}" if config.streaks_on else "",
    }

async def produce(config: GitHubStatsConfig, services: Services) -> GitHubUser:
    return await services.github.fetch_user(config.username)

def summarize(config: GitHubStatsConfig, user: GitHubUser) -> str:
    """Profile line built from the fetched user record."""
    who = html.escape(user.name or user.login)
    return (
        f'<p align="center"><b>{who}</b> · {user.followers} followers · {user.following} following'
        f" · {user.public_repos} public repos · {user.public_gists} gists</p>\n"
    )

_ALTS = {"stats": "GitHub Stats", "trophies": "GitHub Trophies", "streaks": "GitHub Streak"}

def _img(url: str, alt: str, width: int, height: int, style: str = "border-radius: 8px;") -> str:
    return f'<img src="{url}" alt="{alt}" width="{width}" height="{height}" style="{style}" />\n'

def _side_by_side(cards: dict[str, str]) -> str:
    md = '<table border="0" cellspacing="10" cellpadding="0" style="border-collapse: separate; margin: 0 auto;">\n<tr>\n'
    for key, url in cards.items():
        md += '<td align="center" valign="top" style="padding: 5px;">\n'
        md += _img(url, _ALTS[key], 420, 195)
        md += "</td>\n"
    return md + "</tr>\n</table>\n\n"

def _grid(cards: dict[str, str]) -> str:
    md = '<table border="0" cellspacing="20" cellpadding="0" style="border-collapse: separate; margin: 0 auto;">\n<tr>\n'
    for key in ("stats", "trophies"):
        if key in cards:
            md += '<td align="center" valign="top" style="padding: 10px;">\n'
            md += _img(cards[key], _ALTS[key], 400, 195)
            md += "</td>\n"
    md += "</tr>\n"
    if "streaks" in cards:
        span = "2" if "stats" in cards and "trophies" in cards else "1"
        md += f'<tr>\n<td colspan="{span}" align="center" style="padding: 10px;">\n'
        md += _img(cards["streaks"], _ALTS["streaks"], 800, 180)
        md += "</td>\n</tr>\n"
    return md + "</table>\n\n"

def _stacked(cards: dict[str, str]) -> str:
    heights = {"stats": 195, "trophies": 160, "streaks": 180}
    return "".join(
        _img(url, _ALTS[key], 500, heights[key], "border-radius: 8px; margin: 10px 0;") + "\n"
        for key, url in cards.items()
    )

LAYOUTS = {"side-by-side": _side_by_side, "grid": _grid, "stacked": _stacked}

def synthesize(config: GitHubStatsConfig, arrangement: str | None = None, base_url: str = DEFAULT_BASE_URL) -> str:
    if not config.username:
        return PLACEHOLDER
    cards = {key: url for key, url in urls(config).items() if url}
    if not cards:
        return f"<!-- {title}: no sections enabled for {config.username} -->"

    md = ""
    if not config.hide_title:
        md += f"## {config.custom_title or title}\n\n"
    layout = LAYOUTS.get(arrangement or config.layout_style, _stacked)
    md += '<div align="center">\n\n'
    md += layout(cards)
    md += "</div>\n"
    return md
