"""Composite GitHub stats + top languages block.

Pure markdown: the cards are served by github-readme-stats, so there is
nothing to generate or cache locally.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlencode

from ..endpoints import DEFAULT_BASE_URL
from .base import flag, option

name = "stats_layout"
title = "GitHub Stats Layout"

PLACEHOLDER = "<!-- GitHub Stats Layout: Please configure username -->"

ARRANGEMENTS = ("sideBySide", "statsLanguages", "allWidgets")

STATS_API = "https://github-readme-stats.vercel.app/api"
LANGS_API = "https://github-readme-stats.vercel.app/api/top-langs/"
GRAPH_API = "https://github-readme-activity-graph.vercel.app/graph"

@dataclass(frozen=True)
class StatsLayoutConfig:
    username: str = ""
    arrangement: str = "sideBySide"
    theme: str = "tokyonight"
    show_private: bool = False
    compact_languages: bool = True
    show_icons: bool = True

def parse(raw: Mapping[str, Any]) -> StatsLayoutConfig:
    return StatsLayoutConfig(
        username=str(raw.get("username") or "").strip(),
        arrangement=str(raw.get("arrangement") or "sideBySide"),
        theme=str(raw.get("theme") or "tokyonight"),
        show_private=bool(option(raw, "show_private", False)),
        compact_languages=bool(option(raw, "compact_languages", True)),
        show_icons=bool(option(raw, "show_icons", True)),
    )

def stats_url(config: StatsLayoutConfig) -> str:
    p = {
        "username": config.username,
        "theme": config.theme,
        "show_icons": flag(config.show_icons),
        "count_private": flag(config.show_private),
        "hide_border": "true",
    }
    return f"{STATS_API}?{urlencode(p)}"

def languages_url(config: StatsLayoutConfig) -> str:
    p = {"username": config.username, "theme": config.theme, "hide_border": "true"}
    if config.compact_languages:
        p["layout"] = "compact"
    return f"{LANGS_API}?{urlencode(p)}"

def graph_url(config: StatsLayoutConfig) -> str:
    theme = "default" if config.theme == "light" else config.theme
    p = {"username": config.username, "theme": theme, "area": "true", "hide_border": "true"}
    return f"{GRAPH_API}?{urlencode(p)}"

SIDE_BY_SIDE = """<div align="center">

<table>
<tr>
<td>

![Github Stats]({stats})

</td>
<td>

![Top Languages]({langs})

</td>
</tr>
<tr>
<td align="center">

**My GitHub Statistics**

</td>
<td align="center">

**My Top Languages**

</td>
</tr>
</table>

</div>"""

STATS_LANGUAGES = """<div align="center">

![GitHub Stats]({stats})

<table>
<tr>
<td>

![Most Used Languages]({langs})

</td>
<td>

![GitHub Stats Details]({stats}&include_all_commits=true&count_private=true)

</td>
</tr>
</table>

</div>"""

ALL_WIDGETS = """<div align="center">

<table>
<tr>
<td>

![GitHub Stats]({stats})

</td>
<td>

![Top Languages]({langs})

</td>
</tr>
<tr>
<td colspan="2">

![Contributions Graph]({graph})

</td>
</tr>
</table>

</div>"""

STACKED = """<div align="center">

![GitHub Stats]({stats})

![Top Languages]({langs})

</div>"""

TEMPLATES = {
    "sideBySide": SIDE_BY_SIDE,
    "statsLanguages": STATS_LANGUAGES,
    "allWidgets": ALL_WIDGETS,
}

def synthesize(config: StatsLayoutConfig, arrangement: str | None = None, base_url: str = DEFAULT_BASE_URL) -> str:
    if not config.username:
        return PLACEHOLDER
    template = TEMPLATES.get(arrangement or config.arrangement, STACKED)
    return template.format(stats=stats_url(config), langs=languages_url(config), graph=graph_url(config))
