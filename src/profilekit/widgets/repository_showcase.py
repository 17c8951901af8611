from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping
from urllib.parse import urlencode
import re

from ..endpoints import DEFAULT_BASE_URL, absolute_url
from .base import Services, flag, integer, option, require, text

name = "repository_showcase"
title = "Repository Showcase"

TTL = 5 * 60
KEY_FIELDS = (
    "username", "repos", "theme", "repo_layout", "sort_by", "max_repos", "card_size",
    "card_spacing", "show_stats", "show_language", "show_description", "show_topics",
    "show_last_updated", "hide_border", "hide_title", "custom_title",
)
PLACEHOLDER = "<!-- Repository Showcase: add repositories in owner/repo format -->"

# the endpoint renders at most this many cards
MAX_REPOS = 6
CARD_SIZES = {"small": (300, 150), "medium": (350, 175), "large": (400, 200)}
SPACING = {"tight": 5, "normal": 10, "loose": 15}
SORT_KEYS = ("stars", "forks", "updated", "created", "name")

_CONTROL = re.compile(r"[\n\r\t]")

@dataclass(frozen=True)
class RepositoryShowcaseConfig:
    username: str = ""
    repos: tuple[str, ...] = ()
    theme: str = "light"
    repo_layout: str = "single"
    sort_by: str = "stars"
    max_repos: int = 4
    card_size: str = "medium"
    card_spacing: str = "normal"
    show_stats: bool | None = None
    show_language: bool | None = None
    show_description: bool | None = None
    show_topics: bool | None = None
    show_last_updated: bool | None = None
    hide_border: bool = False
    hide_title: bool = False
    custom_title: str | None = None

def normalize_repos(entries: Any, username: str = "") -> tuple[str, ...]:
    """Keep ``owner/repo`` entries, qualifying bare names with ``username``."""
    if isinstance(entries, str):
        entries = entries.split(",")
    out = []
    for entry in entries or ():
        if not isinstance(entry, str):
            continue
        repo = _CONTROL.sub("", entry.strip())
        if repo and "/" not in repo and username:
            repo = f"{username}/{repo}"
        if "/" in repo:
            out.append(repo)
    return tuple(out)

def _shown(raw: Mapping[str, Any], key: str) -> bool | None:
    value = option(raw, key)
    return None if value is None else bool(value)

def parse(raw: Mapping[str, Any]) -> RepositoryShowcaseConfig:
    username = (text(raw.get("username")) or "").strip()
    size = str(option(raw, "card_size") or "medium")
    spacing = str(option(raw, "card_spacing") or "normal")
    sort_by = str(option(raw, "sort_by") or "stars")
    return RepositoryShowcaseConfig(
        username=username,
        repos=normalize_repos(option(raw, "showcase_repos", raw.get("repos")), username),
        theme=str(raw.get("theme") or "light"),
        repo_layout=str(option(raw, "repo_layout") or "single"),
        sort_by=sort_by if sort_by in SORT_KEYS else "stars",
        max_repos=min(max(integer(option(raw, "max_repos"), 4) or 4, 1), MAX_REPOS),
        card_size=size if size in CARD_SIZES else "medium",
        card_spacing=spacing if spacing in SPACING else "normal",
        show_stats=_shown(raw, "show_stats"),
        show_language=_shown(raw, "show_language"),
        show_description=_shown(raw, "show_description"),
        show_topics=_shown(raw, "show_topics"),
        show_last_updated=_shown(raw, "show_last_updated"),
        hide_border=bool(option(raw, "hide_border", False)),
        hide_title=bool(option(raw, "hide_title", False)),
        custom_title=text(option(raw, "custom_title")),
    )

def validate(config: RepositoryShowcaseConfig) -> None:
    require(bool(config.repos), "No valid repositories found. Use owner/repo format.")

def params(config: RepositoryShowcaseConfig) -> dict[str, str]:
    width, height = CARD_SIZES[config.card_size]
    p = {
        "repos": ",".join(config.repos),
        "theme": config.theme,
        "layout": config.repo_layout,
        "sortBy": config.sort_by,
        "maxRepos": str(config.max_repos),
        "cardWidth": str(width),
        "cardHeight": str(height),
        "spacing": str(SPACING[config.card_spacing]),
    }
    for key, value in (
        ("showStats", config.show_stats),
        ("showLanguage", config.show_language),
        ("showDescription", config.show_description),
        ("showTopics", config.show_topics),
        ("showLastUpdated", config.show_last_updated),
    ):
        if value is not None:
            p[key] = flag(value)
    return p

def build_url(config: RepositoryShowcaseConfig, base_url: str = DEFAULT_BASE_URL) -> str:
    return absolute_url(base_url, f"/api/repo-showcase?{urlencode(params(config))}")

async def produce(config: RepositoryShowcaseConfig, services: Services) -> str:
    return await services.endpoint.fetch(build_url(config, services.base_url))

def synthesize(config: RepositoryShowcaseConfig, arrangement: str | None = None, base_url: str = DEFAULT_BASE_URL) -> str:
    if not config.repos:
        return PLACEHOLDER
    if arrangement:
        config = replace(config, repo_layout=arrangement)
    md = "" if config.hide_title else f"## {config.custom_title or title}\n\n"
    return md + f"![{title}]({build_url(config, base_url)})"
