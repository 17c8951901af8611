from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlencode

from ..endpoints import DEFAULT_BASE_URL, absolute_url
from .base import Services, integer, option, require, text

name = "language_chart"
title = "Language Chart"

TTL = 5 * 60
KEY_FIELDS = (
    "username", "theme", "size", "chart_type", "max_languages", "min_percentage",
    "hide_border", "hide_title", "custom_title", "show_percentages",
)
PLACEHOLDER = "<!-- Language Chart: Please configure username -->"

MAX_LANGUAGES = 8
CHART_ICONS = {"pie": "🥧", "bar": "📊", "donut": "🍩"}

@dataclass(frozen=True)
class LanguageChartConfig:
    username: str = ""
    theme: str = "dark"
    size: int = 400
    chart_type: str = "donut"
    max_languages: int = MAX_LANGUAGES
    min_percentage: float | None = None
    hide_border: bool = False
    hide_title: bool = False
    custom_title: str | None = None
    show_percentages: bool = False

def parse(raw: Mapping[str, Any]) -> LanguageChartConfig:
    return LanguageChartConfig(
        username=str(raw.get("username") or "").strip(),
        theme=str(raw.get("theme") or "dark"),
        size=integer(raw.get("size"), 400) or 400,
        chart_type=str(option(raw, "chart_type") or "donut"),
        max_languages=min(integer(option(raw, "max_languages"), MAX_LANGUAGES) or MAX_LANGUAGES, MAX_LANGUAGES),
        min_percentage=option(raw, "min_percentage"),
        hide_border=bool(option(raw, "hide_border", False)),
        hide_title=bool(option(raw, "hide_title", False)),
        custom_title=text(option(raw, "custom_title")),
        show_percentages=bool(option(raw, "show_percentages", False)),
    )

def validate(config: LanguageChartConfig) -> None:
    require(bool(config.username), "GitHub username is required")

def params(config: LanguageChartConfig) -> dict[str, str]:
    p = {
        "username": config.username,
        "theme": config.theme,
        "size": str(config.size),
        "chartType": config.chart_type,
        "maxLanguages": str(min(config.max_languages, MAX_LANGUAGES)),
    }
    if config.min_percentage:
        p["minPercentage"] = str(config.min_percentage)
    if config.hide_border:
        p["hideBorder"] = "true"
    if config.hide_title:
        p["hideTitle"] = "true"
    if config.custom_title:
        p["customTitle"] = config.custom_title
    if config.show_percentages:
        p["showPercentages"] = "true"
    return p

def build_url(config: LanguageChartConfig, base_url: str = DEFAULT_BASE_URL) -> str:
    return absolute_url(base_url, f"/api/language-chart?{urlencode(params(config))}")

async def produce(config: LanguageChartConfig, services: Services) -> str:
    return await services.endpoint.fetch(
        build_url(config, services.base_url),
        not_found=f'User "{config.username}" not found on GitHub',
    )

def synthesize(config: LanguageChartConfig, arrangement: str | None = None, base_url: str = DEFAULT_BASE_URL) -> str:
    if not config.username:
        return PLACEHOLDER
    icon = CHART_ICONS.get(config.chart_type, CHART_ICONS["donut"])
    return f"![{icon} {config.username}'s Language Chart]({build_url(config, base_url)})"
