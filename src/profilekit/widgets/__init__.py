from __future__ import annotations

from . import (
    github_stats,
    language_chart,
    progress,
    repository_showcase,
    social_stats,
    stats_layout,
    typing_animation,
    wave,
)

REGISTRY = {
    progress.name: progress,
    wave.name: wave,
    typing_animation.name: typing_animation,
    language_chart.name: language_chart,
    github_stats.name: github_stats,
    stats_layout.name: stats_layout,
    repository_showcase.name: repository_showcase,
    social_stats.name: social_stats,
}
