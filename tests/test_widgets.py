from urllib.parse import parse_qs, urlparse

from profilekit import svg
from profilekit.github import GitHubUser
from profilekit.widgets import (
    REGISTRY,
    github_stats,
    language_chart,
    progress,
    repository_showcase,
    social_stats,
    stats_layout,
    typing_animation,
    wave,
)


def test_progress_markdown_scenario():
    cfg = progress.parse({"skills": [{"name": "TypeScript", "level": 85}], "width": 400, "height": 300})
    md = progress.synthesize(cfg)
    assert md.startswith("![Skills](http://localhost:3000/api/animated-progress?")
    assert "skills=TypeScript%3A85" in md
    assert "width=400" in md
    assert "height=300" in md


def test_progress_parses_string_skills_and_colors():
    cfg = progress.parse({"skills": ["Python:90:#3572A5", "Rust:60"]})
    assert [s.encode() for s in cfg.skills] == ["Python:90:#3572A5", "Rust:60"]


def test_progress_placeholder_without_skills():
    assert progress.synthesize(progress.parse({})) == progress.PLACEHOLDER


def test_progress_inline_embeds_svg():
    cfg = progress.parse({"skills": [{"name": "Go", "level": 70}], "inline": True, "align": "center"})
    md = progress.synthesize(cfg)
    assert md.startswith('<div align="center">')
    assert "<svg" in md and ">Go<" in md and "70%" in md


def test_progress_uses_base_url():
    cfg = progress.parse({"skills": ["Go:70"]})
    assert progress.build_url(cfg, "https://cards.example.dev/").startswith(
        "https://cards.example.dev/api/animated-progress?"
    )


def test_wave_params_only_send_distinct_secondary_color():
    same = wave.parse({"waveColor": "#123456", "waveSecondaryColor": "#123456"})
    other = wave.parse({"waveColor": "#123456", "waveSecondaryColor": "#abcdef", "waveSpeed": "fast"})
    assert "secondaryColor" not in wave.params(same)
    assert wave.params(other)["secondaryColor"] == "#abcdef"
    assert wave.params(other)["speed"] == "2.0"


def test_wave_unknown_speed_falls_back_to_medium():
    assert wave.parse({"speed": "warp"}).speed == "medium"


def test_wave_markdown_has_title_and_image():
    md = wave.synthesize(wave.parse({"customTitle": "Ocean"}))
    assert md.startswith("## Ocean\n\n")
    assert 'alt="Wave Animation" width="800" height="200"' in md


def test_wave_inline_svg_draws_one_path_per_wave():
    text = svg.wave_svg(waves=4, width=100, height=50)
    assert text.count("<path") == 4
    assert text.startswith('<svg width="100" height="50"')


def test_typing_params_clamp_and_default():
    cfg = typing_animation.parse({"text": "x" * 600, "size": 200, "width": 50, "color": "blue"})
    p = typing_animation.params(cfg)
    assert len(p["text"]) == typing_animation.MAX_TEXT
    assert "fontSize" not in p
    assert "color" not in p
    assert p["width"] == "600"
    assert p["height"] == "100"
    assert p["loop"] == "true"


def test_typing_duration_overrides_speed():
    cfg = typing_animation.parse({"text": "hello", "speed": 100, "duration": 1000})
    assert typing_animation.params(cfg)["speed"] == "200"


def test_typing_placeholder_for_blank_text():
    assert typing_animation.synthesize(typing_animation.parse({"text": "   "})) == typing_animation.PLACEHOLDER


def test_language_chart_clamps_languages_and_names_chart():
    cfg = language_chart.parse({"username": "octocat", "maxLanguages": 20, "chartType": "pie"})
    md = language_chart.synthesize(cfg)
    assert md.startswith("![🥧 octocat's Language Chart](")
    query = parse_qs(urlparse(md[md.index("(") + 1 : -1]).query)
    assert query["maxLanguages"] == ["8"]


def test_language_chart_placeholder():
    assert language_chart.synthesize(language_chart.parse({"username": ""})) == language_chart.PLACEHOLDER


def test_github_stats_sections_follow_layout_type():
    full = github_stats.parse({"username": "octocat", "layoutType": "full"})
    urls = github_stats.urls(full)
    assert all(urls.values())
    stats_only = github_stats.urls(github_stats.parse({"username": "octocat"}))
    assert stats_only["stats"] and not stats_only["trophies"] and not stats_only["streaks"]


def test_github_stats_grid_spans_streak_row():
    cfg = github_stats.parse({"username": "octocat", "layoutType": "full", "layoutStyle": "grid"})
    md = github_stats.synthesize(cfg)
    assert md.startswith("## GitHub Stats\n\n")
    assert 'colspan="2"' in md
    assert md.count("<img") == 3


def test_github_stats_arrangement_argument_wins():
    cfg = github_stats.parse({"username": "octocat", "layoutStyle": "grid"})
    md = github_stats.synthesize(cfg, "stacked")
    assert "<table" not in md
    assert 'width="500"' in md


def test_github_stats_placeholder():
    assert github_stats.synthesize(github_stats.parse({})) == github_stats.PLACEHOLDER


def test_stats_layout_arrangements():
    cfg = stats_layout.parse({"username": "octocat"})
    side = stats_layout.synthesize(cfg)
    assert "**My Top Languages**" in side
    assert "layout=compact" in side
    combo = stats_layout.synthesize(cfg, "statsLanguages")
    assert "&include_all_commits=true&count_private=true" in combo
    grid = stats_layout.synthesize(cfg, "allWidgets")
    assert "github-readme-activity-graph" in grid
    fallback = stats_layout.synthesize(cfg, "mystery")
    assert "<table>" not in fallback and "![Top Languages]" in fallback


def test_stats_layout_light_theme_maps_graph_to_default():
    cfg = stats_layout.parse({"username": "octocat", "theme": "light"})
    assert "theme=default" in stats_layout.graph_url(cfg)


def test_stats_layout_empty_username_placeholder():
    assert stats_layout.synthesize(stats_layout.parse({"username": ""})) == stats_layout.PLACEHOLDER


def test_every_kind_degrades_on_empty_config():
    for kind in REGISTRY.values():
        md = kind.synthesize(kind.parse({}))
        assert isinstance(md, str) and md


def test_typing_accepts_quoted_numbers():
    cfg = typing_animation.parse({"text": "hi", "width": "600", "height": "120", "size": "24", "speed": "fast"})
    assert cfg.width == 600 and cfg.height == 120 and cfg.size == 24
    assert cfg.speed is None
    md = typing_animation.synthesize(cfg)
    assert 'width="600" height="120"' in md
    assert "fontSize=24" in md


def test_typing_duration_uses_truncated_length():
    cfg = typing_animation.parse({"text": "x" * 1000, "duration": 100000})
    assert typing_animation.params(cfg)["speed"] == str(100000 // typing_animation.MAX_TEXT)


def test_custom_title_is_coerced_to_text():
    import datetime

    cfg = language_chart.parse({"username": "octocat", "customTitle": datetime.date(2024, 1, 1)})
    assert cfg.custom_title == "2024-01-01"
    assert "customTitle=2024-01-01" in language_chart.synthesize(cfg)
    assert progress.parse({"skills": ["Go:1"], "customTitle": 2024}).custom_title == "2024"


def test_github_stats_summary_uses_user_record():
    user = GitHubUser("octocat", "The <Octocat>", None, "", 4242, 9, 8, 7)
    line = github_stats.summarize(github_stats.parse({"username": "octocat"}), user)
    assert "4242 followers" in line
    assert "8 public repos" in line and "7 gists" in line
    assert "The &lt;Octocat&gt;" in line


def test_repository_showcase_normalizes_repos():
    cfg = repository_showcase.parse({
        "username": "octocat",
        "showcaseRepos": [" hello-world\n", "torvalds/linux", "", 42],
        "cardSize": "large",
        "cardSpacing": "loose",
        "showTopics": False,
    })
    assert cfg.repos == ("octocat/hello-world", "torvalds/linux")
    q = parse_qs(urlparse(repository_showcase.build_url(cfg)).query)
    assert q["repos"] == ["octocat/hello-world,torvalds/linux"]
    assert q["cardWidth"] == ["400"] and q["cardHeight"] == ["200"]
    assert q["spacing"] == ["15"]
    assert q["showTopics"] == ["false"]
    assert "showStats" not in q


def test_repository_showcase_without_owner_is_placeholder():
    cfg = repository_showcase.parse({"showcaseRepos": ["lonely-repo"]})
    assert cfg.repos == ()
    assert repository_showcase.synthesize(cfg) == repository_showcase.PLACEHOLDER


def test_repository_showcase_clamps_max_repos_and_layout_argument():
    cfg = repository_showcase.parse({"repos": "a/b,c/d", "maxRepos": 20})
    assert cfg.max_repos == repository_showcase.MAX_REPOS
    md = repository_showcase.synthesize(cfg, "grid")
    assert md.startswith("## Repository Showcase\n\n![Repository Showcase](http://localhost:3000/api/repo-showcase?")
    assert "layout=grid" in md


def test_social_stats_badges_and_card():
    cfg = social_stats.parse({
        "socials": {"github": "octocat", "twitter": "octo", "dev": "octodev"},
        "badgeStyle": "flat",
        "theme": "midnight",
    })
    md = social_stats.synthesize(cfg)
    assert md.startswith("## 🌐 Connect with Me\n\n")
    assert "(https://twitter.com/octo)" in md
    assert "https://img.shields.io/badge/Twitter-1DA1F2?style=flat&logo=twitter" in md
    assert "(https://dev.to/octodev)" in md
    assert "/api/github-stats-svg?username=octocat&theme=dark&layout=default" in md


def test_social_stats_grid_rows():
    cfg = social_stats.parse({
        "twitter": "a", "linkedin": "b", "instagram": "c",
        "displayLayout": "grid", "gridColumns": 2,
    })
    md = social_stats.synthesize(cfg)
    rows = [ln for ln in md.splitlines() if ln.startswith("[![")]
    assert len(rows) == 2
    assert "GitHub Stats" not in md


def test_social_stats_summary_honours_hide_flags():
    user = GitHubUser("octocat", None, None, "", 10, 2, 8, 1)
    cfg = social_stats.parse({"github": "octocat", "hideFollowing": True})
    line = social_stats.summarize(cfg, user)
    assert "10 followers" in line and "8 repositories" in line
    assert "following" not in line
    hidden = social_stats.parse({"github": "octocat", "hideFollowers": True, "hideFollowing": True, "hideRepos": True})
    assert social_stats.summarize(hidden, user) == ""


def test_store_backed_kinds_declare_cache_contract():
    for kind in REGISTRY.values():
        if hasattr(kind, "produce"):
            assert kind.TTL > 0
            assert kind.KEY_FIELDS
            assert callable(kind.validate)
        else:
            assert not hasattr(kind, "TTL") and not hasattr(kind, "validate")
    assert not hasattr(stats_layout, "produce")
