from pathlib import Path

import pytest

from profilekit.cli import main
from profilekit.config import Config, load_config
from profilekit.errors import ErrorKind, WidgetError
from profilekit.github import GitHubUser
from profilekit.readme import ReadmeData, collect_all, storage_key
from profilekit.renderers import render_with
from profilekit.renderers.render_pillow import card_lines
from profilekit.storage import ConfigStorage
from profilekit.widgets.base import Services, WidgetResult


class FakeEndpoint:
    base_url = "http://cards.test"

    def __init__(self, fail=None):
        self.fail = fail
        self.fetched = []

    async def fetch(self, url, method="GET", *, not_found=None):
        self.fetched.append((method, url))
        if self.fail is not None:
            raise self.fail
        return url


class FakeGitHub:
    def __init__(self, followers=1):
        self.followers = followers
        self.calls = []

    async def fetch_user(self, username):
        self.calls.append(username)
        return GitHubUser(username, None, None, "", self.followers, 2, 3, 4)


def make_config(**raw):
    raw.setdefault("generation", {"debounce_ms": 0, "backoff_seconds": 0.001})
    return Config(raw=raw)


@pytest.mark.asyncio
async def test_collect_all_generates_each_widget():
    cfg = make_config(
        readme={"widgets": ["animated_progress", "github_stats", "stats_layout"], "header": "# Hi"},
        animated_progress={"skills": ["Python:90"]},
        github_stats={"username": "octocat"},
        stats_layout={"username": "octocat"},
    )
    endpoint = FakeEndpoint()
    data = await collect_all(cfg, Services(endpoint=endpoint, github=FakeGitHub()))

    statuses = {r.name: r.status for r in data.results}
    assert statuses == {"animated_progress": "ready", "github_stats": "ready", "stats_layout": "idle"}
    assert data.results[1].artifact.login == "octocat"
    assert endpoint.fetched[0][1].startswith("http://cards.test/api/animated-progress?")
    assert data.markdown.startswith("# Hi\n\n![Skills](http://cards.test/")


@pytest.mark.asyncio
async def test_failed_widget_keeps_markdown_and_reports_error():
    cfg = make_config(
        readme={"widgets": ["language_chart"]},
        language_chart={"username": "ghost"},
        generation={"debounce_ms": 0, "max_retries": 1, "backoff_seconds": 0.001},
    )
    endpoint = FakeEndpoint(fail=WidgetError(ErrorKind.NOT_FOUND, 'User "ghost" not found on GitHub'))
    data = await collect_all(cfg, Services(endpoint=endpoint, github=FakeGitHub()))

    (res,) = data.results
    assert res.status == "error"
    assert res.error.kind is ErrorKind.NOT_FOUND
    assert len(endpoint.fetched) == 2
    assert "ghost's Language Chart" in res.markdown


@pytest.mark.asyncio
async def test_unknown_widget_and_offline_mode():
    cfg = make_config(readme={"widgets": ["clock", "wave_animation"]})
    endpoint = FakeEndpoint()
    data = await collect_all(cfg, Services(endpoint=endpoint, github=FakeGitHub()), offline=True)
    assert data.results[0].status == "error"
    assert not data.results[0].ok
    assert data.results[1].status == "idle"
    assert endpoint.fetched == []


@pytest.mark.asyncio
async def test_options_restored_from_storage(tmp_path):
    storage = ConfigStorage(tmp_path / "store.json")
    storage.save(storage_key("typing_animation"), {"text": "saved text"})
    cfg = make_config(readme={"widgets": ["typing_animation"]})
    data = await collect_all(cfg, Services(endpoint=FakeEndpoint(), github=FakeGitHub()), storage=storage, offline=True)
    assert "saved+text" in data.results[0].markdown


def test_readme_markdown_skips_empty_blocks():
    data = ReadmeData(
        results=[
            WidgetResult(name="a", title="A", markdown="one\n"),
            WidgetResult(name="b", title="B", markdown=""),
            WidgetResult(name="c", title="C", markdown="two"),
        ],
    )
    assert data.markdown == "one\n\ntwo\n"


def test_config_properties(tmp_path, monkeypatch):
    monkeypatch.delenv("PROFILEKIT_BASE_URL", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(
        "generation:\n  debounce_ms: 150\nrenderer:\n  kind: pillow\nreadme:\n  widgets: [wave_animation]\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.debounce_seconds == 0.15
    assert cfg.renderer_kind == "pillow"
    assert cfg.widget_order == ["wave_animation"]
    assert cfg.base_url == "http://localhost:3000"
    assert cfg.max_retries is None


def test_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_pillow_renderer_writes_png(tmp_path):
    data = ReadmeData(results=[
        WidgetResult(name="wave_animation", title="Wave Animation", markdown="<div>x</div>"),
        WidgetResult(name="language_chart", title="Language Chart", markdown="", status="error",
                     error=WidgetError(ErrorKind.RATE_LIMITED)),
    ])
    out = render_with("pillow", tmp_path / "README.md", data, tmp_path / "preview.png")
    assert out == tmp_path / "preview.png"
    assert out.read_bytes().startswith(b"\x89PNG")
    assert (tmp_path / "README.md").read_text(encoding="utf-8") == "<div>x</div>\n"


def test_cli_offline_writes_readme(tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text(
        "readme:\n"
        "  header: '# Hello'\n"
        "  widgets: [animated_progress, stats_layout]\n"
        "animated_progress:\n"
        "  skills:\n"
        "    - {name: TypeScript, level: 85}\n"
        "stats_layout:\n"
        "  username: octocat\n",
        encoding="utf-8",
    )
    out = tmp_path / "README.md"
    assert main(["--config", str(config), "--out", str(out), "--offline", "--no-storage"]) == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith("# Hello\n\n![Skills](")
    assert "skills=TypeScript%3A85" in text
    assert "**My GitHub Statistics**" in text


@pytest.mark.asyncio
async def test_fetched_user_reaches_readme_and_preview():
    cfg = make_config(
        readme={"widgets": ["github_stats", "social_stats"]},
        github_stats={"username": "octocat"},
        social_stats={"socials": {"github": "octocat", "twitter": "octo"}},
    )
    github = FakeGitHub(followers=4242)
    data = await collect_all(cfg, Services(endpoint=FakeEndpoint(), github=github))

    stats, social = data.results
    assert stats.status == "ready" and social.status == "ready"
    assert github.calls == ["octocat", "octocat"]
    assert "4242 followers" in stats.markdown
    assert "👥 4242 followers" in social.markdown
    assert "4242" in data.markdown
    assert any("4242" in line for line in card_lines(stats))


@pytest.mark.asyncio
async def test_repository_showcase_fetches_card_endpoint():
    cfg = make_config(
        readme={"widgets": ["repository_showcase"]},
        repository_showcase={"username": "octocat", "showcaseRepos": ["hello-world"]},
    )
    endpoint = FakeEndpoint()
    data = await collect_all(cfg, Services(endpoint=endpoint, github=FakeGitHub()))
    (res,) = data.results
    assert res.status == "ready"
    assert endpoint.fetched[0][1].startswith("http://cards.test/api/repo-showcase?repos=octocat%2Fhello-world")


@pytest.mark.asyncio
async def test_social_stats_without_github_stays_idle():
    cfg = make_config(readme={"widgets": ["social_stats"]}, social_stats={"linkedin": "octo"})
    github = FakeGitHub()
    data = await collect_all(cfg, Services(endpoint=FakeEndpoint(), github=github))
    (res,) = data.results
    assert res.status == "idle"
    assert github.calls == []
    assert "https://linkedin.com/in/octo" in res.markdown
