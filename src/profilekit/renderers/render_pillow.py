from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from PIL import Image, ImageDraw, ImageFont
import os
import math
import textwrap

from ..github import GitHubUser
from ..readme import ReadmeData
from ..widgets.base import WidgetResult

DEFAULT_THEME = {
    "background": "#0d1117",
    "foreground": "#c9d1d9",
    "foreground_dim": "#8b949e",
    "panel_border": "#30363d",
    "ready": "#3fb950",
    "loading": "#d29922",
    "alert": "#f85149",
}

def _hex(c: str) -> tuple[int, int, int]:
    c = c.lstrip("#")
    return tuple(int(c[i:i+2], 16) for i in (0, 2, 4))

def _load_font(theme: dict, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    font_path = theme.get("font_path")
    try:
        if font_path:
            return ImageFont.truetype(os.path.expanduser(font_path), size=size)
        family = theme.get("font_family", "DejaVuSansMono")
        return ImageFont.truetype(f"{family}.ttf", size=size)
    except OSError:
        return ImageFont.load_default()

@dataclass(frozen=True)
class Layout:
    width: int
    height: int
    columns: int
    gap: int
    margin: int
    cell_w: int
    cell_h: int
    rows: int

def _compute_layout(width: int, columns: int, n: int, cell_h: int) -> Layout:
    margin = max(24, width // 80)
    gap = max(18, width // 120)
    cols = max(1, columns)
    rows = max(1, math.ceil(n / cols))
    cell_w = (width - 2 * margin - (cols - 1) * gap) // cols
    height = 2 * margin + rows * cell_h + (rows - 1) * gap
    return Layout(width, height, cols, gap, margin, cell_w, cell_h, rows)

def card_lines(res: WidgetResult, wrap: int = 60) -> list[str]:
    if res.error is not None:
        lines = [f"ERROR ({res.error.kind.value})"]
        lines.extend(textwrap.wrap(res.error.message, wrap)[:3])
        lines.append("rerun to retry")
        return lines
    lines = [f"status: {res.status}"]
    if isinstance(res.artifact, GitHubUser):
        user = res.artifact
        lines.append(f"{user.name or user.login} (@{user.login})")
        lines.append(f"followers {user.followers}  following {user.following}")
        lines.append(f"repos {user.public_repos}  gists {user.public_gists}")
    if isinstance(res.artifact, str) and res.artifact.startswith("http"):
        lines.extend(textwrap.wrap(res.artifact, wrap)[:2])
    for ln in res.markdown.splitlines():
        if ln.strip():
            lines.extend(textwrap.wrap(ln.strip(), wrap)[:1])
    return lines

def render(
    out_path: Path,
    data: ReadmeData,
    width: int = 1280,
    columns: int = 2,
    theme: dict | None = None,
) -> Path:
    """Status board: one card per widget with its state and markdown head."""
    theme = {**DEFAULT_THEME, **(theme or {})}
    bg = _hex(theme["background"])
    fg = _hex(theme["foreground"])
    fg_dim = _hex(theme["foreground_dim"])
    border = _hex(theme["panel_border"])
    status_colors = {
        "ready": _hex(theme["ready"]),
        "loading": _hex(theme["loading"]),
        "error": _hex(theme["alert"]),
    }

    n = max(1, len(data.results))
    layout = _compute_layout(width, columns, n, cell_h=260)

    img = Image.new("RGB", (layout.width, layout.height), bg)
    draw = ImageDraw.Draw(img)

    font_h = _load_font(theme, size=max(18, width // 60))
    font_b = _load_font(theme, size=max(12, width // 100))

    for i, res in enumerate(data.results):
        r = i // layout.columns
        c = i % layout.columns
        x0 = layout.margin + c * (layout.cell_w + layout.gap)
        y0 = layout.margin + r * (layout.cell_h + layout.gap)
        x1 = x0 + layout.cell_w
        y1 = y0 + layout.cell_h

        draw.rounded_rectangle([x0, y0, x1, y1], radius=12, outline=border, width=2)
        dot = status_colors.get(res.status, fg_dim)
        draw.ellipse([x0 + 16, y0 + 20, x0 + 28, y0 + 32], fill=dot)
        draw.text((x0 + 40, y0 + 14), res.title, font=font_h, fill=fg)

        wrap = max(20, layout.cell_w // max(7, width // 160))
        y = y0 + 56
        for ln in card_lines(res, wrap)[:9]:
            draw.text((x0 + 16, y), ln, font=font_b, fill=fg_dim)
            y += 20

    out_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(out_path, format="PNG")
    return out_path
