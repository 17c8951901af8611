from __future__ import annotations

from pathlib import Path
from ..readme import ReadmeData

from . import render_markdown, render_pillow

def render_with(
    kind: str,
    out_path: Path,
    data: ReadmeData,
    preview_path: Path | None = None,
    theme: dict | None = None,
) -> Path:
    """Write the README; the pillow renderer also draws a status board PNG."""
    kind = kind.lower().strip()
    if kind == "markdown":
        return render_markdown.render(out_path, data)
    if kind == "pillow":
        render_markdown.render(out_path, data)
        if preview_path is None:
            preview_path = out_path.with_suffix(".png")
        return render_pillow.render(preview_path, data, theme=theme)
    raise ValueError(f"Unknown renderer: {kind}")
