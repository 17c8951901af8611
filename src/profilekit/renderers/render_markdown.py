from __future__ import annotations

from pathlib import Path

from ..readme import ReadmeData

def render(out_path: Path, data: ReadmeData) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(data.markdown, encoding="utf-8")
    return out_path
