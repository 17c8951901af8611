"""Parametric SVG drawing for wave banners and skill progress bars."""
from __future__ import annotations

from dataclasses import dataclass
from xml.sax.saxutils import escape
import math
import re

WAVE_THEMES = {
    "default": (("#0066cc",), "transparent"),
    "ocean": (("#006994", "#0891b2", "#67e8f9"), ("#f0f9ff", "#e0f2fe")),
    "sunset": (("#dc2626", "#ea580c", "#eab308"), ("#fef3c7", "#fed7aa")),
    "forest": (("#15803d", "#22c55e", "#84cc16"), ("#f7fee7", "#ecfccb")),
    "purple": (("#7c3aed", "#a855f7", "#c084fc"), ("#faf5ff", "#f3e8ff")),
    "neon": (("#06b6d4", "#0891b2", "#67e8f9"), ("#0f172a", "#1e293b")),
}

@dataclass(frozen=True)
class ProgressTheme:
    bg: tuple[str, str]
    bar_bg: str
    bar: tuple[str, str]
    text: str
    title: str
    glow: bool = False

PROGRESS_THEMES = {
    "default": ProgressTheme(("#1e3a8a", "#3730a3"), "#374151", ("#3b82f6", "#8b5cf6"), "#e5e7eb", "#ffffff"),
    "gradient": ProgressTheme(("#667eea", "#764ba2"), "#2a2a40", ("#667eea", "#f093fb"), "#ffffff", "#ffffff"),
    "neon": ProgressTheme(("#0d1117", "#0d1117"), "#161b22", ("#39ff14", "#ff0080"), "#58a6ff", "#f0f6fc", glow=True),
    "minimal": ProgressTheme(("#ffffff", "#ffffff"), "#f6f8fa", ("#0969da", "#0550ae"), "#656d76", "#24292f"),
    "light": ProgressTheme(("#ffffff", "#f6f8fa"), "#e5e7eb", ("#3b82f6", "#8b5cf6"), "#374151", "#111827"),
    "dark": ProgressTheme(("#0d1117", "#161b22"), "#21262d", ("#3b82f6", "#8b5cf6"), "#c9d1d9", "#f0f6fc"),
}

_HEX = re.compile(r"^#[0-9a-fA-F]{6}$")

def _num(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")

def wave_path(index: int, total: int, width: int, height: int, amplitude: float, frequency: float) -> str:
    phase = (index * math.pi * 2) / total
    scale = 0.7 + index * 0.3 / total
    points = [
        f"{x},{_num(height / 2 + math.sin(x * frequency + phase) * amplitude * scale)}"
        for x in range(0, width + 1, 2)
    ]
    points.append(f"{width},{height}")
    points.append(f"0,{height}")
    return "M " + " L ".join(points) + " Z"

def wave_svg(
    *,
    width: int = 800,
    height: int = 200,
    color: str = "#0066cc",
    secondary_color: str | None = None,
    waves: int = 3,
    speed: float = 1.0,
    amplitude: float = 20,
    frequency: float = 0.02,
    theme: str = "default",
    background: str = "transparent",
) -> str:
    colors, theme_bg = WAVE_THEMES.get(theme, WAVE_THEMES["default"])
    if color and color != "#0066cc":
        colors = (color, secondary_color) if secondary_color else (color,)
    waves = max(1, waves)
    speed = speed if speed > 0 else 1.0

    bg = background if background != "transparent" else theme_bg
    if isinstance(bg, tuple):
        stops = "".join(
            f'<stop offset="{_num(i / (len(bg) - 1) * 100)}%" stop-color="{c}"/>' for i, c in enumerate(bg)
        )
        background_el = (
            f'<defs><linearGradient id="bg" x1="0%" y1="0%" x2="0%" y2="100%">{stops}</linearGradient></defs>'
            '<rect width="100%" height="100%" fill="url(#bg)"/>'
        )
    elif bg != "transparent":
        background_el = f'<rect width="100%" height="100%" fill="{escape(bg)}"/>'
    else:
        background_el = ""

    paths = []
    for i in range(waves):
        fill = colors[i % len(colors)]
        opacity = _num(0.3 + (i * 0.7) / waves)
        duration = _num((3 + i * 0.5) / speed)
        paths.append(
            f'<path d="{wave_path(i, waves, width, height, amplitude, frequency)}" fill="{escape(fill)}" opacity="{opacity}">'
            f'<animateTransform attributeName="transform" type="translate" values="0,0; {_num(amplitude)},0; 0,0" '
            f'dur="{duration}s" begin="{_num(i * 0.2)}s" repeatCount="indefinite"/></path>'
        )

    return (
        f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" xmlns="http://www.w3.org/2000/svg">'
        f"{background_el}<g>{''.join(paths)}</g></svg>"
    )

def progress_svg(
    skills: list[tuple[str, int, str | None]],
    *,
    width: int = 400,
    height: int = 300,
    theme: str = "default",
    title: str = "Skills & Technologies",
    hide_title: bool = False,
    animated: bool = True,
    show_percentage: bool = True,
    bar_height: int = 20,
    duration: float = 2.0,
) -> str:
    style = PROGRESS_THEMES.get(theme, PROGRESS_THEMES["default"])
    spacing = max(35, bar_height + 15)
    start_y = 30 if hide_title else 60
    track = max(0, width - 120)

    parts = [
        f'<svg width="{width}" height="{height}" xmlns="http://www.w3.org/2000/svg">',
        "<defs>",
        f'<linearGradient id="bgGradient" x1="0%" y1="0%" x2="100%" y2="100%">'
        f'<stop offset="0%" stop-color="{style.bg[0]}"/><stop offset="100%" stop-color="{style.bg[1]}"/></linearGradient>',
        f'<linearGradient id="progressGradient" x1="0%" y1="0%" x2="100%" y2="0%">'
        f'<stop offset="0%" stop-color="{style.bar[0]}"/><stop offset="100%" stop-color="{style.bar[1]}"/></linearGradient>',
        "</defs>",
        '<rect width="100%" height="100%" fill="url(#bgGradient)" rx="10"/>',
    ]
    if not hide_title:
        parts.append(
            f'<text x="20" y="35" font-family="\'Segoe UI\', Arial, sans-serif" font-size="18" '
            f'font-weight="600" fill="{style.title}">{escape(title)}</text>'
        )

    glow = ' style="filter: drop-shadow(0 0 6px currentColor)"' if style.glow else ""
    for i, (name, level, color) in enumerate(skills):
        level = max(0, min(100, int(level)))
        y = start_y + i * spacing
        bar_w = _num(track * level / 100)
        fill = color if color and _HEX.match(color) else "url(#progressGradient)"
        parts.append(
            f'<text x="20" y="{y - 5}" font-family="\'Segoe UI\', Arial, sans-serif" font-size="12" '
            f'font-weight="500" fill="{style.text}">{escape(name)}</text>'
        )
        parts.append(f'<rect x="20" y="{y}" width="{track}" height="{bar_height}" fill="{style.bar_bg}" rx="10"/>')
        if animated:
            parts.append(
                f'<rect x="20" y="{y}" width="0" height="{bar_height}" fill="{fill}" rx="10"{glow}>'
                f'<animate attributeName="width" from="0" to="{bar_w}" dur="{_num(duration)}s" '
                f'begin="{_num(i * 0.2)}s" fill="freeze"/></rect>'
            )
        else:
            parts.append(f'<rect x="20" y="{y}" width="{bar_w}" height="{bar_height}" fill="{fill}" rx="10"{glow}/>')
        if show_percentage:
            parts.append(
                f'<text x="{width - 80}" y="{y + bar_height * 3 // 4}" font-family="\'Segoe UI\', Arial, sans-serif" '
                f'font-size="11" font-weight="600" fill="{style.text}" text-anchor="middle">{level}%</text>'
            )

    parts.append("</svg>")
    return "".join(parts)
