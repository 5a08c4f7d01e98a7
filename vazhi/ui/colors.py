"""Theme palettes, icon glyphs and color utilities for the UI."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    bg_top: str
    bg_bottom: str
    card_bg: str
    card_border: str
    text_primary: str
    text_secondary: str
    text_muted: str
    accent: str
    progress_track: str
    overlay_bg: str
    panel_bg: str


DARK = Palette(
    bg_top="#0f172a",
    bg_bottom="#1e1b4b",
    card_bg="#1e293b",
    card_border="#334155",
    text_primary="#f1f5f9",
    text_secondary="#cbd5e1",
    text_muted="#94a3b8",
    accent="#a78bfa",
    progress_track="#334155",
    overlay_bg="rgba(0, 0, 0, 0.55)",
    panel_bg="#111827",
)

# Light theme follows the teal home palette
LIGHT = Palette(
    bg_top="#e0f7fa",
    bg_bottom="#80deea",
    card_bg="#ffffff",
    card_border="#b2ebf2",
    text_primary="#1a3a3a",
    text_secondary="#4a6572",
    text_muted="#78909c",
    accent="#00838f",
    progress_track="#e6f0f0",
    overlay_bg="rgba(0, 0, 0, 0.2)",
    panel_bg="#ffffff",
)

FALLBACK_ACCENT = "#8b5cf6"

PATH_ICONS = {
    "code": "💻",
    "shield": "🛡",
    "brain": "🧠",
    "chart": "📊",
    "cube": "🧊",
    "cloud": "☁",
}

RESOURCE_ICONS = {
    "video": "🎬",
    "article": "📄",
    "course": "📘",
}


def palette_for(theme: str) -> Palette:
    return LIGHT if theme == "light" else DARK


def path_icon(tag: str) -> str:
    return PATH_ICONS.get(tag, "")


def resource_icon(kind: str) -> str:
    return RESOURCE_ICONS.get(kind, "")


def is_hex(color: str) -> bool:
    color = color.strip()
    if not (color.startswith("#") and len(color) == 7):
        return False
    try:
        int(color[1:], 16)
    except ValueError:
        return False
    return True


def accent_or_default(color: str) -> str:
    return color.strip() if is_hex(color) else FALLBACK_ACCENT


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    a = a.strip()
    b = b.strip()
    if not (is_hex(a) and is_hex(b)):
        return a
    t = max(0.0, min(1.0, float(t)))
    ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
    br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
    r = int(ar + (br - ar) * t)
    g = int(ag + (bg - ag) * t)
    bl = int(ab + (bb - ab) * t)
    return f"#{r:02X}{g:02X}{bl:02X}"


def rgba(color: str, alpha: float) -> str:
    """Qt style sheet rgba() for a #RRGGBB color."""
    color = accent_or_default(color)
    alpha = max(0.0, min(1.0, float(alpha)))
    r, g, b = int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)
    return f"rgba({r}, {g}, {b}, {alpha:.2f})"
