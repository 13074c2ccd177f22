"""
Task list theme - light and dark palettes.

Palettes map semantic roles to colors; front ends look colors up by role so a
theme switch only changes which palette is active.
"""

from typing import Dict

from todolist.shared.domain.settings.theme import ThemePreference

# =============================================================================
# PRIMARY ACCENT COLORS
# =============================================================================
CYAN_PRIMARY = "#48b0f7"       # Main accent, headings
TEAL_PRIMARY = "#4ECDC4"       # Completed tasks
RED_PRIMARY = "#FF6B6B"        # Errors
INDIGO_PRIMARY = "#3D60C8"     # Accent on light backgrounds

# =============================================================================
# TEXT COLORS
# =============================================================================
TEXT_BRIGHT = "#AFC5D6"
TEXT_MUTED = "#8A9BA8"
TEXT_DARK = "#1F2A33"
TEXT_DARK_MUTED = "#5A6B78"

# =============================================================================
# PALETTES
# =============================================================================
DARK_PALETTE: Dict[str, str] = {
    "title": CYAN_PRIMARY,
    "text": TEXT_BRIGHT,
    "muted": TEXT_MUTED,
    "complete": TEAL_PRIMARY,
    "border": "#2A3A4A",
    "error": RED_PRIMARY,
}

LIGHT_PALETTE: Dict[str, str] = {
    "title": INDIGO_PRIMARY,
    "text": TEXT_DARK,
    "muted": TEXT_DARK_MUTED,
    "complete": "#2E8B7F",
    "border": "#C9D3DC",
    "error": "#C0392B",
}

THEME_LABELS = {
    ThemePreference.LIGHT: "Light",
    ThemePreference.DARK: "Dark",
    ThemePreference.SYSTEM: "System",
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================
def get_palette(dark: bool) -> Dict[str, str]:
    """Get the palette for a resolved dark/light choice."""
    return DARK_PALETTE if dark else LIGHT_PALETTE


def get_palette_for(preference: ThemePreference, system_dark: bool) -> Dict[str, str]:
    return get_palette(preference.is_dark(system_dark))


def get_log_color(level: str, dark: bool = True) -> str:
    """Get the color for a log level."""
    palette = get_palette(dark)
    colors = {
        "ERROR": palette["error"],
        "WARNING": palette["title"],
        "INFO": palette["text"],
    }
    return colors.get(level.upper(), palette["muted"])


def get_theme_label(preference: ThemePreference) -> str:
    return THEME_LABELS[preference]
