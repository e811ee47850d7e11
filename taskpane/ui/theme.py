"""One Monokai color theme for TaskPane.

All UI components reference these constants via f-string interpolation in
their CSS definitions. The button style function in style.py receives a
Palette built from the same constants, so widgets and computed appearances
stay in sync.
"""

from pydantic import BaseModel, ConfigDict

from taskpane.models import Priority


# ============================================================================
# BASE COLORS
# ============================================================================

BACKGROUND = "#272822"  # Main application background (dark charcoal)
FOREGROUND = "#F8F8F2"  # Primary text color (off-white)
SELECTION = "#49483E"   # Selected item background (medium gray)
COMMENT = "#75715E"     # Secondary/dimmed text (muted brown-gray)
BORDER = "#3E3D32"      # Borders and dividers (dark gray-green)

ACCENT = "#66D9EF"      # Primary accent (cyan)
GREEN = "#A6E22E"
PINK = "#F92672"
YELLOW = "#E6DB74"
PURPLE = "#AE81FF"

COMPLETE_COLOR = COMMENT

HOVER_OPACITY = "20"
TRANSPARENT = "transparent"


# ============================================================================
# PRIORITY COLORS
# ============================================================================

PRIORITY_COLORS = {
    Priority.LOW: COMMENT,
    Priority.NORMAL: FOREGROUND,
    Priority.HIGH: PINK,
}


# ============================================================================
# BUTTON PALETTE
# ============================================================================

class Palette(BaseModel):
    """Named colors consumed by the button style function."""

    model_config = ConfigDict(frozen=True)

    accent: str = ACCENT
    on_accent: str = BACKGROUND
    bg_component: str = SELECTION
    button_bg: str = BORDER
    on_bg: str = FOREGROUND
    radius_s: int = 1


DEFAULT_PALETTE = Palette()


def with_alpha(color: str, alpha: str) -> str:
    """Add alpha transparency to a hex color.

    Args:
        color: Base hex color string (e.g., '#272822')
        alpha: Alpha value as 2-digit hex string (00-FF)

    Returns:
        Color with alpha channel appended (8-digit hex color code).

    Examples:
        >>> with_alpha(SELECTION, HOVER_OPACITY)
        '#49483E20'
    """
    return f"{color}{alpha}"


def get_priority_color(priority: Priority) -> str:
    """Get the marker color for a task priority."""
    return PRIORITY_COLORS.get(priority, FOREGROUND)
