"""
Theme definitions for the question toolkit GUI.
"""


class Colors:
    # Text
    TEXT_PRIMARY = "#1f1f1f"
    TEXT_SECONDARY = "#666666"

    # Status
    ERROR = "#d32f2f"
    SUCCESS = "#388e3c"
    WARNING = "#f57c00"


class ColorsDark:
    """Dark theme color palette."""

    TEXT_PRIMARY = "#E6EDF3"
    TEXT_SECONDARY = "#8B949E"

    ERROR = "#F85149"
    SUCCESS = "#3FB950"
    WARNING = "#D29922"


_is_dark_mode = False


def set_dark_mode(is_dark: bool):
    """Explicitly set the dark mode state."""
    global _is_dark_mode
    _is_dark_mode = is_dark


def get_colors():
    """Get the appropriate color palette based on current theme."""
    return ColorsDark if _is_dark_mode else Colors
