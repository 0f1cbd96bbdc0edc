"""Color palette for QuizRunner supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    # Text colors
    TEXT_PRIMARY = ThemeColors(light="#111827", dark="#F5F7FF")
    TEXT_SECONDARY = ThemeColors(light="#6B7280", dark="#9CA3AF")
    TEXT_DISABLED = ThemeColors(light="#C4C4C4", dark="#4B5563")

    # Background colors
    BACKGROUND_PRIMARY = ThemeColors(light="#FFFFFF", dark="#0F1221")
    BACKGROUND_SECONDARY = ThemeColors(light="#F3F4F6", dark="#1A1F36")

    # Accent colors (points, accuracy, time on the results screen)
    ACCENT_PRIMARY = ThemeColors(light="#7C3AED", dark="#A78BFA")
    ACCENT_SECONDARY = ThemeColors(light="#DB2777", dark="#F472B6")

    # Status colors
    SUCCESS = ThemeColors(light="#059669", dark="#34D399")
    WARNING = ThemeColors(light="#D97706", dark="#FBBF24")
    ERROR = ThemeColors(light="#DC2626", dark="#F87171")

    # Leaderboard medals
    GOLD = ThemeColors(light="#CA8A04", dark="#FACC15")
    SILVER = ThemeColors(light="#6B7280", dark="#D1D5DB")
    BRONZE = ThemeColors(light="#B45309", dark="#D97706")

    # Borders and buttons
    BORDER_PRIMARY = ThemeColors(light="#D1D5DB", dark="#2E3552")
    BUTTON_PRIMARY_BG = ThemeColors(light="#7C3AED", dark="#8B5CF6")
    BUTTON_PRIMARY_TEXT = ThemeColors(light="#FFFFFF", dark="#FFFFFF")
    BUTTON_SECONDARY_BG = ThemeColors(light="#F3F4F6", dark="#232A45")
    BUTTON_HOVER_BG = ThemeColors(light="#E5E7EB", dark="#2E3658")
