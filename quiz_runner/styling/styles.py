"""Centralized styles and font definitions for the application."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.DARK) -> str:
        return f"""
            QMainWindow {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
                color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};
                border: 1px solid {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
            }}
            QLineEdit, QPlainTextEdit, QSpinBox, QComboBox {{
                background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QListWidget, QTableWidget {{
                background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 8px;
                margin-top: 6px;
                padding-top: 10px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 3px 0 3px;
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_stat_value_style(color: str) -> str:
        return f"font-size: 22pt; font-weight: bold; color: {color};"

    @staticmethod
    def get_timer_style(level: str, theme: Theme = Theme.DARK) -> str:
        colors = {
            "normal": ColorPalette.TEXT_PRIMARY,
            "low": ColorPalette.WARNING,
            "critical": ColorPalette.ERROR,
        }
        color = colors.get(level, ColorPalette.TEXT_PRIMARY).get(theme)
        return f"font-size: 20pt; font-weight: bold; color: {color};"

    @staticmethod
    def get_option_style(state: str, theme: Theme = Theme.DARK) -> str:
        """Style for an answer button: idle, selected, correct, wrong or dimmed."""
        borders = {
            "idle": ColorPalette.BORDER_PRIMARY,
            "selected": ColorPalette.ACCENT_PRIMARY,
            "correct": ColorPalette.SUCCESS,
            "wrong": ColorPalette.ERROR,
            "dimmed": ColorPalette.BORDER_PRIMARY,
        }
        border = borders.get(state, ColorPalette.BORDER_PRIMARY).get(theme)
        text_color = (
            ColorPalette.TEXT_DISABLED.get(theme)
            if state == "dimmed"
            else ColorPalette.TEXT_PRIMARY.get(theme)
        )
        return (
            f"QPushButton {{ text-align: left; padding: 12px; border: 2px solid {border}; "
            f"border-radius: 10px; color: {text_color}; }}"
        )
