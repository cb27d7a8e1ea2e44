"""Centralized styles and font definitions for the application."""

from .color_palette import ColorPalette


class Styles:
    """Helper class to generate Qt stylesheets from the profile settings."""

    @staticmethod
    def get_main_window_style(background: str = ColorPalette.BACKGROUND_PRIMARY) -> str:
        return f"""
            QMainWindow {{
                background-color: {background};
                color: {ColorPalette.TEXT_PRIMARY};
            }}
            QWidget {{
                background-color: {background};
                color: {ColorPalette.TEXT_PRIMARY};
                font-family: 'Courier New', 'Roboto Mono', monospace;
                font-size: 14px;
            }}
            QLabel {{
                color: {ColorPalette.TEXT_PRIMARY};
                background-color: transparent;
            }}
            QPushButton {{
                background-color: {ColorPalette.BACKGROUND_CARD};
                color: {ColorPalette.TEXT_PRIMARY};
                border: 2px solid {ColorPalette.BORDER_PRIMARY};
                border-radius: 10px;
                padding: 8px 14px;
                font-weight: bold;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.ACCENT_SAND};
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.ACCENT_NAVY};
                color: {ColorPalette.TEXT_ON_ACCENT};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_MUTED};
                border-color: {ColorPalette.BORDER_SOFT};
            }}
            QLineEdit, QComboBox, QSpinBox {{
                background-color: {ColorPalette.BACKGROUND_SHEET};
                color: {ColorPalette.TEXT_PRIMARY};
                border: 2px solid {ColorPalette.BORDER_PRIMARY};
                border-radius: 6px;
                padding: 4px;
            }}
            QListWidget, QTableWidget {{
                background-color: {ColorPalette.BACKGROUND_CARD};
                border: 2px solid {ColorPalette.BORDER_PRIMARY};
                border-radius: 8px;
            }}
            QGroupBox {{
                border: 2px solid {ColorPalette.BORDER_PRIMARY};
                border-radius: 10px;
                margin-top: 8px;
                padding-top: 12px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 3px 0 3px;
            }}
            QProgressBar {{
                border: 2px solid {ColorPalette.BORDER_PRIMARY};
                border-radius: 6px;
                background-color: {ColorPalette.BACKGROUND_CARD};
                height: 14px;
            }}
            QProgressBar::chunk {{
                background-color: {ColorPalette.ACCENT_SAGE};
            }}
        """

    @staticmethod
    def get_title_style() -> str:
        return "font-size: 26pt; font-weight: bold; letter-spacing: 2px;"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_accent_button_style(color: str) -> str:
        return (
            f"QPushButton {{ background-color: {color}; color: {ColorPalette.TEXT_PRIMARY}; }}"
            f"QPushButton:hover {{ background-color: {ColorPalette.ACCENT_SAND}; }}"
        )

    @staticmethod
    def get_answer_option_style(state: str) -> str:
        """Style of one option button; ``state`` is idle, correct, wrong or dimmed."""
        colors = {
            "correct": ColorPalette.SUCCESS,
            "wrong": ColorPalette.ERROR,
            "dimmed": ColorPalette.BORDER_SOFT,
        }
        background = colors.get(state, ColorPalette.BACKGROUND_CARD)
        return (
            f"QPushButton {{ background-color: {background}; text-align: left; padding: 10px; }}"
        )
