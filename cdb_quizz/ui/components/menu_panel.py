"""Quiz mode picker."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from cdb_quizz.constants.ui_constants import BUTTON_BACK, MENU_TITLE
from cdb_quizz.core.catalog import MODE_DESCRIPTIONS
from cdb_quizz.core.models import AppMode
from cdb_quizz.core.quiz_manager import QuizManager
from cdb_quizz.styling.color_palette import mode_accent
from cdb_quizz.styling.styles import Styles


class MenuPanel(QWidget):
    def __init__(self, quiz_manager: QuizManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.mode_buttons: dict[AppMode, QPushButton] = {}
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        title = QLabel(MENU_TITLE, self)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(title)

        for mode in AppMode:
            button = QPushButton(f"{mode.label}\n{MODE_DESCRIPTIONS.get(mode, '')}", self)
            button.setCheckable(True)
            button.setMinimumHeight(60)
            button.setStyleSheet(Styles.get_accent_button_style(mode_accent(mode)))
            button.clicked.connect(lambda _checked=False, m=mode: self.quiz_manager.select_app_mode(m))
            self.mode_buttons[mode] = button
            layout.addWidget(button)

        layout.addStretch()
        back_button = QPushButton(BUTTON_BACK, self)
        back_button.clicked.connect(self.quiz_manager.back_to_profile)
        layout.addWidget(back_button)

    def refresh(self) -> None:
        for mode, button in self.mode_buttons.items():
            button.setChecked(mode is self.quiz_manager.app_mode)
