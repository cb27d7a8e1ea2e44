"""Ranking view with a global tab and one tab per quiz mode."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from cdb_quizz.constants.ui_constants import BUTTON_BACK, GLOBAL_LEADERBOARD_TAB, LEADERBOARD_TITLE
from cdb_quizz.core.models import AppMode
from cdb_quizz.core.quiz_manager import QuizManager
from cdb_quizz.styling.color_palette import ColorPalette
from cdb_quizz.styling.styles import Styles

_COLUMNS = ("#", "Jugador", "XP", "Nivel")


class LeaderboardPanel(QWidget):
    def __init__(self, quiz_manager: QuizManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.tab_buttons: dict[str, QPushButton] = {}
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        title = QLabel(LEADERBOARD_TITLE, self)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(title)

        tabs = QHBoxLayout()
        for tab in (GLOBAL_LEADERBOARD_TAB, *(mode.value for mode in AppMode)):
            button = QPushButton(tab, self)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, value=tab: self._select_tab(value))
            self.tab_buttons[tab] = button
            tabs.addWidget(button)
        layout.addLayout(tabs)

        self.table = QTableWidget(0, len(_COLUMNS), self)
        self.table.setHorizontalHeaderLabels(list(_COLUMNS))
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionMode(QAbstractItemView.NoSelection)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.Stretch)
        layout.addWidget(self.table, stretch=1)

        back_button = QPushButton(BUTTON_BACK, self)
        back_button.clicked.connect(self.quiz_manager.back_to_profile)
        layout.addWidget(back_button)

    def _select_tab(self, tab: str) -> None:
        self.quiz_manager.set_leaderboard_tab(tab if tab == GLOBAL_LEADERBOARD_TAB else AppMode(tab))

    def refresh(self) -> None:
        current = self.quiz_manager.leaderboard_tab
        current_key = current.value if isinstance(current, AppMode) else current
        for tab, button in self.tab_buttons.items():
            button.setChecked(tab == current_key)

        rows = self.quiz_manager.leaderboard_rows()
        self.table.setRowCount(len(rows))
        highlight = QBrush(QColor(ColorPalette.ACCENT_SAND))
        for row_index, row in enumerate(rows):
            values = (str(row.rank), row.nickname, str(row.xp), str(row.level))
            for column, value in enumerate(values):
                item = QTableWidgetItem(value)
                if row.is_user:
                    item.setBackground(highlight)
                self.table.setItem(row_index, column, item)
