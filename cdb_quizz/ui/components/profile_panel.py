"""Home view: the player card and navigation to every other view."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cdb_quizz.constants.ui_constants import (
    BUTTON_ADMIN,
    BUTTON_EDIT_PROFILE,
    BUTTON_HISTORY,
    BUTTON_LEADERBOARD,
    BUTTON_PLAY,
    BUTTON_SELECT_QUIZ,
    PROFILE_LEVEL_TEMPLATE,
    PROFILE_STATS_TEMPLATE,
)
from cdb_quizz.core import progression
from cdb_quizz.core.catalog import BADGES, MODE_DESCRIPTIONS
from cdb_quizz.core.quiz_manager import QuizManager
from cdb_quizz.styling.color_palette import mode_accent
from cdb_quizz.styling.styles import Styles
from cdb_quizz.ui.components.profile_dialog import ProfileDialog
from cdb_quizz.ui.dialog_helpers import show_warning


class ProfilePanel(QWidget):
    """UI component showing level, XP and badges of the local player."""

    def __init__(self, quiz_manager: QuizManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header = QHBoxLayout()
        self.avatar_label = QLabel(self)
        self.avatar_label.setStyleSheet("font-size: 48pt;")
        header.addWidget(self.avatar_label)

        identity = QVBoxLayout()
        self.nickname_label = QLabel(self)
        self.nickname_label.setStyleSheet(Styles.get_large_label_style())
        identity.addWidget(self.nickname_label)
        self.level_label = QLabel(self)
        identity.addWidget(self.level_label)
        self.xp_bar = QProgressBar(self)
        self.xp_bar.setRange(0, 1000)
        self.xp_bar.setTextVisible(False)
        identity.addWidget(self.xp_bar)
        self.stats_label = QLabel(self)
        identity.addWidget(self.stats_label)
        header.addLayout(identity, stretch=1)

        edit_button = QPushButton(BUTTON_EDIT_PROFILE, self)
        edit_button.clicked.connect(self._handle_edit_profile)
        header.addWidget(edit_button, alignment=Qt.AlignTop)
        layout.addLayout(header)

        self.badge_row = QHBoxLayout()
        self.badge_labels: list[QLabel] = []
        for badge in BADGES:
            label = QLabel(badge.icon, self)
            label.setAlignment(Qt.AlignCenter)
            label.setToolTip(f"{badge.name}: {badge.description}")
            self.badge_labels.append(label)
            self.badge_row.addWidget(label)
        layout.addLayout(self.badge_row)

        layout.addStretch()
        self.mode_label = QLabel(self)
        self.mode_label.setAlignment(Qt.AlignCenter)
        self.mode_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.mode_label)
        self.mode_description = QLabel(self)
        self.mode_description.setAlignment(Qt.AlignCenter)
        self.mode_description.setWordWrap(True)
        layout.addWidget(self.mode_description)

        self.play_button = QPushButton(BUTTON_PLAY, self)
        self.play_button.setMinimumHeight(56)
        self.play_button.clicked.connect(self.quiz_manager.open_setup)
        layout.addWidget(self.play_button)

        grid = QGridLayout()
        navigation = (
            (BUTTON_SELECT_QUIZ, self.quiz_manager.open_menu),
            (BUTTON_LEADERBOARD, self.quiz_manager.open_leaderboard),
            (BUTTON_HISTORY, self.quiz_manager.open_history),
            (BUTTON_ADMIN, self.quiz_manager.open_admin),
        )
        for position, (text, handler) in enumerate(navigation):
            button = QPushButton(text, self)
            button.clicked.connect(handler)
            grid.addWidget(button, position // 2, position % 2)
        layout.addLayout(grid)

    def _handle_edit_profile(self) -> None:
        profile = self.quiz_manager.profile
        dialog = ProfileDialog(
            self,
            nickname=profile.nickname,
            avatar=profile.selected_avatar,
            avatars=progression.unlocked_avatars(profile.level),
        )
        if not dialog.exec():
            return
        try:
            self.quiz_manager.update_identity(dialog.get_nickname(), dialog.get_avatar())
        except ValueError as exc:
            show_warning(self, BUTTON_EDIT_PROFILE, str(exc))
            return
        self.refresh()

    def refresh(self) -> None:
        profile = self.quiz_manager.profile
        mode = self.quiz_manager.app_mode
        self.avatar_label.setText(profile.selected_avatar)
        self.nickname_label.setText(profile.nickname)
        self.level_label.setText(PROFILE_LEVEL_TEMPLATE.format(level=profile.level, xp=profile.xp))
        self.xp_bar.setValue(int(progression.level_progress(profile.xp) * 1000))
        self.stats_label.setText(
            PROFILE_STATS_TEMPLATE.format(
                correct=profile.total_correct,
                minutes=int(profile.total_time_seconds // 60),
            )
        )
        for badge, label in zip(BADGES, self.badge_labels):
            unlocked = badge.id in profile.badges
            label.setStyleSheet(f"font-size: 24pt; {'' if unlocked else 'color: #BBBBBB;'}")
            label.setText(badge.icon if unlocked else "🔒")
        self.mode_label.setText(mode.label)
        self.mode_description.setText(MODE_DESCRIPTIONS.get(mode, ""))
        self.play_button.setStyleSheet(Styles.get_accent_button_style(mode_accent(mode)))
