"""Dialog for editing nickname and avatar."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from cdb_quizz.constants.quiz_constants import NICKNAME_MAX_LENGTH
from cdb_quizz.constants.ui_constants import AVATAR_LABEL, NICKNAME_LABEL, PROFILE_DIALOG_TITLE
from cdb_quizz.core.models import Avatar


class ProfileDialog(QDialog):
    """Only avatars unlocked at the current level are offered."""

    def __init__(
        self,
        parent=None,
        nickname: str = "",
        avatar: str = "",
        avatars: list[Avatar] | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(PROFILE_DIALOG_TITLE)
        self.setModal(True)
        self.setMinimumWidth(360)

        self._nickname = nickname
        self._avatar = avatar
        self._avatars = avatars or []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        nickname_row = QHBoxLayout()
        nickname_row.addWidget(QLabel(NICKNAME_LABEL))
        self.nickname_edit = QLineEdit(self._nickname)
        self.nickname_edit.setMaxLength(NICKNAME_MAX_LENGTH)
        nickname_row.addWidget(self.nickname_edit, stretch=1)
        layout.addLayout(nickname_row)

        avatar_row = QHBoxLayout()
        avatar_row.addWidget(QLabel(AVATAR_LABEL))
        self.avatar_combo = QComboBox()
        for avatar in self._avatars:
            self.avatar_combo.addItem(f"{avatar.icon}  (Nivel {avatar.level})", avatar.icon)
        current = self.avatar_combo.findData(self._avatar)
        if current >= 0:
            self.avatar_combo.setCurrentIndex(current)
        avatar_row.addWidget(self.avatar_combo, stretch=1)
        layout.addLayout(avatar_row)

        # Buttons
        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancelar")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Guardar")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def get_nickname(self) -> str:
        return self.nickname_edit.text()

    def get_avatar(self) -> str:
        """Get the selected avatar icon."""
        return self.avatar_combo.currentData() or self._avatar
