"""Settings, quiz sources and reset actions."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from cdb_quizz.constants.about import APP_ABOUT_TEXT
from cdb_quizz.constants.ui_constants import (
    ADMIN_TITLE,
    BACKGROUND_LABEL,
    BACKGROUND_OPTIONS,
    BORDER_RADIUS_LABEL,
    BUTTON_ADD_SOURCE,
    BUTTON_BACK,
    BUTTON_LAYOUT_LABEL,
    BUTTON_LAYOUT_LABELS,
    BUTTON_RESET_MODE,
    BUTTON_RESET_PROFILE,
    NEW_SOURCE_PLACEHOLDER,
    SOUND_LABEL,
    SOURCES_TITLE_TEMPLATE,
)
from cdb_quizz.core.models import ButtonLayout
from cdb_quizz.core.quiz_manager import QuizManager
from cdb_quizz.styling.color_palette import ColorPalette
from cdb_quizz.styling.styles import Styles
from cdb_quizz.ui.dialog_helpers import confirm_reset_mode, confirm_reset_profile

_SOURCE_ID_ROLE = Qt.UserRole


class AdminPanel(QWidget):
    """UI component for app settings. Changes apply immediately."""

    def __init__(self, quiz_manager: QuizManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        title = QLabel(ADMIN_TITLE, self)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(title)

        # Display settings group
        display_group = QGroupBox(ADMIN_TITLE, self)
        display_layout = QVBoxLayout()
        display_group.setLayout(display_layout)

        self.sound_checkbox = QCheckBox(SOUND_LABEL, display_group)
        self.sound_checkbox.toggled.connect(lambda checked: self.quiz_manager.update_settings(sound_enabled=checked))
        display_layout.addWidget(self.sound_checkbox)

        background_row = QHBoxLayout()
        background_row.addWidget(QLabel(BACKGROUND_LABEL, display_group))
        background_row.addStretch()
        self.background_combo = QComboBox(display_group)
        for color, label in BACKGROUND_OPTIONS:
            self.background_combo.addItem(label, color)
        self.background_combo.currentIndexChanged.connect(self._handle_background_changed)
        background_row.addWidget(self.background_combo)
        display_layout.addLayout(background_row)

        layout_row = QHBoxLayout()
        layout_row.addWidget(QLabel(BUTTON_LAYOUT_LABEL, display_group))
        layout_row.addStretch()
        self.button_layout_combo = QComboBox(display_group)
        for value, label in BUTTON_LAYOUT_LABELS.items():
            self.button_layout_combo.addItem(label, value)
        self.button_layout_combo.currentIndexChanged.connect(self._handle_button_layout_changed)
        layout_row.addWidget(self.button_layout_combo)
        display_layout.addLayout(layout_row)

        radius_row = QHBoxLayout()
        radius_row.addWidget(QLabel(BORDER_RADIUS_LABEL, display_group))
        radius_row.addStretch()
        self.radius_spinbox = QSpinBox(display_group)
        self.radius_spinbox.setRange(0, 48)
        self.radius_spinbox.setSuffix(" px")
        self.radius_spinbox.valueChanged.connect(
            lambda value: self.quiz_manager.update_settings(card_border_radius=value)
        )
        radius_row.addWidget(self.radius_spinbox)
        display_layout.addLayout(radius_row)
        layout.addWidget(display_group)

        # Sources of the selected mode
        self.sources_group = QGroupBox(self)
        sources_layout = QVBoxLayout()
        self.sources_group.setLayout(sources_layout)
        self.sources_list = QListWidget(self.sources_group)
        self.sources_list.itemChanged.connect(self._handle_source_toggled)
        sources_layout.addWidget(self.sources_list)
        add_row = QHBoxLayout()
        self.new_source_edit = QLineEdit(self.sources_group)
        self.new_source_edit.setPlaceholderText(NEW_SOURCE_PLACEHOLDER)
        self.new_source_edit.returnPressed.connect(self._handle_add_source)
        add_row.addWidget(self.new_source_edit, stretch=1)
        add_button = QPushButton(BUTTON_ADD_SOURCE, self.sources_group)
        add_button.clicked.connect(self._handle_add_source)
        add_row.addWidget(add_button)
        sources_layout.addLayout(add_row)
        layout.addWidget(self.sources_group, stretch=1)

        reset_row = QHBoxLayout()
        self.reset_mode_button = QPushButton(BUTTON_RESET_MODE, self)
        self.reset_mode_button.clicked.connect(self._handle_reset_mode)
        reset_row.addWidget(self.reset_mode_button)
        reset_profile_button = QPushButton(BUTTON_RESET_PROFILE, self)
        reset_profile_button.setStyleSheet(Styles.get_accent_button_style(ColorPalette.ACCENT_CORAL))
        reset_profile_button.clicked.connect(self._handle_reset_profile)
        reset_row.addWidget(reset_profile_button)
        layout.addLayout(reset_row)

        about_label = QLabel(APP_ABOUT_TEXT, self)
        about_label.setWordWrap(True)
        about_label.setStyleSheet(f"color: {ColorPalette.TEXT_MUTED}; font-size: 10pt;")
        layout.addWidget(about_label)

        back_button = QPushButton(BUTTON_BACK, self)
        back_button.clicked.connect(self.quiz_manager.back_to_profile)
        layout.addWidget(back_button)

    def _handle_background_changed(self, index: int) -> None:
        color = self.background_combo.itemData(index)
        if color:
            self.quiz_manager.update_settings(background_color=color)

    def _handle_button_layout_changed(self, index: int) -> None:
        value = self.button_layout_combo.itemData(index)
        if value:
            self.quiz_manager.update_settings(button_layout=ButtonLayout(value))

    def _handle_source_toggled(self, item: QListWidgetItem) -> None:
        self.quiz_manager.toggle_source(self.quiz_manager.app_mode, item.data(_SOURCE_ID_ROLE))

    def _handle_add_source(self) -> None:
        name = self.new_source_edit.text()
        if not name.strip():
            return
        self.quiz_manager.add_source(self.quiz_manager.app_mode, name)
        self.new_source_edit.clear()

    def _handle_reset_mode(self) -> None:
        mode = self.quiz_manager.app_mode
        self.quiz_manager.reset_mode_stats(mode, lambda: confirm_reset_mode(self, mode.label))

    def _handle_reset_profile(self) -> None:
        self.quiz_manager.reset_profile(lambda: confirm_reset_profile(self))

    def refresh(self) -> None:
        profile = self.quiz_manager.profile
        settings = profile.settings
        mode = self.quiz_manager.app_mode
        widgets = (
            self.sound_checkbox,
            self.background_combo,
            self.button_layout_combo,
            self.radius_spinbox,
            self.sources_list,
        )
        for widget in widgets:
            widget.blockSignals(True)
        try:
            self.sound_checkbox.setChecked(settings.sound_enabled)
            background_index = self.background_combo.findData(settings.background_color)
            self.background_combo.setCurrentIndex(max(0, background_index))
            self.button_layout_combo.setCurrentIndex(
                max(0, self.button_layout_combo.findData(settings.button_layout.value))
            )
            self.radius_spinbox.setValue(settings.card_border_radius)

            self.sources_group.setTitle(SOURCES_TITLE_TEMPLATE.format(mode=mode.label))
            self.sources_list.clear()
            for source in profile.sources_for(mode):
                item = QListWidgetItem(f"{source.name}  ·  {source.type.value}")
                item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
                item.setCheckState(Qt.Checked if source.enabled else Qt.Unchecked)
                item.setData(_SOURCE_ID_ROLE, source.id)
                self.sources_list.addItem(item)
        finally:
            for widget in widgets:
                widget.blockSignals(False)
        self.reset_mode_button.setText(f"{BUTTON_RESET_MODE} ({mode.label})")
