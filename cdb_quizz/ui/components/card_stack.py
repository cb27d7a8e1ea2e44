"""Painted stack of swipeable question cards."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QPointF, QRectF, Qt, QVariantAnimation
from PySide6.QtGui import QColor, QFont, QMouseEvent, QPainter, QPaintEvent, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from cdb_quizz.constants.quiz_constants import FLY_DURATION_MS
from cdb_quizz.constants.ui_constants import (
    CARD_HEIGHT,
    CARD_WIDTH,
    SWIPE_DOWN_LABEL,
    SWIPE_LEFT_LABEL,
    SWIPE_RIGHT_LABEL,
    SWIPE_UP_LABEL,
)
from cdb_quizz.core.card import CardGesture, CardPhase, CardPose, card_content, stack_layout
from cdb_quizz.core.models import Question, SwipeDirection
from cdb_quizz.core.services.scheduler import Scheduler
from cdb_quizz.styling.color_palette import ColorPalette, difficulty_color


class CardStackWidget(QWidget):
    """Shows up to three cards; only the top one follows the pointer."""

    def __init__(
        self,
        scheduler: Scheduler,
        on_swipe: Callable[[SwipeDirection], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._scheduler = scheduler
        self._on_swipe = on_swipe
        self._cards: tuple[Question, ...] = ()
        self._deal_key: object = None
        self._gesture: CardGesture | None = None
        self._fly_offset = QPointF(0, 0)
        self._border_radius = 24

        self._fly_animation = QVariantAnimation(self)
        self._fly_animation.setDuration(FLY_DURATION_MS)
        self._fly_animation.valueChanged.connect(self._on_fly_step)

        self.setMinimumSize(CARD_WIDTH + 40, CARD_HEIGHT + 60)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

    def set_border_radius(self, radius: int) -> None:
        self._border_radius = max(0, radius)
        self.update()

    def set_cards(self, cards: tuple[Question, ...], deal_key: object) -> None:
        """Replace the visible window. A new ``deal_key`` means a new top card."""
        self._cards = cards
        if deal_key != self._deal_key:
            self._deal_key = deal_key
            if self._gesture is not None:
                self._gesture.cancel()
            self._fly_animation.stop()
            self._fly_offset = QPointF(0, 0)
            self._gesture = CardGesture(self._scheduler, self._on_swipe) if cards else None
        self.update()

    def clear(self) -> None:
        self.set_cards((), None)

    def trigger(self, direction: SwipeDirection) -> None:
        if self._gesture is not None and self._gesture.trigger(direction):
            self._start_fly()

    # --- Pointer input ---

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if self._gesture is not None and event.button() == Qt.LeftButton:
            position = event.position()
            self._gesture.pointer_down(position.x(), position.y())
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._gesture is not None and self._gesture.phase is CardPhase.DRAGGING:
            position = event.position()
            self._gesture.pointer_move(position.x(), position.y())
            self.update()
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if self._gesture is not None and event.button() == Qt.LeftButton:
            released_from = QPointF(*self._gesture.offset)
            if self._gesture.pointer_up() is not None:
                self._start_fly(released_from)
            self.update()
        super().mouseReleaseEvent(event)

    def _start_fly(self, start: QPointF | None = None) -> None:
        if self._gesture is None or self._gesture.phase is not CardPhase.FLYING:
            return
        self._fly_animation.stop()
        self._fly_animation.setStartValue(start or QPointF(0, 0))
        self._fly_animation.setEndValue(QPointF(*self._gesture.offset))
        self._fly_animation.start()

    def _on_fly_step(self, value: QPointF) -> None:
        self._fly_offset = value
        self.update()

    # --- Painting ---

    def _top_pose(self) -> CardPose | None:
        if self._gesture is None:
            return None
        pose = self._gesture.pose()
        if self._gesture.phase is CardPhase.FLYING:
            return CardPose(
                offset_x=self._fly_offset.x(),
                offset_y=self._fly_offset.y(),
                rotation=pose.rotation,
                hint_left=pose.hint_left,
                hint_right=pose.hint_right,
                hint_up=pose.hint_up,
                hint_down=pose.hint_down,
            )
        return pose

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        center = QPointF(self.width() / 2, self.height() / 2)
        for index in reversed(range(len(self._cards))):
            slot = stack_layout(index)
            if slot is None:
                continue
            pose = self._top_pose() if index == 0 else None
            painter.save()
            painter.translate(center)
            if pose is not None:
                painter.translate(pose.offset_x, pose.offset_y)
                painter.rotate(pose.rotation)
            painter.translate(0, slot.translate_y)
            painter.rotate(slot.rotation)
            painter.scale(slot.scale, slot.scale)
            painter.setOpacity(slot.opacity)
            self._paint_card(painter, self._cards[index], pose)
            painter.restore()
        painter.end()

    def _paint_card(self, painter: QPainter, question: Question, pose: CardPose | None) -> None:
        rect = QRectF(-CARD_WIDTH / 2, -CARD_HEIGHT / 2, CARD_WIDTH, CARD_HEIGHT)
        painter.setPen(QPen(QColor(ColorPalette.BORDER_PRIMARY), 3))
        painter.setBrush(QColor(ColorPalette.BACKGROUND_CARD))
        painter.drawRoundedRect(rect, self._border_radius, self._border_radius)

        content = card_content(question)
        if content.difficulty_label:
            pill = QRectF(rect.left() + 20, rect.top() + 20, 110, 30)
            painter.setBrush(QColor(difficulty_color(content.difficulty_label)))
            painter.setPen(QPen(QColor(ColorPalette.BORDER_PRIMARY), 2))
            painter.drawRoundedRect(pill, 12, 12)
            painter.setFont(QFont("Courier New", 11, QFont.Bold))
            painter.drawText(pill, Qt.AlignCenter, content.difficulty_label.upper())

        painter.setPen(QColor(ColorPalette.TEXT_PRIMARY))
        painter.setFont(QFont("Courier New", content.font_size, QFont.Bold))
        text_rect = rect.adjusted(24, 70, -24, -40)
        painter.drawText(text_rect, Qt.AlignCenter | Qt.TextWordWrap, content.question_text)

        if pose is not None:
            self._paint_hints(painter, rect, pose)

    def _paint_hints(self, painter: QPainter, rect: QRectF, pose: CardPose) -> None:
        hints = (
            (pose.hint_left, SWIPE_LEFT_LABEL, ColorPalette.HINT_LEFT, Qt.AlignRight | Qt.AlignTop),
            (pose.hint_right, SWIPE_RIGHT_LABEL, ColorPalette.HINT_RIGHT, Qt.AlignLeft | Qt.AlignTop),
            (pose.hint_up, SWIPE_UP_LABEL, ColorPalette.HINT_UP, Qt.AlignHCenter | Qt.AlignBottom),
            (pose.hint_down, SWIPE_DOWN_LABEL, ColorPalette.HINT_DOWN, Qt.AlignHCenter | Qt.AlignTop),
        )
        painter.setFont(QFont("Courier New", 18, QFont.Bold))
        base_opacity = painter.opacity()
        for strength, label, color, alignment in hints:
            if strength <= 0:
                continue
            painter.setOpacity(base_opacity * strength)
            painter.setPen(QPen(QColor(color), 3))
            painter.drawText(rect.adjusted(28, 28, -28, -28), alignment, label.upper())
        painter.setOpacity(base_opacity)
