"""
Unit tests for the swipe card gesture model.
"""
import unittest

from cdb_quizz.core.card import (
    CardGesture,
    CardPhase,
    card_content,
    classify_swipe,
    stack_layout,
)
from cdb_quizz.core.models import Difficulty, SwipeDirection
from cdb_quizz.core.services.scheduler import ManualScheduler
from tests.fixtures import make_question


class TestClassifySwipe(unittest.TestCase):

    def test_below_threshold_is_no_swipe(self):
        self.assertIsNone(classify_swipe(80, 0))
        self.assertIsNone(classify_swipe(-80, 80))

    def test_directions(self):
        self.assertIs(classify_swipe(81, 0), SwipeDirection.RIGHT)
        self.assertIs(classify_swipe(-81, 0), SwipeDirection.LEFT)
        self.assertIs(classify_swipe(0, -81), SwipeDirection.UP)
        self.assertIs(classify_swipe(0, 81), SwipeDirection.DOWN)

    def test_horizontal_wins_over_vertical(self):
        self.assertIs(classify_swipe(90, -300), SwipeDirection.RIGHT)
        self.assertIs(classify_swipe(-90, 300), SwipeDirection.LEFT)


class TestStackLayout(unittest.TestCase):

    def test_top_card_is_untransformed(self):
        slot = stack_layout(0)
        self.assertEqual((slot.scale, slot.translate_y, slot.rotation, slot.opacity), (1.0, 0.0, 0.0, 1.0))
        self.assertEqual(slot.z_order, 100)

    def test_depth_slots(self):
        first = stack_layout(1)
        self.assertAlmostEqual(first.scale, 0.95)
        self.assertEqual(first.translate_y, 18)
        self.assertEqual(first.rotation, -2.0)
        self.assertAlmostEqual(first.opacity, 0.7)
        second = stack_layout(2)
        self.assertAlmostEqual(second.scale, 0.9)
        self.assertEqual(second.rotation, 2.0)
        self.assertLess(second.z_order, first.z_order)

    def test_outside_window_is_not_materialised(self):
        self.assertIsNone(stack_layout(3))
        self.assertIsNone(stack_layout(-1))


class TestCardContent(unittest.TestCase):

    def test_question_object(self):
        content = card_content(make_question(text="¿Qué es un vermut?"))
        self.assertEqual(content.question_text, "¿Qué es un vermut?")
        self.assertEqual(content.difficulty_label, Difficulty.MEDIUM.label)
        self.assertEqual(content.font_size, 28)

    def test_font_size_shrinks_with_length(self):
        self.assertEqual(card_content({"questionText": "x" * 45}).font_size, 24)
        self.assertEqual(card_content({"questionText": "x" * 80}).font_size, 20)
        self.assertEqual(card_content({"questionText": "x" * 150}).font_size, 17)

    def test_missing_fields_become_empty(self):
        for value in (None, {}, object()):
            content = card_content(value)
            self.assertEqual(content.question_text, "")
            self.assertEqual(content.difficulty_label, "")

    def test_plain_mapping_with_text_key(self):
        content = card_content({"text": "Hola", "difficulty": "hard"})
        self.assertEqual(content.question_text, "Hola")
        self.assertEqual(content.difficulty_label, "hard")


class TestCardGesture(unittest.TestCase):

    def setUp(self):
        self.scheduler = ManualScheduler()
        self.commits = []
        self.gesture = CardGesture(self.scheduler, self.commits.append)

    def drag(self, dx, dy):
        self.gesture.pointer_down(100, 100)
        self.gesture.pointer_move(100 + dx, 100 + dy)
        return self.gesture.pointer_up()

    def test_short_drag_snaps_back(self):
        self.assertIsNone(self.drag(40, 10))
        self.assertEqual(self.gesture.offset, (0.0, 0.0))
        self.assertIs(self.gesture.phase, CardPhase.IDLE)
        self.assertEqual(self.commits, [])

    def test_right_swipe_commits_after_fly_off(self):
        self.assertIs(self.drag(150, 0), SwipeDirection.RIGHT)
        self.assertIs(self.gesture.phase, CardPhase.FLYING)
        self.assertEqual(self.gesture.offset, (800.0, 0.0))
        self.scheduler.advance(299)
        self.assertEqual(self.commits, [])
        self.scheduler.advance(1)
        self.assertEqual(self.commits, [SwipeDirection.RIGHT])
        self.assertIs(self.gesture.phase, CardPhase.IDLE)

    def test_flying_card_ignores_input(self):
        self.drag(-150, 0)
        self.assertFalse(self.gesture.pointer_down(0, 0))
        self.assertFalse(self.gesture.trigger(SwipeDirection.RIGHT))
        self.scheduler.advance(300)
        self.assertEqual(self.commits, [SwipeDirection.LEFT])

    def test_up_commits_immediately_and_recentres(self):
        self.assertIs(self.drag(0, -150), SwipeDirection.UP)
        self.assertEqual(self.commits, [SwipeDirection.UP])
        self.assertEqual(self.gesture.offset, (0.0, 0.0))

    def test_down_flies_downwards(self):
        self.gesture.trigger(SwipeDirection.DOWN)
        self.assertEqual(self.gesture.offset, (0.0, 800.0))
        self.scheduler.advance(300)
        self.assertEqual(self.commits, [SwipeDirection.DOWN])

    def test_lower_cards_do_not_react(self):
        gesture = CardGesture(self.scheduler, self.commits.append, stack_index=1)
        self.assertFalse(gesture.pointer_down(0, 0))
        self.assertFalse(gesture.trigger(SwipeDirection.UP))
        self.assertEqual(self.commits, [])

    def test_cancel_drops_pending_commit(self):
        self.gesture.trigger(SwipeDirection.LEFT)
        self.gesture.cancel()
        self.scheduler.advance(1000)
        self.assertEqual(self.commits, [])

    def test_pose_hints_and_rotation(self):
        self.gesture.pointer_down(0, 0)
        self.gesture.pointer_move(50, -200)
        pose = self.gesture.pose()
        self.assertAlmostEqual(pose.rotation, 2.5)
        self.assertAlmostEqual(pose.hint_right, 0.5)
        self.assertEqual(pose.hint_left, 0.0)
        self.assertEqual(pose.hint_up, 1.0)
        self.assertEqual(pose.hint_down, 0.0)


if __name__ == "__main__":
    unittest.main()
