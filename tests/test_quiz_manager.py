"""
Unit tests for QuizManager: navigation, the play loop, duels, pronunciation and results.
"""
import asyncio
import random
import unittest

from cdb_quizz.constants.ui_constants import (
    LOAD_ERROR_MESSAGE,
    MICROPHONE_ERROR_MESSAGE,
    SAVE_ERROR_MESSAGE,
    SAVE_OK_TEMPLATE,
)
from cdb_quizz.core.catalog import FRIEND_OPPONENT, OPPONENTS
from cdb_quizz.core.models import (
    AppMode,
    GameMode,
    Language,
    PronunciationFeedback,
    SwipeDirection,
    Topic,
)
from cdb_quizz.core.quiz_manager import is_victory
from cdb_quizz.core.services.attempt_reporter import AttemptSaveError
from cdb_quizz.core.services.challenge import ChallengeStatus
from cdb_quizz.core.services.game_session import PronunciationPhase, RecordingError
from cdb_quizz.core.services.gemini_client import GeminiError
from cdb_quizz.core.services.question_source import QuestionSourceError
from cdb_quizz.core.state_machine import GameState, IllegalTransitionError
from tests.fixtures import (
    FakeQuestionSource,
    FakeReporter,
    build_manager,
    go_to_setup,
    make_questions,
)


class FixedRandom(random.Random):
    """Random whose ``random()`` always returns the same value."""

    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


class FakeGemini:
    def __init__(self, score=90.0, error=None):
        self.score = score
        self.error = error
        self.evaluated = []

    async def evaluate_pronunciation(self, audio, mime_type, word, language):
        self.evaluated.append((audio, mime_type, word, language))
        if self.error is not None:
            raise self.error
        return PronunciationFeedback(score=self.score, feedback="Bien")

    async def synthesize_speech(self, text, language):
        if self.error is not None:
            raise self.error
        return b"pcm:" + text.encode("utf-8")


def start_playing(manager, mode=AppMode.CULTURA):
    go_to_setup(manager, mode)
    if mode is AppMode.IDIOMAS:
        manager.select_language(Language.ENGLISH)
        manager.select_topic(Topic.INGREDIENTS)
    return asyncio.run(manager.start_game())


def answer_current(manager, scheduler, option):
    manager.handle_swipe(SwipeDirection.UP)
    entry = manager.select_answer(option)
    manager.continue_to_next()
    scheduler.advance(400)
    return entry


class TestNavigation(unittest.TestCase):

    def setUp(self):
        self.manager, self.scheduler, self.repository = build_manager(make_questions(3))

    def test_intro_moves_to_profile_after_delay(self):
        self.manager.start()
        self.scheduler.advance(3999)
        self.assertIs(self.manager.state, GameState.INTRO)
        self.scheduler.advance(1)
        self.assertIs(self.manager.state, GameState.PROFILE)

    def test_skipping_intro_cancels_its_timer(self):
        self.manager.start()
        self.manager.skip_intro()
        self.manager.open_leaderboard()
        self.scheduler.advance(10_000)
        self.assertIs(self.manager.state, GameState.LEADERBOARD)

    def test_illegal_navigation_raises(self):
        with self.assertRaises(IllegalTransitionError):
            self.manager.open_setup()

    def test_changing_mode_clears_language_and_topic(self):
        go_to_setup(self.manager, AppMode.IDIOMAS)
        self.manager.select_language(Language.FRENCH)
        self.assertTrue(self.manager.select_topic(Topic.DISHES))
        self.manager.back_to_profile()
        self.manager.open_menu()
        self.manager.select_app_mode(AppMode.VINO)
        self.assertIs(self.manager.state, GameState.PROFILE)
        self.assertIsNone(self.manager.language)
        self.assertIsNone(self.manager.topic)

    def test_language_mode_needs_language_and_topic(self):
        go_to_setup(self.manager, AppMode.IDIOMAS)
        self.assertFalse(self.manager.can_start())
        self.assertIsNone(self.manager.begin_loading())
        self.manager.select_language(Language.ENGLISH)
        self.assertFalse(self.manager.can_start())
        self.manager.select_topic(Topic.MEAT)
        self.assertTrue(self.manager.can_start())

    def test_locked_topic_is_rejected(self):
        go_to_setup(self.manager, AppMode.IDIOMAS)
        self.assertFalse(self.manager.select_topic(Topic.SERVICE))
        self.assertIsNone(self.manager.topic)

    def test_listeners_are_notified(self):
        calls = []
        listener = lambda: calls.append(self.manager.state)
        self.manager.add_listener(listener)
        self.manager.skip_intro()
        self.assertEqual(calls, [GameState.PROFILE])
        self.manager.remove_listener(listener)
        self.manager.open_menu()
        self.assertEqual(len(calls), 1)

    def test_leaderboard_tab(self):
        self.manager.skip_intro()
        self.manager.open_leaderboard()
        self.assertEqual(len(self.manager.leaderboard_rows()), 5)
        self.manager.set_leaderboard_tab(AppMode.VINO)
        self.assertEqual(self.manager.leaderboard_rows()[0].xp, 8000)


class TestPlayLoop(unittest.TestCase):

    def setUp(self):
        self.questions = make_questions(3)
        self.source = FakeQuestionSource(self.questions, used_sources=["Hemeroteca"])
        self.manager, self.scheduler, self.repository = build_manager(source=self.source)

    def test_start_game_requests_enabled_sources(self):
        self.assertTrue(start_playing(self.manager))
        self.assertIs(self.manager.state, GameState.PLAYING)
        request = self.source.requests[0]
        self.assertIs(request.mode, AppMode.CULTURA)
        self.assertIsNone(request.language)
        self.assertEqual(request.sources, ("Guía Repsol", "Michelin Guide Spain"))
        names = [source.name for source in self.manager.profile.sources_for(AppMode.CULTURA)]
        self.assertIn("Hemeroteca", names)

    def test_worked_session(self):
        start_playing(self.manager)
        q1, q2, q3 = self.questions

        self.assertTrue(answer_current(self.manager, self.scheduler, "A").is_correct)
        self.assertIs(self.manager.current_question(), q2)

        self.manager.handle_swipe(SwipeDirection.LEFT)
        self.assertIs(self.manager.current_question(), q3)
        self.assertEqual(len(self.manager.session.deck), 4)

        self.assertFalse(answer_current(self.manager, self.scheduler, "B").is_correct)
        self.assertIs(self.manager.current_question(), q2)

        self.manager.handle_swipe(SwipeDirection.RIGHT)
        self.assertIs(self.manager.state, GameState.RESULTS)
        summary = self.manager.summary
        self.assertEqual(summary.score, 1)
        self.assertEqual(summary.answered, 2)
        self.assertEqual(summary.deck_length, 4)
        self.assertEqual(summary.distinct_questions, 3)
        self.assertEqual(summary.xp_earned, 50)
        self.assertEqual(summary.accuracy_percent, 33)
        self.assertFalse(summary.victory)
        self.assertEqual(self.manager.profile.xp, 55)
        self.assertEqual(len(self.manager.profile.history), 2)

    def test_finish_payload(self):
        start_playing(self.manager)
        answer_current(self.manager, self.scheduler, "A")
        answer_current(self.manager, self.scheduler, "C")
        self.manager.handle_swipe(SwipeDirection.RIGHT)
        payload = self.manager.summary.payload
        self.assertEqual(payload["slug"], "cultura-de-bar")
        self.assertEqual(payload["app_mode"], "CULTURA")
        self.assertEqual(payload["language"], "es")
        self.assertIsNone(payload["topic"])
        self.assertEqual(payload["score"], 33.33)
        self.assertEqual([q["id"] for q in payload["questions"]], ["q1", "q2", "q3"])
        self.assertEqual(
            [(h["questionId"], h["isCorrect"]) for h in payload["history"]],
            [("q1", True), ("q2", False)],
        )
        self.assertEqual(payload["used_sources"], ["Hemeroteca"])

    def test_down_requeues_like_left(self):
        start_playing(self.manager)
        self.manager.handle_swipe(SwipeDirection.DOWN)
        deck = self.manager.session.deck
        self.assertEqual(len(deck), 4)
        self.assertEqual(deck.remaining(), 3)
        self.assertIs(deck.questions()[-1], self.questions[0])

    def test_stopwatch_runs_only_while_sheet_is_unanswered(self):
        start_playing(self.manager)
        self.manager.handle_swipe(SwipeDirection.UP)
        self.scheduler.advance(1000)
        self.assertEqual(self.manager.session.sheet.elapsed_deciseconds, 10)
        self.manager.select_answer("A")
        self.scheduler.advance(1000)
        self.assertEqual(self.manager.session.sheet.elapsed_deciseconds, 10)
        self.assertAlmostEqual(self.manager.profile.total_time_seconds, 1.0)

    def test_swipes_are_ignored_while_sheet_is_open(self):
        start_playing(self.manager)
        self.manager.handle_swipe(SwipeDirection.UP)
        self.manager.handle_swipe(SwipeDirection.RIGHT)
        self.assertIs(self.manager.current_question(), self.questions[0])
        self.assertTrue(self.manager.session.sheet.open)

    def test_only_first_answer_counts(self):
        start_playing(self.manager)
        self.manager.handle_swipe(SwipeDirection.UP)
        self.manager.select_answer("B")
        self.assertIsNone(self.manager.select_answer("A"))
        self.assertEqual(self.manager.session.score, 0)
        self.assertEqual(self.manager.session.answered, 1)

    def test_continue_waits_for_exit_animation(self):
        start_playing(self.manager)
        self.assertFalse(self.manager.continue_to_next())
        self.manager.handle_swipe(SwipeDirection.UP)
        self.manager.select_answer("A")
        self.assertTrue(self.manager.continue_to_next())
        self.assertFalse(self.manager.continue_to_next())
        self.assertTrue(self.manager.session.sheet.exiting)
        self.scheduler.advance(399)
        self.assertIs(self.manager.current_question(), self.questions[0])
        self.scheduler.advance(1)
        self.assertIs(self.manager.current_question(), self.questions[1])
        self.assertFalse(self.manager.session.sheet.open)

    def test_abandon_drops_session_and_timers(self):
        start_playing(self.manager)
        self.manager.handle_swipe(SwipeDirection.UP)
        self.manager.abandon_session()
        self.assertIs(self.manager.state, GameState.PROFILE)
        self.assertIsNone(self.manager.session)
        self.assertIsNone(self.manager.summary)
        self.assertEqual(self.scheduler.pending(), 0)

    def test_source_failure_gives_placeholder_deck(self):
        source = FakeQuestionSource(error=QuestionSourceError("offline"))
        manager, _, _ = build_manager(source=source)
        start_playing(manager)
        self.assertIs(manager.state, GameState.PLAYING)
        self.assertEqual(manager.current_question().id, "err-1")
        self.assertEqual(manager.load_error, LOAD_ERROR_MESSAGE)

    def test_empty_deck_goes_straight_to_results(self):
        manager, _, _ = build_manager(questions=())
        start_playing(manager)
        self.assertIs(manager.state, GameState.RESULTS)
        self.assertEqual(manager.summary.distinct_questions, 0)

    def test_stale_generation_result_is_ignored(self):
        go_to_setup(self.manager)
        request = self.manager.begin_loading()
        result = asyncio.run(self.manager.fetch_deck(request))
        self.manager.complete_loading(result)
        self.manager.complete_loading(result)
        self.assertIs(self.manager.state, GameState.PLAYING)
        self.assertEqual(self.manager.session.deck.index, 0)

    def test_random_actions_keep_deck_invariants(self):
        for seed in range(1, 6):
            with self.subTest(seed=seed):
                self._play_randomly(seed)

    def _play_randomly(self, seed):
        questions = make_questions(5)
        manager, scheduler, _ = build_manager(questions)
        start_playing(manager)
        chooser = random.Random(seed)
        deferrals = answers = 0
        for _ in range(500):
            if manager.state is not GameState.PLAYING:
                break
            deck = manager.session.deck
            length, remaining = len(deck), deck.remaining()
            action = chooser.choices(["right", "left", "down", "answer"], weights=[3, 1, 1, 3])[0]
            if action == "answer":
                answer_current(manager, scheduler, chooser.choice("ABCD"))
                answers += 1
            elif action == "right":
                manager.handle_swipe(SwipeDirection.RIGHT)
            else:
                manager.handle_swipe(SwipeDirection.LEFT if action == "left" else SwipeDirection.DOWN)
                deferrals += 1
                self.assertEqual(len(deck), length + 1)
                self.assertEqual(deck.remaining(), remaining)
                continue
            if manager.state is GameState.PLAYING:
                self.assertEqual(len(deck), length)
                self.assertEqual(deck.remaining(), remaining - 1)
        self.assertIs(manager.state, GameState.RESULTS)
        summary = manager.summary
        self.assertEqual(summary.deck_length, 5 + deferrals)
        self.assertEqual(summary.answered, answers)
        self.assertLessEqual(summary.score, summary.answered)
        self.assertLessEqual(summary.answered, summary.distinct_questions)
        self.assertEqual(summary.distinct_questions, 5)


class TestDuel(unittest.TestCase):

    def test_opponent_scores_only_while_playing_a_duel(self):
        manager, scheduler, _ = build_manager(make_questions(3), rng=FixedRandom(0.0))
        go_to_setup(manager)
        manager.select_game_mode(GameMode.DUEL)
        self.assertEqual(scheduler.pending(), 0)
        asyncio.run(manager.start_game())
        speed = OPPONENTS[0].speed_ms
        scheduler.advance(speed * 2)
        self.assertEqual(manager.session.opponent_score, 2)
        self.assertEqual(manager.session.opponent_last_score_ms, speed * 2)
        manager.abandon_session()
        scheduler.advance(speed * 5)
        self.assertEqual(scheduler.pending(), 0)

    def test_solo_session_has_no_opponent_timer(self):
        manager, scheduler, _ = build_manager(make_questions(3), rng=FixedRandom(0.0))
        start_playing(manager)
        scheduler.advance(60_000)
        self.assertEqual(manager.session.opponent_score, 0)

    def test_hit_chance_depends_on_opponent_difficulty(self):
        for opponent, expected in ((OPPONENTS[0], 0), (OPPONENTS[2], 3)):
            with self.subTest(opponent=opponent.name):
                manager, scheduler, _ = build_manager(make_questions(3), rng=FixedRandom(0.7))
                go_to_setup(manager)
                manager.select_game_mode(GameMode.DUEL)
                manager.select_opponent(opponent)
                asyncio.run(manager.start_game())
                scheduler.advance(opponent.speed_ms * 3)
                self.assertEqual(manager.session.opponent_score, expected)

    def test_switching_to_solo_mid_session_stops_opponent(self):
        manager, scheduler, _ = build_manager(make_questions(3), rng=FixedRandom(0.0))
        go_to_setup(manager)
        manager.select_game_mode(GameMode.DUEL)
        asyncio.run(manager.start_game())
        speed = OPPONENTS[0].speed_ms
        scheduler.advance(speed)
        self.assertEqual(manager.session.opponent_score, 1)
        pending = scheduler.pending()
        manager.select_game_mode(GameMode.SOLO)
        self.assertEqual(scheduler.pending(), pending - 1)
        scheduler.advance(speed * 5)
        self.assertEqual(manager.session.opponent_score, 1)

    def test_new_opponent_uses_its_own_speed(self):
        fast = OPPONENTS[2]
        manager, scheduler, _ = build_manager(make_questions(3), rng=FixedRandom(0.0))
        go_to_setup(manager)
        manager.select_game_mode(GameMode.DUEL)
        asyncio.run(manager.start_game())
        scheduler.advance(fast.speed_ms)
        manager.select_opponent(fast)
        scheduler.advance(fast.speed_ms * 2)
        self.assertEqual(manager.session.opponent_score, 2)

    def test_duel_lost_when_opponent_ahead(self):
        manager, scheduler, _ = build_manager(make_questions(1), rng=FixedRandom(0.0))
        go_to_setup(manager)
        manager.select_game_mode(GameMode.DUEL)
        asyncio.run(manager.start_game())
        scheduler.advance(OPPONENTS[0].speed_ms)
        answer_current(manager, scheduler, "A")
        self.assertIs(manager.state, GameState.RESULTS)
        self.assertEqual(manager.summary.opponent_score, 1)
        self.assertFalse(manager.summary.victory)

    def test_victory_rules(self):
        self.assertTrue(is_victory(GameMode.DUEL, 3, 2, 10))
        self.assertFalse(is_victory(GameMode.DUEL, 2, 2, 10))
        self.assertTrue(is_victory(GameMode.SOLO, 2, 9, 4))
        self.assertFalse(is_victory(GameMode.SOLO, 1, 0, 3))


class TestChallengeFlow(unittest.TestCase):

    def test_connected_friend_becomes_duel_opponent(self):
        urls = []
        manager, scheduler, _ = build_manager(make_questions(2), opened_urls=urls)
        go_to_setup(manager)
        self.assertTrue(manager.start_challenge())
        url = manager.send_challenge()
        self.assertEqual(urls, [url])
        scheduler.advance(3000)
        self.assertIs(manager.challenge.status, ChallengeStatus.CONNECTED)
        self.assertEqual(manager.opponent, FRIEND_OPPONENT)
        self.assertIs(manager.game_mode, GameMode.DUEL)

    def test_pending_connection_is_dropped_when_game_starts(self):
        manager, scheduler, _ = build_manager(make_questions(3), rng=FixedRandom(0.0))
        go_to_setup(manager)
        manager.start_challenge()
        manager.send_challenge()
        asyncio.run(manager.start_game())
        self.assertIs(manager.state, GameState.PLAYING)
        scheduler.advance(3000 + 18_000)
        self.assertIs(manager.game_mode, GameMode.SOLO)
        self.assertEqual(manager.opponent, OPPONENTS[0])
        self.assertEqual(manager.session.opponent_score, 0)
        self.assertIs(manager.challenge.status, ChallengeStatus.IDLE)

    def test_connected_friend_plays_the_duel(self):
        manager, scheduler, _ = build_manager(make_questions(3), rng=FixedRandom(0.0))
        go_to_setup(manager)
        manager.start_challenge()
        manager.send_challenge()
        scheduler.advance(3000)
        asyncio.run(manager.start_game())
        scheduler.advance(FRIEND_OPPONENT.speed_ms)
        self.assertEqual(manager.session.opponent_score, 1)
        self.assertIs(manager.challenge.status, ChallengeStatus.CONNECTED)

    def test_leaving_setup_resets_challenge(self):
        manager, scheduler, _ = build_manager(make_questions(2))
        go_to_setup(manager)
        manager.start_challenge()
        manager.send_challenge()
        manager.back_to_profile()
        scheduler.advance(60_000)
        self.assertIs(manager.challenge.status, ChallengeStatus.IDLE)
        self.assertIs(manager.game_mode, GameMode.SOLO)


class TestPronunciation(unittest.TestCase):

    def setUp(self):
        self.gemini = FakeGemini()
        self.source = FakeQuestionSource(make_questions(2))
        self.manager, self.scheduler, _ = build_manager(source=self.source, gemini=self.gemini)
        start_playing(self.manager, AppMode.IDIOMAS)

    def test_request_carries_language_and_topic(self):
        request = self.source.requests[0]
        self.assertIs(request.language, Language.ENGLISH)
        self.assertIs(request.topic, Topic.INGREDIENTS)

    def test_good_pronunciation_awards_bonus(self):
        self.assertFalse(self.manager.can_practice_pronunciation())
        self.manager.handle_swipe(SwipeDirection.UP)
        self.assertTrue(self.manager.begin_recording())
        self.assertFalse(self.manager.begin_recording())
        word, language = self.manager.finish_recording()
        self.assertEqual((word, language), ("A", Language.ENGLISH))
        self.assertIs(self.manager.session.sheet.pronunciation, PronunciationPhase.ANALYZING)
        feedback = asyncio.run(self.manager.evaluate_recording(b"wav", "audio/wav", word, language))
        self.assertTrue(self.manager.apply_pronunciation_feedback(feedback))
        self.assertIs(self.manager.session.sheet.pronunciation, PronunciationPhase.DONE)
        self.assertEqual(self.manager.profile.mode_xp(AppMode.IDIOMAS), 20)
        self.assertFalse(self.manager.apply_pronunciation_feedback(feedback))

    def test_bonus_needs_score_above_threshold(self):
        self.manager.handle_swipe(SwipeDirection.UP)
        self.manager.begin_recording()
        self.manager.finish_recording()
        self.assertFalse(self.manager.apply_pronunciation_feedback(PronunciationFeedback(80, "Casi")))
        self.assertEqual(self.manager.profile.xp, 0)

    def test_recording_failure_returns_to_idle(self):
        self.manager.handle_swipe(SwipeDirection.UP)
        self.manager.begin_recording()
        message = self.manager.recording_failed(RecordingError("denied"))
        self.assertEqual(message, MICROPHONE_ERROR_MESSAGE)
        self.assertIs(self.manager.session.sheet.pronunciation, PronunciationPhase.IDLE)

    def test_evaluation_error_gives_zero_score(self):
        self.gemini.error = GeminiError("down")
        feedback = asyncio.run(self.manager.evaluate_recording(b"wav", "audio/wav", "A", Language.ENGLISH))
        self.assertEqual(feedback.score, 0)

    def test_answer_audio(self):
        self.manager.handle_swipe(SwipeDirection.UP)
        self.assertTrue(self.manager.can_play_audio())
        self.assertEqual(asyncio.run(self.manager.fetch_answer_audio()), b"pcm:A")
        self.gemini.error = GeminiError("down")
        self.assertIsNone(asyncio.run(self.manager.fetch_answer_audio()))


class TestResults(unittest.TestCase):

    def finish(self, reporter):
        manager, scheduler, _ = build_manager(make_questions(1), reporter=reporter)
        start_playing(manager)
        answer_current(manager, scheduler, "A")
        self.assertIs(manager.state, GameState.RESULTS)
        return manager

    def test_report_results_stores_attempt_id(self):
        reporter = FakeReporter(attempt_id=42)
        manager = self.finish(reporter)
        message = asyncio.run(manager.report_results())
        self.assertEqual(message, SAVE_OK_TEMPLATE.format(attempt_id=42))
        self.assertEqual(manager.save_message, message)
        self.assertEqual(reporter.payloads, [manager.summary.payload])
        self.assertTrue(manager.summary.victory)

    def test_report_failure_sets_error_message(self):
        manager = self.finish(FakeReporter(error=AttemptSaveError("HTTP 500")))
        asyncio.run(manager.report_results())
        self.assertEqual(manager.save_message, SAVE_ERROR_MESSAGE)

    def test_no_reporter_means_no_message(self):
        manager = self.finish(None)
        self.assertEqual(asyncio.run(manager.report_results()), "")
        self.assertIsNone(manager.save_message)

    def test_late_save_message_is_ignored_after_leaving(self):
        manager = self.finish(FakeReporter())
        message = asyncio.run(manager.submit_results())
        manager.leave_results()
        manager.set_save_message(message)
        self.assertIs(manager.state, GameState.PROFILE)
        self.assertIsNone(manager.save_message)
        self.assertIsNone(manager.summary)

    def test_share_text(self):
        manager = self.finish(None)
        text = manager.share_text()
        self.assertIn("1 aciertos", text)
        self.assertIn("50 XP", text)


class TestProfileCommands(unittest.TestCase):

    def setUp(self):
        self.manager, self.scheduler, self.repository = build_manager(make_questions(1))
        self.manager.skip_intro()

    def test_update_identity_persists(self):
        self.manager.update_identity("Lola", "☕")
        self.assertEqual(self.repository.saved[-1].nickname, "Lola")
        with self.assertRaises(ValueError):
            self.manager.update_identity(" ", "☕")

    def test_settings_and_sources(self):
        self.manager.update_settings(sound_enabled=False, card_border_radius=8)
        self.assertFalse(self.manager.can_play_audio())
        self.manager.toggle_source(AppMode.VINO, "src_parker")
        self.manager.add_source(AppMode.VINO, "Guía Peñín")
        self.assertEqual(self.manager.profile.enabled_source_names(AppMode.VINO), ["D.O. España Oficial", "Guía Peñín"])

    def test_reset_profile_from_admin_returns_to_profile(self):
        self.manager.update_identity("Lola", "☕")
        self.manager.open_admin()
        self.assertFalse(self.manager.reset_profile(lambda: False))
        self.assertIs(self.manager.state, GameState.ADMIN)
        self.assertTrue(self.manager.reset_profile(lambda: True))
        self.assertIs(self.manager.state, GameState.PROFILE)
        self.assertEqual(self.manager.profile.nickname, "CamareroNovato")

    def test_reset_mode_stats(self):
        self.manager.open_menu()
        self.manager.select_app_mode(AppMode.LEGAL)
        self.manager.open_setup()
        asyncio.run(self.manager.start_game())
        answer_current(self.manager, self.scheduler, "A")
        self.manager.leave_results()
        self.assertEqual(self.manager.profile.xp, 50)
        self.assertTrue(self.manager.reset_mode_stats(AppMode.LEGAL, lambda: True))
        self.assertEqual(self.manager.profile.xp, 0)
        self.assertEqual(self.manager.profile.history, ())


if __name__ == "__main__":
    unittest.main()
