"""Quiz-related constants shared across UI and core layers."""

XP_PER_LEVEL: int = 500
XP_PER_CORRECT: int = 50
XP_PER_INCORRECT: int = 5
PRONUNCIATION_BONUS_XP: int = 20
PRONUNCIATION_BONUS_MIN_SCORE: int = 80
HISTORY_LIMIT: int = 100
NICKNAME_MAX_LENGTH: int = 15

# Card gestures (pixels / milliseconds)
SWIPE_THRESHOLD_PX: int = 80
FLY_DISTANCE_PX: int = 800
FLY_DURATION_MS: int = 300
CARD_STACK_WINDOW: int = 3
CARD_DRAG_ROTATION_FACTOR: float = 0.05
CARD_HINT_DISTANCE_PX: int = 100

# Session timers
INTRO_DELAY_MS: int = 4000
STOPWATCH_TICK_MS: int = 100
CONTINUE_EXIT_MS: int = 400
OPPONENT_HIGHLIGHT_MS: int = 500
CHALLENGE_COUNTDOWN_SECONDS: int = 30
CHALLENGE_TICK_MS: int = 1000
CHALLENGE_CONNECT_DELAY_MS: int = 3000

OPPONENT_HIT_CHANCE: dict[str, float] = {
    "easy": 0.6,
    "medium": 0.8,
    "hard": 0.95,
}

PROFILE_SNAPSHOT_KEY: str = "cdb_quizz_profile_v4"
