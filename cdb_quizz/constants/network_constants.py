"""Network configuration constants for the quiz application."""

DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 8000
API_WORKER_COUNT: int = 1

REST_NAMESPACE: str = "cdb-quizz/v1"
DEFAULT_REST_URL: str = f"http://{DEFAULT_HOST}:{DEFAULT_PORT}/"
DEFAULT_QUIZ_SLUG: str = "cultura-de-bar"
HTTP_TIMEOUT_SECONDS: float = 30.0

GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_TEXT_MODEL: str = "gemini-2.5-flash"
GEMINI_TTS_MODEL: str = "gemini-2.5-flash-preview-tts"
GEMINI_TTS_VOICE: str = "Kore"
TTS_SAMPLE_RATE: int = 24000
