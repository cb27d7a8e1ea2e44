"""Runtime configuration loaded from the environment (and an optional .env file)."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path

from dotenv import load_dotenv

from cdb_quizz.constants.network_constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_QUIZ_SLUG,
    DEFAULT_REST_URL,
    GEMINI_API_BASE,
    GEMINI_TEXT_MODEL,
    GEMINI_TTS_MODEL,
    HTTP_TIMEOUT_SECONDS,
)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _default_data_dir() -> Path:
    return Path.home() / ".cdb_quizz"


@dataclass(slots=True)
class Settings:
    """Application settings. Every field can be overridden by an environment variable."""

    rest_url: str = DEFAULT_REST_URL
    quiz_slug: str = DEFAULT_QUIZ_SLUG
    gemini_api_key: str = ""
    gemini_api_base: str = GEMINI_API_BASE
    gemini_model: str = GEMINI_TEXT_MODEL
    gemini_tts_model: str = GEMINI_TTS_MODEL
    data_dir: Path = field(default_factory=_default_data_dir)
    db_path: Path = field(default_factory=lambda: _default_data_dir() / "cdb_quizz.db")
    server_host: str = DEFAULT_HOST
    server_port: int = DEFAULT_PORT
    embedded_server: bool = True
    question_source: str = "auto"
    http_timeout_seconds: float = HTTP_TIMEOUT_SECONDS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: Path | None = None) -> "Settings":
        """Build settings from ``os.environ`` after loading ``.env`` if present."""
        load_dotenv(dotenv_path=dotenv_path)
        data_dir = Path(os.environ.get("CDB_QUIZZ_DATA_DIR", str(_default_data_dir()))).expanduser()
        rest_url = os.environ.get("CDB_QUIZZ_REST_URL", DEFAULT_REST_URL)
        if not rest_url.endswith("/"):
            rest_url += "/"
        return cls(
            rest_url=rest_url,
            quiz_slug=os.environ.get("CDB_QUIZZ_SLUG", DEFAULT_QUIZ_SLUG),
            gemini_api_key=os.environ.get("GEMINI_API_KEY", ""),
            gemini_api_base=os.environ.get("GEMINI_API_BASE", GEMINI_API_BASE),
            gemini_model=os.environ.get("GEMINI_MODEL", GEMINI_TEXT_MODEL),
            gemini_tts_model=os.environ.get("GEMINI_TTS_MODEL", GEMINI_TTS_MODEL),
            data_dir=data_dir,
            db_path=Path(os.environ.get("CDB_QUIZZ_DB_PATH", str(data_dir / "cdb_quizz.db"))).expanduser(),
            server_host=os.environ.get("CDB_QUIZZ_HOST", DEFAULT_HOST),
            server_port=int(os.environ.get("CDB_QUIZZ_PORT", str(DEFAULT_PORT))),
            embedded_server=_env_flag("CDB_QUIZZ_EMBEDDED_SERVER", True),
            question_source=os.environ.get("CDB_QUIZZ_QUESTION_SOURCE", "auto").strip().lower(),
            http_timeout_seconds=float(os.environ.get("CDB_QUIZZ_HTTP_TIMEOUT", str(HTTP_TIMEOUT_SECONDS))),
            log_level=os.environ.get("CDB_QUIZZ_LOG_LEVEL", "INFO").upper(),
        )

    @property
    def has_gemini_key(self) -> bool:
        return bool(self.gemini_api_key.strip())

    @property
    def uses_gemini_directly(self) -> bool:
        """``gemini`` forces direct generation, ``rest`` the backend; ``auto`` picks Gemini when a key is set."""
        if self.question_source == "rest":
            return False
        if self.question_source == "gemini":
            return True
        return self.has_gemini_key
