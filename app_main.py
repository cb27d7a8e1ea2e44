"""Application entry point for the CdB Quizz desktop client."""

from __future__ import annotations

import sys

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QApplication

from cdb_quizz.config.settings import Settings
from cdb_quizz.constants.about import APP_NAME
from cdb_quizz.core.quiz_manager import QuizManager
from cdb_quizz.core.services.attempt_reporter import AttemptReporter
from cdb_quizz.core.services.gemini_client import GeminiClient, gemini_client_from_settings
from cdb_quizz.core.services.profile_repository import ProfileRepository
from cdb_quizz.core.services.profile_store import ProfileStore
from cdb_quizz.core.services.question_source import GeminiQuestionSource, QuestionSource, RestQuestionSource
from cdb_quizz.server.api_server import start_api_server
from cdb_quizz.server.attempt_store import AttemptStore
from cdb_quizz.ui.main_window import CdbQuizzMainWindow
from cdb_quizz.ui.qt_scheduler import QtScheduler
from cdb_quizz.utils.logging_config import configure_logging


def _build_question_source(settings: Settings, gemini: GeminiClient | None) -> QuestionSource:
    if settings.uses_gemini_directly and gemini is not None:
        return GeminiQuestionSource(gemini)
    return RestQuestionSource(settings.rest_url, settings.quiz_slug, settings.http_timeout_seconds)


def _open_url(url: str) -> None:
    QDesktopServices.openUrl(QUrl(url))


def main() -> None:
    """Initialize logging, start the embedded API server, and launch the Qt UI."""
    settings = Settings.from_env()
    logger = configure_logging(settings.log_level)
    logger.info("Starting %s…", APP_NAME)

    gemini = gemini_client_from_settings(settings)
    if gemini is None:
        logger.warning("GEMINI_API_KEY is not set; questions come from the backend mock set")

    if settings.embedded_server:
        start_api_server(
            store=AttemptStore(settings.db_path),
            gemini=gemini,
            host=settings.server_host,
            port=settings.server_port,
        )
        logger.info("Embedded API listening on http://%s:%s/", settings.server_host, settings.server_port)

    store = ProfileStore(ProfileRepository(settings.data_dir))

    app = QApplication(sys.argv)
    scheduler = QtScheduler()
    quiz_manager = QuizManager(
        store=store,
        scheduler=scheduler,
        question_source=_build_question_source(settings, gemini),
        reporter=AttemptReporter(settings.rest_url, settings.http_timeout_seconds),
        gemini=gemini,
        quiz_slug=settings.quiz_slug,
        open_url=_open_url,
    )
    window = CdbQuizzMainWindow(quiz_manager=quiz_manager, scheduler=scheduler)
    window.show()
    quiz_manager.start()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
