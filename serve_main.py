"""Entry point for running the CdB Quizz REST backend on its own."""

from __future__ import annotations

import uvicorn

from cdb_quizz.config.settings import Settings
from cdb_quizz.core.services.gemini_client import gemini_client_from_settings
from cdb_quizz.server.api_server import create_api_app
from cdb_quizz.server.attempt_store import AttemptStore
from cdb_quizz.utils.logging_config import configure_logging


def main() -> None:
    settings = Settings.from_env()
    logger = configure_logging(settings.log_level)
    app = create_api_app(AttemptStore(settings.db_path), gemini_client_from_settings(settings))
    logger.info("Serving API on http://%s:%s/", settings.server_host, settings.server_port)
    uvicorn.run(app, host=settings.server_host, port=settings.server_port, log_level="info")


if __name__ == "__main__":
    main()
