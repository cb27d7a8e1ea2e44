"""Service that reports finished sessions to the backend ``/finish`` endpoint."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

import aiohttp

from cdb_quizz.constants.network_constants import HTTP_TIMEOUT_SECONDS, REST_NAMESPACE
from cdb_quizz.constants.ui_constants import SAVE_ERROR_MESSAGE

logger = logging.getLogger(__name__)


class AttemptSaveError(Exception):
    """Raised when the backend does not confirm the attempt was stored."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(SAVE_ERROR_MESSAGE)
        self.detail = detail


class AttemptReporter:
    def __init__(self, rest_url: str, timeout_seconds: float = HTTP_TIMEOUT_SECONDS) -> None:
        self._endpoint = f"{rest_url.rstrip('/')}/{REST_NAMESPACE}/finish"
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def submit(self, payload: Mapping[str, Any]) -> int:
        """POST the finish payload and return the stored attempt id."""
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.post(self._endpoint, json=dict(payload)) as response:
                    status = response.status
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            logger.warning("Finish request failed: %s", exc)
            raise AttemptSaveError(str(exc)) from exc

        if status < 200 or status >= 300:
            raise AttemptSaveError(f"HTTP {status}")
        if not isinstance(data, dict) or data.get("ok") is not True:
            raise AttemptSaveError("Backend did not confirm the attempt.")
        try:
            attempt_id = int(data.get("intento_id") or 0)
        except (TypeError, ValueError) as exc:
            raise AttemptSaveError("Attempt id is not a number.") from exc
        logger.info("Attempt stored with id %s", attempt_id)
        return attempt_id
