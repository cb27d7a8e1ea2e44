"""
Tests for the finished-session reporter.
"""
import unittest

from aiohttp import web
from aiohttp.test_utils import TestServer

from cdb_quizz.constants.ui_constants import SAVE_ERROR_MESSAGE
from cdb_quizz.core.services.attempt_reporter import AttemptReporter, AttemptSaveError


class TestAttemptReporter(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.received = []
        self.reply = {"ok": True, "intento_id": 12}
        self.status = 200
        self.raw = None
        app = web.Application()
        app.router.add_post("/cdb-quizz/v1/finish", self.finish)
        self.server = TestServer(app)
        await self.server.start_server()
        self.reporter = AttemptReporter(str(self.server.make_url("/")))

    async def asyncTearDown(self):
        await self.server.close()

    async def finish(self, request):
        self.received.append(await request.json())
        if self.raw is not None:
            return web.Response(status=self.status, body=self.raw)
        return web.json_response(self.reply, status=self.status)

    async def test_submit_returns_attempt_id(self):
        attempt_id = await self.reporter.submit({"slug": "cultura-de-bar", "score": 50.0})
        self.assertEqual(attempt_id, 12)
        self.assertEqual(self.received, [{"slug": "cultura-de-bar", "score": 50.0}])

    async def test_unconfirmed_attempt_raises(self):
        for reply, status in (({"ok": False}, 200), ({"ok": True, "intento_id": 1}, 500), ({"ok": True, "intento_id": "x"}, 200)):
            with self.subTest(reply=reply, status=status):
                self.reply, self.status = reply, status
                with self.assertRaises(AttemptSaveError) as ctx:
                    await self.reporter.submit({})
                self.assertEqual(str(ctx.exception), SAVE_ERROR_MESSAGE)

    async def test_undecodable_reply_raises_save_error(self):
        self.raw, self.status = b"\xff\xfe", 502
        with self.assertRaises(AttemptSaveError) as ctx:
            await self.reporter.submit({})
        self.assertEqual(str(ctx.exception), SAVE_ERROR_MESSAGE)

    async def test_unreachable_backend_raises(self):
        reporter = AttemptReporter("http://127.0.0.1:9/", timeout_seconds=2)
        with self.assertRaises(AttemptSaveError):
            await reporter.submit({})

    def test_endpoint(self):
        self.assertEqual(AttemptReporter("http://host/").endpoint, "http://host/cdb-quizz/v1/finish")


if __name__ == "__main__":
    unittest.main()
