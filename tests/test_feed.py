from __future__ import annotations

import json
import tempfile
import threading
import unittest
from pathlib import Path

from simple_websocket import ConnectionClosed

from lottery_live import create_app
from lottery_live.lottery import POWERBALL
from lottery_live.routes.feed import stream_results
from lottery_live.runtime import get_broadcaster
from lottery_live.schemas.result import encode_result
from lottery_live.services.broadcaster import Broadcaster
from tests.helpers import POWERBALL_DRAW


class _FakeSocket:
    """Stands in for a flask-sock connection.

    ``on_open`` runs on the first ``connected`` check, once the handler has
    subscribed. The socket disconnects after ``close_after`` sends.
    """

    def __init__(self, on_open=None, close_after: int = 1, fail_on_send: bool = False) -> None:  # type: ignore[no-untyped-def]
        self.sent: list[str] = []
        self._on_open = on_open
        self._close_after = close_after
        self._fail_on_send = fail_on_send
        self._open = True

    @property
    def connected(self) -> bool:
        if self._on_open is not None:
            callback, self._on_open = self._on_open, None
            callback()
        return self._open

    def send(self, payload: str) -> None:
        if self._fail_on_send:
            raise ConnectionClosed()
        self.sent.append(payload)
        if len(self.sent) >= self._close_after:
            self._open = False


class StreamResultsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.broadcaster = Broadcaster()

    def test_forwards_published_payloads_in_order(self) -> None:
        def publish() -> None:
            self.broadcaster.publish("one")
            self.broadcaster.publish("two")

        ws = _FakeSocket(on_open=publish, close_after=2)
        stream_results(ws, self.broadcaster, poll_seconds=0.01)

        self.assertEqual(ws.sent, ["one", "two"])
        self.assertEqual(len(self.broadcaster), 0)

    def test_client_disconnect_unsubscribes(self) -> None:
        ws = _FakeSocket(on_open=lambda: self.broadcaster.publish("x"), fail_on_send=True)
        stream_results(ws, self.broadcaster, poll_seconds=0.01)

        self.assertEqual(ws.sent, [])
        self.assertEqual(len(self.broadcaster), 0)
        # Later publishes find no one listening.
        self.assertEqual(self.broadcaster.publish("y"), 0)

    def test_idle_connection_stays_subscribed_until_closed(self) -> None:
        ws = _FakeSocket()
        done = threading.Event()

        def run() -> None:
            stream_results(ws, self.broadcaster, poll_seconds=0.01)
            done.set()

        worker = threading.Thread(target=run, daemon=True)
        worker.start()
        self.assertFalse(done.wait(0.1))
        self.assertEqual(len(self.broadcaster), 1)

        ws._open = False
        worker.join(timeout=2)
        self.assertTrue(done.is_set())
        self.assertEqual(len(self.broadcaster), 0)


class LiveFeedAppTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        db_path = Path(self._tmpdir.name) / "feed.db"
        self.app = create_app(
            {
                "TESTING": True,
                "DATABASE_URL": f"sqlite:///{db_path}",
                "SCHEDULER_ENABLED": False,
                "FEED_POLL_SECONDS": 0.01,
            }
        )

    def tearDown(self) -> None:
        self.app.extensions["engine"].dispose()
        self._tmpdir.cleanup()

    def test_stored_result_reaches_connected_client(self) -> None:
        store = self.app.extensions["result_store"]
        record = store.append("powerball", POWERBALL_DRAW, [POWERBALL_DRAW], 1.0)
        payload = encode_result(POWERBALL.schema, record)

        with self.app.app_context():
            broadcaster = get_broadcaster()
            ws = _FakeSocket(on_open=lambda: broadcaster.publish(payload))
            stream_results(ws, broadcaster, float(self.app.config["FEED_POLL_SECONDS"]))

        self.assertEqual(len(ws.sent), 1)
        message = json.loads(ws.sent[0])
        self.assertEqual(message["id"], record.id)
        self.assertEqual(message["draw"], POWERBALL_DRAW)
        self.assertEqual(message["score"], 1.0)
        self.assertEqual(len(broadcaster), 0)


if __name__ == "__main__":
    unittest.main()
