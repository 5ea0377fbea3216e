import threading
import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from mindweather.clustering.live_merge import LiveMergeController
from mindweather.emotions import EmotionCategory as E
from mindweather.observations import Observation
from mindweather.runtime.snapshot_poller import SnapshotPoller

_TS = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


def _obs(address, emotion=E.JOY, intensity=5):
    return Observation(user_id="u", emotion=emotion, intensity=intensity, address=address, observed_at=_TS)


class TestSnapshotPoller(unittest.TestCase):
    def setUp(self):
        for target in (
            "mindweather.clustering.live_merge.emit_structured_log",
            "mindweather.runtime.snapshot_poller.emit_structured_log",
        ):
            patcher = patch(target)
            mock = patcher.start()
            self.addCleanup(patcher.stop)
            if target.startswith("mindweather.runtime"):
                self.poller_log = mock

    def test_poll_once_replaces_working_set(self):
        controller = LiveMergeController(observations=[_obs("제주")])
        poller = SnapshotPoller(load_snapshot=lambda: [_obs("서울"), _obs("부산")], controller=controller)

        self.assertTrue(poller.poll_once())
        self.assertEqual([o.address for o in controller.observations], ["서울", "부산"])
        self.assertEqual([c.key for c in controller.clusters], ["서울", "부산"])

    def test_failed_pull_keeps_last_known_working_set(self):
        controller = LiveMergeController()
        controller.replace([_obs("서울")])

        def _broken():
            raise ConnectionError("upstream unavailable")

        poller = SnapshotPoller(load_snapshot=_broken, controller=controller)
        self.assertFalse(poller.poll_once())
        self.assertEqual([o.address for o in controller.observations], ["서울"])
        self.assertEqual([c.key for c in controller.clusters], ["서울"])

        self.poller_log.assert_called_once()
        kwargs = self.poller_log.call_args.kwargs
        self.assertEqual(kwargs["event"], "snapshot.poll.failed")
        self.assertEqual(kwargs["error_type"], "ConnectionError")
        self.assertEqual(kwargs["kept_observation_count"], 1)

    def test_live_events_after_failed_poll_still_apply(self):
        controller = LiveMergeController()
        controller.replace([_obs("서울")])
        poller = SnapshotPoller(load_snapshot=lambda: 1 / 0, controller=controller)
        poller.poll_once()
        controller.append(_obs("서울", E.ANGER, 9))
        self.assertEqual(len(controller.clusters[0].observations), 2)

    def test_unusable_rows_are_reported_and_working_set_kept(self):
        controller = LiveMergeController()
        controller.replace([_obs("서울")])
        poller = SnapshotPoller(load_snapshot=lambda: [{"region": "부산"}], controller=controller)

        self.assertFalse(poller.poll_once())
        self.assertEqual([o.address for o in controller.observations], ["서울"])
        self.assertEqual([c.key for c in controller.clusters], ["서울"])
        kwargs = self.poller_log.call_args.kwargs
        self.assertEqual(kwargs["event"], "snapshot.poll.failed")
        self.assertEqual(kwargs["stage"], "apply")
        self.assertEqual(kwargs["error_type"], "AttributeError")

    def test_background_thread_survives_a_failing_poll(self):
        controller = LiveMergeController()
        poller = SnapshotPoller(load_snapshot=lambda: [_obs("대전")], controller=controller, interval_seconds=0.01)
        recovered = threading.Event()
        attempts = []

        def _flaky_poll():
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("unexpected")
            recovered.set()
            return True

        with patch.object(poller, "poll_once", side_effect=_flaky_poll):
            poller.start()
            try:
                self.assertTrue(recovered.wait(timeout=2.0))
                self.assertTrue(poller.running)
            finally:
                poller.stop()

        self.assertGreaterEqual(len(attempts), 2)
        failures = [c.kwargs for c in self.poller_log.call_args_list if c.kwargs.get("stage") == "loop"]
        self.assertEqual(failures[0]["error_type"], "RuntimeError")

    def test_background_thread_polls_until_stopped(self):
        controller = LiveMergeController()
        polled = threading.Event()
        calls = []

        def _load():
            calls.append(1)
            polled.set()
            return [_obs("대전")]

        poller = SnapshotPoller(load_snapshot=_load, controller=controller, interval_seconds=0.01)
        poller.start()
        poller.start()
        try:
            self.assertTrue(polled.wait(timeout=2.0))
        finally:
            poller.stop()

        self.assertFalse(poller.running)
        self.assertGreaterEqual(len(calls), 1)
        self.assertEqual([c.key for c in controller.clusters], ["대전"])


if __name__ == "__main__":
    unittest.main()
