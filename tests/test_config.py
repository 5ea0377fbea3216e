import os
import unittest
from unittest.mock import patch

from mindweather.config import (
    DEFAULT_SNAPSHOT_POLL_INTERVAL_SECONDS,
    INITIAL_ZOOM_ENV,
    SNAPSHOT_POLL_INTERVAL_ENV,
    MoodMapSettings,
    parse_interval_seconds,
)


class TestParseIntervalSeconds(unittest.TestCase):
    def test_plain_and_suffixed_values(self):
        self.assertEqual(parse_interval_seconds("30"), 30.0)
        self.assertEqual(parse_interval_seconds(45), 45.0)
        self.assertEqual(parse_interval_seconds("30s"), 30.0)
        self.assertEqual(parse_interval_seconds("2m"), 120.0)
        self.assertEqual(parse_interval_seconds(" 1H "), 3600.0)
        self.assertEqual(parse_interval_seconds("0.5"), 0.5)

    def test_rejects_invalid(self):
        for raw in ("", "0", "-5", "abc", "7d", "nan", "inf", True):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    parse_interval_seconds(raw, field_name="x")


class TestMoodMapSettings(unittest.TestCase):
    def test_defaults_without_env(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = MoodMapSettings.from_env()
        self.assertEqual(settings.snapshot_poll_interval_seconds, DEFAULT_SNAPSHOT_POLL_INTERVAL_SECONDS)
        self.assertEqual(settings.snapshot_poll_interval_seconds, 30.0)
        self.assertEqual(settings.initial_zoom, 1.0)

    def test_reads_env(self):
        env = {SNAPSHOT_POLL_INTERVAL_ENV: "1m", INITIAL_ZOOM_ENV: "2.5"}
        with patch.dict(os.environ, env, clear=True):
            settings = MoodMapSettings.from_env()
        self.assertEqual(settings.snapshot_poll_interval_seconds, 60.0)
        self.assertEqual(settings.initial_zoom, 2.5)

    def test_invalid_env_fails_fast(self):
        for env in ({SNAPSHOT_POLL_INTERVAL_ENV: "soon"}, {INITIAL_ZOOM_ENV: "far"}, {INITIAL_ZOOM_ENV: "inf"}):
            with self.subTest(env=env):
                with patch.dict(os.environ, env, clear=True):
                    with self.assertRaises(ValueError):
                        MoodMapSettings.from_env()


if __name__ == "__main__":
    unittest.main()
