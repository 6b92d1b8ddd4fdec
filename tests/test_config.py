import json
import os
import tempfile
import unittest

from log_dashboard.config import MAX_RECENT_FILES, ConfigManager


class TestConfigManager(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "app_config.json")

    def tearDown(self):
        self.tmp.cleanup()

    def test_defaults_without_file(self):
        cfg = ConfigManager(self.path)
        self.assertEqual(cfg.theme_mode, "dark")
        self.assertEqual(cfg.bucket_count, 20)
        self.assertEqual(cfg.get("mock_event_count"), 50)
        self.assertIsNone(cfg.get("mock_seed"))

    def test_save_and_reload(self):
        cfg = ConfigManager(self.path)
        cfg.theme_mode = "light"
        cfg.set("bucket_count", 10)
        self.assertTrue(cfg.save())

        again = ConfigManager(self.path)
        self.assertEqual(again.theme_mode, "light")
        self.assertEqual(again.bucket_count, 10)

    def test_partial_file_keeps_other_defaults(self):
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"mock_seed": 42}, f)
        cfg = ConfigManager(self.path)
        self.assertEqual(cfg.get("mock_seed"), 42)
        self.assertEqual(cfg.get("mock_error_ratio"), 0.2)

    def test_corrupt_file_uses_defaults(self):
        for content in ("{not json", "[1, 2, 3]"):
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(content)
            self.assertEqual(ConfigManager(self.path).theme_mode, "dark")

    def test_bad_bucket_count(self):
        cfg = ConfigManager(self.path)
        for bad, expected in (("x", 20), (None, 20), (0, 1), (-5, 1)):
            cfg.set("bucket_count", bad)
            self.assertEqual(cfg.bucket_count, expected)

    def test_bad_mock_settings(self):
        cfg = ConfigManager(self.path)
        self.assertEqual((cfg.mock_event_count, cfg.mock_error_ratio, cfg.mock_seed), (50, 0.2, None))
        for bad, expected in (("12", 12), ("many", 50), (-1, 0), ([3], 50)):
            cfg.set("mock_event_count", bad)
            self.assertEqual(cfg.mock_event_count, expected)
        for bad, expected in (("0.5", 0.5), (7, 1.0), ("high", 0.2), (None, 0.2)):
            cfg.set("mock_error_ratio", bad)
            self.assertEqual(cfg.mock_error_ratio, expected)
        for seed, expected in ((7, 7), ("abc", "abc"), ([1], None), (1.5, None), (True, None)):
            cfg.set("mock_seed", seed)
            self.assertEqual(cfg.mock_seed, expected)

    def test_recent_files(self):
        cfg = ConfigManager(self.path)
        for i in range(MAX_RECENT_FILES + 3):
            cfg.add_recent_file(f"/logs/{i}.log")
        cfg.add_recent_file("/logs/5.log")
        recent = cfg.get("recent_files")
        self.assertEqual(len(recent), MAX_RECENT_FILES)
        self.assertEqual(recent[0], "/logs/5.log")
        self.assertEqual(recent.count("/logs/5.log"), 1)
        self.assertEqual(cfg.get("last_log_dir"), "/logs")

    def test_save_failure_is_reported(self):
        cfg = ConfigManager(os.path.join(self.tmp.name, "no", "such", "dir.json"))
        self.assertFalse(cfg.save())


if __name__ == '__main__':
    unittest.main()
