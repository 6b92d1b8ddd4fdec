import json
import os
import sys

from log_dashboard.core.engine import DEFAULT_FALLBACK_PATHS
from log_dashboard.core.ingest import coerce_count, coerce_ratio

MAX_RECENT_FILES = 10


def default_config_path():
    if getattr(sys, 'frozen', False):
        base_dir = os.path.dirname(sys.executable)
    else:
        base_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(base_dir, "app_config.json")


def default_config():
    return {
        "theme_mode": "dark",
        "last_log_dir": os.path.expanduser("~"),
        "recent_files": [],
        "bucket_count": 20,
        "mock_event_count": 50,
        "mock_error_ratio": 0.2,
        "mock_seed": None,
        "fallback_log_paths": list(DEFAULT_FALLBACK_PATHS),
        "window_geometry": "1280x800",
    }


class ConfigManager:
    """
    JSON-backed application settings.
    Missing or broken files fall back to the defaults, so the app always starts.
    """

    def __init__(self, path=None):
        self.path = path or default_config_path()
        self.data = default_config()
        self.load()

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        self.data[key] = value

    def load(self):
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if isinstance(data, dict):
                self.data.update(data)
            else:
                print(f"Ignoring config {self.path}: not a JSON object.")
        except (OSError, ValueError) as e:
            print(f"Error loading config: {e}. Using defaults.")

    def save(self):
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=4)
                f.flush()
                os.fsync(f.fileno())
            return True
        except OSError as e:
            print(f"Error saving config: {e}")
            return False

    def add_recent_file(self, path):
        recent = [p for p in self.data.get("recent_files", []) if p != path]
        recent.insert(0, path)
        self.data["recent_files"] = recent[:MAX_RECENT_FILES]
        self.data["last_log_dir"] = os.path.dirname(path) or self.data.get("last_log_dir")

    @property
    def theme_mode(self):
        return self.data.get("theme_mode", "dark")

    @theme_mode.setter
    def theme_mode(self, value):
        self.data["theme_mode"] = value

    @property
    def bucket_count(self):
        try:
            return max(1, int(self.data.get("bucket_count", 20)))
        except (TypeError, ValueError):
            return 20

    @property
    def mock_event_count(self):
        return coerce_count(self.data.get("mock_event_count", 50), 50)

    @property
    def mock_error_ratio(self):
        return coerce_ratio(self.data.get("mock_error_ratio", 0.2), 0.2)

    @property
    def mock_seed(self):
        """int or str seeds are passed to random.Random; anything else means unseeded."""
        seed = self.data.get("mock_seed")
        if isinstance(seed, bool) or not isinstance(seed, (int, str)):
            return None
        return seed


# Global instance
_config_instance = None

def get_config():
    global _config_instance
    if _config_instance is None:
        _config_instance = ConfigManager()
    return _config_instance
