import os

# First match wins, so "ERROR" is tried before its substring "ERR".
KEYWORDS = ("ERROR", "ERR", "MEDIA_TIMEOUT", "AbandonedCall", "Warning")

DEFAULT_FALLBACK_PATHS = (
    "../dummy_logs/server_errors.log",
    "../../dummy_logs/server_errors.log",
    "dummy_logs/server_errors.log",
)

PLACEHOLDER_DATA = {
    "total_lines": 2,
    "events": [
        {"line_number": 1, "time": "00:00:00", "level": "INFO", "message": "No log file loaded."},
        {"line_number": 2, "time": "00:00:01", "level": "INFO", "message": "Click 'Open Log...' to select a file."},
    ],
}


def parse_log_text(text, keywords=KEYWORDS):
    """
    Extracts keyword events from raw log text.

    Lines look like "2023-10-27 10:00:01 ERROR Database connection...".
    Only lines containing one of the keywords become events; the rest
    still count towards total_lines.
    """
    # Only "\n" ends a line; a stray "\r" or form feed stays inside it.
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    lines = [l[:-1] if l.endswith("\r") else l for l in lines]
    events = []

    for i, line in enumerate(lines):
        parts = line.split()
        if len(parts) < 3:
            continue

        level = None
        for kw in keywords:
            if kw in line:
                level = kw
                break

        if level is None:
            continue

        events.append({
            "line_number": i + 1,  # 1-based for display
            "time": parts[1],
            "level": level,
            "message": " ".join(parts[2:]),
        })

    return {"total_lines": len(lines), "events": events}


class LogEngine:
    """Reads a log file from disk and extracts its keyword events."""

    def __init__(self, fallback_paths=DEFAULT_FALLBACK_PATHS, keywords=KEYWORDS):
        self.fallback_paths = list(fallback_paths)
        self.keywords = tuple(keywords)

    def _read(self, path):
        with open(path, 'r', encoding='utf-8', errors='replace', newline='') as f:
            return f.read()

    def get_events(self, file_path=""):
        content = None
        loaded_path = ""

        if file_path:
            try:
                content = self._read(file_path)
                loaded_path = file_path
                print(f"Loaded logs from: {file_path}")
            except OSError:
                print(f"Failed to read provided path: {file_path}")

        if content is None:
            for p in self.fallback_paths:
                if not os.path.exists(p):
                    continue
                try:
                    content = self._read(p)
                except OSError:
                    continue
                loaded_path = p
                print(f"Loaded logs from fallback: {p}")
                break

        if content is None:
            print("Could not find any logs.")
            return {
                "total_lines": PLACEHOLDER_DATA["total_lines"],
                "events": [dict(e) for e in PLACEHOLDER_DATA["events"]],
                "source": "",
            }

        data = parse_log_text(content, self.keywords)
        data["source"] = loaded_path
        return data

    __call__ = get_events
