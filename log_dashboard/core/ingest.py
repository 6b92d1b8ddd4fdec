import asyncio
import dataclasses
import inspect
import math
import random
from collections.abc import Mapping

from log_dashboard.core.errors import MalformedResponseError
from log_dashboard.core.models import EventBatch, LogEvent, UNKNOWN_LEVEL

MOCK_SEED_EVENTS = (
    {"time": "10:00:01", "level": "ERROR", "message": "Database connection failed unexpectedly."},
    {"time": "10:05:23", "level": "WARN", "message": "High latency detected on node-3."},
    {"time": "10:12:44", "level": "INFO", "message": "User login successful."},
    {"time": "10:15:00", "level": "ERROR", "message": "Payment gateway timeout."},
)
MOCK_MESSAGE = "Regular system activity"


def _is_count(value):
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def coerce_count(value, default=50):
    """Non-negative int from user config; anything unusable gives `default`."""
    if isinstance(value, bool):
        return default
    try:
        return max(0, int(value))
    except (TypeError, ValueError, OverflowError):
        return default


def coerce_ratio(value, default=0.2):
    """Float clamped to [0, 1]; anything unusable (NaN included) gives `default`."""
    if isinstance(value, bool):
        return default
    try:
        value = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(value):
        return default
    return min(1.0, max(0.0, value))


def normalize_event(record, index):
    """Builds a LogEvent from a raw record, resolving missing fields once."""
    if not isinstance(record, Mapping):
        raise MalformedResponseError(f"Event #{index} is not a record: {record!r}")

    line_number = record.get("line_number")
    if not _is_count(line_number):
        line_number = index

    timestamp = record.get("time", record.get("timestamp"))
    level = record.get("level")
    message = record.get("message")

    return LogEvent(
        line_number=line_number,
        timestamp="" if timestamp is None else str(timestamp),
        level=str(level) if level else UNKNOWN_LEVEL,
        message="" if message is None else str(message),
    )


def normalize_response(raw, source=""):
    """
    Accepts either response shape the backend may produce:
      - a bare sequence of event records (older protocol)
      - an envelope {"total_lines": int, "events": [...]}
    and returns the canonical EventBatch.

    An envelope may name the file it was actually read from under
    "source"; otherwise the requested source is assumed.
    """
    loaded_from = source or ""
    if isinstance(raw, Mapping):
        if "events" not in raw:
            raise MalformedResponseError("Envelope has no 'events' field")
        records = raw["events"]
        total_lines = raw.get("total_lines")
        if "source" in raw:
            loaded_from = "" if raw["source"] is None else str(raw["source"])
    elif isinstance(raw, (list, tuple)):
        records = raw
        total_lines = None
    else:
        raise MalformedResponseError(f"Unexpected response type: {type(raw).__name__}")

    if not isinstance(records, (list, tuple)):
        raise MalformedResponseError("'events' is not a sequence")

    events = tuple(normalize_event(r, i) for i, r in enumerate(records))

    if not _is_count(total_lines):
        total_lines = len(events)

    # Backends that under-report would break the scrub mapping.
    total_lines = max([total_lines] + [e.line_number for e in events])

    return EventBatch(events=events, total_lines=total_lines, source=source or "",
                      loaded_from=loaded_from)


def generate_mock_events(rng=None, count=50, error_ratio=0.2):
    """Representative seed events followed by `count` synthetic ones."""
    rng = rng or random.Random()
    count = coerce_count(count)
    error_ratio = coerce_ratio(error_ratio)
    mocks = [dict(e) for e in MOCK_SEED_EVENTS]

    for i in range(count):
        hour, minute = divmod(16 + i, 60)
        mocks.append({
            "time": f"{10 + hour:02d}:{minute:02d}:00",
            "level": "ERROR" if rng.random() > 1 - error_ratio else "INFO",
            "message": MOCK_MESSAGE,
        })

    return mocks


def generate_mock_batch(source="", rng=None, count=50, error_ratio=0.2):
    batch = normalize_response(generate_mock_events(rng, count, error_ratio), source)
    return dataclasses.replace(batch, degraded=True, loaded_from="")


async def fetch_raw(backend, source):
    if inspect.iscoroutinefunction(backend):
        return await backend(source)
    # File-backed engines block, keep them off the event loop.
    raw = await asyncio.to_thread(backend, source)
    if inspect.isawaitable(raw):
        raw = await raw
    return raw


async def load_batch(source, backend, rng=None, mock_count=50, error_ratio=0.2):
    """
    Loads one EventBatch from the backend.

    Never raises: a failing backend or an unreadable response yields the
    synthetic batch with degraded=True.
    """
    source = source or ""
    try:
        raw = await fetch_raw(backend, source)
        return normalize_response(raw, source)
    except Exception as e:
        print(f"Backend not ready, using mock events: {e}")
        return generate_mock_batch(source, rng, mock_count, error_ratio)
