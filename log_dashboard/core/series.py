import math

from log_dashboard.core.models import BarPoint, ChartSeries, LinePoint

DEFAULT_BUCKET_COUNT = 20

# Only exact "ERROR" counts in the volume chart; the summary cards also
# count "ERR" (see stats.ERROR_LEVELS).
BUCKET_ERROR_LEVEL = "ERROR"


def build_bar_series(events):
    """Event count per level, in order of first appearance."""
    counts = {}
    for e in events:
        counts[e.level] = counts.get(e.level, 0) + 1
    return tuple(BarPoint(name=level, value=n) for level, n in counts.items())


def bucket_size_for(event_count, bucket_count=DEFAULT_BUCKET_COUNT):
    return max(1, math.ceil(event_count / max(1, bucket_count)))


def build_line_series(events, bucket_count=DEFAULT_BUCKET_COUNT):
    """
    Volume and error count per contiguous chunk of events.

    Each point is named after the index of the first event in its chunk.
    The last chunk may be shorter than the others.
    """
    events = tuple(events)
    size = bucket_size_for(len(events), bucket_count)

    points = []
    for i in range(0, len(events), size):
        chunk = events[i:i + size]
        errors = sum(1 for e in chunk if e.level == BUCKET_ERROR_LEVEL)
        points.append(LinePoint(name=i, value=len(chunk), errors=errors))
    return tuple(points)


def build_series(batch, bucket_count=DEFAULT_BUCKET_COUNT):
    return ChartSeries(
        bar=build_bar_series(batch.events),
        line=build_line_series(batch.events, bucket_count),
    )
