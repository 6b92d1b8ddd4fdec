from dataclasses import dataclass, field
from typing import Tuple

UNKNOWN_LEVEL = "UNKNOWN"


@dataclass(frozen=True)
class LogEvent:
    """One parsed log line."""
    line_number: int
    timestamp: str
    level: str
    message: str


@dataclass(frozen=True)
class EventBatch:
    """
    Canonical result of one load: the events in source order plus the
    total line count of the source they came from.

    ``source`` is what was requested; ``loaded_from`` is what the backend
    actually read, which differs when it fell back to another file and is
    empty when nothing was read.
    """
    events: Tuple[LogEvent, ...] = ()
    total_lines: int = 0
    degraded: bool = False
    source: str = ""
    loaded_from: str = ""

    def __len__(self):
        return len(self.events)


@dataclass(frozen=True)
class Stats:
    total: int = 0
    errors: int = 0

    @property
    def error_rate(self):
        return self.errors / self.total if self.total else 0.0


@dataclass(frozen=True)
class BarPoint:
    name: str
    value: int


@dataclass(frozen=True)
class LinePoint:
    name: int  # start index of the bucket
    value: int
    errors: int


@dataclass(frozen=True)
class ChartSeries:
    bar: Tuple[BarPoint, ...] = ()
    line: Tuple[LinePoint, ...] = ()

    def as_rows(self):
        """Plain dict rows, the shape chart widgets consume."""
        return {
            "bar": [{"name": p.name, "value": p.value} for p in self.bar],
            "line": [{"name": p.name, "value": p.value, "errors": p.errors} for p in self.line],
        }


@dataclass(frozen=True)
class ViewState:
    batch: EventBatch = field(default_factory=EventBatch)
    stats: Stats = field(default_factory=Stats)
    series: ChartSeries = field(default_factory=ChartSeries)
    generation: int = 0

    @property
    def is_empty(self):
        return not self.batch.events
