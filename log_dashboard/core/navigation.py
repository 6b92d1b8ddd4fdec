import bisect
import math


def clamp_fraction(fraction):
    try:
        value = float(fraction)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def target_line_for(fraction, total_lines):
    return math.floor(clamp_fraction(fraction) * max(0, total_lines))


def fraction_for_line(line_number, total_lines):
    """Position of a line along the scrubber, the inverse of target_line_for."""
    if total_lines <= 0:
        return 0.0
    return clamp_fraction(line_number / total_lines)


def marker_offset(fraction, width, marker_width):
    """Left edge of a marker drawn at `fraction` on a strip `width` px wide."""
    return clamp_fraction(fraction) * max(0, width - marker_width)


def fraction_at(x, width, marker_width):
    """
    Scrub fraction for a tap at `x`, the inverse of marker_offset taken at
    the marker centre over the same track.
    """
    track = width - marker_width
    if track <= 0:
        return 0.0
    return clamp_fraction((x - marker_width / 2) / track)


def locate(fraction, batch):
    """
    Index of the event nearest to the scrub position, or None for an
    empty batch. On equal distance the earliest event in source order wins.
    """
    if not batch.events:
        return None

    target = target_line_for(fraction, batch.total_lines)
    best_idx = None
    best_dist = None
    for i, event in enumerate(batch.events):
        dist = abs(event.line_number - target)
        if best_dist is None or dist < best_dist:
            best_idx = i
            best_dist = dist
    return best_idx


class EventLocator:
    """
    Sorted-index version of locate() for large batches.

    Keeps the distinct line numbers in ascending order together with the
    earliest source index seen for each, so every answer matches the
    linear scan exactly, tie-break included.
    """

    def __init__(self, batch):
        self.total_lines = batch.total_lines
        first_seen = {}
        for i, event in enumerate(batch.events):
            first_seen.setdefault(event.line_number, i)
        self.lines = sorted(first_seen)
        self.first_index = [first_seen[line] for line in self.lines]

    def __len__(self):
        return len(self.lines)

    def locate(self, fraction):
        if not self.lines:
            return None

        target = target_line_for(fraction, self.total_lines)
        pos = bisect.bisect_left(self.lines, target)

        # Nearest line is either the first one >= target or the one before it.
        candidates = [p for p in (pos - 1, pos) if 0 <= p < len(self.lines)]
        best = min(candidates, key=lambda p: (abs(self.lines[p] - target), self.first_index[p]))
        return self.first_index[best]
