from log_dashboard.core.models import Stats

# Levels counted as errors in the summary cards.
ERROR_LEVELS = frozenset(("ERROR", "ERR"))


def is_error(event):
    return event.level in ERROR_LEVELS


def aggregate(batch):
    """Scalar summary of a batch. Recomputed from scratch on every load."""
    errors = sum(1 for e in batch.events if is_error(e))
    return Stats(total=len(batch.events), errors=errors)
