from log_dashboard.core.models import ViewState
from log_dashboard.core.series import DEFAULT_BUCKET_COUNT, build_series
from log_dashboard.core.stats import aggregate


def build_view_state(batch, generation=0, bucket_count=DEFAULT_BUCKET_COUNT):
    """Derives stats and chart series from one batch in a single step."""
    return ViewState(
        batch=batch,
        stats=aggregate(batch),
        series=build_series(batch, bucket_count),
        generation=generation,
    )
