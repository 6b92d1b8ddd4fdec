import inspect
import random

from log_dashboard.config import get_config
from log_dashboard.core.engine import DEFAULT_FALLBACK_PATHS, LogEngine
from log_dashboard.core.ingest import load_batch
from log_dashboard.core.models import ViewState
from log_dashboard.core.navigation import EventLocator
from log_dashboard.core.pipeline import build_view_state


async def _emit(callbacks, *args):
    for cb in list(callbacks):
        result = cb(*args)
        if inspect.isawaitable(result):
            await result


class DashboardController:
    """
    Owns the dashboard's ViewState.

    Every reload bumps a generation counter; a load that finishes after a
    newer one was started is dropped, so the published state always belongs
    to the most recently initiated request.
    """

    def __init__(self, backend=None, config=None):
        self.config = config or get_config()
        if backend is None:
            backend = LogEngine(self.config.get("fallback_log_paths", DEFAULT_FALLBACK_PATHS))
        self.backend = backend

        self.state = ViewState()
        self._locator = EventLocator(self.state.batch)
        self.generation = 0
        self.current_source = ""
        self.selected_index = None

        self.state_changed = []  # callbacks(ViewState)
        self.scroll_requested = []  # callbacks(index)

    @property
    def is_loading(self):
        return self.generation != self.state.generation

    def _make_rng(self):
        return random.Random(self.config.mock_seed)

    async def reload(self, source=None):
        if source is None:
            source = self.current_source

        self.generation += 1
        generation = self.generation

        batch = await load_batch(
            source,
            self.backend,
            rng=self._make_rng(),
            mock_count=self.config.mock_event_count,
            error_ratio=self.config.mock_error_ratio,
        )

        if generation != self.generation:
            print(f"Discarding stale load #{generation} ({source or 'default source'})")
            return None

        state = build_view_state(batch, generation, self.config.bucket_count)
        self.state = state
        self._locator = EventLocator(batch)
        self.current_source = source or ""
        self.selected_index = None

        await _emit(self.state_changed, state)
        return state

    async def open_file(self, path):
        """Loads a file chosen in the picker. A cancelled picker passes None."""
        if not path:
            return None
        clean_path = path.strip().strip('\"\'')
        if not clean_path:
            return None
        state = await self.reload(clean_path)
        # Only remember files that were actually read, not a fallback.
        if state is not None and state.batch.loaded_from == clean_path:
            self.config.add_recent_file(clean_path)
        return state

    def locate(self, fraction):
        return self._locator.locate(fraction)

    async def scrub(self, fraction):
        """Maps a scrub position to an event and asks the view to scroll to it."""
        index = self.locate(fraction)
        if index is None:
            return None
        self.selected_index = index
        await _emit(self.scroll_requested, index)
        return index
