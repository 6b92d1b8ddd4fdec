import flet as ft

from log_dashboard.core.navigation import fraction_at, fraction_for_line, marker_offset
from log_dashboard.ui.theme import level_color
from log_dashboard.utils.helpers import get_event_prop, readable_text_color

ROW_HEIGHT = 28
SCRUBBER_HEIGHT = 24
MAX_MARKERS = 1000
MARKER_WIDTH = 2


class EventList:
    def __init__(self, app):
        self.app = app
        self.list_view = None
        self.container = None
        self.selected = None

    def build(self):
        colors = self.app._get_colors()
        self.list_view = ft.ListView(spacing=0, item_extent=ROW_HEIGHT, expand=True)
        self.container = ft.Container(
            expand=True,
            bgcolor=colors["card_bg"],
            border_radius=8,
            padding=ft.padding.symmetric(vertical=5),
            content=self.list_view,
        )
        return self.container

    def _row(self, index, event):
        colors = self.app._get_colors()
        badge_bg = level_color(event.level, self.app.page.theme_mode)

        async def on_click(_, idx=index):
            await self.app.on_event_click(idx)

        return ft.Container(
            height=ROW_HEIGHT,
            padding=ft.padding.symmetric(horizontal=10),
            on_click=on_click,
            content=ft.Row([
                ft.Text(str(event.line_number), size=11, width=60, color=colors["text_muted"],
                        font_family="Consolas, monospace"),
                ft.Text(event.timestamp, size=11, width=70, color=colors["text_muted"],
                        font_family="Consolas, monospace"),
                ft.Container(
                    width=110,
                    content=ft.Container(
                        content=ft.Text(event.level, size=10, weight=ft.FontWeight.BOLD,
                                        color=readable_text_color(badge_bg), no_wrap=True),
                        bgcolor=badge_bg,
                        border_radius=4,
                        padding=ft.padding.symmetric(horizontal=6, vertical=1),
                    ),
                ),
                ft.Text(event.message, size=12, color=colors["text"], no_wrap=True,
                        overflow=ft.TextOverflow.ELLIPSIS, expand=True),
            ], spacing=8, vertical_alignment=ft.CrossAxisAlignment.CENTER),
        )

    def render(self, events):
        self.selected = None
        self.list_view.controls = [self._row(i, e) for i, e in enumerate(events)]

    def highlight(self, index):
        colors = self.app._get_colors()
        rows = self.list_view.controls
        if self.selected is not None and self.selected < len(rows):
            rows[self.selected].bgcolor = None
        if index is not None and 0 <= index < len(rows):
            rows[index].bgcolor = colors["selection_bg"]
        self.selected = index

    async def scroll_to_index(self, index):
        # Keep the target row roughly centered
        offset = max(0, (index - 5) * ROW_HEIGHT)
        self.highlight(index)
        await self.list_view.scroll_to(offset=offset, duration=300)
        self.list_view.update()

    def update_colors(self):
        if self.container:
            self.container.bgcolor = self.app._get_colors()["card_bg"]


class Scrubber:
    """One marker per event along the file's line range; tap or drag to jump."""

    def __init__(self, app):
        self.app = app
        self.markers = None
        self.container = None

    def build(self):
        colors = self.app._get_colors()
        self.markers = ft.Stack(height=SCRUBBER_HEIGHT, expand=True)
        self.container = ft.Container(
            height=SCRUBBER_HEIGHT,
            bgcolor=colors["scrub_track"],
            border_radius=4,
            content=ft.GestureDetector(
                content=self.markers,
                on_tap_down=self.on_tap,
                on_horizontal_drag_update=self.on_tap,
                mouse_cursor=ft.MouseCursor.CLICK,
            ),
        )
        return self.container

    def render(self, batch):
        mode = self.app.page.theme_mode
        width = self.app.scrubber_width
        events = batch.events
        # Too many markers freezes the page; a thinned set looks the same.
        step = max(1, len(events) // MAX_MARKERS)

        self.markers.controls = [
            ft.Container(
                left=marker_offset(
                    fraction_for_line(e.line_number, batch.total_lines), width, MARKER_WIDTH),
                top=0,
                width=MARKER_WIDTH,
                height=SCRUBBER_HEIGHT,
                bgcolor=level_color(e.level, mode),
            )
            for e in events[::step]
        ]

    async def on_tap(self, e):
        width = self.app.scrubber_width
        if width <= 0:
            return
        x = get_event_prop(e, "local_x", 0) or 0
        await self.app.on_scrub(fraction_at(x, width, MARKER_WIDTH))

    def update_colors(self):
        if self.container:
            self.container.bgcolor = self.app._get_colors()["scrub_track"]
