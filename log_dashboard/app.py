import asyncio
import os
import re
import traceback

import flet as ft

from log_dashboard.config import get_config
from log_dashboard.controllers import DashboardController
from log_dashboard.ui.components.charts import LevelChart, StatCards, VolumeChart
from log_dashboard.ui.components.event_list import EventList, Scrubber
from log_dashboard.ui.components.sidebar import SIDEBAR_WIDTH, Sidebar
from log_dashboard.ui.components.status_bar import StatusBar
from log_dashboard.ui.components.top_bar import TopBar
from log_dashboard.ui.theme import ThemeColors

CONTENT_PADDING = 20


class DashboardApp:
    def __init__(self, page: ft.Page, controller=None, config=None):
        self.page = page
        self.config = config or get_config()
        self.controller = controller or DashboardController(config=self.config)

        self._init_state_variables()
        self._init_settings()
        self.build_ui()

        self.controller.state_changed.append(self.on_state_changed)
        self.controller.scroll_requested.append(self.on_scroll_requested)

    def _init_state_variables(self):
        self.APP_NAME = "Log Dashboard"
        self.VERSION = "V1.0"

        self.page.title = self.APP_NAME
        self.page.padding = 0
        self.page.spacing = 0

        self.scrubber_width = 0

        self.top_bar_comp = TopBar(self)
        self.sidebar_comp = Sidebar(self)
        self.stat_cards = StatCards(self)
        self.level_chart = LevelChart(self)
        self.volume_chart = VolumeChart(self)
        self.scrubber = Scrubber(self)
        self.event_list = EventList(self)
        self.status_bar_comp = StatusBar(self)

    def _init_settings(self):
        tm = self.config.theme_mode
        self.page.theme_mode = ft.ThemeMode.DARK if tm == "dark" else ft.ThemeMode.LIGHT

        match = re.match(r"(\d+)x(\d+)", str(self.config.get("window_geometry", "")))
        if match:
            w, h = map(int, match.groups())
            self.page.window.width = w
            self.page.window.height = h

    def _get_colors(self):
        return ThemeColors.get(self.page.theme_mode)

    def build_ui(self, update_page=True):
        colors = self._get_colors()
        self.page.bgcolor = colors["page_bg"]

        content = ft.Container(
            expand=True,
            padding=ft.padding.all(CONTENT_PADDING),
            content=ft.Column([
                self.stat_cards.build(),
                ft.Row([self.level_chart.build(), self.volume_chart.build()], spacing=15),
                self.scrubber.build(),
                self.event_list.build(),
            ], spacing=15, expand=True),
        )

        self.page.clean()
        self.page.add(
            ft.Column([
                self.top_bar_comp.build(),
                ft.Row([self.sidebar_comp.build(), content], expand=True, spacing=0),
                self.status_bar_comp.build(),
            ], expand=True, spacing=0)
        )

        self.page.on_resize = self.on_resize
        self._update_scrubber_width()

        if update_page:
            self.page.update()

    def _update_scrubber_width(self):
        width = self.page.width or 0
        self.scrubber_width = max(0, width - SIDEBAR_WIDTH - 2 * CONTENT_PADDING)

    async def start(self, initial_path=None):
        if initial_path:
            await self.load_file(initial_path)
        else:
            await self._run_safe_async(self.controller.reload(""), "Loading")

    # --- Controller callbacks ---

    def on_state_changed(self, state):
        self.render_state(state)
        if state.batch.degraded:
            self.show_toast("Backend unavailable, showing sample data", is_error=True)

    def render_state(self, state):
        rows = state.series.as_rows()
        self.top_bar_comp.set_source(state.batch.loaded_from or state.batch.source)
        self.stat_cards.render(state.stats)
        self.level_chart.render(rows["bar"])
        self.volume_chart.render(rows["line"])
        self.scrubber.render(state.batch)
        self.event_list.render(state.batch.events)
        self.update_status_bar()
        self.page.update()

    async def on_scroll_requested(self, index):
        await self.event_list.scroll_to_index(index)

    # --- UI events ---

    async def on_scrub(self, fraction):
        await self.controller.scrub(fraction)

    async def on_event_click(self, index):
        self.controller.selected_index = index
        self.event_list.highlight(index)
        self.page.update()

    async def on_open_file_click(self, e):
        await self._run_safe_async(self._perform_open_file_dialog(), "Opening File")

    async def _perform_open_file_dialog(self):
        file_picker = ft.FilePicker()
        files = await file_picker.pick_files(
            allow_multiple=False,
            allowed_extensions=["log", "txt", "out"],
            dialog_title="Select Log File",
            initial_directory=self.config.get("last_log_dir", os.path.expanduser("~"))
        )
        file_path = files[0].path if files else None

        if file_path:
            await self.load_file(file_path)

    async def load_file(self, path):
        if not path: return
        await self._run_safe_async(self.controller.open_file(path), f"Loading {os.path.basename(path.strip())}")
        self.config.save()

    async def on_reload_click(self, e):
        await self._run_safe_async(self.controller.reload(), "Reloading")

    async def on_live_stream_click(self, e):
        self.show_toast("Live streaming is coming soon")

    async def toggle_theme(self, e):
        is_dark = self.page.theme_mode == ft.ThemeMode.DARK
        self.page.theme_mode = ft.ThemeMode.LIGHT if is_dark else ft.ThemeMode.DARK
        self.config.theme_mode = "light" if is_dark else "dark"
        self.config.save()
        self.update_ui_colors()
        # Level colours are baked into rows and markers
        if not self.controller.state.is_empty:
            self.render_state(self.controller.state)
        self.page.update()

    def update_ui_colors(self):
        self.page.bgcolor = self._get_colors()["page_bg"]
        for comp in (self.top_bar_comp, self.sidebar_comp, self.stat_cards, self.level_chart,
                     self.volume_chart, self.scrubber, self.event_list, self.status_bar_comp):
            comp.update_colors()

    async def on_resize(self, e):
        self._update_scrubber_width()
        if not self.controller.state.is_empty:
            self.scrubber.render(self.controller.state.batch)
        self.page.update()

    def update_status_bar(self):
        state = self.controller.state
        batch = state.batch
        if batch.degraded:
            self.status_bar_comp.update_status(
                f"Disconnected: showing sample data ({len(batch):,} events)", degraded=True)
        elif not batch.loaded_from:
            self.status_bar_comp.update_status("Connected: no log file loaded", degraded=False)
        else:
            source = os.path.basename(batch.loaded_from)
            if batch.source and batch.source != batch.loaded_from:
                source += f" (could not read {os.path.basename(batch.source)})"
            self.status_bar_comp.update_status(
                f"Connected: {source} ({len(batch):,} events, {batch.total_lines:,} lines)", degraded=False)

    async def _run_safe_async(self, coro, status_msg=None):
        """
        Runs a UI task with a single error path: print the traceback and
        show a toast rather than letting the exception kill the page.
        """
        if status_msg:
            self.status_bar_comp.update_status(f"{status_msg}...")

        try:
            result = await coro
            # A discarded load leaves the transient message behind
            if status_msg and self.status_bar_comp.status_text.value == f"{status_msg}...":
                self.status_bar_comp.update_status("Ready")
            return result
        except Exception as e:
            print(f"UNHANDLED ERROR: {e}", flush=True)
            traceback.print_exc()
            self.show_toast(f"Error: {str(e)}", is_error=True)
            return None

    def show_toast(self, message, is_error=False, duration=3.0):
        """Displays a toast notification in the overlay."""
        is_dark = self.page.theme_mode == ft.ThemeMode.DARK

        if is_error:
            bg_color = ft.Colors.RED_800
            fg_color = ft.Colors.WHITE
        else:
            bg_color = "#333333" if is_dark else "#E0E0E0"
            fg_color = ft.Colors.WHITE if is_dark else ft.Colors.BLACK

        toast_content = ft.Container(
            content=ft.Text(message, color=fg_color, size=13, weight=ft.FontWeight.W_500),
            bgcolor=bg_color,
            padding=ft.padding.symmetric(horizontal=15, vertical=8),
            border_radius=8,
            opacity=0,
            animate_opacity=300,
        )
        toast_wrapper = ft.Container(
            content=ft.Row([toast_content], alignment=ft.MainAxisAlignment.CENTER),
            bottom=50,
            left=0,
            right=0,
        )

        self.page.overlay.append(toast_wrapper)
        self.page.update()

        toast_content.opacity = 1
        toast_content.update()

        async def _remove_toast():
            await asyncio.sleep(duration)
            try:
                toast_content.opacity = 0
                toast_content.update()
                await asyncio.sleep(0.3)
                if toast_wrapper in self.page.overlay:
                    self.page.overlay.remove(toast_wrapper)
                    self.page.update()
            except Exception:
                pass  # Page might be closed

        asyncio.create_task(_remove_toast())
