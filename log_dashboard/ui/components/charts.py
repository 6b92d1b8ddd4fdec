import flet as ft

from log_dashboard.ui.theme import level_color

CHART_HEIGHT = 160
BAR_MAX_WIDTH = 220


class StatCards:
    def __init__(self, app):
        self.app = app
        self.total_text = None
        self.errors_text = None
        self.rate_text = None
        self.cards = []

    def _card(self, title, value_text, accent=None):
        colors = self.app._get_colors()
        card = ft.Container(
            expand=True,
            bgcolor=colors["card_bg"],
            border_radius=8,
            padding=ft.padding.all(15),
            content=ft.Column([
                ft.Text(title, size=12, color=colors["text_muted"]),
                value_text,
            ], spacing=4),
        )
        if accent:
            value_text.color = accent
        self.cards.append(card)
        return card

    def build(self):
        colors = self.app._get_colors()
        self.cards = []
        self.total_text = ft.Text("0", size=26, weight=ft.FontWeight.BOLD, color=colors["text"])
        self.errors_text = ft.Text("0", size=26, weight=ft.FontWeight.BOLD, color=colors["chart_errors"])
        self.rate_text = ft.Text("0.0%", size=26, weight=ft.FontWeight.BOLD, color=colors["text"])
        return ft.Row([
            self._card("Total Events", self.total_text),
            self._card("Errors", self.errors_text, colors["chart_errors"]),
            self._card("Error Rate", self.rate_text),
        ], spacing=15)

    def render(self, stats):
        self.total_text.value = f"{stats.total:,}"
        self.errors_text.value = f"{stats.errors:,}"
        self.rate_text.value = f"{stats.error_rate * 100:.1f}%"

    def update_colors(self):
        colors = self.app._get_colors()
        for card in self.cards:
            card.bgcolor = colors["card_bg"]
        if self.total_text:
            self.total_text.color = colors["text"]
            self.errors_text.color = colors["chart_errors"]
            self.rate_text.color = colors["text"]


class LevelChart:
    """Horizontal bar per level, from ChartSeries.bar rows."""

    def __init__(self, app):
        self.app = app
        self.rows_column = None
        self.container = None

    def build(self):
        colors = self.app._get_colors()
        self.rows_column = ft.Column(spacing=6, scroll=ft.ScrollMode.AUTO, expand=True)
        self.container = ft.Container(
            expand=True,
            height=CHART_HEIGHT + 40,
            bgcolor=colors["card_bg"],
            border_radius=8,
            padding=ft.padding.all(15),
            content=ft.Column([
                ft.Text("Events by Level", size=13, weight=ft.FontWeight.W_500, color=colors["text"]),
                self.rows_column,
            ], spacing=10),
        )
        return self.container

    def render(self, rows):
        colors = self.app._get_colors()
        mode = self.app.page.theme_mode
        peak = max((r["value"] for r in rows), default=0)

        controls = []
        for r in rows:
            width = BAR_MAX_WIDTH * r["value"] / peak if peak else 0
            controls.append(ft.Row([
                ft.Text(r["name"], size=12, width=110, no_wrap=True, color=colors["text"]),
                ft.Container(width=max(2, width), height=14, border_radius=3,
                             bgcolor=level_color(r["name"], mode)),
                ft.Text(str(r["value"]), size=12, color=colors["text_muted"]),
            ], spacing=8))
        self.rows_column.controls = controls

    def update_colors(self):
        if self.container:
            self.container.bgcolor = self.app._get_colors()["card_bg"]


class VolumeChart:
    """Stacked column per bucket (errors on top of the rest), from ChartSeries.line rows."""

    def __init__(self, app):
        self.app = app
        self.columns_row = None
        self.container = None

    def build(self):
        colors = self.app._get_colors()
        self.columns_row = ft.Row(
            spacing=3,
            height=CHART_HEIGHT,
            vertical_alignment=ft.CrossAxisAlignment.END,
        )
        self.container = ft.Container(
            expand=2,
            height=CHART_HEIGHT + 40,
            bgcolor=colors["card_bg"],
            border_radius=8,
            padding=ft.padding.all(15),
            content=ft.Column([
                ft.Text("Activity Over Time", size=13, weight=ft.FontWeight.W_500, color=colors["text"]),
                self.columns_row,
            ], spacing=10),
        )
        return self.container

    def render(self, rows):
        colors = self.app._get_colors()
        peak = max((r["value"] for r in rows), default=0)

        controls = []
        for r in rows:
            scale = CHART_HEIGHT / peak if peak else 0
            controls.append(ft.Container(
                expand=True,
                tooltip=f"From event #{r['name']}: {r['value']} events, {r['errors']} errors",
                content=ft.Column([
                    ft.Container(height=r["errors"] * scale, bgcolor=colors["chart_errors"]),
                    ft.Container(height=(r["value"] - r["errors"]) * scale, bgcolor=colors["chart_volume"]),
                ], spacing=0, alignment=ft.MainAxisAlignment.END),
            ))
        self.columns_row.controls = controls

    def update_colors(self):
        if self.container:
            self.container.bgcolor = self.app._get_colors()["card_bg"]
