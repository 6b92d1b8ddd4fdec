import flet as ft

SIDEBAR_WIDTH = 200

class Sidebar:
    def __init__(self, app):
        self.app = app
        self.items = []
        self.container = None

    def _nav_item(self, icon, label, on_click, active=False):
        colors = self.app._get_colors()
        item = ft.Container(
            content=ft.Row([
                ft.Icon(icon, size=18, color=colors["text"]),
                ft.Text(label, size=13, color=colors["text"]),
            ], spacing=10),
            padding=ft.padding.symmetric(horizontal=12, vertical=10),
            border_radius=6,
            bgcolor=colors["selection_bg"] if active else None,
            on_click=on_click,
        )
        item.data = active
        self.items.append(item)
        return item

    def build(self):
        colors = self.app._get_colors()
        self.items = []

        self.container = ft.Container(
            width=SIDEBAR_WIDTH,
            bgcolor=colors["sidebar_bg"],
            padding=ft.padding.all(15),
            content=ft.Column([
                ft.Text("RUNE", size=22, weight=ft.FontWeight.BOLD, color=colors["text"]),
                ft.Container(height=10),
                self._nav_item(ft.Icons.DESCRIPTION, "Logs", None, active=True),
                self._nav_item(ft.Icons.STREAM, "Live Stream", self.app.on_live_stream_click),
                self._nav_item(ft.Icons.BRIGHTNESS_6, "Toggle Theme", self.app.toggle_theme),
            ], spacing=4),
        )
        return self.container

    def update_colors(self):
        colors = self.app._get_colors()
        if not self.container:
            return
        self.container.bgcolor = colors["sidebar_bg"]
        for item in self.items:
            item.bgcolor = colors["selection_bg"] if item.data else None
            for sub in item.content.controls:
                if isinstance(sub, ft.Text):
                    sub.color = colors["text"]
                elif isinstance(sub, ft.Icon):
                    sub.color = colors["text"]
