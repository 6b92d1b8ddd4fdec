import flet as ft

class TopBar:
    def __init__(self, app):
        self.app = app
        self.title_text = None
        self.source_text = None
        self.open_btn = None
        self.reload_btn = None
        self.container = None

    def _button_style(self, is_dark):
        return ft.ButtonStyle(
            bgcolor={
                ft.ControlState.DEFAULT: ft.Colors.BLUE_700 if is_dark else ft.Colors.BLUE_50,
                ft.ControlState.HOVERED: ft.Colors.BLUE_600 if is_dark else ft.Colors.BLUE_100,
            },
            color={
                ft.ControlState.DEFAULT: ft.Colors.WHITE if is_dark else ft.Colors.BLUE_700,
            },
            padding=ft.padding.symmetric(horizontal=12),
            shape=ft.RoundedRectangleBorder(radius=6)
        )

    def build(self):
        colors = self.app._get_colors()
        is_dark = self.app.page.theme_mode == ft.ThemeMode.DARK

        self.title_text = ft.Text("Log Dashboard", size=16, weight=ft.FontWeight.BOLD, color=colors["text"])
        self.source_text = ft.Text("", size=12, color=colors["text_muted"], no_wrap=True,
                                   overflow=ft.TextOverflow.ELLIPSIS, expand=True)

        self.open_btn = ft.ElevatedButton(
            content=ft.Row([ft.Icon(ft.Icons.FOLDER_OPEN, size=16), ft.Text("Open Log...", size=12)], spacing=5),
            height=30,
            on_click=self.app.on_open_file_click,
            style=self._button_style(is_dark),
        )
        self.reload_btn = ft.IconButton(
            icon=ft.Icons.REFRESH,
            tooltip="Reload",
            on_click=self.app.on_reload_click,
        )

        self.container = ft.Container(
            height=44,
            bgcolor=colors["top_bar_bg"],
            padding=ft.padding.symmetric(horizontal=15),
            content=ft.Row(
                [self.title_text, self.source_text, self.reload_btn, self.open_btn],
                spacing=15,
                vertical_alignment=ft.CrossAxisAlignment.CENTER,
            ),
        )
        return self.container

    def set_source(self, source):
        self.source_text.value = source or "(default source)"

    def update_colors(self):
        colors = self.app._get_colors()
        is_dark = self.app.page.theme_mode == ft.ThemeMode.DARK
        if self.container:
            self.container.bgcolor = colors["top_bar_bg"]
            self.title_text.color = colors["text"]
            self.source_text.color = colors["text_muted"]
            self.open_btn.style = self._button_style(is_dark)
