class ThemeColors:
    """Centralized color definitions for the dashboard."""
    DARK = {
        "page_bg": "#121212",
        "sidebar_bg": "#1E1E1E",
        "card_bg": "#252526",
        "top_bar_bg": "#333333",
        "text": "#E0E0E0",
        "text_muted": "#9E9E9E",
        "divider": "#333333",
        "selection_bg": "#264F78",
        "chart_bar": "#2196F3",
        "chart_volume": "#4FC3F7",
        "chart_errors": "#F44336",
        "scrub_track": "#000000",
        "status_bg": "#005A9E",
        "status_text": "#FFFFFF",
        "status_degraded_bg": "#8B1A1A",
    }

    LIGHT = {
        "page_bg": "#FAFAFA",
        "sidebar_bg": "#F5F5F5",
        "card_bg": "#FFFFFF",
        "top_bar_bg": "#E0E0E0",
        "text": "#202124",
        "text_muted": "#5F6368",
        "divider": "#D0D0D0",
        "selection_bg": "#E8F0FE",
        "chart_bar": "#1A73E8",
        "chart_volume": "#4285F4",
        "chart_errors": "#D93025",
        "scrub_track": "#EEEEEE",
        "status_bg": "#E1F5FE",
        "status_text": "#005A9E",
        "status_degraded_bg": "#FCE8E6",
    }

    LEVELS_DARK = {
        "ERROR": "#F44336",
        "ERR": "#F44336",
        "WARN": "#FFEB3B",
        "Warning": "#FFEB3B",
        "MEDIA_TIMEOUT": "#FF9800",
        "AbandonedCall": "#AB47BC",
        "INFO": "#2196F3",
    }

    LEVELS_LIGHT = {
        "ERROR": "#D93025",
        "ERR": "#D93025",
        "WARN": "#F9AB00",
        "Warning": "#F9AB00",
        "MEDIA_TIMEOUT": "#E8710A",
        "AbandonedCall": "#8E24AA",
        "INFO": "#1A73E8",
    }

    @staticmethod
    def is_dark(mode):
        # Handle ThemeMode Enum or string
        return str(mode).split(".")[-1].lower() == "dark"

    @staticmethod
    def get(mode):
        return ThemeColors.DARK if ThemeColors.is_dark(mode) else ThemeColors.LIGHT


def level_color(level, mode):
    dark = ThemeColors.is_dark(mode)
    table = ThemeColors.LEVELS_DARK if dark else ThemeColors.LEVELS_LIGHT
    return table.get(level, "#9E9E9E" if dark else "#757575")
