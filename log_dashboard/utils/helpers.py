def hex_to_rgb(hex_str):
    hex_str = hex_str.lstrip('#')
    if not hex_str: return (0, 0, 0)
    if len(hex_str) == 3: hex_str = "".join(c*2 for c in hex_str)
    try:
        return tuple(int(hex_str[i:i+2], 16) for i in (0, 2, 4))
    except ValueError:
        return (0, 0, 0)

def get_luminance(hex_str):
    rgb = hex_to_rgb(hex_str)
    return (0.299 * rgb[0] + 0.587 * rgb[1] + 0.114 * rgb[2]) / 255.0

def readable_text_color(bg_hex):
    """Black or white, whichever reads better on the given background."""
    return "#000000" if get_luminance(bg_hex) > 0.5 else "#FFFFFF"

def get_event_prop(event, prop_name, default=None):
    """
    Safely access event properties with fallback.
    Helps resolve API differences between Flet versions.
    """
    if hasattr(event, prop_name):
        return getattr(event, prop_name)

    aliases = {
        'local_x': ['local_position'],
    }

    for alias in aliases.get(prop_name, []):
        if hasattr(event, alias):
            val = getattr(event, alias)
            # Offset objects carry x/y
            if prop_name.endswith('_x') and hasattr(val, 'x'):
                return val.x
            return val

    return default
