"""
Centralized styles module for the VitalSim dashboard.

Colors, fonts and stylesheet builders shared by the tiles and chart row.
"""

# =============================================================================
# COLORS - Unified color palette
# =============================================================================

COLORS = {
    # Core UI surfaces
    'background': '#0B0F14',
    'background_alt': '#0F141C',
    'panel': '#151B24',
    'header': '#10151D',

    # Borders & Dividers
    'border': '#2A3341',

    # Text
    'text': '#E7ECF4',
    'text_secondary': '#C1CAD8',
    'text_dim': '#7E8A9C',

    # Classification
    'normal': '#2FB36D',
    'abnormal': '#E26D5C',

    # Charts
    'spo2': '#4C86F7',
    'hr': '#E35B5B',
    'map': '#9E7BC9',
}

# =============================================================================
# FONTS
# =============================================================================

FONTS = {
    'family': 'Arial',
    'size_small': '11px',
    'size_normal': '12px',
    'size_title': '16px',
    'size_numeric': '48px',
}

# =============================================================================
# STYLE BUILDERS - Functions to generate stylesheet strings
# =============================================================================

def get_base_widget_style():
    """Base style for all widgets."""
    return f"""
        QWidget {{
            background-color: {COLORS['background']};
            color: {COLORS['text']};
            font-family: {FONTS['family']};
            font-size: {FONTS['size_normal']};
        }}
        QLabel {{
            background-color: transparent;
            background: none;
            color: {COLORS['text']};
        }}
    """

def get_bar_style(radius=20):
    """Rounded translucent bar holding a row of tiles or charts."""
    return f"""
        QFrame {{
            background-color: {get_rgba(COLORS['panel'], 0.85)};
            border: 1px solid {COLORS['border']};
            border-radius: {radius}px;
        }}
    """

def get_tinted_frame_style(color, alpha=0.06, radius=8):
    """Subtle tinted frame for numeric panels."""
    return f"""
        QFrame {{
            background-color: {get_rgba(color, alpha)};
            border: 1px solid {COLORS['border']};
            border-radius: {radius}px;
        }}
    """

# =============================================================================

def hex_to_rgb(hex_color):
    """Convert hex color to r, g, b string for rgba()."""
    hex_color = hex_color.lstrip('#')
    r, g, b = tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))
    return f"{r}, {g}, {b}"

def get_rgba(hex_color, alpha):
    """Get rgba string from hex color and alpha value (0-1)."""
    return f"rgba({hex_to_rgb(hex_color)}, {alpha})"
