"""
Inferred style presets.

Values used when analysis did not observe a style but a sensible default can
be derived (typically from the primary brand color). Every preset is returned
as a fresh object so callers may mutate what they receive.
"""

from __future__ import annotations

import copy
import re
from typing import Any

HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")

DISABLED_COLOR = "#94A3B8"

_LOGO_RULES = {
    "clearSpaceMultiplier": 1.5,
    "minDisplaySize": "80px",
    "prohibitedUsage": [
        "Do not rotate or skew",
        "Do not change the logo colors",
        "Do not add effects or shadows",
        "Do not place on busy backgrounds",
    ],
}

_NEUTRALS = [
    {"hex": "#F8FAFC", "name": "Light Gray", "role": "neutral", "usage": ["backgrounds"]},
    {"hex": "#64748B", "name": "Slate", "role": "neutral", "usage": ["text", "borders"]},
    {"hex": "#1E293B", "name": "Dark Slate", "role": "neutral", "usage": ["text", "backgrounds"]},
]

_TEXT_COLORS = {
    "on_light": [
        {"hex": "#1E293B", "name": "Primary Text", "role": "text", "usage": ["headings", "body"]},
        {"hex": "#64748B", "name": "Secondary Text", "role": "text", "usage": ["captions", "muted"]},
    ],
    "on_dark": [
        {"hex": "#F8FAFC", "name": "Primary Text", "role": "text", "usage": ["headings", "body"]},
        {"hex": "#94A3B8", "name": "Secondary Text", "role": "text", "usage": ["captions", "muted"]},
    ],
}

_BACKGROUNDS = {
    "light": "#FFFFFF",
    "dark": "#0F172A",
    "surface": "#F8FAFC",
}

_TYPOGRAPHY_SCALE = {
    "baseSize": 16,
    "scaleRatio": 1.25,
    "lineHeight": {"heading": 1.2, "body": 1.6},
    "letterSpacing": {"heading": "-0.02em", "body": "0", "caps": "0.08em"},
}

_MONO_FONT = {
    "name": "JetBrains Mono",
    "fallbacks": ["monospace"],
    "style": "monospace",
}

_CARD_STYLE = {
    "borderRadius": "12px",
    "shadow": "0 4px 6px -1px rgba(0, 0, 0, 0.1)",
    "border": "none",
    "padding": "24px",
    "background": "#FFFFFF",
}

_CARD_DARK_STYLE = {
    "borderRadius": "12px",
    "shadow": "0 4px 6px -1px rgba(0, 0, 0, 0.3)",
    "border": "1px solid rgba(255, 255, 255, 0.1)",
    "padding": "24px",
    "background": "#1E293B",
}


def normalize_hex(value: Any) -> str | None:
    """Return ``#RRGGBB`` for a six-digit hex color, or None."""
    if not isinstance(value, str):
        return None
    match = HEX_COLOR_RE.match(value.strip())
    if not match:
        return None
    return f"#{match.group(1)}"


def darken_color(hex_color: str, percent: float) -> str:
    """
    Darken a hex color by subtracting ``round(2.55 * percent)`` from each channel.

    Channels clamp at 0. Output is lowercase ``#rrggbb``.
    """
    normalized = normalize_hex(hex_color)
    if normalized is None:
        raise ValueError(f"Not a hex color: {hex_color!r}")
    num = int(normalized[1:], 16)
    amount = int(2.55 * percent + 0.5)
    red = max(0, (num >> 16) - amount)
    green = max(0, ((num >> 8) & 0xFF) - amount)
    blue = max(0, (num & 0xFF) - amount)
    return f"#{red:02x}{green:02x}{blue:02x}"


def logo_rules() -> dict:
    return copy.deepcopy(_LOGO_RULES)


def neutral_swatches() -> list[dict]:
    return copy.deepcopy(_NEUTRALS)


def text_colors() -> dict:
    return copy.deepcopy(_TEXT_COLORS)


def backgrounds() -> dict:
    return copy.deepcopy(_BACKGROUNDS)


def typography_scale() -> dict:
    return copy.deepcopy(_TYPOGRAPHY_SCALE)


def mono_font() -> dict:
    return copy.deepcopy(_MONO_FONT)


def card_style() -> dict:
    return copy.deepcopy(_CARD_STYLE)


def card_dark_style() -> dict:
    return copy.deepcopy(_CARD_DARK_STYLE)


def button_style(primary: str) -> dict:
    """Solid primary button derived from the brand color."""
    return {
        "borderRadius": "8px",
        "padding": "12px 24px",
        "fontWeight": 600,
        "textTransform": "none",
        "states": {
            "default": {"bg": primary, "text": "#FFFFFF", "border": "none"},
            "hover": {"bg": darken_color(primary, 10), "text": "#FFFFFF", "border": "none"},
            "disabled": {"bg": DISABLED_COLOR, "text": "#FFFFFF", "border": "none"},
        },
    }


def secondary_button_style(primary: str) -> dict:
    """Outline variant of the primary button."""
    return {
        "borderRadius": "8px",
        "padding": "12px 24px",
        "fontWeight": 600,
        "textTransform": "none",
        "states": {
            "default": {"bg": "transparent", "text": primary, "border": f"2px solid {primary}"},
            "hover": {"bg": primary, "text": "#FFFFFF", "border": f"2px solid {primary}"},
            "disabled": {
                "bg": "transparent",
                "text": DISABLED_COLOR,
                "border": f"2px solid {DISABLED_COLOR}",
            },
        },
    }


def input_style(primary: str) -> dict:
    return {
        "borderRadius": "8px",
        "border": "1px solid #E2E8F0",
        "focusRing": f"0 0 0 3px {primary}33",
        "background": "#FFFFFF",
    }
