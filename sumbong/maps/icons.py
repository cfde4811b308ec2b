"""
Marker glyphs for incident categories.

Every category gets the same teardrop pin, filled with the category color
and anchored at its bottom tip so that it points at the report location.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import folium

from ..reports.categories import resolve_category

PIN_SIZE: Tuple[int, int] = (28, 40)
PIN_ANCHOR: Tuple[int, int] = (14, 40)
PIN_POPUP_ANCHOR: Tuple[int, int] = (0, -40)

_PIN_TEMPLATE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" viewBox="0 0 24 24">'
    '<path fill="{color}" stroke="#000" stroke-width="1.6" stroke-linejoin="round" '
    'd="M12 2C8.13 2 5 5.13 5 9c0 5.25 7 13 7 13s7-7.75 7-13c0-3.87-3.13-7-7-7z"/>'
    '<circle cx="12" cy="9.2" r="2.2" fill="#fff" stroke="#000" stroke-width="1"/>'
    '</svg>'
)


@dataclass(frozen=True)
class PinIcon:
    """Resolved marker glyph for one category."""
    category: str
    color: str
    svg: str
    size: Tuple[int, int] = PIN_SIZE
    anchor: Tuple[int, int] = PIN_ANCHOR
    popup_anchor: Tuple[int, int] = PIN_POPUP_ANCHOR

    def to_folium(self) -> folium.DivIcon:
        """Build the Leaflet icon for this glyph."""
        return folium.DivIcon(
            html=self.svg,
            icon_size=self.size,
            icon_anchor=self.anchor,
            popup_anchor=self.popup_anchor,
            class_name='incident-pin',
        )


def icon_for(category: Optional[str]) -> PinIcon:
    """
    Get the pin glyph for a category key.

    Args:
        category: Category key; unresolved keys use the default color

    Returns:
        PinIcon filled with the resolved color
    """
    color = resolve_category(category).color
    svg = _PIN_TEMPLATE.format(width=PIN_SIZE[0], height=PIN_SIZE[1], color=color)
    return PinIcon(category=category or '', color=color, svg=svg)
