"""
Rendering strategies for incident reports.

Two interchangeable renderers share one capability, painting a report
collection onto the map through a Layer Manager handle:

- ``MarkerRenderer`` draws one pin marker with a popup per report
- ``HeatmapRenderer`` draws a single density layer in which every report
  contributes unit weight

The Layer Manager picks exactly one of them per render from the current
view mode.
"""

from enum import Enum
from typing import List, Optional, Sequence, TYPE_CHECKING
import logging

import folium
from folium.plugins import HeatMap

from .icons import icon_for
from .map_config import IncidentMapConfig, get_map_config
from .popups import content_for
from ..reports.model import IncidentReport

if TYPE_CHECKING:
    from .layers import LayerManager

logger = logging.getLogger(__name__)

HEAT_WEIGHT = 1


class ViewMode(str, Enum):
    """Mutually exclusive rendering modes of the map."""

    MARKERS = "markers"
    HEATMAP = "heatmap"

    @classmethod
    def parse(cls, value) -> "ViewMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"View mode must be one of {[m.value for m in cls]}, got {value!r}")

    @property
    def label(self) -> str:
        return self.value.title()


class ReportRenderer:
    """Base class for strategies that paint reports onto the map."""

    mode: ViewMode

    def __init__(self, config: Optional[IncidentMapConfig] = None):
        self.config = config or get_map_config()

    def render(self, reports: Sequence[IncidentReport], layers: "LayerManager") -> int:
        """
        Paint ``reports`` and register the created layers.

        Args:
            reports: Visible reports, already filtered
            layers: Layer Manager that takes ownership of created layers

        Returns:
            Number of reports drawn
        """
        raise NotImplementedError


class MarkerRenderer(ReportRenderer):
    """Draws one category pin per report."""

    mode = ViewMode.MARKERS

    def build_marker(self, report: IncidentReport) -> folium.Marker:
        """Create the marker for a single renderable report."""
        content = content_for(report)
        max_width = self.config.get_marker_settings().get('popup_max_width', 300)
        return folium.Marker(
            location=[report.latitude, report.longitude],
            icon=icon_for(report.category).to_folium(),
            popup=folium.Popup(content.to_html(), max_width=max_width),
            tooltip=folium.Tooltip(content.tooltip_text()),
        )

    def render(self, reports: Sequence[IncidentReport], layers: "LayerManager") -> int:
        drawn = 0
        skipped = 0
        for report in reports:
            if not report.is_renderable:
                skipped += 1
                continue
            layers.register_marker(self.build_marker(report))
            drawn += 1

        if skipped:
            logger.debug(f"Skipped {skipped} reports without coordinates")
        logger.debug(f"Rendered {drawn} incident markers")
        return drawn


def heat_points(reports: Sequence[IncidentReport]) -> List[List[float]]:
    """
    Project reports to weighted heatmap points.

    Every renderable report becomes its own ``[lat, lng, 1]`` point; reports
    sharing a coordinate are not merged or summed.
    """
    return [
        [report.latitude, report.longitude, HEAT_WEIGHT]
        for report in reports
        if report.is_renderable
    ]


class HeatmapRenderer(ReportRenderer):
    """Draws a single incident density layer."""

    mode = ViewMode.HEATMAP

    def build_layer(self, points: List[List[float]]) -> HeatMap:
        settings = self.config.get_heatmap_settings()
        return HeatMap(
            points,
            name='Incident density',
            radius=settings['radius'],
            blur=settings['blur'],
            max_zoom=settings['max_zoom'],
            gradient=settings['gradient'],
        )

    def render(self, reports: Sequence[IncidentReport], layers: "LayerManager") -> int:
        points = heat_points(reports)
        if not points:
            logger.debug("No renderable reports, heatmap layer not created")
            return 0

        layers.register_heatmap(self.build_layer(points))
        logger.debug(f"Rendered heatmap with {len(points)} points")
        return len(points)


_RENDERERS = {
    ViewMode.MARKERS: MarkerRenderer,
    ViewMode.HEATMAP: HeatmapRenderer,
}


def renderer_for(mode, config: Optional[IncidentMapConfig] = None) -> ReportRenderer:
    """Get the renderer matching a view mode."""
    return _RENDERERS[ViewMode.parse(mode)](config)
