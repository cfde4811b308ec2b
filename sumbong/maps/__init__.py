"""
Maps Component - Interactive incident map.

This component draws incident reports on a Folium map, either as category
pins with popups or as a density heatmap, and keeps the drawn layers in
sync with the report collection and the category filter.

The Streamlit page lives in ``sumbong.maps.map_page`` and is imported by the
app directly.
"""

from .map_config import IncidentMapConfig, get_map_config
from .renderer import ViewMode, MarkerRenderer, HeatmapRenderer
from .layers import LayerManager
from .canvas import MapCanvasController, ViewSurface
from .view import IncidentMapView

__all__ = [
    'IncidentMapConfig',
    'get_map_config',
    'ViewMode',
    'MarkerRenderer',
    'HeatmapRenderer',
    'LayerManager',
    'MapCanvasController',
    'ViewSurface',
    'IncidentMapView'
]
