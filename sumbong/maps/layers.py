"""
Layer management for the incident map.

``LayerManager`` is the single owner of the layers currently drawn on the
map. Every filter or mode change goes through ``rebuild``, which removes all
previous layers before the selected renderer draws the new ones, so markers
and heatmaps from different renders never coexist.
"""

import threading
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple
import logging

import folium
from branca.element import MacroElement
from folium.plugins import HeatMap

from .map_config import IncidentMapConfig, get_map_config
from .renderer import ViewMode, renderer_for
from ..reports.filters import apply_filter, normalize_selection
from ..reports.model import IncidentReport

logger = logging.getLogger(__name__)


class LayerManager:
    """
    Owns the active Layer Set and enforces clear-before-redraw.

    A rebuild requested while another rebuild is still drawing (for example
    from a callback fired during rendering) is queued and run right after
    the current one finishes; only the latest queued request is kept. All
    state changes happen under one lock, so reports delivered from a
    background fetch never interleave with a render in progress, and readers
    never see a half-built Layer Set.
    """

    def __init__(self, config: Optional[IncidentMapConfig] = None,
                 mode: ViewMode = ViewMode.MARKERS):
        self.config = config or get_map_config()
        self._mode = ViewMode.parse(mode)
        self._map: Optional[folium.Map] = None
        self._markers: List[folium.Marker] = []
        self._heatmap: Optional[HeatMap] = None
        self._reports: Sequence[IncidentReport] = []
        self._selected: FrozenSet[str] = frozenset()
        self._lock = threading.RLock()
        self._busy = False
        self._pending: Optional[Tuple[Sequence[IncidentReport], FrozenSet[str], ViewMode]] = None
        self.render_count = 0

    @property
    def mode(self) -> ViewMode:
        return self._mode

    @property
    def selected(self) -> FrozenSet[str]:
        return self._selected

    @property
    def is_attached(self) -> bool:
        return self._map is not None

    @property
    def active_layers(self) -> Tuple[MacroElement, ...]:
        """Snapshot of the committed Layer Set."""
        with self._lock:
            layers = tuple(self._markers)
            if self._heatmap is not None:
                layers += (self._heatmap,)
            return layers

    @property
    def layer_count(self) -> int:
        return len(self.active_layers)

    @property
    def marker_count(self) -> int:
        with self._lock:
            return len(self._markers)

    @property
    def has_heatmap(self) -> bool:
        with self._lock:
            return self._heatmap is not None

    def attach(self, map_obj: folium.Map) -> None:
        """Bind to a map and draw any layers registered while detached."""
        with self._lock:
            self._map = map_obj
            for layer in self.active_layers:
                layer.add_to(map_obj)
            logger.debug(f"Layer manager attached with {self.layer_count} layers")

    def detach(self) -> None:
        """Clear all layers and release the map reference."""
        with self._lock:
            self.clear_layers()
            self._map = None
            logger.debug("Layer manager detached")

    def register_marker(self, marker: folium.Marker) -> None:
        with self._lock:
            self._markers.append(marker)
            if self._map is not None:
                marker.add_to(self._map)

    def register_heatmap(self, layer: HeatMap) -> None:
        """Register the heatmap layer, replacing any previous one."""
        with self._lock:
            if self._heatmap is not None:
                self._remove_from_map(self._heatmap)
            self._heatmap = layer
            if self._map is not None:
                layer.add_to(self._map)

    def clear_layers(self) -> None:
        """Remove every marker and the heatmap; safe to call when empty."""
        with self._lock:
            for marker in self._markers:
                self._remove_from_map(marker)
            removed = len(self._markers)
            self._markers = []

            if self._heatmap is not None:
                self._remove_from_map(self._heatmap)
                self._heatmap = None
                removed += 1

            if removed:
                logger.debug(f"Cleared {removed} layers")

    def _remove_from_map(self, layer: MacroElement) -> None:
        if self._map is None:
            return
        self._map._children.pop(layer.get_name(), None)

    def set_mode(self, mode: ViewMode) -> None:
        """Switch view mode and redraw the last inputs."""
        with self._lock:
            self.rebuild(self._reports, self._selected, mode)

    def rebuild(self, reports: Sequence[IncidentReport], selected: Iterable[str] = (),
                mode: Optional[ViewMode] = None) -> None:
        """
        Clear all layers and redraw the visible reports.

        Args:
            reports: Full report collection
            selected: Selected category keys; empty means all visible
            mode: View mode to draw with; defaults to the current mode
        """
        request = (
            reports,
            normalize_selection(selected),
            ViewMode.parse(mode) if mode is not None else self._mode,
        )
        with self._lock:
            if self._busy:
                logger.debug("Rebuild requested during a render, queued")
                self._pending = request
                return

            self._busy = True
            try:
                while request is not None:
                    self._draw(*request)
                    request, self._pending = self._pending, None
            except Exception:
                # Never leave a partially drawn Layer Set behind
                self.clear_layers()
                self._pending = None
                raise
            finally:
                self._busy = False

    def _draw(self, reports: Sequence[IncidentReport], selected: FrozenSet[str],
              mode: ViewMode) -> None:
        self._reports = reports
        self._selected = selected
        self._mode = mode

        self.clear_layers()
        visible = apply_filter(reports, selected)
        drawn = renderer_for(mode, self.config).render(visible, self)
        self.render_count += 1
        logger.debug(f"Render #{self.render_count}: {mode.value}, {drawn} of {len(reports)} reports drawn")
