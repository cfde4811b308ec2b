"""
Map canvas lifecycle for the incident map.

``MapCanvasController`` owns the base map: it builds the Folium map with its
tile source and scale control once the view surface is ready, hands the map
to the Layer Manager, and releases it on teardown.
"""

import threading
from typing import Callable, List, Optional, Sequence
import logging

import folium
from branca.element import MacroElement
from jinja2 import Template as JinjaTemplate

from .layers import LayerManager
from .map_config import IncidentMapConfig, get_map_config

logger = logging.getLogger(__name__)


class ScaleControl(MacroElement):
    """Leaflet scale indicator with configurable units."""

    _template = JinjaTemplate(
        """
        {% macro script(this, kwargs) %}
        L.control.scale({{ this.options|tojson }}).addTo({{ this._parent.get_name() }});
        {% endmacro %}
        """
    )

    def __init__(self, imperial: bool = False, metric: bool = True):
        super().__init__()
        self._name = 'ScaleControl'
        self.options = {'imperial': imperial, 'metric': metric}


class ViewSurface:
    """
    Readiness signal for the element the map is drawn into.

    The owning view calls ``mark_ready`` once the surface exists; callbacks
    registered with ``when_ready`` run at that moment, or immediately when
    the surface is already ready.
    """

    def __init__(self, name: str = 'map', ready: bool = False):
        self.name = name
        self._ready = threading.Event()
        self._callbacks: List[Callable[[], None]] = []
        self._lock = threading.Lock()
        if ready:
            self._ready.set()

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    def when_ready(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Run ``callback`` once the surface is ready.

        Returns:
            Function that cancels the callback if it has not run yet
        """
        with self._lock:
            if not self._ready.is_set():
                self._callbacks.append(callback)

                def cancel() -> None:
                    with self._lock:
                        if callback in self._callbacks:
                            self._callbacks.remove(callback)

                return cancel

        callback()
        return lambda: None

    def mark_ready(self) -> None:
        with self._lock:
            if self._ready.is_set():
                return
            self._ready.set()
            callbacks, self._callbacks = self._callbacks, []

        logger.debug(f"View surface '{self.name}' ready, running {len(callbacks)} callbacks")
        for callback in callbacks:
            callback()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._ready.wait(timeout)


class MapCanvasController:
    """Owns the base map surface, tile source, and map lifecycle."""

    def __init__(self, config: Optional[IncidentMapConfig] = None,
                 layers: Optional[LayerManager] = None):
        self.config = config or get_map_config()
        self.layers = layers or LayerManager(self.config)
        self._map: Optional[folium.Map] = None
        self._torn_down = False
        self._cancel_deferred: Optional[Callable[[], None]] = None

    @property
    def map_obj(self) -> Optional[folium.Map]:
        return self._map

    @property
    def is_ready(self) -> bool:
        return self._map is not None

    @property
    def is_torn_down(self) -> bool:
        return self._torn_down

    @property
    def is_deferred(self) -> bool:
        return self._cancel_deferred is not None

    def initialize(self, center: Optional[Sequence[float]] = None,
                   zoom_level: Optional[int] = None,
                   surface: Optional[ViewSurface] = None) -> bool:
        """
        Build the base map, deferring until ``surface`` is ready.

        Args:
            center: (lat, lng) of the initial view; configured default if None
            zoom_level: Initial zoom; configured default if None
            surface: Surface the map is drawn into; None means ready now

        Returns:
            True if the map is initialized when the call returns
        """
        if self._torn_down:
            logger.warning("Map canvas was torn down, ignoring initialize()")
            return False
        if self._map is not None:
            logger.debug("Map canvas already initialized")
            return True

        settings = self.config.get_map_settings()
        center = list(center) if center is not None else list(settings['default_center'])
        zoom_level = zoom_level if zoom_level is not None else settings['default_zoom']

        if surface is not None and not surface.is_ready:
            if self._cancel_deferred is None:
                logger.info(f"View surface '{surface.name}' not ready, deferring map initialization")
                cancel = surface.when_ready(lambda: self._initialize_now(center, zoom_level))
                # The surface may have become ready in the meantime
                if self._map is None:
                    self._cancel_deferred = cancel
            return self._map is not None

        return self._initialize_now(center, zoom_level)

    def _initialize_now(self, center: List[float], zoom_level: int) -> bool:
        self._cancel_deferred = None
        if self._torn_down:
            return False

        tiles = self.config.get_tile_settings()
        settings = self.config.get_map_settings()
        try:
            map_obj = folium.Map(
                location=center,
                zoom_start=zoom_level,
                tiles=None,
                max_zoom=tiles['max_zoom'],
            )
            folium.TileLayer(
                tiles=tiles['url_template'],
                attr=tiles['attribution'],
                name='Base map',
                max_zoom=tiles['max_zoom'],
                control=False,
            ).add_to(map_obj)
            ScaleControl(imperial=settings.get('scale_imperial', False)).add_to(map_obj)
        except Exception as e:
            logger.error(f"Error initializing map: {e}")
            return False

        self._map = map_obj
        self.layers.attach(map_obj)
        logger.info(f"Initialized map at {center} (zoom {zoom_level})")
        return True

    def teardown(self) -> None:
        """Release the map; only the first call has any effect."""
        if self._torn_down:
            return
        self._torn_down = True

        if self._cancel_deferred is not None:
            self._cancel_deferred()
            self._cancel_deferred = None
            logger.debug("Cancelled deferred map initialization")

        if self._map is not None:
            self.layers.detach()
            self._map = None
            logger.info("Released map canvas")

    def render_html(self) -> str:
        """Standalone HTML document of the current map, empty if not ready."""
        if self._map is None:
            return ''
        return self._map.get_root().render()
