"""
Incident map view: the owner of reports, filter state, and the map.

``IncidentMapView`` ties the pieces together. It keeps the report collection
and the selected categories, routes every change through the Layer Manager,
fetches new collections in the background and applies them on the calling
thread, and exposes the read-only summary accessors used by the summary
panel.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from datetime import datetime
from typing import Callable, FrozenSet, Iterable, List, Optional, Sequence, Tuple
import logging

import folium

from .canvas import MapCanvasController, ViewSurface
from .layers import LayerManager
from .legend import LegendGenerator
from .map_config import IncidentMapConfig, get_map_config
from .renderer import ViewMode
from ..reports import statistics
from ..reports.filters import normalize_selection, toggle_category
from ..reports.model import IncidentReport
from ..reports.source import ReportSource

logger = logging.getLogger(__name__)


class IncidentMapView:
    """Owning view of the incident map."""

    def __init__(self, config: Optional[IncidentMapConfig] = None,
                 reports: Optional[Iterable[IncidentReport]] = None):
        self.config = config or get_map_config()
        self.layers = LayerManager(self.config)
        self.canvas = MapCanvasController(self.config, self.layers)
        self.legend = LegendGenerator()

        self._reports: List[IncidentReport] = list(reports or [])
        self._selected: FrozenSet[str] = frozenset()
        self._legend_element: Optional[folium.Element] = None
        self._lock = threading.RLock()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._pending_load: Optional[Tuple[ReportSource, Future]] = None
        self._destroyed = False
        self._cancel_surface_callback: Optional[Callable[[], None]] = None

    # ----- state -----

    @property
    def reports(self) -> Tuple[IncidentReport, ...]:
        return tuple(self._reports)

    @property
    def selected(self) -> FrozenSet[str]:
        return self._selected

    @property
    def mode(self) -> ViewMode:
        return self.layers.mode

    @property
    def map_obj(self) -> Optional[folium.Map]:
        return self.canvas.map_obj

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    # ----- lifecycle -----

    def mount(self, surface: Optional[ViewSurface] = None,
              center: Optional[Sequence[float]] = None,
              zoom_level: Optional[int] = None) -> bool:
        """
        Initialize the map (possibly deferred) and draw the current reports.

        Returns:
            True if the map is ready when the call returns
        """
        if self._destroyed:
            logger.warning("Incident map view was destroyed, ignoring mount()")
            return False

        ready = self.canvas.initialize(center, zoom_level, surface)
        self.refresh()
        if not ready and surface is not None and self.canvas.is_deferred:
            self._cancel_surface_callback = surface.when_ready(self._refresh_legend)
        return ready

    def destroy(self) -> None:
        """Cancel outstanding loads and release the map. Idempotent."""
        with self._lock:
            if self._destroyed:
                return
            self._destroyed = True
            if self._pending_load is not None:
                self._pending_load[1].cancel()
                self._pending_load = None
            if self._cancel_surface_callback is not None:
                self._cancel_surface_callback()
                self._cancel_surface_callback = None

        self.canvas.teardown()
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
        logger.info("Incident map view destroyed")

    # ----- events -----

    def refresh(self) -> None:
        """Redraw the current reports with the current filter and mode."""
        with self._lock:
            if self._destroyed:
                return
            self.layers.rebuild(self._reports, self._selected)
            self._refresh_legend()

    def set_view_mode(self, mode: ViewMode) -> None:
        with self._lock:
            if self._destroyed:
                return
            mode = ViewMode.parse(mode)
            if mode is self.layers.mode and self.layers.render_count:
                return
            logger.info(f"Switching view mode to {mode.value}")
            self.layers.rebuild(self._reports, self._selected, mode)

    def toggle_category(self, category: str) -> FrozenSet[str]:
        with self._lock:
            self.set_selection(toggle_category(self._selected, category))
            return self._selected

    def set_selection(self, categories: Optional[Iterable[str]]) -> None:
        """Replace the selected-category set; empty shows every report."""
        with self._lock:
            if self._destroyed:
                return
            self._selected = normalize_selection(categories)
            self.refresh()

    def replace_reports(self, reports: Iterable[IncidentReport]) -> None:
        """Replace the whole report collection and redraw."""
        with self._lock:
            if self._destroyed:
                logger.debug("Ignoring report delivery to a destroyed view")
                return
            self._reports = list(reports)
            logger.info(f"Report collection replaced ({len(self._reports)} reports)")
            self.refresh()

    def load_reports(self, source: ReportSource) -> Optional[Future]:
        """
        Fetch a new collection from ``source`` in the background.

        The worker thread only fetches. The result is applied to the map by
        ``apply_loaded_reports`` on the calling thread. A newer load or
        ``destroy()`` supersedes this one, and its result is never applied.

        Returns:
            Future resolving to the fetched reports, or None if the view is
            already destroyed
        """
        with self._lock:
            if self._destroyed:
                logger.warning("Incident map view was destroyed, ignoring load_reports()")
                return None

            if self._pending_load is not None:
                self._pending_load[1].cancel()
                logger.debug("Superseding pending report load")

            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='report-fetch')
            future = self._executor.submit(source.fetch)
            self._pending_load = (source, future)
            logger.info(f"Loading reports from {source.name}")
            return future

    @property
    def is_loading(self) -> bool:
        return self._pending_load is not None

    def apply_loaded_reports(self, timeout: Optional[float] = None) -> Optional[bool]:
        """
        Apply the result of the latest background load on the calling thread.

        Fetch failures are logged and leave the current collection untouched.

        Args:
            timeout: Seconds to wait for the load to finish; None only checks

        Returns:
            None if no load is pending or it is still running, True when the
            new collection was applied, False when the load failed or was
            superseded while waiting
        """
        pending = self._pending_load
        if pending is None:
            return None

        source, future = pending
        done, _ = wait([future], timeout=timeout or 0)
        if not done:
            return None

        with self._lock:
            if self._pending_load is not pending:
                logger.debug("Discarding reports from a superseded load")
                return False
            self._pending_load = None

            try:
                reports = future.result()
            except Exception as e:
                logger.error(f"Error loading reports from {source.name}: {e}")
                return False

            self.replace_reports(reports)
            return True

    def _refresh_legend(self) -> None:
        map_obj = self.canvas.map_obj
        if map_obj is None:
            return
        legend_html = self.legend.create_legend(selected=self._selected)
        self._legend_element = self.legend.add_legend_to_map(map_obj, legend_html, self._legend_element)

    # ----- read-only accessors -----

    def total_count(self) -> int:
        return statistics.total_count(self._reports)

    def verified_count(self) -> int:
        return statistics.verified_count(self._reports)

    def top_categories(self, n: Optional[int] = None) -> List[statistics.CategoryCount]:
        if n is None:
            n = self.config.get_statistics_settings()['top_n']
        return statistics.top_categories(self._reports, n)

    def recent_count(self, days: Optional[int] = None, now: Optional[datetime] = None) -> int:
        if days is None:
            days = self.config.get_statistics_settings()['recent_days']
        return statistics.recent_count(self._reports, days, now=now)

    def filtered_count(self) -> int:
        return statistics.filtered_count(self._reports, self._selected)

    def cluster_count(self) -> int:
        return statistics.cluster_count(self._reports)

    def summary(self, now: Optional[datetime] = None) -> statistics.ReportSummary:
        settings = self.config.get_statistics_settings()
        return statistics.summarize(
            self._reports,
            self._selected,
            recent_days=settings['recent_days'],
            top_n=settings['top_n'],
            now=now,
        )
