"""
Incident map page for the Streamlit app.

This module renders the community incident map: a view-mode switch, a
category filter, the statistics panel, and the Folium map itself. The
``IncidentMapView`` lives in session state so that the report collection,
filter, and layers survive Streamlit reruns.
"""

from typing import Optional
import logging

import pandas as pd
import streamlit as st
from streamlit_folium import st_folium

from .canvas import ViewSurface
from .map_config import get_map_config
from .renderer import ViewMode
from .view import IncidentMapView
from ..reports.adapters import normalize_records
from ..reports.categories import CRIME_CATEGORIES, category_label
from ..reports.sample_data import SAMPLE_RECORDS
from ..reports.source import HttpReportSource
from ..reports.statistics import monthly_counts, reports_to_frame, top_categories_frame

logger = logging.getLogger(__name__)


class IncidentMapPage:
    """Main interface for the incident map page."""

    def __init__(self):
        self.config = get_map_config()

    def render_map_page(self) -> None:
        """Render the incident map page with its sidebar controls."""

        st.title("🗺️ Crime Map")
        st.markdown("### Reported incidents in Barangay Parian, Calamba City")

        self._initialize_session_state()
        view: IncidentMapView = st.session_state.incident_map_view
        self._apply_finished_load(view)

        self._render_sidebar_controls(view)

        if st.session_state.incident_map_show_stats:
            self._render_statistics_panel(view)

        self._render_map(view)

        if st.session_state.incident_map_show_table:
            st.dataframe(reports_to_frame(view.reports), use_container_width=True, hide_index=True)

    def _initialize_session_state(self) -> None:
        """Initialize session state for the incident map."""

        if 'incident_map_view' not in st.session_state:
            reports = normalize_records(SAMPLE_RECORDS)
            view = IncidentMapView(self.config, reports)
            view.mount(ViewSurface('incident-map', ready=True))
            st.session_state.incident_map_view = view
            logger.info(f"Incident map view created with {len(reports)} sample reports")

        if 'incident_map_show_stats' not in st.session_state:
            st.session_state.incident_map_show_stats = False

        if 'incident_map_show_table' not in st.session_state:
            st.session_state.incident_map_show_table = False

        if 'incident_map_last_error' not in st.session_state:
            st.session_state.incident_map_last_error = None

    def _render_sidebar_controls(self, view: IncidentMapView) -> None:
        with st.sidebar:
            st.markdown("### View")
            modes = list(ViewMode)
            mode = st.radio(
                "Display",
                options=modes,
                index=modes.index(view.mode),
                format_func=lambda m: m.label,
                horizontal=True,
                key="incident_map_mode",
            )
            if mode is not view.mode:
                view.set_view_mode(mode)

            st.markdown("### Filter")
            keys = [c.key for c in CRIME_CATEGORIES]
            selected = st.multiselect(
                "Incident types",
                options=keys,
                default=sorted(view.selected),
                format_func=category_label,
                help="Leave empty to show every report",
                key="incident_map_categories",
            )
            if frozenset(selected) != view.selected:
                view.set_selection(selected)

            st.markdown("### Panels")
            st.session_state.incident_map_show_stats = st.checkbox(
                "Show statistics", value=st.session_state.incident_map_show_stats
            )
            st.session_state.incident_map_show_table = st.checkbox(
                "Show report table", value=st.session_state.incident_map_show_table
            )

            self._render_source_controls(view)

    def _render_source_controls(self, view: IncidentMapView) -> None:
        source_settings = self.config.get_source_settings()
        if not source_settings.get('url'):
            return

        st.markdown("### Data")
        if st.button("🔄 Refresh reports", use_container_width=True):
            source = HttpReportSource(source_settings['url'], timeout=source_settings['timeout_sec'])
            self._load_from_source(view, source, source_settings['timeout_sec'])

        if st.session_state.incident_map_last_error:
            st.warning(st.session_state.incident_map_last_error)

    def _load_from_source(self, view: IncidentMapView, source: HttpReportSource,
                          timeout: Optional[float]) -> None:
        if view.load_reports(source) is None:
            return

        with st.spinner("Loading reports..."):
            self._apply_finished_load(view, timeout)

    def _apply_finished_load(self, view: IncidentMapView, timeout: Optional[float] = None) -> None:
        """Apply a finished background load on this script run."""
        if not view.is_loading:
            return

        applied = view.apply_loaded_reports(timeout=timeout)
        if applied is None:
            st.session_state.incident_map_last_error = "Reports are still loading, the map will update on the next refresh"
        elif applied:
            st.session_state.incident_map_last_error = None
        else:
            st.session_state.incident_map_last_error = "Could not load reports, showing the previous data"

    def _render_statistics_panel(self, view: IncidentMapView) -> None:
        summary = view.summary()

        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("Total Reports", summary.total)
        with col2:
            st.metric("Verified", summary.verified)
        with col3:
            st.metric(f"Last {summary.recent_days} Days", summary.recent)
        with col4:
            st.metric("Showing", summary.filtered)

        col_top, col_trend = st.columns(2)
        with col_top:
            st.markdown("#### Top Incident Types")
            if summary.top_categories:
                st.dataframe(top_categories_frame(summary.top_categories),
                             use_container_width=True, hide_index=True)
            else:
                st.info("No reports yet")
        with col_trend:
            st.markdown("#### Reports per Month")
            months = monthly_counts(view.reports)
            if months:
                st.bar_chart(pd.Series(months, name="Reports"))
            else:
                st.info("No dated reports")

    def _render_map(self, view: IncidentMapView) -> None:
        map_obj = view.map_obj
        if map_obj is None:
            st.error("❌ The map could not be initialized")
            return

        height = self.config.get_map_settings().get('map_height', 600)
        st_folium(
            map_obj,
            width=None,
            height=height,
            key=f"incident_map_{view.mode.value}_{view.layers.render_count}",
            returned_objects=[],
        )
        st.caption(f"{view.filtered_count()} of {view.total_count()} reports shown")


def render_map_page():
    """
    Main function to render the incident map page in Streamlit.
    """
    page = IncidentMapPage()
    page.render_map_page()
