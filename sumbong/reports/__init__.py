"""
Reports Component - Incident report model, normalization, and statistics.

This component turns raw report records from the local snapshot or the
reports API into ``IncidentReport`` values, filters them by category, and
computes the figures shown in the statistics panel.
"""

from .model import IncidentReport, ReportStatus
from .adapters import normalize_records
from .filters import apply_filter, toggle_category
from .source import ReportSource, StaticReportSource, HttpReportSource
from .statistics import ReportSummary, summarize

__all__ = [
    'IncidentReport',
    'ReportStatus',
    'normalize_records',
    'apply_filter',
    'toggle_category',
    'ReportSource',
    'StaticReportSource',
    'HttpReportSource',
    'ReportSummary',
    'summarize'
]
