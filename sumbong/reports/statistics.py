"""
Summary statistics over incident report collections.

These functions back the map's summary panel and any chart collaborator.
They are pure: inputs are never mutated and unresolved categories or missing
timestamps degrade to defaults instead of raising.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence
import logging

import pandas as pd

from .filters import apply_filter
from .model import IncidentReport, ReportStatus
from .categories import category_label

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5
DEFAULT_RECENT_DAYS = 7


@dataclass(frozen=True)
class CategoryCount:
    """Frequency of one category key in a report collection."""
    key: str
    label: str
    count: int


@dataclass
class ReportSummary:
    """Bundle of the read-only accessors shown in the summary panel."""
    total: int
    verified: int
    filtered: int
    recent: int
    recent_days: int
    clusters: int
    top_categories: List[CategoryCount] = field(default_factory=list)


def total_count(reports: Sequence[IncidentReport]) -> int:
    return len(reports)


def verified_count(reports: Iterable[IncidentReport]) -> int:
    return sum(1 for r in reports if r.status is ReportStatus.VERIFIED)


def category_counts(reports: Iterable[IncidentReport]) -> Dict[str, int]:
    """Count reports per category key, keyed in first-seen order."""
    counts: Dict[str, int] = OrderedDict()
    for report in reports:
        counts[report.category] = counts.get(report.category, 0) + 1
    return counts


def top_categories(reports: Iterable[IncidentReport], n: int = DEFAULT_TOP_N) -> List[CategoryCount]:
    """
    Most frequent categories, highest count first.

    Categories with equal counts keep the order in which they first appear
    in ``reports``.

    Args:
        reports: Report collection
        n: Maximum number of entries to return

    Returns:
        List of CategoryCount with labels resolved through the category table
    """
    if n <= 0:
        return []
    ranked = sorted(category_counts(reports).items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryCount(key=key, label=category_label(key), count=count)
        for key, count in ranked[:n]
    ]


def recent_count(reports: Iterable[IncidentReport], days: float,
                 now: Optional[datetime] = None) -> int:
    """
    Count reports filed within the last ``days`` days.

    A report timestamped exactly ``now - days`` is included. Reports without
    a timestamp are never counted as recent.
    """
    reference = now or datetime.now()
    try:
        cutoff = reference - timedelta(days=days)
    except OverflowError:
        # Window reaches past the representable date range
        cutoff = datetime.min if days > 0 else datetime.max
    return sum(1 for r in reports if r.timestamp is not None and r.timestamp >= cutoff)


def filtered_count(reports: Sequence[IncidentReport], selected: Iterable[str]) -> int:
    return total_count(apply_filter(reports, selected))


def cluster_count(reports: Iterable[IncidentReport]) -> int:
    """Placeholder for spatial clustering; always 0."""
    return 0


def monthly_counts(reports: Iterable[IncidentReport]) -> Dict[str, int]:
    """Reports per calendar month (``YYYY-MM``), in chronological order."""
    counts: Dict[str, int] = {}
    for report in reports:
        if report.timestamp is None:
            continue
        month = report.timestamp.strftime('%Y-%m')
        counts[month] = counts.get(month, 0) + 1
    return dict(sorted(counts.items()))


def summarize(reports: Sequence[IncidentReport], selected: Iterable[str] = (),
              recent_days: int = DEFAULT_RECENT_DAYS, top_n: int = DEFAULT_TOP_N,
              now: Optional[datetime] = None) -> ReportSummary:
    """Compute every summary-panel figure in one pass over the accessors."""
    summary = ReportSummary(
        total=total_count(reports),
        verified=verified_count(reports),
        filtered=filtered_count(reports, selected),
        recent=recent_count(reports, recent_days, now=now),
        recent_days=recent_days,
        clusters=cluster_count(reports),
        top_categories=top_categories(reports, top_n),
    )
    logger.debug(f"Computed report summary: {summary}")
    return summary


def reports_to_frame(reports: Iterable[IncidentReport]) -> pd.DataFrame:
    """Tabular view of reports for display and export."""
    columns = ['report_id', 'category', 'category_label', 'location', 'latitude',
               'longitude', 'status', 'timestamp', 'description']
    rows = [
        {
            'report_id': r.report_id,
            'category': r.category,
            'category_label': category_label(r.category),
            'location': r.location,
            'latitude': r.latitude,
            'longitude': r.longitude,
            'status': r.status.label,
            'timestamp': r.timestamp,
            'description': r.description,
        }
        for r in reports
    ]
    return pd.DataFrame(rows, columns=columns)


def top_categories_frame(entries: Iterable[CategoryCount]) -> pd.DataFrame:
    return pd.DataFrame(
        [{'Category': e.label, 'Reports': e.count} for e in entries],
        columns=['Category', 'Reports'],
    )
