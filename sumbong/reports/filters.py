"""
Category filtering for incident reports.

The selected-category set is the map's only filter. An empty selection means
"no filter": every report stays visible.
"""

from typing import FrozenSet, Iterable, List, Optional, Sequence
import logging

from .model import IncidentReport

logger = logging.getLogger(__name__)


def normalize_selection(categories: Optional[Iterable[str]]) -> FrozenSet[str]:
    """Turn any iterable of category keys (e.g. a widget value) into a selection."""
    if categories is None:
        return frozenset()
    return frozenset(categories)


def apply_filter(reports: Sequence[IncidentReport],
                 selected: Iterable[str]) -> Sequence[IncidentReport]:
    """
    Compute the visible subset of reports for a category selection.

    Args:
        reports: Ordered report collection
        selected: Selected category keys; empty means all visible

    Returns:
        ``reports`` itself when nothing is selected, otherwise the ordered
        subsequence whose category is selected
    """
    selection = normalize_selection(selected)
    if not selection:
        return reports

    visible: List[IncidentReport] = [r for r in reports if r.category in selection]
    logger.debug(f"Category filter {sorted(selection)} kept {len(visible)} of {len(reports)} reports")
    return visible


def toggle_category(selected: Iterable[str], category: str) -> FrozenSet[str]:
    """Remove ``category`` from the selection if present, add it otherwise."""
    return normalize_selection(selected) ^ {category}
