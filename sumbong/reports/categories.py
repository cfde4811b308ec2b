"""
Crime category table for incident map visualization.

This module holds the closed, static set of crime categories used for
marker icons, popup badges, legends, and summary statistics.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrimeCategory:
    """One named, colored classification bucket for incident reports."""
    key: str
    label: str
    color: str


DEFAULT_CATEGORY_KEY = "other"
DEFAULT_LABEL = "Other"
DEFAULT_COLOR = "#6b7280"

CRIME_CATEGORIES: Tuple[CrimeCategory, ...] = (
    CrimeCategory("theft", "Theft", "#ef4444"),
    CrimeCategory("assault", "Assault", "#f59e0b"),
    CrimeCategory("burglary", "Burglary", "#d97706"),
    CrimeCategory("vandalism", "Vandalism", "#7c3aed"),
    CrimeCategory("drug", "Drug", "#ec4899"),
    CrimeCategory("fraud", "Fraud", "#8b5cf6"),
    CrimeCategory("harassment", "Harassment", "#06b6d4"),
    CrimeCategory(DEFAULT_CATEGORY_KEY, DEFAULT_LABEL, DEFAULT_COLOR),
)

FALLBACK_CATEGORY = CrimeCategory(DEFAULT_CATEGORY_KEY, DEFAULT_LABEL, DEFAULT_COLOR)

_CATEGORY_BY_KEY: Dict[str, CrimeCategory] = {c.key: c for c in CRIME_CATEGORIES}

# Labels submitted through the report form, keyed by their normalized spelling.
CATEGORY_ALIASES: Dict[str, str] = {
    "drug-related": "drug",
    "drug related": "drug",
    "drugs": "drug",
    "narcotics": "drug",
    "physical assault": "assault",
    "break-in": "burglary",
    "graffiti": "vandalism",
    "scam": "fraud",
}


def normalize_category_key(raw: Optional[str]) -> str:
    """
    Map a raw category value from either input schema to a table key.

    Unknown values are kept (lowercased) so that they still count as their
    own category; lookups on them fall back to the default category.
    """
    if raw is None:
        return DEFAULT_CATEGORY_KEY
    key = str(raw).strip().lower()
    if not key:
        return DEFAULT_CATEGORY_KEY
    return CATEGORY_ALIASES.get(key, key)


def resolve_category(key: Optional[str]) -> CrimeCategory:
    """Return the category for ``key`` or the "Other" fallback."""
    category = _CATEGORY_BY_KEY.get(key or "")
    if category is None:
        logger.debug(f"Unresolved category key {key!r}, using fallback")
        return FALLBACK_CATEGORY
    return category


def is_known_category(key: Optional[str]) -> bool:
    return (key or "") in _CATEGORY_BY_KEY


def category_label(key: Optional[str]) -> str:
    return resolve_category(key).label


def category_color(key: Optional[str]) -> str:
    return resolve_category(key).color


def list_categories(keys: Optional[Iterable[str]] = None) -> Tuple[CrimeCategory, ...]:
    """List categories in display order, optionally restricted to ``keys``."""
    if keys is None:
        return CRIME_CATEGORIES
    wanted = set(keys)
    return tuple(c for c in CRIME_CATEGORIES if c.key in wanted)
