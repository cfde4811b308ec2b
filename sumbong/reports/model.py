"""
Canonical incident report model.

Both report schemas seen in the system (local camelCase objects and the
remote snake_case API payload) are mapped onto ``IncidentReport`` by the
adapters module before any filtering, rendering, or aggregation happens.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class ReportStatus(str, Enum):
    """Review status of an incident report."""

    PENDING = "pending"
    VERIFIED = "verified"
    UNDER_INVESTIGATION = "under_investigation"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ReportStatus":
        """
        Parse a status value leniently.

        Matching ignores case and treats spaces and hyphens as underscores,
        so "Under investigation" and "under-investigation" both resolve.
        Unknown or missing values degrade to PENDING.
        """
        if isinstance(raw, cls):
            return raw
        if raw is None:
            return cls.PENDING
        value = str(raw).strip().lower().replace('-', '_').replace(' ', '_')
        try:
            return cls(value)
        except ValueError:
            logger.warning(f"Unknown report status {raw!r}, treating as pending")
            return cls.PENDING

    @property
    def label(self) -> str:
        return self.value.replace('_', ' ').title()


@dataclass(frozen=True)
class IncidentReport:
    """One filed observation of an incident."""
    report_id: str
    category: str
    location: str
    latitude: Optional[float]
    longitude: Optional[float]
    description: str
    status: ReportStatus
    timestamp: Optional[datetime]

    @property
    def is_renderable(self) -> bool:
        """True when both coordinates are present."""
        return self.latitude is not None and self.longitude is not None

    @property
    def coordinates(self) -> Optional[Tuple[float, float]]:
        if not self.is_renderable:
            return None
        return (self.latitude, self.longitude)

    @property
    def is_verified(self) -> bool:
        return self.status is ReportStatus.VERIFIED
