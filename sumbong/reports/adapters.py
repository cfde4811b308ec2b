"""
Schema adapters for incident report records.

Two record shapes reach the map engine:

- local objects (camelCase): ``id``, ``crimeType``, ``location``, ``lat``,
  ``lng``, ``description``, ``status``, ``timestamp``
- remote API rows (snake_case): ``id``, ``crime_type``, ``location``,
  ``latitude``/``lat``, ``longitude``/``lng``, ``description``, ``status``,
  ``date``

Each adapter maps one shape to the canonical ``IncidentReport``. Rendering
and statistics code only ever sees the canonical type.
"""

import math
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional
import logging

import pandas as pd

from .model import IncidentReport, ReportStatus
from .categories import normalize_category_key

logger = logging.getLogger(__name__)

LOCAL_SCHEMA = "local"
REMOTE_SCHEMA = "remote"


def parse_timestamp(raw: Any) -> Optional[datetime]:
    """
    Parse a timestamp value into a naive local datetime.

    Timezone-aware values are converted to local time first. Missing or
    unparseable values return None.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    elif not isinstance(raw, (datetime, pd.Timestamp)):
        return None

    ts = pd.to_datetime(raw, errors='coerce')
    if pd.isna(ts):
        logger.warning(f"Could not parse timestamp {raw!r}")
        return None

    value = ts.to_pydatetime()
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def _to_float(raw: Any) -> Optional[float]:
    if raw is None or raw == '':
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning(f"Invalid coordinate value {raw!r}")
        return None
    if math.isnan(value):
        return None
    return value


def _first_present(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None and value != '':
            return value
    return None


def _text(value: Any) -> str:
    return '' if value is None else str(value).strip()


def from_local_record(record: Mapping[str, Any], fallback_id: Optional[str] = None) -> IncidentReport:
    """Map a camelCase local record onto an IncidentReport."""
    report_id = _first_present(record, 'id')
    return IncidentReport(
        report_id=_text(report_id) if report_id is not None else (fallback_id or ''),
        category=normalize_category_key(record.get('crimeType')),
        location=_text(record.get('location')),
        latitude=_to_float(record.get('lat')),
        longitude=_to_float(record.get('lng')),
        description=_text(record.get('description')),
        status=ReportStatus.parse(record.get('status')),
        timestamp=parse_timestamp(record.get('timestamp')),
    )


def from_remote_record(record: Mapping[str, Any], fallback_id: Optional[str] = None) -> IncidentReport:
    """Map a snake_case remote API row onto an IncidentReport."""
    report_id = _first_present(record, 'id', 'report_id')
    return IncidentReport(
        report_id=_text(report_id) if report_id is not None else (fallback_id or ''),
        category=normalize_category_key(record.get('crime_type')),
        location=_text(record.get('location')),
        latitude=_to_float(_first_present(record, 'latitude', 'lat')),
        longitude=_to_float(_first_present(record, 'longitude', 'lng')),
        description=_text(record.get('description')),
        status=ReportStatus.parse(record.get('status')),
        timestamp=parse_timestamp(_first_present(record, 'date', 'timestamp')),
    )


_ADAPTERS = {
    LOCAL_SCHEMA: from_local_record,
    REMOTE_SCHEMA: from_remote_record,
}


def normalize_records(records: Iterable[Any], schema: str = LOCAL_SCHEMA) -> List[IncidentReport]:
    """
    Map a whole record collection onto IncidentReports, preserving order.

    Args:
        records: Iterable of mapping records in one schema
        schema: 'local' (camelCase) or 'remote' (snake_case)

    Returns:
        List of canonical reports; non-mapping entries are skipped
    """
    if schema not in _ADAPTERS:
        raise ValueError(f"Schema must be one of {list(_ADAPTERS)}")
    adapter = _ADAPTERS[schema]

    reports: List[IncidentReport] = []
    skipped = 0
    for index, record in enumerate(records or []):
        if not isinstance(record, Mapping):
            skipped += 1
            continue
        reports.append(adapter(record, fallback_id=f"{schema}-{index}"))

    if skipped:
        logger.warning(f"Skipped {skipped} {schema} records that were not objects")
    logger.debug(f"Normalized {len(reports)} {schema} records")
    return reports
