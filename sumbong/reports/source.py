"""
Report sources for the incident map.

A source delivers the complete report collection in one call. The map view
runs ``fetch()`` off the UI path and replaces its collection wholesale with
the result; sources never stream or deliver partial updates.
"""

from typing import Any, Iterable, List, Optional
import logging

import requests

from .adapters import LOCAL_SCHEMA, REMOTE_SCHEMA, normalize_records
from .model import IncidentReport
from ..exceptions import ReportSourceError

logger = logging.getLogger(__name__)


class ReportSource:
    """Base class for anything that can deliver a full report collection."""

    name = "report source"

    def fetch(self) -> List[IncidentReport]:
        raise NotImplementedError


class StaticReportSource(ReportSource):
    """Serves a fixed snapshot of records in one of the known schemas."""

    name = "static snapshot"

    def __init__(self, records: Iterable[Any], schema: str = LOCAL_SCHEMA):
        self.records = list(records)
        self.schema = schema

    def fetch(self) -> List[IncidentReport]:
        return normalize_records(self.records, self.schema)


class HttpReportSource(ReportSource):
    """
    Fetches the report list from the reports API.

    The endpoint returns a JSON array of snake_case rows (``crime_type``,
    ``date``, ...), or an object wrapping that array under ``reports`` or
    ``data``.

    Attributes:
        url (str): Endpoint returning the report list
        timeout (float): Request timeout in seconds
    """

    name = "reports API"

    def __init__(self, url: str, timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self) -> List[IncidentReport]:
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise ReportSourceError(f"Failed to fetch reports from {self.url}: {e}") from e
        except ValueError as e:
            raise ReportSourceError(f"Reports endpoint {self.url} returned invalid JSON: {e}") from e

        records = self._extract_records(payload)
        reports = normalize_records(records, REMOTE_SCHEMA)
        logger.info(f"Fetched {len(reports)} reports from {self.url}")
        return reports

    def _extract_records(self, payload: Any) -> List[Any]:
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            for key in ('reports', 'data'):
                if isinstance(payload.get(key), list):
                    return payload[key]
        raise ReportSourceError(
            f"Reports endpoint {self.url} returned {type(payload).__name__}, expected a list"
        )
