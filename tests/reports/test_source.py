"""
Tests for report sources.
"""

from unittest.mock import Mock

import pytest
import requests

from sumbong.exceptions import ReportSourceError, SumbongError
from sumbong.reports.source import HttpReportSource, StaticReportSource


def _session_returning(payload):
    response = Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    session = Mock()
    session.get.return_value = response
    return session


class TestStaticReportSource:
    """Test the fixed-snapshot source."""

    def test_local_snapshot(self, sample_records):
        reports = StaticReportSource(sample_records).fetch()

        assert len(reports) == 6
        assert reports[0].category == 'theft'

    def test_remote_rows(self, remote_records):
        reports = StaticReportSource(remote_records, schema='remote').fetch()

        assert [r.report_id for r in reports] == ['101', '102', 'r-103']


class TestHttpReportSource:
    """Test the reports API source with a mocked session."""

    def test_fetch_list_payload(self, remote_records):
        session = _session_returning(remote_records)
        source = HttpReportSource('https://example.org/api/reports', timeout=5, session=session)

        reports = source.fetch()

        assert len(reports) == 3
        session.get.assert_called_once_with('https://example.org/api/reports', timeout=5)

    def test_fetch_wrapped_payload(self, remote_records):
        source = HttpReportSource('https://example.org/api', session=_session_returning({'reports': remote_records}))

        assert len(source.fetch()) == 3

    def test_fetch_data_key(self, remote_records):
        source = HttpReportSource('https://example.org/api', session=_session_returning({'data': remote_records[:1]}))

        assert len(source.fetch()) == 1

    def test_connection_error(self):
        session = Mock()
        session.get.side_effect = requests.ConnectionError("connection refused")
        source = HttpReportSource('https://example.org/api', session=session)

        with pytest.raises(ReportSourceError) as exc_info:
            source.fetch()
        assert isinstance(exc_info.value, SumbongError)
        assert 'connection refused' in str(exc_info.value)

    def test_http_error(self):
        session = _session_returning([])
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        source = HttpReportSource('https://example.org/api', session=session)

        with pytest.raises(ReportSourceError):
            source.fetch()

    def test_invalid_json(self):
        session = _session_returning(None)
        session.get.return_value.json.side_effect = ValueError("Expecting value")
        source = HttpReportSource('https://example.org/api', session=session)

        with pytest.raises(ReportSourceError, match='invalid JSON'):
            source.fetch()

    def test_unexpected_payload_shape(self):
        source = HttpReportSource('https://example.org/api', session=_session_returning("oops"))

        with pytest.raises(ReportSourceError, match='expected a list'):
            source.fetch()
