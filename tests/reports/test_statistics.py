"""
Tests for report statistics.

This module tests the summary-panel accessors: total, verified, top
categories, recent, filtered, and cluster counts.
"""

from dataclasses import replace
from datetime import datetime, timedelta

import pytest

from sumbong.reports.model import ReportStatus
from sumbong.reports.statistics import (
    CategoryCount, category_counts, cluster_count, filtered_count, monthly_counts,
    recent_count, reports_to_frame, summarize, top_categories, top_categories_frame,
    total_count, verified_count
)


class TestCounts:
    """Test simple counting accessors."""

    def test_total_and_verified(self, sample_reports):
        assert total_count(sample_reports) == 6
        assert verified_count(sample_reports) == 5

    def test_empty_collection(self):
        assert total_count([]) == 0
        assert verified_count([]) == 0
        assert top_categories([]) == []
        assert recent_count([], 7) == 0

    def test_category_counts_first_seen_order(self, sample_reports):
        counts = category_counts(sample_reports)

        assert list(counts.items()) == [('theft', 3), ('assault', 1), ('vandalism', 1), ('drug', 1)]

    def test_filtered_count(self, sample_reports):
        assert filtered_count(sample_reports, set()) == 6
        assert filtered_count(sample_reports, {'theft'}) == 3
        assert filtered_count(sample_reports, {'theft', 'drug'}) == 4

    def test_cluster_count_is_zero(self, sample_reports):
        assert cluster_count(sample_reports) == 0


class TestTopCategories:
    """Test top-N category ranking."""

    def test_ranking_with_first_seen_tie_break(self, sample_reports):
        top = top_categories(sample_reports, 5)

        assert top[0] == CategoryCount('theft', 'Theft', 3)
        assert [entry.key for entry in top] == ['theft', 'assault', 'vandalism', 'drug']
        assert all(entry.count == 1 for entry in top[1:])

    def test_limited_to_n(self, sample_reports):
        assert [entry.key for entry in top_categories(sample_reports, 2)] == ['theft', 'assault']

    def test_non_positive_n(self, sample_reports):
        assert top_categories(sample_reports, 0) == []
        assert top_categories(sample_reports, -1) == []

    def test_unknown_category_uses_fallback_label(self, sample_reports):
        reports = [replace(sample_reports[0], category='cybercrime')]

        assert top_categories(reports) == [CategoryCount('cybercrime', 'Other', 1)]

    def test_frame(self, sample_reports):
        frame = top_categories_frame(top_categories(sample_reports, 2))

        assert list(frame.columns) == ['Category', 'Reports']
        assert frame.iloc[0].tolist() == ['Theft', 3]


class TestRecentCount:
    """Test the recent-days window."""

    def test_all_recent(self, sample_reports):
        assert recent_count(sample_reports, 7, now=datetime(2024, 1, 16, 10, 30)) == 6

    def test_window(self, sample_reports):
        # Cutoff 2024-01-13 00:00: reports 1, 2 and 3
        assert recent_count(sample_reports, 7, now=datetime(2024, 1, 20)) == 3

    def test_cutoff_is_inclusive(self, sample_reports):
        now = sample_reports[0].timestamp + timedelta(days=7)

        assert recent_count(sample_reports[:1], 7, now=now) == 1
        assert recent_count(sample_reports[:1], 7, now=now + timedelta(seconds=1)) == 0

    def test_reports_without_timestamp_never_recent(self, sample_reports):
        reports = [replace(r, timestamp=None) for r in sample_reports]

        assert recent_count(reports, 3650, now=datetime(2024, 1, 16)) == 0

    def test_window_beyond_date_range(self, sample_reports):
        now = datetime(2024, 1, 16)

        assert recent_count(sample_reports, 1_000_000, now=now) == 6
        assert recent_count(sample_reports, 10 ** 10, now=now) == 6
        assert recent_count(sample_reports, -1_000_000, now=now) == 0


class TestSummary:
    """Test the combined summary."""

    def test_sample_snapshot(self, sample_reports):
        summary = summarize(sample_reports, {'theft'}, recent_days=7, top_n=5,
                            now=datetime(2024, 1, 16, 10, 30))

        assert summary.total == 6
        assert summary.verified == 5
        assert summary.filtered == 3
        assert summary.recent == 6
        assert summary.recent_days == 7
        assert summary.clusters == 0
        assert summary.top_categories[0].key == 'theft'

    def test_inputs_not_mutated(self, sample_reports):
        before = list(sample_reports)
        summarize(sample_reports, {'drug'})

        assert sample_reports == before
        assert sample_reports[4].status is ReportStatus.UNDER_INVESTIGATION

    def test_monthly_counts(self, sample_reports):
        reports = sample_reports + [replace(sample_reports[0], report_id='7',
                                            timestamp=datetime(2023, 12, 31))]

        assert monthly_counts(reports) == {'2023-12': 1, '2024-01': 6}

    def test_reports_frame(self, sample_reports):
        frame = reports_to_frame(sample_reports)

        assert len(frame) == 6
        assert frame.loc[4, 'status'] == 'Under Investigation'
        assert frame.loc[0, 'category_label'] == 'Theft'
