"""Unit tests for the index builder.

Tests header/blank handling, grouping, stable ordering and fail-fast builds.
"""

from __future__ import annotations

from datetime import time
from decimal import Decimal

import pytest

from priceclock.catalog.index import OfferIndex
from priceclock.errors import BuildFailed, InvalidPrice, InvalidTime, MalformedRow
from priceclock.ingestion.builder import build_index


class TestBuildIndex:
    """Test successful builds."""

    def test_builds_example_batch(self, example_lines):
        """Test the example batch groups into five identifiers."""
        index = build_index(example_lines)

        assert isinstance(index, OfferIndex)
        assert len(index) == 5
        assert index.offer_count == 7
        assert "u00006541" in index
        assert "SkuID" not in index

    def test_header_is_skipped_unvalidated(self):
        """Test the first non-blank line is never parsed, whatever it holds."""
        index = build_index(["not|a|valid|row|at all", "a|10:00|10:15|1"])

        assert index.identifiers == ("a",)

    def test_leading_blank_lines_before_header(self):
        """Test the header is the first NON-blank line."""
        index = build_index(["", "   ", "header", "", "a|10:00|10:15|1", "\t"])

        assert index.offer_count == 1

    def test_header_only_batch_is_empty(self):
        """Test a batch with no data rows yields an empty index."""
        index = build_index(["SkuID|StartTime|EndTime|Price"])

        assert len(index) == 0
        assert index.offer_count == 0

    def test_empty_batch_is_empty(self):
        """Test an empty input yields an empty index."""
        assert len(build_index([])) == 0

    def test_offers_sorted_by_start(self):
        """Test each identifier's offers are ordered by start time."""
        index = build_index([
            "h",
            "a|14:00|15:00|3",
            "a|09:00|10:00|1",
            "a|11:00|12:00|2",
        ])

        starts = [o.start for o in index.offers_for("a")]
        assert starts == [time(9, 0), time(11, 0), time(14, 0)]

    def test_equal_starts_keep_input_order(self):
        """Test ties on start time are broken by input order."""
        index = build_index([
            "h",
            "a|10:00|10:30|1",
            "b|08:00|09:00|9",
            "a|10:00|10:05|2",
            "a|10:00|11:00|3",
        ])

        prices = [o.price for o in index.offers_for("a")]
        assert prices == [Decimal("1"), Decimal("2"), Decimal("3")]

    def test_accepts_any_iterable(self, example_lines):
        """Test the input is consumed once as a stream."""
        index = build_index(iter(example_lines))

        assert index.offer_count == 7


class TestBuildFailures:
    """Test fail-fast behaviour."""

    def test_bad_time_reports_line(self):
        """Test a bad row fails the build with its 1-based line number."""
        lines = ["header", "a|10:00|10:15|1", "u00006541|25:00|10:15|101"]

        with pytest.raises(BuildFailed) as exc_info:
            build_index(lines)

        err = exc_info.value
        assert err.line_number == 3
        assert err.raw_line == "u00006541|25:00|10:15|101"
        assert isinstance(err.cause, InvalidTime)

    def test_line_numbers_count_blank_lines(self):
        """Test line numbers are physical, blank lines included."""
        with pytest.raises(BuildFailed) as exc_info:
            build_index(["", "header", "", "a|10:00|10:15"])

        assert exc_info.value.line_number == 4
        assert isinstance(exc_info.value.cause, MalformedRow)

    def test_first_error_wins(self):
        """Test the build stops at the first bad row."""
        with pytest.raises(BuildFailed) as exc_info:
            build_index(["h", "a|10:00|10:15|x", "b|99:00|10:15|1"])

        assert exc_info.value.line_number == 2
        assert isinstance(exc_info.value.cause, InvalidPrice)

    def test_stops_consuming_after_failure(self):
        """Test nothing after the bad row is read."""
        consumed = []

        def lines():
            for line in ["h", "bad", "a|10:00|10:15|1", "b|10:00|10:15|1"]:
                consumed.append(line)
                yield line

        with pytest.raises(BuildFailed):
            build_index(lines())

        assert consumed == ["h", "bad"]

    def test_to_dict_carries_diagnostics(self):
        """Test the structured failure names the row and the reason."""
        with pytest.raises(BuildFailed) as exc_info:
            build_index(["h", "u00006541|25:00|10:15|101"])

        details = exc_info.value.to_dict()
        assert details["error_type"] == "invalid_time"
        assert details["line_number"] == 2
        assert details["raw_line"] == "u00006541|25:00|10:15|101"
        assert details["text"] == "25:00"
