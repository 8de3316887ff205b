"""Unit tests for ingestion line sources."""

from __future__ import annotations

import pytest

from priceclock.ingestion.builder import build_index
from priceclock.ingestion.sources import iter_file_lines, split_payload


class TestIterFileLines:
    """Test file-backed batches."""

    def test_reads_lines_without_newlines(self, tmp_path):
        path = tmp_path / "prices.tsv"
        path.write_text("SkuID|StartTime|EndTime|Price\r\nu1|10:00|10:15|101\n", encoding="utf-8")

        assert list(iter_file_lines(path)) == ["SkuID|StartTime|EndTime|Price", "u1|10:00|10:15|101"]

    def test_drops_byte_order_mark(self, tmp_path):
        path = tmp_path / "prices.tsv"
        path.write_bytes("\ufeffheader\nu1|10:00|10:15|101\n".encode("utf-8"))

        lines = list(iter_file_lines(path))

        assert lines[0] == "header"
        assert build_index(lines).offer_count == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            list(iter_file_lines(tmp_path / "missing.tsv"))


class TestSplitPayload:
    """Test uploaded payloads."""

    def test_splits_any_line_ending(self):
        assert split_payload(b"h\r\na|10:00|10:15|1\nb|10:00|10:15|2") == [
            "h",
            "a|10:00|10:15|1",
            "b|10:00|10:15|2",
        ]

    def test_rejects_non_utf8(self):
        with pytest.raises(UnicodeDecodeError):
            split_payload(b"\xff\xfeh\x00")
