"""Offer ingestion for PriceClock.

Parses pipe-delimited offer batches and builds immutable offer indexes.
"""

from priceclock.ingestion.builder import build_index
from priceclock.ingestion.parser import parse_record, parse_time

__all__ = ["build_index", "parse_record", "parse_time"]
