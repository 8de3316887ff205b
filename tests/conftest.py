"""Pytest configuration and fixtures for PriceClock tests.

Provides common fixtures for testing.
"""

from __future__ import annotations

import logging

import pytest

from priceclock.catalog.holder import Catalog, reset_catalog
from priceclock.config import reset_config
from priceclock.ingestion.builder import build_index
from priceclock.pricing.engine import LookupStrategy
from priceclock.service import PriceService

HEADER = "SkuID | StartTime | EndTime | Price"

EXAMPLE_ROWS = [
    "u00006541|10:00|10:15|101",
    "i00006111|10:02|10:05|100",
    "u09099000|10:00|10:08|5000",
    "t12182868|10:00|20:00|87",
    "b98989000|00:30|07:00|9128",
    "u00006541|10:05|10:10|99",
    "t12182868|14:00|15:00|92",
]


@pytest.fixture
def example_lines() -> list[str]:
    """The example batch, header first."""
    return [HEADER, *EXAMPLE_ROWS]


@pytest.fixture
def example_index(example_lines):
    """Index built from the example batch."""
    return build_index(example_lines)


@pytest.fixture
def catalog() -> Catalog:
    """A fresh, empty catalog."""
    return Catalog()


@pytest.fixture
def loaded_catalog(example_index) -> Catalog:
    """A catalog serving the example batch."""
    return Catalog(example_index)


@pytest.fixture(params=[LookupStrategy.LINEAR, LookupStrategy.BISECT], ids=["linear", "bisect"])
def strategy(request) -> LookupStrategy:
    """Every lookup strategy; query results must not depend on it."""
    return request.param


@pytest.fixture
def service(catalog, strategy) -> PriceService:
    """A PriceService over an empty private catalog."""
    return PriceService(catalog=catalog, strategy=strategy)


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Set up test environment variables and drop process-wide singletons."""
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    monkeypatch.delenv("PRICECLOCK_LOOKUP_STRATEGY", raising=False)
    monkeypatch.delenv("PRICECLOCK_UPLOAD_SUFFIXES", raising=False)
    monkeypatch.delenv("PRICECLOCK_MAX_UPLOAD_BYTES", raising=False)
    monkeypatch.delenv("PRICECLOCK_BOOTSTRAP_FILE", raising=False)
    root_level = logging.getLogger().level
    reset_config()
    reset_catalog()
    yield
    reset_config()
    reset_catalog()
    logging.getLogger().setLevel(root_level)
