"""
Pytest configuration and fixtures for happycamper tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import csv
import os
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

import pytest

from happycamper.core.models import Camper, EnhancedRoster, PipelineSettings
from happycamper.observability.warning_manager import WarningManager

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that exercise one module in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that run the pipeline on real files"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that drive the command-line interface"
    )


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture(scope="session")
def camper_csv() -> Path:
    """Enrollment export with four campers"""
    return FIXTURES_DIR / "campers.csv"


@pytest.fixture(scope="session")
def activity_csv() -> Path:
    """Activity export for three of those campers plus one unmatched camper"""
    return FIXTURES_DIR / "activities.csv"


@pytest.fixture
def write_csv(tmp_path) -> Callable[..., Path]:
    """
    Factory writing a fully quoted CSV file into tmp_path

    Usage:
        path = write_csv("campers.csv", ["First Name"], [["Alice"]])
    """
    def _write(name: str, headers: Sequence[str], rows: Iterable[Sequence[str]]) -> Path:
        path = tmp_path / name
        with path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle, quoting=csv.QUOTE_ALL)
            writer.writerow(headers)
            writer.writerows(rows)
        return path

    return _write


# =======================
# DOMAIN FIXTURES
# =======================

@pytest.fixture
def settings() -> PipelineSettings:
    return PipelineSettings()


@pytest.fixture
def warning_manager() -> WarningManager:
    return WarningManager()


@pytest.fixture
def make_roster() -> Callable[..., EnhancedRoster]:
    """
    Factory building an EnhancedRoster from row dicts

    Every key of every row is registered as a header.
    """
    def _make(rows: Iterable[dict[str, str | None]]) -> EnhancedRoster:
        roster = EnhancedRoster()
        for row in rows:
            roster.add_headers(row.keys())
            roster.add_camper(Camper(row))
        return roster

    return _make


# =======================
# CONFIGURATION FIXTURES
# =======================

@pytest.fixture(scope="session", autouse=True)
def test_env_vars():
    """
    Set test environment variables

    This fixture loads config/test.env and clears settings overrides
    """
    from dotenv import load_dotenv

    env_path = Path(__file__).parent.parent / "config" / "test.env"
    if env_path.exists():
        load_dotenv(env_path, override=True)
    os.environ.pop("HAPPYCAMPER_SETTINGS", None)
    os.environ.pop("HAPPYCAMPER_METRICS_FILE", None)
