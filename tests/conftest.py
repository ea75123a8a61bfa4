"""Pytest configuration and shared fixtures for the test suite.

This module provides:
- Deterministic test environment setup
- Paths to the YAML spec fixtures
- Ready-made default and vertical specs
"""
from __future__ import annotations

import os
from pathlib import Path

import pytest

from protoboard.spec import BoardSpec, default_spec, load_board_spec

TESTS_DIR = Path(__file__).resolve().parent
GOLDEN_SPECS_DIR = TESTS_DIR / "golden_specs"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest environment for determinism."""
    deterministic_env = {
        "LC_ALL": "C",
        "LANG": "C",
        "TZ": "UTC",
        "PYTHONHASHSEED": "0",
    }
    for key, value in deterministic_env.items():
        os.environ.setdefault(key, value)


@pytest.fixture(scope="session")
def golden_specs_dir() -> Path:
    return GOLDEN_SPECS_DIR


@pytest.fixture(scope="session")
def all_golden_specs() -> list[Path]:
    return sorted(GOLDEN_SPECS_DIR.glob("*.yaml"))


@pytest.fixture
def horizontal_spec() -> BoardSpec:
    """The standard 54 x 33 mm horizontal board."""
    return default_spec()


@pytest.fixture
def vertical_spec() -> BoardSpec:
    """The standard board dimensions laid out vertically."""
    return load_board_spec({"board": {"horizontal": False}})
