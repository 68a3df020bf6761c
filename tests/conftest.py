"""Shared fixtures and pytest configuration for all plantsim tests."""

from __future__ import annotations

import pytest
from pathlib import Path

from plantsim.utils.config import ConfigLoader

PROJECT_ROOT = Path(__file__).parent.parent
CONFIGS_DIR = PROJECT_ROOT / "configs"


# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def configs_dir() -> Path:
    return CONFIGS_DIR


@pytest.fixture
def plant_config_path() -> Path:
    return CONFIGS_DIR / "plants" / "heater_loop.yaml"


@pytest.fixture
def loader() -> ConfigLoader:
    return ConfigLoader()


# ---------------------------------------------------------------------------
# Pytest mark registration
# ---------------------------------------------------------------------------

def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "slow: long-running simulation sweeps")
