"""
Shared pytest fixtures for LMC scanner tests.

The conftest pins the Config singleton to an empty test config at import
time, so schema defaults apply regardless of any config.json in the
working directory.
"""

import sys
from pathlib import Path

# Ensure project root is on sys.path so imports work from tests/
sys.path.insert(0, str(Path(__file__).parent.parent))

# Patch the Config singleton and the module-level `config` accessor BEFORE
# the scanner modules import it, so tests never read a developer's config.json.
import common.config as config_module
from common.config import Config

_test_config = Config.__new__(Config)
_test_config._config = {}
Config._instance = _test_config
config_module.config = _test_config

import pytest
from common.models import Segment
from providers.static import StaticCoherenceProvider
from scanner.pipeline import ScanPipeline


SAMPLE_SEGMENTS = [
    Segment("Carbon pricing shifts the cost of emissions onto polluters.", 0.92),
    Segment("My cousin bought a new bicycle last weekend at the fair.", 0.08),
    Segment("policy policy policy policy policy policy policy policy policy.", 0.6),
    Segment("Emission trading schemes cap total output and let firms trade permits.", 0.85),
]


@pytest.fixture
def segments():
    return list(SAMPLE_SEGMENTS)


@pytest.fixture
def static_provider(segments):
    return StaticCoherenceProvider(segments)


@pytest.fixture
def pipeline(static_provider):
    return ScanPipeline(provider=static_provider)


@pytest.fixture(autouse=True)
def _reset_test_config():
    """Every test starts and ends with an empty config."""
    _test_config._config = {}
    yield
    _test_config._config = {}
