"""
Shared fixtures for zemguidance tests.
"""

import numpy as np
import pytest


ENV_VARS = [
    "LOG_LEVEL",
    "ENVIRONMENT",
    "ZEMGUIDANCE_ZEM_GAIN",
    "ZEMGUIDANCE_ZEV_GAIN",
    "ZEMGUIDANCE_TIME_TO_GO",
    "ZEMGUIDANCE_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep host environment variables out of configuration tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def arbitrary_case():
    """Snapshot engagement with its expected control under the optimal gains."""
    return {
        "zem": np.array([-21.163, 9.887, -0.613]),
        "zev": np.array([-1.244, -0.112, 3.119]),
        "time_to_go": 12.516,
        "expected": np.array([-0.611797225534058, 0.396587823003621, -0.521881100532641]),
    }
