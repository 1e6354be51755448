"""
Core zemguidance types and configuration.
"""

from .types import GuidanceGains, Vector3, as_vector3
from .config import GuidanceConfig, ConfigurationError, load_config

__all__ = [
    'GuidanceGains',
    'Vector3',
    'as_vector3',
    'GuidanceConfig',
    'ConfigurationError',
    'load_config',
]
