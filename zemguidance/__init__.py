"""
zemguidance - Optimal Guidance Law for terminal guidance

Closed-form ZEM/ZEV feedback guidance under constant-gravity dynamics,
with configuration, logging and command line tooling.
"""

import logging

from .core.types import GuidanceGains, Vector3, as_vector3
from .core.config import GuidanceConfig, ConfigurationError, load_config
from .guidance.algorithms.optimal_guidance import (
    OptimalGuidanceLaw,
    compute_optimal_guidance_law,
    compute_optimal_guidance_law_batch,
    create_optimal_guidance_law,
)

__version__ = "1.0.0"

__all__ = [
    # Guidance law
    "compute_optimal_guidance_law",
    "compute_optimal_guidance_law_batch",
    "OptimalGuidanceLaw",
    "create_optimal_guidance_law",

    # Types
    "GuidanceGains",
    "Vector3",
    "as_vector3",

    # Configuration
    "GuidanceConfig",
    "ConfigurationError",
    "load_config",
    "configure_logging",

    "__version__",
]


def configure_logging(level="INFO", format_string=None):
    """Configure logging for zemguidance components."""
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    logging.getLogger("zemguidance").setLevel(getattr(logging, level.upper()))
