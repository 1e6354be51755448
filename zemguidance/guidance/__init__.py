"""Guidance algorithms for zemguidance."""

from zemguidance.guidance.algorithms.optimal_guidance import (
    OptimalGuidanceLaw,
    compute_optimal_guidance_law,
    compute_optimal_guidance_law_batch,
    create_optimal_guidance_law,
)

__all__ = [
    "OptimalGuidanceLaw",
    "compute_optimal_guidance_law",
    "compute_optimal_guidance_law_batch",
    "create_optimal_guidance_law",
]
