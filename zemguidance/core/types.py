"""Core data types for zemguidance."""

from dataclasses import dataclass, asdict
from typing import Dict, Any, Sequence, Union
import numpy as np


# Vector3 values are numpy arrays of shape (3,)
Vector3 = np.ndarray
VectorLike = Union[np.ndarray, Sequence[float]]

DEFAULT_ZEM_GAIN = 6.0
DEFAULT_ZEV_GAIN = -2.0


def as_vector3(value: VectorLike, name: str = "vector") -> Vector3:
    """Convert a 3-element sequence to a numpy vector without copying arrays."""
    vector = np.asarray(value)
    if vector.shape != (3,):
        raise ValueError(f"{name} must have exactly 3 components, got shape {vector.shape}")
    return vector


@dataclass(frozen=True)
class GuidanceGains:
    """Feedback gains for the ZEM and ZEV terms of the optimal guidance law.

    The defaults (6.0, -2.0) are the closed-form optimal gains for terminal
    guidance under constant gravity.
    """
    zem_gain: float = DEFAULT_ZEM_GAIN
    zev_gain: float = DEFAULT_ZEV_GAIN

    @classmethod
    def optimal(cls) -> "GuidanceGains":
        """Gains of the constant-gravity optimal solution."""
        return cls()

    @property
    def is_optimal(self) -> bool:
        return self.zem_gain == DEFAULT_ZEM_GAIN and self.zev_gain == DEFAULT_ZEV_GAIN

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GuidanceGains":
        """Create from dictionary."""
        return cls(
            zem_gain=float(data.get("zem_gain", DEFAULT_ZEM_GAIN)),
            zev_gain=float(data.get("zev_gain", DEFAULT_ZEV_GAIN)),
        )
