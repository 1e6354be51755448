"""
Optimal Guidance Law (OGL) for terminal guidance under constant gravity.

The OGL commands

    u(t) = k_r / t_go^2 * ZEM(t) + k_v / t_go * ZEV(t)

where ZEM and ZEV are the Zero-Effort-Miss and Zero-Effort-Velocity vectors,
t_go is the time-to-go and (k_r, k_v) = (6, -2) are the optimal gains.

References:
  - Ebrahimi, B., Bahrami, M., Roshanian, J. (2008) Optimal sliding-mode guidance
    with terminal velocity constraint for fixed-interval propulsive maneuvers,
    Acta Astronautica, vol. 62, pp. 556-562.
  - Guo, Y., Hawkins, M., Wie, B. (2013) Applications of Generalized
    Zero-Effort-Miss/Zero-Effort-Velocity Feedback Guidance Algorithm,
    Journal of Guidance, Control, and Dynamics, vol. 36, pp. 810-820.
"""

import numpy as np
from typing import Dict, Any, Optional, Tuple, Union
from numba import jit
import logging

from zemguidance.core.types import (
    GuidanceGains, Vector3, VectorLike, as_vector3, DEFAULT_ZEM_GAIN, DEFAULT_ZEV_GAIN
)
from zemguidance.core.config import GuidanceConfig

logger = logging.getLogger(__name__)


def _as_real_scalar(value) -> np.floating:
    """Convert a scalar to a numpy floating scalar.

    Integers are promoted to float64 so squaring cannot wrap around, and a
    zero value yields inf/nan on division instead of ZeroDivisionError.
    """
    value = np.asarray(value)
    if value.dtype.kind not in "fc":
        value = value.astype(np.float64)
    return value[()]


def compute_optimal_guidance_law(
    zero_effort_miss: VectorLike,
    zero_effort_velocity: VectorLike,
    time_to_go: float,
    zero_effort_miss_gain: float = DEFAULT_ZEM_GAIN,
    zero_effort_velocity_gain: float = DEFAULT_ZEV_GAIN
) -> Vector3:
    """Compute the control command of the Optimal Guidance Law.

    Time-to-go is not checked. A zero time-to-go gives inf/nan components;
    callers must stop or freeze guidance before the terminal singularity.

    Args:
        zero_effort_miss: Predicted position miss at arrival with no further control
        zero_effort_velocity: Predicted velocity miss at arrival with no further control
        time_to_go: Time remaining until the terminal event [s]
        zero_effort_miss_gain: Gain on the ZEM term (default 6.0)
        zero_effort_velocity_gain: Gain on the ZEV term (default -2.0)

    Returns:
        Commanded control acceleration, a new array of shape (3,)
    """
    zero_effort_miss = as_vector3(zero_effort_miss, "zero_effort_miss")
    zero_effort_velocity = as_vector3(zero_effort_velocity, "zero_effort_velocity")

    time_to_go = _as_real_scalar(time_to_go)

    zero_effort_miss_premultiplier = zero_effort_miss_gain / (time_to_go * time_to_go)
    zero_effort_velocity_premultiplier = zero_effort_velocity_gain / time_to_go

    return (zero_effort_miss_premultiplier * zero_effort_miss
            + zero_effort_velocity_premultiplier * zero_effort_velocity)


@jit(nopython=True, error_model="numpy")
def _optimal_guidance_law_kernel(
    zero_effort_miss: np.ndarray,
    zero_effort_velocity: np.ndarray,
    time_to_go: np.ndarray,
    zero_effort_miss_gain: float,
    zero_effort_velocity_gain: float
) -> np.ndarray:
    n = zero_effort_miss.shape[0]
    control = np.empty((n, 3))
    for i in range(n):
        t = time_to_go[i]
        miss_premultiplier = zero_effort_miss_gain / (t * t)
        velocity_premultiplier = zero_effort_velocity_gain / t
        for j in range(3):
            control[i, j] = (miss_premultiplier * zero_effort_miss[i, j]
                             + velocity_premultiplier * zero_effort_velocity[i, j])
    return control


def compute_optimal_guidance_law_batch(
    zero_effort_miss: np.ndarray,
    zero_effort_velocity: np.ndarray,
    time_to_go: Union[float, np.ndarray],
    zero_effort_miss_gain: float = DEFAULT_ZEM_GAIN,
    zero_effort_velocity_gain: float = DEFAULT_ZEV_GAIN
) -> np.ndarray:
    """Evaluate the OGL for N independent engagements.

    Args:
        zero_effort_miss: ZEM vectors, shape (N, 3)
        zero_effort_velocity: ZEV vectors, shape (N, 3)
        time_to_go: Time-to-go per engagement, shape (N,), or a shared scalar
        zero_effort_miss_gain: Gain on the ZEM term
        zero_effort_velocity_gain: Gain on the ZEV term

    Returns:
        Control commands, shape (N, 3)
    """
    zem = np.ascontiguousarray(zero_effort_miss, dtype=np.float64)
    zev = np.ascontiguousarray(zero_effort_velocity, dtype=np.float64)

    if zem.ndim != 2 or zem.shape[1] != 3:
        raise ValueError(f"zero_effort_miss must have shape (N, 3), got {zem.shape}")
    if zev.shape != zem.shape:
        raise ValueError(
            f"zero_effort_velocity shape {zev.shape} does not match "
            f"zero_effort_miss shape {zem.shape}"
        )

    t_go = np.asarray(time_to_go, dtype=np.float64)
    if t_go.ndim == 0:
        t_go = np.full(zem.shape[0], float(t_go))
    elif t_go.shape != (zem.shape[0],):
        raise ValueError(
            f"time_to_go must be a scalar or have shape ({zem.shape[0]},), got {t_go.shape}"
        )
    t_go = np.ascontiguousarray(t_go)

    return _optimal_guidance_law_kernel(
        zem, zev, t_go, float(zero_effort_miss_gain), float(zero_effort_velocity_gain)
    )


class OptimalGuidanceLaw:
    """Optimal Guidance Law bound to a fixed pair of gains.

    Instances keep no state besides the immutable gains, so one instance may
    be shared between control loops and threads.
    """

    def __init__(self, gains: Optional[GuidanceGains] = None):
        """Initialize the guidance law."""
        self.gains = gains if gains is not None else GuidanceGains()

        logger.info(
            f"Optimal guidance law initialized: zem_gain={self.gains.zem_gain}, "
            f"zev_gain={self.gains.zev_gain}"
        )

    def compute_command(
        self,
        zero_effort_miss: VectorLike,
        zero_effort_velocity: VectorLike,
        time_to_go: float
    ) -> Vector3:
        """Compute the commanded control acceleration."""
        return compute_optimal_guidance_law(
            zero_effort_miss,
            zero_effort_velocity,
            time_to_go,
            self.gains.zem_gain,
            self.gains.zev_gain,
        )

    def compute_commands(
        self,
        zero_effort_miss: np.ndarray,
        zero_effort_velocity: np.ndarray,
        time_to_go: Union[float, np.ndarray]
    ) -> np.ndarray:
        """Compute commands for a batch of engagements."""
        return compute_optimal_guidance_law_batch(
            zero_effort_miss,
            zero_effort_velocity,
            time_to_go,
            self.gains.zem_gain,
            self.gains.zev_gain,
        )

    def premultipliers(self, time_to_go: float) -> Tuple[float, float]:
        """Scalars applied to ZEM and ZEV at the given time-to-go."""
        time_to_go = _as_real_scalar(time_to_go)
        return (
            float(self.gains.zem_gain / (time_to_go * time_to_go)),
            float(self.gains.zev_gain / time_to_go),
        )

    def get_guidance_status(
        self,
        zero_effort_miss: VectorLike,
        zero_effort_velocity: VectorLike,
        time_to_go: float
    ) -> Dict[str, Any]:
        """Get detailed guidance status."""
        command = self.compute_command(zero_effort_miss, zero_effort_velocity, time_to_go)
        miss_premultiplier, velocity_premultiplier = self.premultipliers(time_to_go)

        return {
            "gains": self.gains.to_dict(),
            "is_optimal": self.gains.is_optimal,
            "time_to_go": float(time_to_go),
            "zero_effort_miss_premultiplier": miss_premultiplier,
            "zero_effort_velocity_premultiplier": velocity_premultiplier,
            "control_command": command.tolist(),
            "control_magnitude": float(np.linalg.norm(command)),
        }

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(zem_gain={self.gains.zem_gain}, "
                f"zev_gain={self.gains.zev_gain})")


def create_optimal_guidance_law(config: Optional[GuidanceConfig] = None) -> OptimalGuidanceLaw:
    """Create an optimal guidance law from configuration."""
    if config is None:
        return OptimalGuidanceLaw()
    return OptimalGuidanceLaw(config.gains)
