from typing import NamedTuple


class FlowParams(NamedTuple):
    """
    Physical and scheme parameters, fixed for one run.

    Passed read-only to every kernel call.
    """
    # Physical Constants
    reynolds: float
    prandtl: float = 1.0

    # Body force (gravity) components
    gx: float = 0.0
    gy: float = 0.0

    # Boussinesq thermal expansion coefficient
    beta: float = 0.0

    # Scheme Parameters
    alpha: float = 0.9   # donor-cell blending factor
    tau: float = 0.5     # CFL safety factor


def check_params(params: FlowParams) -> None:
    """Raise ValueError for parameters outside their admissible range."""
    if not params.reynolds > 0.0:
        raise ValueError(f"Reynolds number must be positive, got {params.reynolds}")
    if not params.prandtl > 0.0:
        raise ValueError(f"Prandtl number must be positive, got {params.prandtl}")
    if not 0.0 <= params.alpha <= 1.0:
        raise ValueError(f"Upwind blending factor alpha must lie in [0, 1], got {params.alpha}")
    if not 0.0 < params.tau <= 1.0:
        raise ValueError(f"CFL safety factor tau must lie in (0, 1], got {params.tau}")


def check_dt(dt: float) -> None:
    if not dt > 0.0:
        raise ValueError(f"Timestep must be positive, got dt={dt}")
