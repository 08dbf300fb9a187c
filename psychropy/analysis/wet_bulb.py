"""
Wet-bulb temperature solver.

The wet-bulb temperature has no closed form in terms of dry-bulb temperature
and relative humidity, so it is found by Newton-Raphson iteration on the
humidity ratio.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import pint

from .psychrometrics import DEFAULT_PRESSURE, humidity_ratio, humidity_ratio_from_rh
from .units import Q_, QuantityLike, strip_unit, to_unit

DEFAULT_MAX_ITER = 5
DEFAULT_TOLERANCE = 1e-5

# Step of the one-sided finite difference used for dw/dt
DERIVATIVE_STEP = Q_(0.001, 'delta_degC')


@dataclass(frozen=True)
class WetBulbSolution:
    """
    Outcome of a wet-bulb solve.

    Attributes
    ----------
    value : Optional[pint.Quantity]
        Wet-bulb temperature [degC], or None if the iteration budget ran out
    iterations : int
        Number of Newton updates performed
    residual : float
        Last absolute difference between target and computed humidity ratios
    """
    value: Optional[pint.Quantity]
    iterations: int
    residual: float

    @property
    def converged(self) -> bool:
        return self.value is not None


class WetBulbConvergenceError(RuntimeError):
    """Raised when a checked wet-bulb solve exhausts its iteration budget."""

    def __init__(self, solution: WetBulbSolution):
        self.solution = solution
        super().__init__(
            f"Wet-bulb solver did not converge after {solution.iterations} iterations "
            f"(residual {solution.residual:.3e})"
        )


def solve_wet_bulb(t_db: QuantityLike, rh: QuantityLike, p: QuantityLike = DEFAULT_PRESSURE,
                   max_iter: int = DEFAULT_MAX_ITER, tol: float = DEFAULT_TOLERANCE) -> WetBulbSolution:
    """
    Solve for the wet-bulb temperature and report how the iteration went.

    Starting from the dry-bulb temperature, the estimate is updated with
    Newton steps until the humidity ratio it implies is within `tol` of the
    humidity ratio implied by `rh`, or until `max_iter` updates were made.

    Parameters
    ----------
    t_db : pint.Quantity or float
        Dry-bulb temperature [degC]
    rh : pint.Quantity or float
        Relative humidity [%]
    p : pint.Quantity or float, optional
        Ambient pressure [kPa], by default 101 kPa
    max_iter : int, optional
        Maximum number of Newton updates, by default 5
    tol : float, optional
        Absolute tolerance on the humidity ratio [kg/kg], by default 1e-5.
        This is compared against the absolute difference of two humidity
        ratios, not a relative error.

    Returns
    -------
    WetBulbSolution
        Solution whose value is None when the solver did not converge
    """
    w_target = strip_unit(humidity_ratio_from_rh(t_db, rh, p), 'dimensionless')
    t_wb = to_unit(t_db, 'degC')
    step = strip_unit(DERIVATIVE_STEP, 'delta_degC')
    iteration = 0

    while True:
        w = strip_unit(humidity_ratio(t_db, t_wb, p), 'dimensionless')
        residual = abs(w_target - w)
        logging.debug(f"Wet-bulb iteration {iteration}: t_wb={t_wb.magnitude:.6f} degC, residual={residual:.3e}")

        if residual <= tol:
            return WetBulbSolution(value=t_wb, iterations=iteration, residual=residual)

        iteration += 1
        if iteration > max_iter:
            logging.debug(f"Wet-bulb solver exhausted {max_iter} iterations")
            return WetBulbSolution(value=None, iterations=max_iter, residual=residual)

        w2 = strip_unit(humidity_ratio(t_db, t_wb - DERIVATIVE_STEP, p), 'dimensionless')
        dw_dt = (w - w2) / step
        t_wb = t_wb + Q_((w_target - w) / dw_dt, 'delta_degC')


def wet_bulb(t_db: QuantityLike, rh: QuantityLike, p: QuantityLike = DEFAULT_PRESSURE,
             max_iter: int = DEFAULT_MAX_ITER, tol: float = DEFAULT_TOLERANCE,
             checked: bool = False) -> Optional[pint.Quantity]:
    """
    Compute the wet-bulb temperature from dry-bulb temperature and relative humidity.

    Parameters
    ----------
    t_db : pint.Quantity or float
        Dry-bulb temperature [degC]
    rh : pint.Quantity or float
        Relative humidity [%]
    p : pint.Quantity or float, optional
        Ambient pressure [kPa], by default 101 kPa
    max_iter : int, optional
        Maximum number of Newton updates, by default 5
    tol : float, optional
        Absolute tolerance on the humidity ratio, by default 1e-5
    checked : bool, optional
        Raise instead of returning None when the solver does not converge,
        by default False

    Returns
    -------
    Optional[pint.Quantity]
        Wet-bulb temperature [degC], or None if the solver did not converge

    Raises
    ------
    WetBulbConvergenceError
        If `checked` is True and the solver did not converge
    """
    solution = solve_wet_bulb(t_db, rh, p, max_iter=max_iter, tol=tol)
    if solution.value is None and checked:
        raise WetBulbConvergenceError(solution)
    return solution.value


__all__ = [
    'DEFAULT_MAX_ITER',
    'DEFAULT_TOLERANCE',
    'DERIVATIVE_STEP',
    'WetBulbSolution',
    'WetBulbConvergenceError',
    'solve_wet_bulb',
    'wet_bulb',
]
