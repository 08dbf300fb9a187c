"""
Module for psychrometric calculations.
"""

from .units import ureg, Q_, DimensionalityError, to_unit, strip_unit, attach_unit
from .psychrometrics import (
    DEFAULT_PRESSURE,
    saturation_pressure,
    partial_pressure,
    humidity_ratio,
    humidity_ratio_from_rh,
    relative_humidity,
    relative_humidity_from_w,
    dew_point,
    dry_air_density,
    moist_air_density,
    enthalpy,
    std_pressure,
    std_temperature,
)
from .wet_bulb import WetBulbSolution, WetBulbConvergenceError, solve_wet_bulb, wet_bulb

__all__ = [
    'ureg',
    'Q_',
    'DimensionalityError',
    'to_unit',
    'strip_unit',
    'attach_unit',
    'DEFAULT_PRESSURE',
    'saturation_pressure',
    'partial_pressure',
    'humidity_ratio',
    'humidity_ratio_from_rh',
    'relative_humidity',
    'relative_humidity_from_w',
    'dew_point',
    'dry_air_density',
    'moist_air_density',
    'enthalpy',
    'std_pressure',
    'std_temperature',
    'WetBulbSolution',
    'WetBulbConvergenceError',
    'solve_wet_bulb',
    'wet_bulb',
]
