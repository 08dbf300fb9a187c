"""
Psychrometric properties of moist air.
"""

from .analysis import (
    ureg,
    Q_,
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
    wet_bulb,
    solve_wet_bulb,
    WetBulbSolution,
    WetBulbConvergenceError,
)
from .data.psy_base import PsychroData
from .data.psy_inferer import PsychroDataInferer

__all__ = [
    'ureg',
    'Q_',
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
    'wet_bulb',
    'solve_wet_bulb',
    'WetBulbSolution',
    'WetBulbConvergenceError',
    'PsychroData',
    'PsychroDataInferer'
]
