"""
Closed-form psychrometric formulas for moist air (ASHRAE Handbook, Fundamentals).

Every function accepts pint quantities in any compatible unit (or bare numbers,
read in the documented unit) and returns a pint quantity.
"""

import math

import pint

from .units import Q_, QuantityLike, attach_unit, strip_unit, to_unit

# Ratio of molecular masses of water vapour and dry air
MOLAR_MASS_RATIO = 0.621945

DEFAULT_PRESSURE = Q_(101, 'kPa')

# Saturation pressure over ice, -100 to 0 degC
C01, C02, C03, C04, C05, C06, C07 = (
    -5674.5359,
    6.3925247,
    -9.677843e-3,
    6.2215701e-7,
    2.0747825e-9,
    -9.484024e-13,
    4.1635019,
)

# Saturation pressure over liquid water, 0 to 200 degC
C08, C09, C10, C11, C12, C13 = (
    -5800.2206,
    1.3914993,
    -4.8640239e-2,
    4.1764768e-5,
    -1.4452093e-8,
    6.5459673,
)

# Dew point, 0 to 93 degC
C14, C15, C16, C17, C18 = 6.54, 14.526, 0.7389, 0.09486, 0.4569


def saturation_pressure(t: QuantityLike) -> pint.Quantity:
    """
    Compute the saturation pressure of water vapour.

    Uses the ASHRAE correlation over ice below 0 degC and over liquid water
    otherwise.

    Parameters
    ----------
    t : pint.Quantity or float
        Temperature [degC]

    Returns
    -------
    pint.Quantity
        Saturation pressure [kPa]

    Notes
    -----
    Accuracy degrades outside -100 to 200 degC but the range is not checked.
    """
    t_c = strip_unit(t, 'degC')
    T = strip_unit(to_unit(t, 'degC'), 'kelvin')

    if t_c < 0:
        ln_pws = C01 / T + C02 + C03 * T + C04 * T**2 + C05 * T**3 + C06 * T**4 + C07 * math.log(T)
    else:
        ln_pws = C08 / T + C09 + C10 * T + C11 * T**2 + C12 * T**3 + C13 * math.log(T)

    return attach_unit(math.exp(ln_pws), 'Pa').to('kPa')


def partial_pressure(p: QuantityLike, w: QuantityLike) -> pint.Quantity:
    """
    Compute the partial pressure of water vapour in moist air.

    Parameters
    ----------
    p : pint.Quantity or float
        Ambient pressure [kPa]
    w : pint.Quantity or float
        Humidity ratio [kg/kg]

    Returns
    -------
    pint.Quantity
        Water vapour partial pressure [kPa]
    """
    p = strip_unit(p, 'kPa')
    w = strip_unit(w, 'dimensionless')
    return attach_unit(p * w / (MOLAR_MASS_RATIO + w), 'kPa')


def humidity_ratio(t_db: QuantityLike, t_wb: QuantityLike,
                   p: QuantityLike = DEFAULT_PRESSURE) -> pint.Quantity:
    """
    Compute the humidity ratio from dry-bulb and wet-bulb temperatures.

    Parameters
    ----------
    t_db : pint.Quantity or float
        Dry-bulb temperature [degC]
    t_wb : pint.Quantity or float
        Wet-bulb temperature [degC]
    p : pint.Quantity or float, optional
        Ambient pressure [kPa], by default 101 kPa

    Returns
    -------
    pint.Quantity
        Humidity ratio [kg/kg, dimensionless]
    """
    pws = strip_unit(saturation_pressure(t_wb), 'kPa')
    t_db = strip_unit(t_db, 'degC')
    t_wb = strip_unit(t_wb, 'degC')
    p = strip_unit(p, 'kPa')

    ws = MOLAR_MASS_RATIO * pws / (p - pws)

    if t_db >= 0:
        w = ((2501 - 2.326 * t_wb) * ws - 1.006 * (t_db - t_wb)) / (2501 + 1.86 * t_db - 4.186 * t_wb)
    else:
        w = ((2830 - 0.24 * t_wb) * ws - 1.006 * (t_db - t_wb)) / (2830 + 1.86 * t_db - 2.1 * t_wb)

    return attach_unit(w, 'dimensionless')


def humidity_ratio_from_rh(t_db: QuantityLike, rh: QuantityLike,
                           p: QuantityLike = DEFAULT_PRESSURE) -> pint.Quantity:
    """
    Compute the humidity ratio from dry-bulb temperature and relative humidity.

    Parameters
    ----------
    t_db : pint.Quantity or float
        Dry-bulb temperature [degC]
    rh : pint.Quantity or float
        Relative humidity [%]
    p : pint.Quantity or float, optional
        Ambient pressure [kPa], by default 101 kPa

    Returns
    -------
    pint.Quantity
        Humidity ratio [kg/kg, dimensionless]
    """
    pws = strip_unit(saturation_pressure(t_db), 'kPa')
    pw = strip_unit(rh, 'percent') * pws / 100
    p = strip_unit(p, 'kPa')
    return attach_unit(MOLAR_MASS_RATIO * pw / (p - pw), 'dimensionless')


def relative_humidity(t_db: QuantityLike, t_wb: QuantityLike,
                      p: QuantityLike = DEFAULT_PRESSURE) -> pint.Quantity:
    """
    Compute relative humidity [%] from dry-bulb and wet-bulb temperatures.

    Values outside 0-100 % are returned as is for inconsistent inputs.
    """
    w = humidity_ratio(t_db, t_wb, p)
    return relative_humidity_from_w(t_db, w, p)


def relative_humidity_from_w(t_db: QuantityLike, w: QuantityLike,
                             p: QuantityLike = DEFAULT_PRESSURE) -> pint.Quantity:
    """
    Compute relative humidity [%] from dry-bulb temperature and humidity ratio.
    """
    pws = strip_unit(saturation_pressure(t_db), 'kPa')
    pw = strip_unit(partial_pressure(p, w), 'kPa')
    return attach_unit(100 * pw / pws, 'percent')


def dew_point(p: QuantityLike, w: QuantityLike) -> pint.Quantity:
    """
    Compute the dew point temperature.

    The primary ASHRAE correlation is used unless its result is below 0 degC,
    in which case the result is replaced by the correlation for dew points
    below freezing.

    Parameters
    ----------
    p : pint.Quantity or float
        Ambient pressure [kPa]
    w : pint.Quantity or float
        Humidity ratio [kg/kg]

    Returns
    -------
    pint.Quantity
        Dew point temperature [degC], NaN when the vapour partial pressure is
        not positive (dry air or an inconsistent humidity ratio)
    """
    pw = strip_unit(partial_pressure(p, w), 'kPa')
    if not pw > 0:
        return attach_unit(math.nan, 'degC')
    alpha = math.log(pw)

    t_dp = C14 + C15 * alpha + C16 * alpha**2 + C17 * alpha**3 + C18 * pw**0.1984
    if t_dp < 0:
        t_dp = 6.09 + 12.608 * alpha + 0.4959 * alpha**2

    return attach_unit(t_dp, 'degC')


def _specific_volume(t_db: QuantityLike, w: QuantityLike, p: QuantityLike) -> float:
    # m3 per kg of dry air
    T = strip_unit(to_unit(t_db, 'degC'), 'kelvin')
    w = strip_unit(w, 'dimensionless')
    p = strip_unit(p, 'kPa')
    return 0.287042 * T * (1 + 1.607858 * w) / p


def dry_air_density(t_db: QuantityLike, w: QuantityLike,
                    p: QuantityLike = DEFAULT_PRESSURE) -> pint.Quantity:
    """
    Compute the density of the dry air component of moist air.

    Parameters
    ----------
    t_db : pint.Quantity or float
        Dry-bulb temperature [degC]
    w : pint.Quantity or float
        Humidity ratio [kg/kg]
    p : pint.Quantity or float, optional
        Ambient pressure [kPa], by default 101 kPa

    Returns
    -------
    pint.Quantity
        Dry air density [kg/m3]
    """
    v = _specific_volume(t_db, w, p)
    return attach_unit(1 / v, 'kg/m**3')


def moist_air_density(t_db: QuantityLike, w: QuantityLike,
                      p: QuantityLike = DEFAULT_PRESSURE) -> pint.Quantity:
    """
    Compute the density of moist air [kg/m3], i.e. dry air plus water vapour.
    """
    v = _specific_volume(t_db, w, p)
    w = strip_unit(w, 'dimensionless')
    return attach_unit((1 / v) * (1 + w), 'kg/m**3')


def enthalpy(t_db: QuantityLike, w: QuantityLike) -> pint.Quantity:
    """
    Compute the specific enthalpy of moist air.

    Parameters
    ----------
    t_db : pint.Quantity or float
        Dry-bulb temperature [degC]
    w : pint.Quantity or float
        Humidity ratio [kg/kg]

    Returns
    -------
    pint.Quantity
        Enthalpy per kg of dry air [kJ/kg]
    """
    t = strip_unit(t_db, 'degC')
    w = strip_unit(w, 'dimensionless')
    return attach_unit(1.006 * t + w * (2501 + 1.86 * t), 'kJ/kg')


def std_pressure(elevation: QuantityLike) -> pint.Quantity:
    """Standard atmosphere pressure [kPa] at an elevation [m]."""
    z = strip_unit(elevation, 'm')
    return attach_unit(101.325 * (1 - z * 2.25577e-5) ** 5.2559, 'kPa')


def std_temperature(elevation: QuantityLike) -> pint.Quantity:
    """Standard atmosphere temperature [degC] at an elevation [m]."""
    z = strip_unit(elevation, 'm')
    return attach_unit(15 - 0.0065 * z, 'degC')


__all__ = [
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
]
