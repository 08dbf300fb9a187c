"""
Unit handling for psychrometric calculations.

All quantities are pint quantities from the registry defined here. Formulas
convert their inputs with ``strip_unit`` right before doing arithmetic on bare
floats and tag the result with ``attach_unit``.
"""

import numbers
from typing import Union

import pint
from pint import DimensionalityError

ureg = pint.UnitRegistry()
Q_ = ureg.Quantity

# Offset temperature units that must never be read as a temperature difference
_OFFSET_TEMPERATURES = ('degree_Celsius', 'degree_Fahrenheit', 'degree_Reaumur')

QuantityLike = Union[pint.Quantity, float, int]


def _is_delta(units) -> bool:
    return 'delta_' in str(units)


def _is_temperature(units) -> bool:
    return ureg.Unit(units).dimensionality == ureg.kelvin.dimensionality


def to_unit(value: QuantityLike, unit: Union[str, pint.Unit]) -> pint.Quantity:
    """
    Convert a quantity to a compatible unit.

    Parameters
    ----------
    value : pint.Quantity or float
        Quantity to convert. A bare number is taken to be expressed in `unit`.
    unit : str or pint.Unit
        Target unit.

    Returns
    -------
    pint.Quantity
        The quantity expressed in `unit`.

    Raises
    ------
    pint.DimensionalityError
        If the units are not dimensionally compatible, or if an absolute
        temperature and a temperature difference are mixed up.
    """
    target = ureg.Unit(unit)
    if not isinstance(value, pint.Quantity):
        if not isinstance(value, numbers.Number):
            raise TypeError(f"Expected a quantity or a number, got {type(value).__name__}")
        return Q_(value, target)

    if _is_temperature(target) and _is_temperature(value.units):
        if _is_delta(value.units) and not _is_delta(target):
            raise DimensionalityError(value.units, target,
                                      extra_msg=" (a temperature difference is not a temperature)")
        if _is_delta(target) and str(value.units) in _OFFSET_TEMPERATURES:
            raise DimensionalityError(value.units, target,
                                      extra_msg=" (a temperature is not a temperature difference)")
    return value.to(target)


def strip_unit(value: QuantityLike, unit: Union[str, pint.Unit]) -> float:
    """Return the bare magnitude of `value` expressed in `unit`."""
    return float(to_unit(value, unit).magnitude)


def attach_unit(magnitude: float, unit: Union[str, pint.Unit]) -> pint.Quantity:
    """Tag a bare number with `unit`."""
    return Q_(magnitude, unit)


__all__ = [
    'ureg',
    'Q_',
    'QuantityLike',
    'DimensionalityError',
    'to_unit',
    'strip_unit',
    'attach_unit',
]
