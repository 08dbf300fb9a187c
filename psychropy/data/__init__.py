"""
Module for tabular psychrometric data processing.
"""

from .psy_base import PsychroData, COLUMN_UNITS
from .psy_inferer import PsychroDataInferer

__all__ = [
    'PsychroData',
    'PsychroDataInferer',
    'COLUMN_UNITS'
]
