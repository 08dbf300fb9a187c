"""
Module for inferring moist air properties of tabular observations.
"""

import pandas as pd
import numpy as np
import logging
from typing import Callable, List

from ..analysis import (
    Q_,
    strip_unit,
    humidity_ratio,
    humidity_ratio_from_rh,
    relative_humidity,
    relative_humidity_from_w,
    dew_point,
    dry_air_density,
    moist_air_density,
    enthalpy,
    std_pressure,
    wet_bulb,
)
from ..analysis.wet_bulb import DEFAULT_MAX_ITER, DEFAULT_TOLERANCE
from .psy_base import COLUMN_UNITS


class PsychroDataInferer:
    """Class for inferring psychrometric columns of an observations DataFrame."""

    def __init__(self, data: pd.DataFrame, station_altitude: float = 0.0,
                 max_iter: int = DEFAULT_MAX_ITER, tol: float = DEFAULT_TOLERANCE):
        """
        Initialize the inferer with observations.

        Parameters
        ----------
        data : pd.DataFrame
            Observations DataFrame with columns:
            - DryBulbTemperature [degC]
            - StationLevelPressure [hPa] (optional)
            - RelativeHumidity [%] (optional)
            - WetBulbTemperature [degC] (optional)
            - DewPointTemperature [degC] (optional)
        station_altitude : float, optional
            The elevation of the observation site in meters, by default 0
        max_iter : int, optional
            Iteration budget of the wet-bulb solver, by default 5
        tol : float, optional
            Absolute humidity ratio tolerance of the wet-bulb solver, by default 1e-5

        Raises
        ------
        ValueError
            If the DryBulbTemperature column is missing
        """
        if 'DryBulbTemperature' not in data.columns:
            raise ValueError("Data must contain a 'DryBulbTemperature' column")

        self.data = data.copy()
        self.station_altitude = station_altitude
        self.max_iter = max_iter
        self.tol = tol
        self.psychro_data = None  # Set when used with a PsychroData object

    def _has(self, column: str) -> bool:
        return column in self.data.columns and self.data[column].notna().any()

    def _apply(self, func: Callable, output_unit: str, columns: List[str], **kwargs) -> np.ndarray:
        """
        Apply a psychrometric function row by row.

        Column values are tagged with their units from COLUMN_UNITS before the
        call, and the result is stripped to `output_unit`. A None result becomes NaN.
        """
        units = [COLUMN_UNITS[col] for col in columns]

        def element(*values):
            args = [Q_(value, unit) for value, unit in zip(values, units)]
            result = func(*args, **kwargs)
            if result is None:
                return np.nan
            return strip_unit(result, output_unit)

        vectorized = np.vectorize(element, otypes=[float])
        return vectorized(*[self.data[col].to_numpy(dtype=float) for col in columns])

    def _log(self, method: str, inputs: dict, added_columns: List[str]):
        if self.psychro_data is not None:
            self.psychro_data._log_operation(
                operation_class="Inferer",
                operation_method=method,
                inputs=inputs,
                outputs={"added_columns": added_columns,
                         "shape": self.data.shape}
            )

    def _solve_wet_bulb(self):
        wb = self._apply(wet_bulb, 'degC', ['DryBulbTemperature', 'RelativeHumidity', 'StationLevelPressure'],
                         max_iter=self.max_iter, tol=self.tol)

        inputs_valid = self.data[['DryBulbTemperature', 'RelativeHumidity', 'StationLevelPressure']].notna().all(axis=1)
        unconverged = int((np.isnan(wb) & inputs_valid.to_numpy()).sum())
        if unconverged:
            logging.warning(f"Wet-bulb solver did not converge for {unconverged} rows within {self.max_iter} iterations")

        self.data['WetBulbTemperature'] = wb
        return unconverged

    def infer_station_pressure(self) -> pd.DataFrame:
        """
        Fill missing station level pressure from the standard atmosphere.

        Returns
        -------
        pd.DataFrame
            DataFrame with a complete StationLevelPressure column [hPa]
        """
        p_std = strip_unit(std_pressure(Q_(self.station_altitude, 'm')), 'hPa')

        if 'StationLevelPressure' not in self.data.columns:
            logging.info(f'\tUsing standard atmosphere pressure at {self.station_altitude} m')
            self.data['StationLevelPressure'] = p_std
            filled = len(self.data)
        else:
            missing = self.data['StationLevelPressure'].isna()
            filled = int(missing.sum())
            if filled:
                logging.info(f'\tFilled {filled} missing station pressures with standard atmosphere pressure')
                self.data.loc[missing, 'StationLevelPressure'] = p_std

        self._log("infer_station_pressure",
                  {"station_altitude": self.station_altitude, "filled_count": filled},
                  ["StationLevelPressure"] if filled else [])

        return self.data

    def infer_psychro_properties(self) -> pd.DataFrame:
        """
        Infer humidity ratio, wet bulb, relative humidity and dew point
        from whichever humidity measurement is available.

        Returns
        -------
        pd.DataFrame
            DataFrame with inferred psychrometric properties:
            - HumidityRatio
            - WetBulbTemperature (if not present)
            - RelativeHumidity (if not present)
            - DewPointTemperature (if not present)
        """
        if not self._has('StationLevelPressure') or self.data['StationLevelPressure'].isna().any():
            self.infer_station_pressure()

        has_rh = self._has('RelativeHumidity')
        has_wb = self._has('WetBulbTemperature')
        has_dp = self._has('DewPointTemperature')

        added_columns = []
        unconverged = 0

        # Case 1: RH available, wet bulb solved for if missing
        if has_rh:
            if has_wb:
                logging.info('\tCalculating Humidity Ratio from Relative Humidity')
            else:
                logging.info('\tCalculating WB Temperature from Relative Humidity')
                unconverged = self._solve_wet_bulb()
                added_columns.append('WetBulbTemperature')
            self.data['HumidityRatio'] = self._apply(
                humidity_ratio_from_rh, 'dimensionless',
                ['DryBulbTemperature', 'RelativeHumidity', 'StationLevelPressure'])
            added_columns.append('HumidityRatio')

        # Case 2: Only WB available
        elif has_wb:
            logging.info('\tCalculating Relative Humidity from WB Temperature')
            self.data['HumidityRatio'] = self._apply(
                humidity_ratio, 'dimensionless',
                ['DryBulbTemperature', 'WetBulbTemperature', 'StationLevelPressure'])
            self.data['RelativeHumidity'] = self._apply(
                relative_humidity, 'percent',
                ['DryBulbTemperature', 'WetBulbTemperature', 'StationLevelPressure'])
            added_columns.extend(['HumidityRatio', 'RelativeHumidity'])

        # Case 3: Only DP available, the air is saturated at the dew point
        elif has_dp:
            logging.info('\tCalculating Relative Humidity and WB Temperature from DP Temperature')
            self.data['HumidityRatio'] = self._apply(
                lambda t_dp, p: humidity_ratio_from_rh(t_dp, Q_(100, 'percent'), p), 'dimensionless',
                ['DewPointTemperature', 'StationLevelPressure'])
            self.data['RelativeHumidity'] = self._apply(
                relative_humidity_from_w, 'percent',
                ['DryBulbTemperature', 'HumidityRatio', 'StationLevelPressure'])
            unconverged = self._solve_wet_bulb()
            added_columns.extend(['HumidityRatio', 'RelativeHumidity', 'WetBulbTemperature'])

        else:
            logging.info('\tNo data could be inferred')

        if added_columns and not has_dp:
            self.data['DewPointTemperature'] = self._apply(
                dew_point, 'degC', ['StationLevelPressure', 'HumidityRatio'])
            added_columns.append('DewPointTemperature')

        self._log("infer_psychro_properties",
                  {"has_relative_humidity": has_rh,
                   "has_wet_bulb": has_wb,
                   "has_dew_point": has_dp,
                   "max_iter": self.max_iter,
                   "tol": self.tol,
                   "unconverged_count": unconverged},
                  added_columns)

        return self.data

    def infer_air_properties(self) -> pd.DataFrame:
        """
        Calculate enthalpy and densities from temperature, humidity ratio and pressure.

        Returns
        -------
        pd.DataFrame
            DataFrame with added Enthalpy, DryAirDensity and MoistAirDensity columns

        Raises
        ------
        ValueError
            If the HumidityRatio column is missing
        """
        if 'HumidityRatio' not in self.data.columns:
            raise ValueError("HumidityRatio is required, run infer_psychro_properties first")
        if 'StationLevelPressure' not in self.data.columns:
            self.infer_station_pressure()

        self.data['Enthalpy'] = self._apply(enthalpy, 'kJ/kg', ['DryBulbTemperature', 'HumidityRatio'])
        self.data['DryAirDensity'] = self._apply(
            dry_air_density, 'kg/m**3', ['DryBulbTemperature', 'HumidityRatio', 'StationLevelPressure'])
        self.data['MoistAirDensity'] = self._apply(
            moist_air_density, 'kg/m**3', ['DryBulbTemperature', 'HumidityRatio', 'StationLevelPressure'])

        added_columns = ['Enthalpy', 'DryAirDensity', 'MoistAirDensity']
        self._log("infer_air_properties", {}, added_columns)

        return self.data

    def infer_all(self) -> pd.DataFrame:
        """
        Perform all available inference calculations.

        Returns
        -------
        pd.DataFrame
            DataFrame with all inferred properties. Air properties are only
            added when a humidity ratio could be inferred.
        """
        initial_columns = set(self.data.columns)
        self.infer_station_pressure()
        self.infer_psychro_properties()
        if 'HumidityRatio' in self.data.columns:
            self.infer_air_properties()

        added_columns = sorted(set(self.data.columns) - initial_columns)
        self._log("infer_all", {"station_altitude": self.station_altitude}, added_columns)

        return self.data
