"""
Base class for tabular psychrometric data.
"""

import pandas as pd
from datetime import datetime
from typing import List, Dict, Any, Optional, Tuple

# Units in which values of the standard columns are stored
COLUMN_UNITS = {
    'DryBulbTemperature': 'degC',
    'WetBulbTemperature': 'degC',
    'DewPointTemperature': 'degC',
    'RelativeHumidity': 'percent',
    'HumidityRatio': 'dimensionless',
    'StationLevelPressure': 'hPa',
    'Enthalpy': 'kJ/kg',
    'DryAirDensity': 'kg/m**3',
    'MoistAirDensity': 'kg/m**3',
}


class PsychroData:
    """Container for moist air observations and the operations applied to them."""

    def __init__(self, data: Optional[pd.DataFrame] = None, station_altitude: float = 0.0):
        """
        Initialize with psychrometric data.

        Parameters
        ----------
        data : pd.DataFrame, optional
            Observations DataFrame using the column names of COLUMN_UNITS, by default None
        station_altitude : float, optional
            Elevation of the observation site in meters, by default 0.0
        """
        self._data = data.copy() if data is not None else pd.DataFrame()
        self._station_altitude = station_altitude

        self._shape = (0, 0)  # (rows, columns)
        self._columns = []
        self._summary = None

        self._operations_log = []
        self._log_operation("System", "Initialize", {"station_altitude": station_altitude})

        self._update_data_attributes()

    def _update_data_attributes(self):
        """
        Update all data-driven attributes based on current data.

        When adding new data-driven attributes to the class, update them here.
        """
        self._shape = self._data.shape
        self._columns = list(self._data.columns)

        # Summary statistics are computed on demand
        self._summary = None

    def _log_operation(self, operation_class, operation_method, inputs=None, outputs=None):
        """
        Log an operation performed on the data.

        Parameters
        ----------
        operation_class : str
            The class that performed the operation (e.g., 'Inferer')
        operation_method : str
            The specific method used (e.g., 'infer_station_pressure')
        inputs : dict, optional
            Input parameters used for the operation, by default None
        outputs : dict, optional
            Output results from the operation (added columns, shape, etc.), by default None
        """
        if inputs is None:
            inputs = {}
        if outputs is None:
            outputs = {}

        self._operations_log.append({
            'timestamp': datetime.now().isoformat(),
            'class': operation_class,
            'method': operation_method,
            'inputs': inputs,
            'outputs': outputs
        })

    @property
    def operations_log(self) -> List[Dict[str, Any]]:
        """
        Get the operations log.

        Returns
        -------
        List[Dict[str, Any]]
            List of logged operations
        """
        return self._operations_log.copy()

    @property
    def data(self) -> pd.DataFrame:
        """
        Get the observations DataFrame.

        Returns
        -------
        pd.DataFrame
            Observations
        """
        return self._data

    @data.setter
    def data(self, new_data: pd.DataFrame):
        self._data = new_data.copy()
        self._update_data_attributes()

    @property
    def station_altitude(self) -> float:
        """
        Get the elevation of the observation site.

        Returns
        -------
        float
            Elevation in meters
        """
        return self._station_altitude

    @station_altitude.setter
    def station_altitude(self, altitude: float):
        self._station_altitude = altitude
        self._log_operation("System", "UpdateStationAltitude", {"station_altitude": altitude})

    @property
    def shape(self) -> Tuple[int, int]:
        """Shape of the data as (rows, columns)."""
        return self._shape

    @property
    def row_count(self) -> int:
        return self._shape[0]

    @property
    def column_count(self) -> int:
        return self._shape[1]

    @property
    def columns(self) -> List[str]:
        return self._columns

    @property
    def summary(self) -> pd.DataFrame:
        """
        Get summary statistics for the data.

        Returns
        -------
        pd.DataFrame
            Summary statistics
        """
        if self._summary is None:
            self._summary = self._data.describe()
        return self._summary

    def copy(self) -> 'PsychroData':
        """
        Create a copy of this object, including its operations log.

        Returns
        -------
        PsychroData
            Independent copy
        """
        new = PsychroData(self._data, station_altitude=self._station_altitude)
        new._operations_log = self._operations_log.copy()
        return new

    def infer(self, max_iter: int = 5, tol: float = 1e-5, inplace: bool = True) -> 'PsychroData':
        """
        Infer all missing psychrometric columns.

        Parameters
        ----------
        max_iter : int, optional
            Iteration budget of the wet-bulb solver, by default 5
        tol : float, optional
            Absolute humidity ratio tolerance of the wet-bulb solver, by default 1e-5
        inplace : bool, optional
            If True, modify the data in place. Otherwise, return a new PsychroData object.

        Returns
        -------
        PsychroData
            The inferred PsychroData object (self if inplace=True, otherwise a new object)
        """
        from .psy_inferer import PsychroDataInferer

        target = self if inplace else self.copy()

        inferer = PsychroDataInferer(target.data, station_altitude=target.station_altitude,
                                     max_iter=max_iter, tol=tol)
        inferer.psychro_data = target
        target.data = inferer.infer_all()

        return target

    def __repr__(self) -> str:
        return (f"PsychroData(rows={self.row_count}, columns={self.column_count}, "
                f"station_altitude={self._station_altitude})")
