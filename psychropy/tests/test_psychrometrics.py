import math
import unittest

from psychropy.analysis import (
    Q_,
    DimensionalityError,
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

P_ATM = Q_(101.325, 'kPa')


class TestSaturationPressure(unittest.TestCase):
    def test_ashrae_table_value_at_20C(self):
        pws = saturation_pressure(Q_(20, 'degC'))
        self.assertEqual(pws.units, Q_(1, 'kPa').units)
        self.assertAlmostEqual(pws.magnitude, 2.3393, delta=0.001)

    def test_kelvin_input_matches_celsius(self):
        self.assertAlmostEqual(saturation_pressure(Q_(293.15, 'kelvin')).magnitude,
                               saturation_pressure(Q_(20, 'degC')).magnitude, places=9)

    def test_bare_number_is_read_as_celsius(self):
        self.assertAlmostEqual(saturation_pressure(20).magnitude,
                               saturation_pressure(Q_(20, 'degC')).magnitude, places=12)

    def test_over_ice_below_freezing(self):
        self.assertAlmostEqual(saturation_pressure(Q_(-20, 'degC')).magnitude, 0.10326, places=4)
        self.assertAlmostEqual(saturation_pressure(Q_(-10, 'degC')).magnitude, 0.25990, places=4)

    def test_continuous_at_freezing(self):
        liquid = saturation_pressure(Q_(0, 'degC')).magnitude
        ice = saturation_pressure(Q_(-1e-9, 'degC')).magnitude
        self.assertAlmostEqual(liquid, 0.611213, places=5)
        self.assertLess(abs(liquid - ice), 1e-4)

    def test_monotonic(self):
        temperatures = [-30, -10, -0.5, 0, 0.5, 10, 30, 60]
        values = [saturation_pressure(Q_(t, 'degC')).magnitude for t in temperatures]
        self.assertEqual(values, sorted(values))

    def test_temperature_difference_rejected(self):
        with self.assertRaises(DimensionalityError):
            saturation_pressure(Q_(20, 'delta_degC'))

    def test_incompatible_unit_rejected(self):
        with self.assertRaises(DimensionalityError):
            saturation_pressure(Q_(20, 'kPa'))


class TestPartialPressure(unittest.TestCase):
    def test_value(self):
        self.assertAlmostEqual(partial_pressure(P_ATM, Q_(0.01, 'dimensionless')).magnitude, 1.603383, places=5)

    def test_pressure_in_pascal_and_ratio_in_g_per_kg(self):
        pw = partial_pressure(Q_(101325, 'Pa'), Q_(10, 'g/kg'))
        self.assertAlmostEqual(pw.to('kPa').magnitude, 1.603383, places=5)

    def test_dry_air(self):
        self.assertEqual(partial_pressure(P_ATM, 0).magnitude, 0)

    def test_temperature_as_pressure_rejected(self):
        with self.assertRaises(DimensionalityError):
            partial_pressure(Q_(20, 'degC'), 0.01)


class TestHumidityRatio(unittest.TestCase):
    def test_from_rh(self):
        w = humidity_ratio_from_rh(Q_(26.7, 'degC'), Q_(50, 'percent'), P_ATM)
        self.assertTrue(w.dimensionless)
        self.assertAlmostEqual(w.magnitude, 0.010946, places=5)

    def test_from_rh_default_pressure_is_101_kpa(self):
        self.assertAlmostEqual(humidity_ratio_from_rh(Q_(20, 'degC'), Q_(50, 'percent')).magnitude,
                               0.007285, places=5)

    def test_from_rh_accepts_fraction(self):
        w_percent = humidity_ratio_from_rh(Q_(20, 'degC'), Q_(50, 'percent'), P_ATM)
        w_fraction = humidity_ratio_from_rh(Q_(20, 'degC'), Q_(0.5, 'dimensionless'), P_ATM)
        self.assertAlmostEqual(w_percent.magnitude, w_fraction.magnitude, places=12)

    def test_from_wet_bulb_above_freezing(self):
        w = humidity_ratio(Q_(25, 'degC'), Q_(18, 'degC'), P_ATM)
        self.assertAlmostEqual(w.magnitude, 0.010018, places=5)

    def test_from_wet_bulb_below_freezing(self):
        w = humidity_ratio(Q_(-5, 'degC'), Q_(-6, 'degC'), P_ATM)
        self.assertAlmostEqual(w.magnitude, 0.001915, places=5)

    def test_saturated_air_matches_saturation_ratio(self):
        w_wb = humidity_ratio(Q_(20, 'degC'), Q_(20, 'degC'), P_ATM)
        w_rh = humidity_ratio_from_rh(Q_(20, 'degC'), Q_(100, 'percent'), P_ATM)
        self.assertAlmostEqual(w_wb.magnitude, w_rh.magnitude, places=9)


class TestRelativeHumidity(unittest.TestCase):
    def test_from_wet_bulb(self):
        rh = relative_humidity(Q_(25, 'degC'), Q_(18, 'degC'), P_ATM)
        self.assertAlmostEqual(rh.to('percent').magnitude, 50.6807, places=3)

    def test_round_trip_through_humidity_ratio(self):
        for t in (-20, -5, 0, 10, 26.7, 50):
            for rh in (5, 30, 50, 80, 99):
                t_db = Q_(t, 'degC')
                w = humidity_ratio_from_rh(t_db, Q_(rh, 'percent'), P_ATM)
                result = relative_humidity_from_w(t_db, w, P_ATM)
                self.assertAlmostEqual(result.to('percent').magnitude, rh, places=6)

    def test_out_of_range_passes_through(self):
        # wet bulb above dry bulb is physically inconsistent but not rejected
        rh = relative_humidity(Q_(20, 'degC'), Q_(25, 'degC'), P_ATM)
        self.assertGreater(rh.to('percent').magnitude, 100)


class TestDewPoint(unittest.TestCase):
    def test_primary_correlation_when_above_freezing(self):
        t_dp = dew_point(P_ATM, Q_(0.004, 'dimensionless'))
        self.assertAlmostEqual(t_dp.to('degC').magnitude, 0.7774, places=3)

    def test_alternate_correlation_when_primary_below_freezing(self):
        # primary correlation gives -1.0728 degC here, replaced by -0.9037 degC
        t_dp = dew_point(P_ATM, Q_(0.0035, 'dimensionless'))
        self.assertAlmostEqual(t_dp.to('degC').magnitude, -0.9037, places=3)

    def test_typical_value(self):
        self.assertAlmostEqual(dew_point(P_ATM, 0.01).magnitude, 14.0744, places=3)

    def test_dry_air_gives_nan(self):
        t_dp = dew_point(P_ATM, Q_(0, 'dimensionless'))
        self.assertEqual(t_dp.units, Q_(0, 'degC').units)
        self.assertTrue(math.isnan(t_dp.magnitude))

    def test_negative_humidity_ratio_gives_nan(self):
        self.assertTrue(math.isnan(dew_point(P_ATM, -0.001).magnitude))


class TestDensityAndEnthalpy(unittest.TestCase):
    def test_dry_air_density(self):
        rho = dry_air_density(Q_(20, 'degC'), 0.01, P_ATM)
        self.assertAlmostEqual(rho.to('kg/m**3').magnitude, 1.185097, places=5)

    def test_moist_air_density(self):
        rho = moist_air_density(Q_(20, 'degC'), 0.01, P_ATM)
        self.assertAlmostEqual(rho.to('kg/m**3').magnitude, 1.196948, places=5)

    def test_bare_numbers_are_read_in_documented_units(self):
        self.assertAlmostEqual(dry_air_density(20, 0.01, 101.325).magnitude, 1.185097, places=5)
        self.assertAlmostEqual(moist_air_density(20, 0.01, 101.325).magnitude, 1.196948, places=5)

    def test_moist_is_denser_per_volume_than_its_dry_air(self):
        self.assertGreater(moist_air_density(Q_(30, 'degC'), 0.02).magnitude,
                           dry_air_density(Q_(30, 'degC'), 0.02).magnitude)

    def test_enthalpy(self):
        h = enthalpy(Q_(20, 'degC'), Q_(0.01, 'dimensionless'))
        self.assertAlmostEqual(h.to('kJ/kg').magnitude, 45.502, places=6)

    def test_enthalpy_in_other_units(self):
        h = enthalpy(Q_(68, 'degF'), 0.01)
        self.assertAlmostEqual(h.to('J/kg').magnitude, 45502, places=2)


class TestStandardAtmosphere(unittest.TestCase):
    def test_sea_level(self):
        self.assertAlmostEqual(std_pressure(Q_(0, 'm')).magnitude, 101.325, places=9)
        self.assertAlmostEqual(std_temperature(Q_(0, 'm')).magnitude, 15, places=9)

    def test_1600m(self):
        self.assertAlmostEqual(std_pressure(Q_(1600, 'm')).magnitude, 83.523, places=2)
        self.assertAlmostEqual(std_temperature(Q_(1600, 'm')).magnitude, 4.6, places=9)

    def test_elevation_in_km(self):
        self.assertAlmostEqual(std_pressure(Q_(1.6, 'km')).magnitude,
                               std_pressure(Q_(1600, 'm')).magnitude, places=9)


if __name__ == '__main__':
    unittest.main()
