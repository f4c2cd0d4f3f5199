"""Tests for building impact scenarios from NeoWs records and density presets."""
import copy
import unittest

from numpy.testing import assert_allclose

from neoimpact import (
    DENSITY_PRESETS,
    ImpactScenarioInput,
    ScenarioParameters,
    density_preset,
    simulate_neo_impact,
)
from neoimpact.constants import MAX_DISTANCE_KM


NEO_RECORD = {
    "id": "3727639",
    "neo_reference_id": "3727639",
    "name": "(2015 KT120)",
    "absolute_magnitude_h": 24.3,
    "estimated_diameter": {
        "kilometers": {
            "estimated_diameter_min": 0.0253837029,
            "estimated_diameter_max": 0.0567596853,
        },
        "meters": {
            "estimated_diameter_min": 25.3837029364,
            "estimated_diameter_max": 56.7596852866,
        },
    },
    "is_potentially_hazardous_asteroid": False,
    "close_approach_data": [
        {
            "close_approach_date": "2015-09-08",
            "relative_velocity": {
                "kilometers_per_second": "11.569203976",
                "kilometers_per_hour": "41649.1343136033",
            },
            "orbiting_body": "Earth",
        }
    ],
}


class TestFromNeo(unittest.TestCase):

    def test_reads_diameter_and_velocity(self):
        scenario = ImpactScenarioInput.from_neo(NEO_RECORD)
        assert_allclose(scenario.diameter_min, 25.3837029)
        assert_allclose(scenario.diameter_max, 56.7596853)
        assert_allclose(scenario.velocity, 11.569203976)
        self.assertEqual(scenario.name, "(2015 KT120)")
        self.assertEqual(scenario.density, 2.5)
        self.assertEqual(scenario.angle, 45.0)
        self.assertEqual(scenario.distance, 200.0)

    def test_user_parameters_passed_through(self):
        scenario = ImpactScenarioInput.from_neo(NEO_RECORD, density=7.8, angle=30.0, distance=50.0)
        self.assertEqual((scenario.density, scenario.angle, scenario.distance), (7.8, 30.0, 50.0))

    def test_missing_close_approach(self):
        neo = copy.deepcopy(NEO_RECORD)
        neo["close_approach_data"] = []
        with self.assertRaises(ValueError):
            ImpactScenarioInput.from_neo(neo)

    def test_missing_diameter(self):
        neo = copy.deepcopy(NEO_RECORD)
        del neo["estimated_diameter"]
        with self.assertRaises(ValueError):
            ImpactScenarioInput.from_neo(neo)

    def test_invalid_angle_from_neo(self):
        with self.assertRaises(ValueError):
            ImpactScenarioInput.from_neo(NEO_RECORD, angle=0.0)

    def test_simulate_neo_impact(self):
        analysis = simulate_neo_impact(NEO_RECORD)
        self.assertEqual(analysis.name, "(2015 KT120)")
        self.assertEqual(analysis.severity, "Regional")


class TestScenarioParameters(unittest.TestCase):

    def test_defaults(self):
        params = ScenarioParameters()
        self.assertEqual((params.density, params.angle, params.distance), (2.5, 45.0, 200.0))

    def test_invalid_scalars(self):
        for kwargs in ({"angle": 0.0}, {"density": -1.0}, {"distance": 35000.0}, {"distance": 0.0}):
            with self.assertRaises(ValueError, msg=str(kwargs)):
                ScenarioParameters(**kwargs)

    def test_antipode_is_allowed(self):
        params = ScenarioParameters(distance=MAX_DISTANCE_KM)
        self.assertAlmostEqual(params.distance, 20015.086796, places=3)

    def test_feeds_from_neo(self):
        params = ScenarioParameters(density=7.8, angle=30.0, distance=50.0)
        scenario = ImpactScenarioInput.from_neo(NEO_RECORD, **params.model_dump())
        self.assertEqual((scenario.density, scenario.angle, scenario.distance), (7.8, 30.0, 50.0))


class TestDensityPresets(unittest.TestCase):

    def test_preset_values(self):
        values = {p.label: p.value for p in DENSITY_PRESETS}
        self.assertEqual(values["Iron"], 7.8)
        self.assertEqual(values["Stony (Silicate)"], 2.5)
        self.assertEqual(values["Ice (Comet)"], 0.92)
        self.assertEqual(len(DENSITY_PRESETS), 7)

    def test_lookup_is_case_insensitive(self):
        self.assertEqual(density_preset("nickel-iron").value, 8.0)

    def test_unknown_preset(self):
        with self.assertRaises(ValueError) as cm:
            density_preset("Cheese")
        self.assertIn("Iron", str(cm.exception))


if __name__ == '__main__':
    unittest.main()
