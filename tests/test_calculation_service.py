import unittest
import math
import os
import sys

import numpy as np
import pandas as pd

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import config
from engine.rules import DEFAULT_PROPOSED_RULES
from schemas.calculation import CalculationRequest, ProposedRulesSchema, SalaryTableRequest
from services.calculation_service import (
    TABLE_COLUMNS,
    build_salary_table,
    format_results,
    map_to_engine_rules,
    resolve_monthly_salary,
    salary_grid,
)


class TestSalaryTable(unittest.TestCase):
    def test_grid_is_inclusive(self):
        grid = salary_grid(0, 10000, 2500)
        np.testing.assert_array_equal(grid, [0, 2500, 5000, 7500, 10000])

    def test_grid_does_not_drift(self):
        grid = salary_grid(0, 1, 0.1)
        self.assertEqual(len(grid), 11)
        self.assertEqual(grid[3], 0.3)

    def test_grid_rejects_bad_ranges(self):
        with self.assertRaises(ValueError):
            salary_grid(0, 100, 0)
        with self.assertRaises(ValueError):
            salary_grid(100, 0, 10)
        with self.assertRaises(ValueError):
            salary_grid(0, config.MAX_TABLE_ROWS * 10, 1)
        with self.assertRaises(ValueError):
            salary_grid(0, 1e308, 1e-300)

    def test_build_table(self):
        df = build_salary_table(0, 10000, 2500, DEFAULT_PROPOSED_RULES)
        self.assertEqual(list(df.columns), TABLE_COLUMNS)
        self.assertEqual(
            list(df['rule_applied']),
            ['initial', 'exemption', 'exemption', 'standard', 'standard']
        )
        last = df.iloc[-1]
        self.assertAlmostEqual(last['final_tax'], 1854.0, places=6)
        self.assertAlmostEqual(last['proposed_net_salary'], 8146.0, places=6)

    def test_format_results(self):
        df = pd.DataFrame({'a': [1.5, np.nan], 'b': ['x', 'y']})
        formatted = format_results(df)
        self.assertEqual(formatted['columns'], ['a', 'b'])
        self.assertEqual(formatted['results'], [{'a': 1.5, 'b': 'x'}, {'a': None, 'b': 'y'}])
        self.assertIsInstance(formatted['results'][0]['a'], float)


class TestRequestMapping(unittest.TestCase):
    def test_default_rules_when_absent(self):
        self.assertIs(map_to_engine_rules(None), DEFAULT_PROPOSED_RULES)

    def test_schema_round_trip_keeps_rules(self):
        self.assertEqual(ProposedRulesSchema.from_rules(DEFAULT_PROPOSED_RULES).to_rules(), DEFAULT_PROPOSED_RULES)

    def test_rules_ordering_validated(self):
        with self.assertRaises(ValueError):
            ProposedRulesSchema(
                exemption_limit=8000,
                discount_tiers=[{'limit': 6000, 'discount': 0.75}],
                standard_range_start=7350,
            )

    def test_salary_resolution(self):
        self.assertEqual(resolve_monthly_salary(CalculationRequest(salary=7000)), 7000)
        self.assertEqual(
            resolve_monthly_salary(CalculationRequest(salary=1, salary_text="84.000,00", period='annual')),
            7000
        )
        self.assertTrue(math.isnan(resolve_monthly_salary(CalculationRequest())))

    def test_oversized_salary_text_is_nan(self):
        request = CalculationRequest(salary_text="9" * 400)
        self.assertTrue(math.isnan(resolve_monthly_salary(request)))

    def test_non_finite_numbers_rejected(self):
        with self.assertRaises(ValueError):
            CalculationRequest(salary=float('inf'))
        with self.assertRaises(ValueError):
            CalculationRequest(salary=float('nan'))
        with self.assertRaises(ValueError):
            SalaryTableRequest(stop=float('inf'))


if __name__ == '__main__':
    unittest.main()
