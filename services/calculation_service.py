import math
import logging

import numpy as np
import pandas as pd

import config
from engine.proposal import calculate_proposed_ir
from engine.rules import DEFAULT_PROPOSED_RULES, ProposedRules
from engine.taxes import STANDARD_BRACKETS
from schemas.calculation import CalculationRequest, SalaryTableRequest, ProposedRulesSchema
from services.presentation import describe_result, describe_rules, parse_brl_amount, to_monthly, DISCLAIMER

logger = logging.getLogger(__name__)

TABLE_COLUMNS = [
    'monthly_salary', 'current_tax', 'final_tax', 'net_difference',
    'rule_applied', 'current_net_salary', 'proposed_net_salary',
]


def map_to_engine_rules(schema: ProposedRulesSchema = None) -> ProposedRules:
    """Convert the optional Pydantic rules to the engine rule set"""
    if schema is None:
        return DEFAULT_PROPOSED_RULES
    return schema.to_rules()


def resolve_monthly_salary(request: CalculationRequest) -> float:
    """Salary text first, then the numeric field; NaN when neither is usable."""
    if request.salary_text is not None:
        amount = parse_brl_amount(request.salary_text)
    elif request.salary is not None:
        amount = request.salary
    else:
        amount = math.nan
    monthly = to_monthly(amount, request.period)
    # Text can parse to a number too large for a float
    if not math.isfinite(monthly):
        return math.nan
    return monthly


def _json_value(val):
    """NaN to None, numpy scalars to plain Python"""
    if pd.isna(val):
        return None
    if hasattr(val, 'item'):
        return val.item()
    return val


def format_results(df: pd.DataFrame) -> dict:
    """Format a results frame for the API response"""
    records = [
        {col: _json_value(val) for col, val in record.items()}
        for record in df.to_dict(orient='records')
    ]
    return {
        'results': records,
        'columns': list(df.columns)
    }


def salary_grid(start: float, stop: float, step: float) -> np.ndarray:
    if step <= 0:
        raise ValueError("step must be positive")
    if stop < start:
        raise ValueError("stop must not be lower than start")

    span = np.floor((stop - start) / step + 1e-9)
    # Huge ranges over tiny steps overflow to inf
    if not math.isfinite(span) or span + 1 > config.MAX_TABLE_ROWS:
        raise ValueError(f"Table would have more than {config.MAX_TABLE_ROWS} rows")
    num_rows = int(span) + 1

    # Rounded to cents so repeated float steps do not drift
    return np.round(start + step * np.arange(num_rows), 2)


def build_salary_table(start: float, stop: float, step: float, rules: ProposedRules) -> pd.DataFrame:
    """
    Evaluate the proposal over a grid of monthly salaries.

    One row per salary from start to stop (inclusive), spaced by step.
    """
    records = []
    for salary in salary_grid(start, stop, step):
        result = calculate_proposed_ir(float(salary), rules)
        records.append({
            'monthly_salary': float(salary),
            'current_tax': result.current_tax,
            'final_tax': result.final_tax,
            'net_difference': result.net_difference,
            'rule_applied': result.rule_applied.value,
            'current_net_salary': float(salary) - result.current_tax,
            'proposed_net_salary': float(salary) - result.final_tax,
        })

    logger.info("Built salary table with %d rows (%.2f to %.2f)", len(records), start, stop)
    return pd.DataFrame(records, columns=TABLE_COLUMNS)


def run_calculation_service(request: CalculationRequest) -> dict:
    """
    Service to run one calculation and describe it for display.
    """
    rules = map_to_engine_rules(request.rules)
    monthly_salary = resolve_monthly_salary(request)
    result = calculate_proposed_ir(monthly_salary, rules)

    return {
        'success': True,
        'result': result.to_dict(),
        'summary': describe_result(result, rules),
    }


def run_salary_table_service(request: SalaryTableRequest) -> dict:
    rules = map_to_engine_rules(request.rules)
    df = build_salary_table(request.start, request.stop, request.step, rules)
    formatted = format_results(df)
    return {
        'success': True,
        **formatted
    }


def export_salary_table_csv(request: SalaryTableRequest) -> str:
    rules = map_to_engine_rules(request.rules)
    df = build_salary_table(request.start, request.stop, request.step, rules)
    return df.to_csv(index=False)


def rules_info_service(rules: ProposedRules = DEFAULT_PROPOSED_RULES) -> dict:
    return {
        'success': True,
        'rules': ProposedRulesSchema.from_rules(rules).model_dump(),
        'descriptions': describe_rules(rules),
        'disclaimer': DISCLAIMER,
    }


def standard_brackets_service() -> dict:
    """Current progressive table; the open-ended last limit is rendered as None"""
    brackets = [
        {
            'limit': None if math.isinf(b.limit) else b.limit,
            'rate': b.rate,
            'deduction': b.deduction,
        }
        for b in STANDARD_BRACKETS
    ]
    return {'success': True, 'brackets': brackets}
