"""
Proposed income tax rules: exemption, partial discounts, or unchanged.

calculate_proposed_ir() is the single entry point used by the service layer.
It is a pure function of the salary and the rule set.
"""
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union

from engine.rules import ProposedRules
from engine.taxes import StandardBracket, calculate_standard_ir

logger = logging.getLogger(__name__)


class RuleApplied(str, Enum):
    EXEMPTION = 'exemption'
    DISCOUNT = 'discount'
    STANDARD = 'standard'
    INITIAL = 'initial'


@dataclass(frozen=True)
class EmptyDetails:
    def to_dict(self) -> Dict[str, float]:
        return {}


@dataclass(frozen=True)
class BracketDetails:
    base_tax: float
    aliquot: float
    deduction: float

    @classmethod
    def from_bracket(cls, base_tax: float, bracket: StandardBracket):
        return cls(base_tax=base_tax, aliquot=bracket.rate, deduction=bracket.deduction)

    def to_dict(self) -> Dict[str, float]:
        return {
            'baseTax': self.base_tax,
            'aliquot': self.aliquot,
            'deduction': self.deduction,
        }


@dataclass(frozen=True)
class DiscountDetails:
    base_tax: float
    discount_applied: float
    aliquot: float
    deduction: float

    def to_dict(self) -> Dict[str, float]:
        return {
            'baseTax': self.base_tax,
            'discountApplied': self.discount_applied,
            'aliquot': self.aliquot,
            'deduction': self.deduction,
        }


Details = Union[EmptyDetails, BracketDetails, DiscountDetails]

# Which details shape each outcome carries
DETAILS_BY_RULE = {
    RuleApplied.INITIAL: EmptyDetails,
    RuleApplied.EXEMPTION: BracketDetails,
    RuleApplied.STANDARD: BracketDetails,
    RuleApplied.DISCOUNT: DiscountDetails,
}


@dataclass(frozen=True)
class CalculationResult:
    final_tax: float
    current_tax: float
    net_difference: float
    monthly_salary: float
    rule_applied: RuleApplied
    details: Details = field(default_factory=EmptyDetails)

    def __post_init__(self):
        expected = DETAILS_BY_RULE[self.rule_applied]
        if type(self.details) is not expected:
            raise ValueError(
                f"'{self.rule_applied.value}' result requires {expected.__name__}, "
                f"got {type(self.details).__name__}"
            )

    @property
    def current_net_salary(self) -> float:
        return self.monthly_salary - self.current_tax

    @property
    def proposed_net_salary(self) -> float:
        return self.monthly_salary - self.final_tax

    def to_dict(self) -> Dict[str, Any]:
        """Camel-cased record as consumed by the web client."""
        return {
            'finalTax': self.final_tax,
            'currentTax': self.current_tax,
            'netDifference': self.net_difference,
            'monthlySalary': self.monthly_salary,
            'ruleApplied': self.rule_applied.value,
            'details': self.details.to_dict(),
        }


INITIAL_RESULT = CalculationResult(
    final_tax=0.0,
    current_tax=0.0,
    net_difference=0.0,
    monthly_salary=0.0,
    rule_applied=RuleApplied.INITIAL,
)


def calculate_proposed_ir(monthly_salary: float, rules: ProposedRules) -> CalculationResult:
    """
    Calculate the tax due under the proposed rules.

    Args:
        monthly_salary: gross monthly salary, already normalized to a month
        rules: ProposedRules configuration, read-only

    Branches, first match wins:
        - NaN or non-positive salary: INITIAL_RESULT
        - salary <= exemption_limit: no tax
        - salary <= standard_range_start with a matching tier: discounted tax
        - otherwise: current table tax, unchanged
    """
    if math.isnan(monthly_salary) or monthly_salary <= 0:
        return INITIAL_RESULT

    current_tax, bracket = calculate_standard_ir(monthly_salary)

    if monthly_salary <= rules.exemption_limit:
        final_tax = 0.0
        return CalculationResult(
            final_tax=final_tax,
            current_tax=current_tax,
            net_difference=current_tax - final_tax,
            monthly_salary=monthly_salary,
            rule_applied=RuleApplied.EXEMPTION,
            details=BracketDetails.from_bracket(current_tax, bracket),
        )

    if monthly_salary <= rules.standard_range_start:
        tier = rules.find_tier(monthly_salary)
        if tier is not None:
            final_tax = current_tax * (1 - tier.discount)
            return CalculationResult(
                final_tax=final_tax,
                current_tax=current_tax,
                net_difference=current_tax - final_tax,
                monthly_salary=monthly_salary,
                rule_applied=RuleApplied.DISCOUNT,
                details=DiscountDetails(
                    base_tax=current_tax,
                    discount_applied=tier.discount,
                    aliquot=bracket.rate,
                    deduction=bracket.deduction,
                ),
            )
        # No tier covers this salary: same outcome as above the range
        logger.debug("No discount tier covers salary %.2f, using standard table", monthly_salary)

    return CalculationResult(
        final_tax=current_tax,
        current_tax=current_tax,
        net_difference=0.0,
        monthly_salary=monthly_salary,
        rule_applied=RuleApplied.STANDARD,
        details=BracketDetails.from_bracket(current_tax, bracket),
    )
