from typing import List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

from engine.rules import DiscountTier, ProposedRules


class DiscountTierSchema(BaseModel):
    """Single discount band of the proposal"""
    limit: float = Field(gt=0, allow_inf_nan=False)
    discount: float = Field(ge=0, le=1)
    label: str = ''


class ProposedRulesSchema(BaseModel):
    """Proposed rule set with ordering validation"""
    exemption_limit: float = Field(ge=0, allow_inf_nan=False)
    discount_tiers: List[DiscountTierSchema] = Field(default_factory=list)
    standard_range_start: float = Field(ge=0, allow_inf_nan=False)

    @model_validator(mode='after')
    def check_ordering(self):
        limits = [self.exemption_limit]
        limits += [tier.limit for tier in self.discount_tiers]
        limits.append(self.standard_range_start)
        if any(a > b for a, b in zip(limits, limits[1:])):
            raise ValueError(
                "Limits must be ascending: exemption_limit <= discount tier limits <= standard_range_start"
            )
        return self

    def to_rules(self) -> ProposedRules:
        return ProposedRules(
            exemption_limit=self.exemption_limit,
            discount_tiers=tuple(
                DiscountTier(limit=t.limit, discount=t.discount, label=t.label)
                for t in self.discount_tiers
            ),
            standard_range_start=self.standard_range_start,
        )

    @classmethod
    def from_rules(cls, rules: ProposedRules) -> 'ProposedRulesSchema':
        return cls(
            exemption_limit=rules.exemption_limit,
            discount_tiers=[
                DiscountTierSchema(limit=t.limit, discount=t.discount, label=t.label)
                for t in rules.discount_tiers
            ],
            standard_range_start=rules.standard_range_start,
        )


class CalculationRequest(BaseModel):
    """
    Salary as a number or as pt-BR text ("7.000,00").
    Text wins when both are given. Missing salary yields the initial result.
    """
    salary: Optional[float] = Field(default=None, allow_inf_nan=False)
    salary_text: Optional[str] = None
    period: Literal['monthly', 'annual'] = 'monthly'
    rules: Optional[ProposedRulesSchema] = None


class SalaryTableRequest(BaseModel):
    """Monthly salary grid, stop inclusive"""
    start: float = Field(ge=0, default=0, allow_inf_nan=False)
    stop: float = Field(gt=0, default=10000, allow_inf_nan=False)
    step: float = Field(gt=0, default=500, allow_inf_nan=False)
    rules: Optional[ProposedRulesSchema] = None
