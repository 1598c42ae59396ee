from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class DiscountTier:
    limit: float     # inclusive upper bound
    discount: float  # fraction of the standard tax forgiven, 0..1
    label: str


@dataclass(frozen=True)
class ProposedRules:
    """
    Proposed rule set. Expected ordering:
    exemption_limit <= discount_tiers[0].limit <= ... <= standard_range_start.
    The engine does not check it.
    """
    exemption_limit: float
    discount_tiers: Tuple[DiscountTier, ...]
    standard_range_start: float

    def find_tier(self, monthly_salary: float):
        for tier in self.discount_tiers:
            if monthly_salary <= tier.limit:
                return tier
        return None


DEFAULT_PROPOSED_RULES = ProposedRules(
    exemption_limit=5000,
    discount_tiers=(
        DiscountTier(limit=6000, discount=0.75, label="até R$ 6.000,00"),
        DiscountTier(limit=7350, discount=0.50, label="de R$ 6.000,01 a R$ 7.350,00"),
    ),
    standard_range_start=7350,
)
