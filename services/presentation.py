"""
Display helpers for the web client: BRL parsing/formatting and the
per-outcome messages shown next to a calculation.
"""
import math
import re
from typing import Any, Dict, List, Optional

from engine.proposal import CalculationResult, RuleApplied
from engine.rules import ProposedRules

_LEADING_NUMBER = re.compile(r'\d+(?:\.\d*)?|\.\d+')

RULE_TITLES = {
    RuleApplied.EXEMPTION: "Isento de Imposto de Renda",
    RuleApplied.DISCOUNT: "Faixa com Desconto",
    RuleApplied.STANDARD: "Cálculo Padrão",
    RuleApplied.INITIAL: "Aguardando valor",
}

DISCLAIMER = (
    "Estes valores são para fins de simulação, baseados em uma proposta. "
    "A lei final pode ter parâmetros diferentes."
)


def parse_brl_amount(text: Optional[str]) -> float:
    """
    Parse a pt-BR amount such as "7.350,00" into a float.

    Anything other than digits and commas is dropped first, so "R$ 1.234,5"
    reads as 1234.5. Returns NaN when no number can be read.
    """
    if not text:
        return math.nan
    sanitized = re.sub(r'[^0-9,]', '', text).replace(',', '.', 1)
    match = _LEADING_NUMBER.match(sanitized)
    if not match:
        return math.nan
    return float(match.group(0))


def to_monthly(amount: float, period: str = 'monthly') -> float:
    if period == 'annual':
        return amount / 12
    return amount


def format_brl(value: float) -> str:
    """Format as Brazilian Real, e.g. R$ 1.234,56"""
    sign = '-' if value < 0 else ''
    digits = f"{abs(value):,.2f}".translate(str.maketrans(',.', '.,'))
    return f"{sign}R$ {digits}"


def format_percent(fraction: float) -> str:
    return f"{fraction * 100:g}%"


def _rule_description(result: CalculationResult, rules: ProposedRules) -> str:
    if result.rule_applied is RuleApplied.EXEMPTION:
        return f"Pela nova proposta, salários até {format_brl(rules.exemption_limit)} são isentos."
    if result.rule_applied is RuleApplied.DISCOUNT:
        pct = format_percent(result.details.discount_applied)
        return f"Seu salário se enquadra na faixa com {pct} de desconto sobre o IR devido."
    if result.rule_applied is RuleApplied.STANDARD:
        return "Para sua faixa salarial, não há mudanças. O cálculo segue a tabela padrão do IR."
    return "Insira seu salário para simular o cálculo."


def describe_result(result: CalculationResult, rules: ProposedRules) -> Dict[str, Any]:
    """Summary shown next to a result: headline, message and both net salaries."""
    summary = {
        'title': RULE_TITLES[result.rule_applied],
        'description': _rule_description(result, rules),
    }
    if result.rule_applied is RuleApplied.INITIAL:
        summary['net_gain'] = '-'
        return summary

    summary.update({
        'net_gain': format_brl(result.net_difference),
        'current_net_salary': result.current_net_salary,
        'proposed_net_salary': result.proposed_net_salary,
        'formatted': {
            'monthly_salary': format_brl(result.monthly_salary),
            'current_tax': format_brl(result.current_tax),
            'final_tax': format_brl(result.final_tax),
            'current_net_salary': format_brl(result.current_net_salary),
            'proposed_net_salary': format_brl(result.proposed_net_salary),
        },
    })
    return summary


def describe_rules(rules: ProposedRules) -> List[str]:
    lines = [f"Isenção: Salários de até {format_brl(rules.exemption_limit)}"]
    for tier in rules.discount_tiers:
        lines.append(f"Desconto de {format_percent(tier.discount)}: Para salários {tier.label}")
    lines.append(
        f"Sem Mudança: Salários acima de {format_brl(rules.standard_range_start)} seguem a tabela padrão."
    )
    return lines
