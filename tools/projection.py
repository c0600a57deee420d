import math
from dataclasses import dataclass
from typing import Optional

from tools.formatting import fmt_count, fmt_money
from tools.numbers import round_half_up


@dataclass(frozen=True)
class FinancialProfile:
    monthly_rent: float = 0.0
    maintenance_fees: float = 0.0
    insurance_taxes: float = 0.0
    management_fee_rate: float = 0.05
    reserve_fund: float = 0.0
    other_expenses: float = 0.0


@dataclass(frozen=True)
class FinancialMetrics:
    management_fee: float
    net_monthly_income: float
    net_income_per_token: float
    yield_percent: float


@dataclass(frozen=True)
class Projection:
    tokens_purchased: int
    adjusted_investment: float
    estimated_monthly_income: float
    net_monthly_income: float
    net_income_per_token: float
    yield_percent: float


@dataclass(frozen=True)
class InvestmentSlider:
    min: float
    max: float
    step: float
    value: float


def management_fee(profile: FinancialProfile) -> float:
    return round_half_up(profile.monthly_rent * profile.management_fee_rate)


def net_monthly_income(profile: FinancialProfile) -> float:
    net = (
        profile.monthly_rent
        - profile.maintenance_fees
        - profile.insurance_taxes
        - management_fee(profile)
        - profile.reserve_fund
        - profile.other_expenses
    )
    return max(0.0, round_half_up(net))


def net_income_per_token(profile: FinancialProfile, total_tokens: int) -> float:
    if total_tokens <= 0:
        return 0.0
    return round_half_up(net_monthly_income(profile) / total_tokens, 2)


def annual_yield_percent(monthly_net: float, property_value: float) -> float:
    """Annualised net income over property value, one decimal."""
    if property_value <= 0:
        return 0.0
    return round_half_up(monthly_net * 12 / property_value * 100, 1)


def derive_metrics(profile: FinancialProfile, total_tokens: int, property_value: float) -> FinancialMetrics:
    net = net_monthly_income(profile)
    return FinancialMetrics(
        management_fee=management_fee(profile),
        net_monthly_income=net,
        net_income_per_token=net_income_per_token(profile, total_tokens),
        yield_percent=annual_yield_percent(net, property_value),
    )


def project(
    profile: FinancialProfile,
    total_tokens: int,
    investment_amount: float,
    token_price: float,
    property_value: Optional[float] = None,
) -> Projection:
    """
    Income projection for an investment size. The amount is always rounded
    down to a whole number of tokens.
    """
    if property_value is None:
        property_value = total_tokens * token_price
    metrics = derive_metrics(profile, total_tokens, property_value)

    if token_price <= 0 or not math.isfinite(investment_amount) or investment_amount <= 0:
        tokens = 0
    else:
        tokens = int(math.floor(investment_amount / token_price))

    return Projection(
        tokens_purchased=tokens,
        adjusted_investment=tokens * token_price,
        estimated_monthly_income=round_half_up(tokens * metrics.net_income_per_token, 2),
        net_monthly_income=metrics.net_monthly_income,
        net_income_per_token=metrics.net_income_per_token,
        yield_percent=metrics.yield_percent,
    )


def investment_slider(
    token_price: float,
    property_value: float,
    min_investment: float = 100,
    max_multiplier: int = 400,
    default_tokens: int = 10,
) -> InvestmentSlider:
    lo = max(min_investment, token_price)
    hi = max(lo, min(property_value, lo * max_multiplier))
    return InvestmentSlider(min=lo, max=hi, step=token_price, value=min(hi, token_price * default_tokens))


def management_fee_label(profile: FinancialProfile) -> str:
    return f"Management Fee ({int(round_half_up(profile.management_fee_rate * 100))}%)"


def yield_summary(yield_percent: float) -> str:
    return f"Projected net yield of {yield_percent:.1f}% with reserves for upkeep and vacancies."


def yield_note(p: Projection) -> str:
    if not p.tokens_purchased:
        return "Adjust the slider to see projected passive income at different commitment levels."
    return (
        f"Investing {fmt_money(p.adjusted_investment)} secures {fmt_count(p.tokens_purchased)} tokens "
        f"with an estimated {fmt_money(p.estimated_monthly_income, 2)} monthly distribution."
    )

