"""Time-value-of-money helpers shared by the projection engine."""


def monthly_rate(annual_rate: float) -> float:
    """Monthly rate that compounds to `annual_rate` over 12 months (not annual_rate / 12)."""
    return (1.0 + annual_rate) ** (1.0 / 12.0) - 1.0


def future_value_lump_sum(principal: float, annual_rate: float, years: float) -> float:
    return principal * (1.0 + annual_rate) ** years


def future_value_annuity(payment: float, rate: float, total_months: int) -> float:
    """
    Future value of an ordinary annuity (payment at the END of each month).

    A zero rate has no growth term, so the closed form collapses to payment * months.
    """
    if rate == 0:
        return payment * total_months
    return payment * ((1.0 + rate) ** total_months - 1.0) / rate


def portfolio_value(
    initial_amount: float,
    monthly_contribution: float,
    annual_rate: float,
    years: int,
) -> float:
    """Unrounded value after `years` of growth on the lump sum plus monthly contributions."""
    lump_sum = future_value_lump_sum(initial_amount, annual_rate, years)
    contributions = future_value_annuity(monthly_contribution, monthly_rate(annual_rate), years * 12)
    return lump_sum + contributions


def round_money(value: float) -> float:
    return round(value, 2)
