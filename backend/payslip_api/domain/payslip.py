from decimal import Decimal
from pydantic import BaseModel, ConfigDict

ZERO = Decimal("0")


class PayslipAmounts(BaseModel):
    """The eight client-supplied money fields of a payslip."""

    model_config = ConfigDict(frozen=True)

    # --- earnings ---
    basic_salary: Decimal
    house_allowance: Decimal = ZERO
    transport_allowance: Decimal = ZERO
    other_earnings: Decimal = ZERO
    # --- deductions ---
    tax: Decimal = ZERO
    insurance: Decimal = ZERO
    pension: Decimal = ZERO
    other_deductions: Decimal = ZERO


class PayslipTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_earnings: Decimal
    total_deductions: Decimal
    net_pay: Decimal


def compute_totals(amounts: PayslipAmounts) -> PayslipTotals:
    """Derive the totals and net pay of a payslip.

    Sums are exact ``Decimal`` additions. Net pay is not clamped and may be
    negative when deductions exceed earnings.
    """
    total_earnings = (
        amounts.basic_salary
        + amounts.house_allowance
        + amounts.transport_allowance
        + amounts.other_earnings
    )
    total_deductions = (
        amounts.tax
        + amounts.insurance
        + amounts.pension
        + amounts.other_deductions
    )
    return PayslipTotals(
        total_earnings=total_earnings,
        total_deductions=total_deductions,
        net_pay=total_earnings - total_deductions,
    )
