'''
Payroll totals.
'''
from decimal import Decimal

from ..models.finance import PayrollEntry


def get_payroll_total(entry: PayrollEntry) -> Decimal:
    """
    Returns the payable total of a payroll line.
    A stored `total_amount` wins; otherwise it is base + bonus - deductions,
    with missing parts read as zero. The result is not clamped at zero.
    """
    if entry.total_amount is not None:
        return entry.total_amount

    base = entry.base_amount or Decimal(0)
    bonus = entry.bonus or Decimal(0)
    deductions = entry.deductions or Decimal(0)
    return base + bonus - deductions
