"""Furusato nozei (ふるさと納税) donation limit estimate."""

import math
from dataclasses import dataclass

from takehome_jp.formatting import format_yen
from takehome_jp.params import ItemizedDeductions
from takehome_jp.tax import (
    INCOME_TAX_BASIC_DEDUCTION,
    RESIDENT_TAX_BASIC_DEDUCTION,
    calc_taxable_base,
)

# 限度額 ≈ (所得税課税所得×0.4% + 住民税課税所得×0.6%) × 2
_INCOME_TAX_BASE_RATE = 0.004
_RESIDENT_TAX_BASE_RATE = 0.006
_LIMIT_MULTIPLIER = 2


@dataclass(frozen=True)
class FurusatoNozeiLimit:
    limit: int
    income_tax_base: float
    resident_tax_base: float
    formula: str


def calc_furusato_nozei_limit(salary_income: float, deductions: ItemizedDeductions) -> FurusatoNozeiLimit:
    """Approximate maximum donation fully offset by tax credits (自己負担2,000円を除く).

    Closed-form approximation over both taxable bases, not the statutory
    credit formula.
    """
    income_tax_base = calc_taxable_base(salary_income, INCOME_TAX_BASIC_DEDUCTION, deductions)
    resident_tax_base = calc_taxable_base(salary_income, RESIDENT_TAX_BASIC_DEDUCTION, deductions)
    limit = math.floor(
        (income_tax_base * _INCOME_TAX_BASE_RATE + resident_tax_base * _RESIDENT_TAX_BASE_RATE)
        * _LIMIT_MULTIPLIER
    )
    return FurusatoNozeiLimit(
        limit=limit,
        income_tax_base=income_tax_base,
        resident_tax_base=resident_tax_base,
        formula=(
            f"ふるさと納税の限度額 = (所得税の課税所得金額({format_yen(income_tax_base)}円) × 0.4% + "
            f"住民税の課税所得金額({format_yen(resident_tax_base)}円) × 0.6%) × 2 = {format_yen(limit)}円"
        ),
    )
