"""Income tax and resident tax with housing loan credit allocation."""

import math
from dataclasses import dataclass

from takehome_jp.deductions import HousingLoanCredit
from takehome_jp.params import ItemizedDeductions

# 所得税累進税率テーブル（国税庁 令和7年分）
# (上限課税所得・円, 税率, 控除額・円)
_INCOME_TAX_BRACKETS: tuple[tuple[float, float, int], ...] = (
    (1_950_000, 0.05, 0),
    (3_300_000, 0.10, 97_500),
    (6_950_000, 0.20, 427_500),
    (9_000_000, 0.23, 636_000),
    (18_000_000, 0.33, 1_536_000),
    (40_000_000, 0.40, 2_796_000),
    (float("inf"), 0.45, 4_796_000),
)

INCOME_TAX_BASIC_DEDUCTION = 480_000    # 基礎控除（所得税）
RESIDENT_TAX_BASIC_DEDUCTION = 430_000  # 基礎控除（住民税）
RECONSTRUCTION_SURTAX_FACTOR = 1.021    # 復興特別所得税 2.1%
RESIDENT_TAX_RATE = 0.10  # 住民税率（道府県民税4% + 市町村民税6%）
RESIDENT_TAX_PER_CAPITA = 5_000  # 均等割


def calc_taxable_base(salary_income: float, basic_deduction: int, deductions: ItemizedDeductions) -> float:
    """課税所得 = max(0, 給与所得 - 基礎控除 - 所得控除合計)."""
    return max(0, salary_income - basic_deduction - deductions.total)


def calc_progressive_income_tax(taxable_income: float) -> float:
    """Base income tax from the progressive table, before surtax and credits."""
    for upper, rate, subtraction in _INCOME_TAX_BRACKETS:
        if taxable_income <= upper:
            return taxable_income * rate - subtraction
    return 0.0  # pragma: no cover


def calc_marginal_income_tax_rate(taxable_income: float) -> float:
    """Return marginal tax rate (所得税+住民税) for a given taxable income (円).

    Returns combined marginal rate (income tax rate + 10% resident tax).
    """
    income_tax_rate = _INCOME_TAX_BRACKETS[0][1]
    for upper, rate, _ in _INCOME_TAX_BRACKETS:
        if taxable_income <= upper:
            income_tax_rate = rate
            break
    return income_tax_rate + RESIDENT_TAX_RATE


@dataclass(frozen=True)
class IncomeTaxResult:
    tax: int
    taxable_income: float
    tax_before_credit: int
    housing_loan_credit_used: int


@dataclass(frozen=True)
class ResidentTaxResult:
    tax: int
    taxable_income: float
    tax_before_credit: int
    housing_loan_credit_used: int


def calc_income_tax(
    salary_income: float,
    deductions: ItemizedDeductions,
    housing_loan: HousingLoanCredit,
) -> IncomeTaxResult:
    """Income tax including the reconstruction surtax, net of housing loan credit.

    The credit applied is bounded by the tax itself; whatever is not consumed
    here is left for the resident tax.
    """
    taxable_income = calc_taxable_base(salary_income, INCOME_TAX_BASIC_DEDUCTION, deductions)
    base_tax = calc_progressive_income_tax(taxable_income)
    tax_before_credit = math.floor(base_tax * RECONSTRUCTION_SURTAX_FACTOR)
    credit_used = max(0, min(housing_loan.income_tax, tax_before_credit))
    return IncomeTaxResult(
        tax=max(0, tax_before_credit - housing_loan.income_tax),
        taxable_income=taxable_income,
        tax_before_credit=tax_before_credit,
        housing_loan_credit_used=credit_used,
    )


def calc_resident_housing_loan_credit(housing_loan: HousingLoanCredit, income_tax_credit_used: int) -> int:
    """Housing loan credit carried over to resident tax.

    min(住民税側上限, max(0, 控除総額 - 所得税で実際に控除された額))
    """
    remaining = max(0, housing_loan.total - income_tax_credit_used)
    return min(housing_loan.resident_tax, remaining)


def calc_resident_tax(
    salary_income: float,
    deductions: ItemizedDeductions,
    housing_loan: HousingLoanCredit,
    income_tax_credit_used: int = 0,
) -> ResidentTaxResult:
    """Resident tax (所得割10% + 均等割5,000円) net of the remaining housing loan credit."""
    taxable_income = calc_taxable_base(salary_income, RESIDENT_TAX_BASIC_DEDUCTION, deductions)
    tax_before_credit = math.floor(taxable_income * RESIDENT_TAX_RATE + RESIDENT_TAX_PER_CAPITA)
    credit = calc_resident_housing_loan_credit(housing_loan, income_tax_credit_used)
    return ResidentTaxResult(
        tax=max(0, tax_before_credit - credit),
        taxable_income=taxable_income,
        tax_before_credit=tax_before_credit,
        housing_loan_credit_used=credit,
    )
