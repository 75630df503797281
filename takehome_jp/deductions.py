"""Income deductions (所得控除) and the housing loan tax credit.

All amounts are 円/年. Every calculator is a pure function that returns the
amount together with a human-readable formula built from the same numbers.
"""

import math
from dataclasses import dataclass

from takehome_jp.formatting import format_yen
from takehome_jp.params import Dependents, InsurancePremiums


@dataclass(frozen=True)
class DeductionResult:
    """A deduction amount and the formula that produced it."""

    deduction: float
    formula: str


# 給与所得控除（令和2年分以降）
# 162.5万円以下は 収入×40%（上限55万円）、850万円超は195万円で頭打ち
_SALARY_DEDUCTION_FIRST_LIMIT = 1_625_000
_SALARY_DEDUCTION_FIRST_RATE = 0.40
_SALARY_DEDUCTION_FIRST_CAP = 550_000
# (上限収入, 率, 加算額)
_SALARY_DEDUCTION_BRACKETS: tuple[tuple[int, float, int], ...] = (
    (1_800_000, 0.30, 162_500),
    (3_600_000, 0.20, 342_500),
    (6_600_000, 0.10, 702_500),
    (8_500_000, 0.05, 1_032_500),
)
SALARY_DEDUCTION_MAX = 1_950_000


def calc_salary_deduction(salary: float) -> float:
    """Return the statutory salary-income deduction (給与所得控除額).

    Not rounded: the lower brackets produce fractional yen which are
    floored later in the tax calculation.
    """
    if salary <= _SALARY_DEDUCTION_FIRST_LIMIT:
        return min(_SALARY_DEDUCTION_FIRST_CAP, salary * _SALARY_DEDUCTION_FIRST_RATE)
    for upper, rate, offset in _SALARY_DEDUCTION_BRACKETS:
        if salary <= upper:
            return salary * rate + offset
    return SALARY_DEDUCTION_MAX


def describe_salary_deduction(salary: float) -> DeductionResult:
    deduction = calc_salary_deduction(salary)
    if salary <= _SALARY_DEDUCTION_FIRST_LIMIT:
        formula = (
            f"給与所得控除額 = min({format_yen(_SALARY_DEDUCTION_FIRST_CAP)}, "
            f"{format_yen(salary)}円 × 40%) = {format_yen(deduction)}円"
        )
    elif salary > _SALARY_DEDUCTION_BRACKETS[-1][0]:
        formula = f"給与所得控除額 = {format_yen(SALARY_DEDUCTION_MAX)}円（上限額）"
    else:
        _, rate, offset = next(b for b in _SALARY_DEDUCTION_BRACKETS if salary <= b[0])
        formula = (
            f"給与所得控除額 = {format_yen(salary)}円 × {rate:.0%} + {format_yen(offset)} "
            f"= {format_yen(deduction)}円"
        )
    return DeductionResult(deduction, formula)


# 医療費控除
MEDICAL_THRESHOLD_CAP = 100_000
MEDICAL_THRESHOLD_RATE = 0.05
MEDICAL_DEDUCTION_CAP = 2_000_000


@dataclass(frozen=True)
class MedicalDeduction:
    deduction: int
    threshold: int
    formula: str


def calc_medical_deduction(medical_expenses: float, income: float) -> MedicalDeduction:
    """Medical expense deduction (医療費控除).

    threshold = min(10万円, 所得×5%); deduction = clamp(支払額 - threshold, 0, 200万円).
    ``income`` is salary income after the salary deduction.
    """
    if medical_expenses <= 0:
        return MedicalDeduction(0, 0, "医療費控除 = 0（医療費の支払いなし）")

    threshold = min(MEDICAL_THRESHOLD_CAP, math.floor(income * MEDICAL_THRESHOLD_RATE))
    deduction = min(MEDICAL_DEDUCTION_CAP, max(0, medical_expenses - threshold))
    return MedicalDeduction(
        deduction=deduction,
        threshold=threshold,
        formula=(
            f"医療費控除 = min({format_yen(MEDICAL_DEDUCTION_CAP)}, max(0, "
            f"{format_yen(medical_expenses)}円 - {format_yen(threshold)}円)) = {format_yen(deduction)}円"
        ),
    )


# 生命保険料控除（新制度、所得税）
LIFE_INSURANCE_CATEGORY_CAP = 40_000
LIFE_INSURANCE_TOTAL_CAP = 120_000


@dataclass(frozen=True)
class LifeInsuranceDeduction:
    general_deduction: int
    medical_deduction: int
    pension_deduction: int
    total: int
    formula: str


def _life_insurance_category(premium: float) -> int:
    """Deduction for a single life-insurance category (一般・介護医療・個人年金)."""
    if premium <= 20_000:
        return premium
    if premium <= 40_000:
        return math.floor(premium * 0.5 + 10_000)
    if premium <= 80_000:
        return math.floor(premium * 0.25 + 20_000)
    return LIFE_INSURANCE_CATEGORY_CAP


def calc_life_insurance_deduction(premiums: InsurancePremiums) -> LifeInsuranceDeduction:
    general = _life_insurance_category(premiums.general_life)
    medical = _life_insurance_category(premiums.medical_life)
    pension = _life_insurance_category(premiums.pension)
    total = min(LIFE_INSURANCE_TOTAL_CAP, general + medical + pension)
    return LifeInsuranceDeduction(
        general_deduction=general,
        medical_deduction=medical,
        pension_deduction=pension,
        total=total,
        formula=(
            f"生命保険料控除 = min({format_yen(LIFE_INSURANCE_TOTAL_CAP)}, "
            f"一般{format_yen(general)}円 + 介護医療{format_yen(medical)}円 + "
            f"個人年金{format_yen(pension)}円) = {format_yen(total)}円"
        ),
    )


# 地震保険料控除（旧長期損害保険料との合算上限5万円）
EARTHQUAKE_DEDUCTION_CAP = 50_000
LEGACY_LONG_TERM_CAP = 10_000


def _legacy_long_term_deduction(premium: float) -> int:
    if premium <= 5_000:
        return premium
    if premium <= 15_000:
        return math.floor(premium * 0.5 + 2_500)
    return LEGACY_LONG_TERM_CAP


def calc_earthquake_insurance_deduction(premiums: InsurancePremiums) -> DeductionResult:
    earthquake = premiums.earthquake
    legacy = premiums.legacy_long_term
    if earthquake <= 0 and legacy <= 0:
        return DeductionResult(0, "地震保険料控除 = 0（地震保険料の支払いなし）")

    earthquake_deduction = min(EARTHQUAKE_DEDUCTION_CAP, earthquake)
    legacy_deduction = _legacy_long_term_deduction(legacy)
    if earthquake > 0 and legacy > 0:
        deduction = min(EARTHQUAKE_DEDUCTION_CAP, earthquake_deduction + legacy_deduction)
        formula = (
            f"地震保険料控除 = min({format_yen(EARTHQUAKE_DEDUCTION_CAP)}, "
            f"地震{format_yen(earthquake_deduction)}円 + 旧長期{format_yen(legacy_deduction)}円) "
            f"= {format_yen(deduction)}円"
        )
    elif earthquake > 0:
        deduction = earthquake_deduction
        formula = (
            f"地震保険料控除 = min({format_yen(EARTHQUAKE_DEDUCTION_CAP)}, "
            f"{format_yen(earthquake)}円) = {format_yen(deduction)}円"
        )
    else:
        deduction = legacy_deduction
        formula = f"旧長期損害保険料控除 = {format_yen(deduction)}円"
    return DeductionResult(deduction, formula)


# 配偶者控除・扶養控除
SPOUSE_INCOME_LIMIT = 480_000
SPOUSE_DEDUCTION = 380_000
ELDERLY_DEDUCTION = 480_000   # 老人扶養（同居老親等以外）
SPECIFIC_DEDUCTION = 630_000  # 特定扶養
GENERAL_DEDUCTION = 380_000   # 一般扶養


@dataclass(frozen=True)
class DependentDeduction:
    spouse: int
    elderly: int
    specific: int
    general: int
    total: int
    formula: str


def calc_dependent_deduction(dependents: Dependents) -> DependentDeduction:
    """Spouse + dependent deductions. Spouse is all-or-nothing at the income limit."""
    spouse = (
        SPOUSE_DEDUCTION
        if dependents.spouse and dependents.spouse_income <= SPOUSE_INCOME_LIMIT
        else 0
    )
    elderly = dependents.elderly * ELDERLY_DEDUCTION
    specific = dependents.specific * SPECIFIC_DEDUCTION
    general = dependents.general * GENERAL_DEDUCTION
    total = spouse + elderly + specific + general
    return DependentDeduction(
        spouse=spouse,
        elderly=elderly,
        specific=specific,
        general=general,
        total=total,
        formula=(
            f"扶養控除等 = 配偶者{format_yen(spouse)}円 + 老人{format_yen(elderly)}円 + "
            f"特定{format_yen(specific)}円 + 一般{format_yen(general)}円 = {format_yen(total)}円"
        ),
    )


# 所得金額調整控除（子育て・介護）
INCOME_ADJUSTMENT_THRESHOLD = 8_500_000
INCOME_ADJUSTMENT_RATE = 0.10


def calc_income_adjustment_deduction(salary: float, has_special_condition: bool) -> DeductionResult:
    """Income adjustment deduction: 10% of salary above 850万円, flag required.

    No taper below the threshold.
    """
    if not has_special_condition or salary <= INCOME_ADJUSTMENT_THRESHOLD:
        return DeductionResult(0, "所得金額調整控除 = 0（対象外）")
    deduction = math.floor((salary - INCOME_ADJUSTMENT_THRESHOLD) * INCOME_ADJUSTMENT_RATE)
    return DeductionResult(
        deduction,
        f"所得金額調整控除 = ({format_yen(salary)}円 - {format_yen(INCOME_ADJUSTMENT_THRESHOLD)}円) "
        f"× 10% = {format_yen(deduction)}円",
    )


# 住宅ローン控除（年末残高×1%、所得税→住民税の順に充当）
HOUSING_LOAN_CREDIT_RATE = 0.01
HOUSING_LOAN_CREDIT_CAP = 400_000
HOUSING_LOAN_RESIDENT_TAX_CAP = 136_500


@dataclass(frozen=True)
class HousingLoanCredit:
    """Housing loan credit before allocation.

    ``income_tax`` is the nominal amount claimable against income tax;
    ``resident_tax`` is the ceiling for the resident-tax side. The actual split
    is resolved in :mod:`takehome_jp.tax`.
    """

    total: int
    income_tax: int
    resident_tax: int
    formula: str


def calc_housing_loan_credit(loan_balance: float) -> HousingLoanCredit:
    if loan_balance <= 0:
        return HousingLoanCredit(0, 0, 0, "住宅ローン控除 = 0（住宅ローンなし）")
    total = min(HOUSING_LOAN_CREDIT_CAP, math.floor(loan_balance * HOUSING_LOAN_CREDIT_RATE))
    return HousingLoanCredit(
        total=total,
        income_tax=total,
        resident_tax=min(HOUSING_LOAN_RESIDENT_TAX_CAP, total),
        formula=(
            f"住宅ローン控除額 = min({format_yen(HOUSING_LOAN_CREDIT_CAP)}, "
            f"{format_yen(loan_balance)}円 × 1%) = {format_yen(total)}円"
        ),
    )
