"""Annual take-home pay (手取り) calculation combining every tax and deduction."""

import math
from collections.abc import Mapping
from dataclasses import dataclass

from takehome_jp.deductions import (
    DeductionResult,
    DependentDeduction,
    HousingLoanCredit,
    LifeInsuranceDeduction,
    MedicalDeduction,
    calc_dependent_deduction,
    calc_earthquake_insurance_deduction,
    calc_housing_loan_credit,
    calc_income_adjustment_deduction,
    calc_life_insurance_deduction,
    calc_medical_deduction,
    describe_salary_deduction,
)
from takehome_jp.furusato import FurusatoNozeiLimit, calc_furusato_nozei_limit
from takehome_jp.params import Dependents, InsurancePremiums, ItemizedDeductions
from takehome_jp.social_insurance import SocialInsurance, calc_social_insurance
from takehome_jp.tax import IncomeTaxResult, ResidentTaxResult, calc_income_tax, calc_resident_tax


@dataclass(frozen=True)
class NetIncomeResult:
    """Every intermediate amount of one take-home calculation."""

    salary: float
    medical_expenses: float
    loan_balance: float
    salary_deduction: DeductionResult
    salary_income: float
    medical_deduction: MedicalDeduction
    life_insurance: LifeInsuranceDeduction
    earthquake_insurance: DeductionResult
    dependent_deduction: DependentDeduction
    income_adjustment: DeductionResult
    housing_loan: HousingLoanCredit
    income_tax_detail: IncomeTaxResult
    resident_tax_detail: ResidentTaxResult
    insurance: SocialInsurance
    furusato_nozei: FurusatoNozeiLimit
    net_income: float

    @property
    def income_tax(self) -> int:
        return self.income_tax_detail.tax

    @property
    def resident_tax(self) -> int:
        return self.resident_tax_detail.tax

    @property
    def monthly_net_income(self) -> int:
        return math.floor(self.net_income / 12)

    def to_dict(self) -> dict:
        """Render as the camelCase record consumed by the web form."""
        life = self.life_insurance
        dep = self.dependent_deduction
        return {
            "salary": self.salary,
            "incomeTax": self.income_tax,
            "residentTax": self.resident_tax,
            "insurance": {
                "health": self.insurance.health,
                "pension": self.insurance.pension,
                "employment": self.insurance.employment,
                "total": self.insurance.total,
                "standardMonthlyRemuneration": self.insurance.standard_monthly_remuneration,
            },
            "medicalExpenses": self.medical_expenses,
            "medicalDeduction": {
                "deduction": self.medical_deduction.deduction,
                "threshold": self.medical_deduction.threshold,
                "formula": self.medical_deduction.formula,
            },
            "housingLoan": {
                "balance": self.loan_balance,
                "deduction": {
                    "total": self.housing_loan.total,
                    "incomeTax": self.income_tax_detail.housing_loan_credit_used,
                    "residentTax": self.resident_tax_detail.housing_loan_credit_used,
                    "formula": self.housing_loan.formula,
                },
            },
            "insuranceDeductions": {
                "life": {
                    "generalDeduction": life.general_deduction,
                    "medicalDeduction": life.medical_deduction,
                    "pensionDeduction": life.pension_deduction,
                    "total": life.total,
                    "formula": life.formula,
                },
                "earthquake": {
                    "deduction": self.earthquake_insurance.deduction,
                    "formula": self.earthquake_insurance.formula,
                },
            },
            "furusatoNozei": {
                "limit": self.furusato_nozei.limit,
                "formula": self.furusato_nozei.formula,
            },
            "dependentDeduction": {
                "spouse": dep.spouse,
                "elderly": dep.elderly,
                "specific": dep.specific,
                "general": dep.general,
                "total": dep.total,
                "formula": dep.formula,
            },
            "incomeAdjustment": {
                "deduction": self.income_adjustment.deduction,
                "formula": self.income_adjustment.formula,
            },
            "salaryDeduction": {
                "deduction": math.floor(self.salary_deduction.deduction),
                "formula": self.salary_deduction.formula,
            },
            "salaryIncome": math.floor(self.salary_income),
            "taxableIncome": {
                "incomeTax": math.floor(self.income_tax_detail.taxable_income),
                "residentTax": math.floor(self.resident_tax_detail.taxable_income),
            },
            "netIncome": self.net_income,
            "monthlyNetIncome": self.monthly_net_income,
        }


def calculate_net_income(
    salary: float,
    medical_expenses: float = 0,
    loan_balance: float = 0,
    insurances: "InsurancePremiums | Mapping | None" = None,
    dependents: "Dependents | Mapping | None" = None,
    has_special_condition: bool = False,
) -> NetIncomeResult:
    """Estimate annual take-home pay from gross salary (円/年).

    Order matters: the resident tax only receives the housing loan credit that
    the income tax could not absorb.
    """
    premiums = InsurancePremiums.from_mapping(insurances)
    family = Dependents.from_mapping(dependents)

    salary_deduction = describe_salary_deduction(salary)
    income_after_salary_deduction = salary - salary_deduction.deduction

    medical = calc_medical_deduction(medical_expenses, income_after_salary_deduction)
    life = calc_life_insurance_deduction(premiums)
    earthquake = calc_earthquake_insurance_deduction(premiums)
    dependent = calc_dependent_deduction(family)
    adjustment = calc_income_adjustment_deduction(salary, has_special_condition)
    housing_loan = calc_housing_loan_credit(loan_balance)

    # 所得金額調整控除は給与所得から差し引く
    salary_income = income_after_salary_deduction - adjustment.deduction
    deductions = ItemizedDeductions(
        medical=medical.deduction,
        life_insurance=life.total,
        earthquake=earthquake.deduction,
        dependents=dependent.total,
    )

    income_tax = calc_income_tax(salary_income, deductions, housing_loan)
    resident_tax = calc_resident_tax(
        salary_income, deductions, housing_loan, income_tax.housing_loan_credit_used,
    )
    insurance = calc_social_insurance(salary)
    # 寄附上限の試算は所得金額調整控除を含めない
    furusato = calc_furusato_nozei_limit(income_after_salary_deduction, deductions)

    return NetIncomeResult(
        salary=salary,
        medical_expenses=medical_expenses,
        loan_balance=loan_balance,
        salary_deduction=salary_deduction,
        salary_income=salary_income,
        medical_deduction=medical,
        life_insurance=life,
        earthquake_insurance=earthquake,
        dependent_deduction=dependent,
        income_adjustment=adjustment,
        housing_loan=housing_loan,
        income_tax_detail=income_tax,
        resident_tax_detail=resident_tax,
        insurance=insurance,
        furusato_nozei=furusato,
        net_income=salary - income_tax.tax - resident_tax.tax - insurance.total,
    )


def simulate_salary_range(start: int, stop: int, step: int, **inputs) -> list[NetIncomeResult]:
    """Run calculate_net_income() for each salary in [start, stop] with other inputs fixed."""
    if step <= 0:
        raise ValueError(f"刻み幅は正の値が必要です: {step}")
    if start > stop:
        raise ValueError(f"開始年収 {start:,}円 が終了年収 {stop:,}円 を超えています")
    return [calculate_net_income(salary, **inputs) for salary in range(start, stop + 1, step)]
