"""Japanese salary take-home pay estimation package."""

from takehome_jp.params import InsurancePremiums, Dependents, ItemizedDeductions
from takehome_jp.deductions import (
    DeductionResult,
    MedicalDeduction,
    LifeInsuranceDeduction,
    DependentDeduction,
    HousingLoanCredit,
    calc_salary_deduction,
    describe_salary_deduction,
    calc_medical_deduction,
    calc_life_insurance_deduction,
    calc_earthquake_insurance_deduction,
    calc_dependent_deduction,
    calc_income_adjustment_deduction,
    calc_housing_loan_credit,
)
from takehome_jp.tax import (
    IncomeTaxResult,
    ResidentTaxResult,
    calc_income_tax,
    calc_resident_tax,
    calc_marginal_income_tax_rate,
    INCOME_TAX_BASIC_DEDUCTION,
    RESIDENT_TAX_BASIC_DEDUCTION,
)
from takehome_jp.social_insurance import (
    SocialInsurance,
    calc_standard_monthly_remuneration,
    calc_social_insurance,
)
from takehome_jp.furusato import FurusatoNozeiLimit, calc_furusato_nozei_limit
from takehome_jp.takehome import NetIncomeResult, calculate_net_income, simulate_salary_range

__all__ = [
    "InsurancePremiums",
    "Dependents",
    "ItemizedDeductions",
    "DeductionResult",
    "MedicalDeduction",
    "LifeInsuranceDeduction",
    "DependentDeduction",
    "HousingLoanCredit",
    "calc_salary_deduction",
    "describe_salary_deduction",
    "calc_medical_deduction",
    "calc_life_insurance_deduction",
    "calc_earthquake_insurance_deduction",
    "calc_dependent_deduction",
    "calc_income_adjustment_deduction",
    "calc_housing_loan_credit",
    "IncomeTaxResult",
    "ResidentTaxResult",
    "calc_income_tax",
    "calc_resident_tax",
    "calc_marginal_income_tax_rate",
    "INCOME_TAX_BASIC_DEDUCTION",
    "RESIDENT_TAX_BASIC_DEDUCTION",
    "SocialInsurance",
    "calc_standard_monthly_remuneration",
    "calc_social_insurance",
    "FurusatoNozeiLimit",
    "calc_furusato_nozei_limit",
    "NetIncomeResult",
    "calculate_net_income",
    "simulate_salary_range",
]
