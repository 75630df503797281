"""Tests for calculate_net_income() and the salary sweep."""

import math

import pytest
from takehome_jp import (
    Dependents,
    InsurancePremiums,
    calc_social_insurance,
    calculate_net_income,
    simulate_salary_range,
)

NO_INSURANCE = {
    "generalLifeInsurance": 0,
    "medicalLifeInsurance": 0,
    "pensionInsurance": 0,
    "earthquakeInsurance": 0,
    "oldLongTermInsurance": 0,
}
NO_DEPENDENTS = {"spouse": False, "spouseIncome": 0, "elderly": 0, "specific": 0, "general": 0}


class TestSalaryOnly:
    def test_salary_1m_deduction(self):
        r = calculate_net_income(1_000_000)
        assert r.salary == 1_000_000
        assert r.salary_deduction.deduction == pytest.approx(400_000)
        assert r.salary_income == pytest.approx(600_000)

    def test_salary_boundary_deduction(self):
        r = calculate_net_income(1_625_000)
        assert r.salary_deduction.deduction == 550_000
        assert r.salary_income == 1_075_000

    def test_salary_5m_taxes(self):
        r = calculate_net_income(5_000_000)
        assert r.income_tax == 239_169
        assert r.resident_tax == 341_750

    def test_net_income_identity(self):
        r = calculate_net_income(5_000_000)
        ins = calc_social_insurance(5_000_000)
        assert r.insurance == ins
        assert r.net_income == 5_000_000 - 239_169 - 341_750 - ins.total

    def test_monthly_net_income(self):
        r = calculate_net_income(5_000_000)
        assert r.monthly_net_income == math.floor(r.net_income / 12)

    def test_defaults_are_zero(self):
        r = calculate_net_income(5_000_000)
        assert r.medical_deduction.deduction == 0
        assert r.life_insurance.total == 0
        assert r.earthquake_insurance.deduction == 0
        assert r.dependent_deduction.total == 0
        assert r.income_adjustment.deduction == 0
        assert r.housing_loan.total == 0


class TestMedicalExpenses:
    def test_scenario_300k(self):
        r = calculate_net_income(5_000_000, 300_000)
        income = 5_000_000 - (5_000_000 * 0.1 + 702_500)
        threshold = min(100_000, math.floor(income * 0.05))
        assert r.medical_deduction.deduction == 300_000 - threshold

    def test_below_threshold(self):
        assert calculate_net_income(5_000_000, 80_000).medical_deduction.deduction == 0

    def test_cap(self):
        assert calculate_net_income(5_000_000, 2_500_000).medical_deduction.deduction == 2_000_000

    def test_medical_lowers_income_tax(self):
        base = calculate_net_income(5_000_000)
        with_medical = calculate_net_income(5_000_000, 300_000)
        assert with_medical.income_tax < base.income_tax
        assert with_medical.resident_tax < base.resident_tax


class TestInsuranceInputs:
    def test_general_life_cap(self):
        r = calculate_net_income(5_000_000, 0, 0, {**NO_INSURANCE, "generalLifeInsurance": 100_000})
        assert r.life_insurance.general_deduction == 40_000

    def test_earthquake_cap(self):
        r = calculate_net_income(5_000_000, 0, 0, {**NO_INSURANCE, "earthquakeInsurance": 60_000})
        assert r.earthquake_insurance.deduction == 50_000

    def test_legacy_long_term(self):
        r = calculate_net_income(5_000_000, 0, 0, {**NO_INSURANCE, "oldLongTermInsurance": 12_000})
        assert r.earthquake_insurance.deduction == 8_500

    def test_dataclass_input(self):
        r = calculate_net_income(5_000_000, insurances=InsurancePremiums(general_life=35_000))
        assert r.life_insurance.general_deduction == 27_500


class TestDependentInputs:
    def test_spouse(self):
        r = calculate_net_income(5_000_000, 0, 0, NO_INSURANCE, {**NO_DEPENDENTS, "spouse": True, "spouseIncome": 400_000})
        assert r.dependent_deduction.spouse == 380_000

    def test_elderly(self):
        r = calculate_net_income(5_000_000, 0, 0, NO_INSURANCE, {**NO_DEPENDENTS, "elderly": 2})
        assert r.dependent_deduction.elderly == 960_000

    def test_specific(self):
        r = calculate_net_income(5_000_000, 0, 0, NO_INSURANCE, {**NO_DEPENDENTS, "specific": 1})
        assert r.dependent_deduction.specific == 630_000

    def test_general(self):
        r = calculate_net_income(5_000_000, 0, 0, NO_INSURANCE, {**NO_DEPENDENTS, "general": 2})
        assert r.dependent_deduction.general == 760_000

    def test_dependents_reduce_tax_base(self):
        r = calculate_net_income(5_000_000, dependents=Dependents(general=1))
        assert r.income_tax_detail.taxable_income == 3_317_500 - 380_000
        assert r.resident_tax_detail.taxable_income == 3_367_500 - 380_000


class TestIncomeAdjustment:
    def test_below_threshold(self):
        r = calculate_net_income(8_000_000, 0, 0, NO_INSURANCE, NO_DEPENDENTS, True)
        assert r.income_adjustment.deduction == 0

    def test_above_threshold(self):
        r = calculate_net_income(9_000_000, 0, 0, NO_INSURANCE, NO_DEPENDENTS, True)
        assert r.income_adjustment.deduction == 50_000

    def test_reduces_salary_income(self):
        without = calculate_net_income(9_000_000)
        with_adj = calculate_net_income(9_000_000, has_special_condition=True)
        assert without.salary_income - with_adj.salary_income == 50_000
        assert with_adj.income_tax < without.income_tax


class TestHousingLoan:
    def test_credit_rolls_into_resident_tax(self):
        """所得税239,169円を超える分（60,831円）が住民税へ"""
        r = calculate_net_income(5_000_000, loan_balance=30_000_000)
        assert r.housing_loan.total == 300_000
        assert r.income_tax == 0
        assert r.income_tax_detail.housing_loan_credit_used == 239_169
        assert r.resident_tax_detail.housing_loan_credit_used == 60_831
        assert r.resident_tax == 341_750 - 60_831

    def test_resident_side_cap(self):
        r = calculate_net_income(5_000_000, loan_balance=50_000_000)
        assert r.resident_tax_detail.housing_loan_credit_used == 136_500

    def test_small_credit_stays_in_income_tax(self):
        r = calculate_net_income(5_000_000, loan_balance=10_000_000)
        assert r.income_tax == 139_169
        assert r.resident_tax == 341_750

    def test_to_dict_reports_used_amounts(self):
        d = calculate_net_income(5_000_000, loan_balance=30_000_000).to_dict()
        assert d["housingLoan"]["balance"] == 30_000_000
        assert d["housingLoan"]["deduction"]["total"] == 300_000
        assert d["housingLoan"]["deduction"]["incomeTax"] == 239_169
        assert d["housingLoan"]["deduction"]["residentTax"] == 60_831


class TestFurusatoNozei:
    def test_salary_5m_with_family(self):
        insurances = {
            "generalLifeInsurance": 50_000,
            "medicalLifeInsurance": 30_000,
            "pensionInsurance": 40_000,
            "earthquakeInsurance": 20_000,
            "oldLongTermInsurance": 0,
        }
        dependents = {"spouse": True, "spouseIncome": 400_000, "elderly": 1, "specific": 0, "general": 1}
        r = calculate_net_income(5_000_000, 0, 0, insurances, dependents)
        income_tax_base = 3_797_500 - 480_000 - 87_500 - 20_000 - 1_240_000
        resident_tax_base = 3_797_500 - 430_000 - 87_500 - 20_000 - 1_240_000
        expected = math.floor((income_tax_base * 0.004 + resident_tax_base * 0.006) * 2)
        assert r.furusato_nozei.limit == expected
        assert "所得税の課税所得金額(1,970,000円)" in r.furusato_nozei.formula
        assert "住民税の課税所得金額(2,020,000円)" in r.furusato_nozei.formula

    def test_salary_10m_capped_deductions(self):
        insurances = {
            "generalLifeInsurance": 100_000,
            "medicalLifeInsurance": 100_000,
            "pensionInsurance": 100_000,
            "earthquakeInsurance": 60_000,
            "oldLongTermInsurance": 0,
        }
        dependents = {"spouse": True, "spouseIncome": 400_000, "elderly": 0, "specific": 1, "general": 1}
        r = calculate_net_income(10_000_000, 0, 0, insurances, dependents)
        taxable_income = 10_000_000 - 1_950_000
        income_tax_base = taxable_income - 480_000 - 120_000 - 50_000 - 1_390_000
        resident_tax_base = taxable_income - 430_000 - 120_000 - 50_000 - 1_390_000
        expected = math.floor((income_tax_base * 0.004 + resident_tax_base * 0.006) * 2)
        assert r.furusato_nozei.limit == expected
        assert "所得税の課税所得金額(6,010,000円)" in r.furusato_nozei.formula

    def test_with_medical_expenses(self):
        insurances = {
            "generalLifeInsurance": 50_000,
            "medicalLifeInsurance": 30_000,
            "pensionInsurance": 40_000,
            "earthquakeInsurance": 20_000,
            "oldLongTermInsurance": 0,
        }
        dependents = {"spouse": True, "spouseIncome": 400_000, "elderly": 0, "specific": 0, "general": 1}
        r = calculate_net_income(5_000_000, 300_000, 0, insurances, dependents)
        assert r.furusato_nozei.income_tax_base == 2_250_000
        assert r.furusato_nozei.resident_tax_base == 2_300_000

    def test_income_adjustment_not_applied(self):
        """所得金額調整控除は税額には効くが、限度額の試算には含めない"""
        r = calculate_net_income(10_000_000, has_special_condition=True)
        assert r.income_adjustment.deduction == 50_000
        assert r.income_tax_detail.taxable_income == 8_050_000 - 50_000 - 480_000
        income_tax_base = 8_050_000 - 480_000
        resident_tax_base = 8_050_000 - 430_000
        assert r.furusato_nozei.income_tax_base == income_tax_base
        assert r.furusato_nozei.resident_tax_base == resident_tax_base
        assert r.furusato_nozei.limit == math.floor((income_tax_base * 0.004 + resident_tax_base * 0.006) * 2)
        assert r.furusato_nozei.limit == calculate_net_income(10_000_000).furusato_nozei.limit


class TestInvariants:
    def test_idempotent(self):
        kwargs = dict(
            salary=7_300_000,
            medical_expenses=150_000,
            loan_balance=25_000_000,
            insurances={"generalLifeInsurance": 60_000, "earthquakeInsurance": 10_000},
            dependents={"spouse": True, "spouseIncome": 0, "specific": 1},
        )
        first = calculate_net_income(**kwargs)
        second = calculate_net_income(**kwargs)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_monotonic_above_saturation(self):
        """標準報酬月額・給与所得控除が頭打ちになった後は手取りが年収に対して単調増加"""
        results = simulate_salary_range(15_000_000, 50_000_000, 250_000)
        nets = [r.net_income for r in results]
        assert all(b >= a for a, b in zip(nets, nets[1:]))

    @pytest.mark.parametrize("salary", [1_000_000, 3_000_000, 5_000_000, 12_000_000, 40_000_000])
    def test_amounts_non_negative(self, salary):
        r = calculate_net_income(
            salary, 500_000, 60_000_000,
            InsurancePremiums(100_000, 100_000, 100_000, 60_000, 20_000),
            Dependents(True, 0, 3, 3, 3),
            True,
        )
        assert r.income_tax >= 0
        assert r.resident_tax >= 0
        assert r.life_insurance.total <= 120_000
        assert r.earthquake_insurance.deduction <= 50_000
        assert r.housing_loan.total <= 400_000
        assert r.resident_tax_detail.housing_loan_credit_used <= 136_500

    def test_negative_salary_not_clamped(self):
        """負の年収も検証せずにそのまま計算する（入力チェックはCLI側）"""
        r = calculate_net_income(-1)
        assert r.salary_deduction.deduction == pytest.approx(-0.4)
        assert r.salary_income == pytest.approx(-0.6)
        assert r.income_tax == 0
        assert r.resident_tax == 5_000
        # 月収がどの等級にも該当しないため最高等級
        assert r.insurance.standard_monthly_remuneration == 1_210_000
        assert r.insurance.employment == -1
        assert r.net_income == -1 - 5_000 - r.insurance.total


class TestToDict:
    def test_record_shape(self):
        d = calculate_net_income(5_000_000).to_dict()
        for key in (
            "salary", "incomeTax", "residentTax", "insurance", "medicalExpenses",
            "medicalDeduction", "housingLoan", "insuranceDeductions", "furusatoNozei",
            "dependentDeduction", "incomeAdjustment", "netIncome",
        ):
            assert key in d
        assert set(d["insurance"]) == {"health", "pension", "employment", "total", "standardMonthlyRemuneration"}
        assert set(d["insuranceDeductions"]["life"]) == {
            "generalDeduction", "medicalDeduction", "pensionDeduction", "total", "formula",
        }

    def test_integer_display_fields(self):
        d = calculate_net_income(1_700_000).to_dict()
        assert isinstance(d["salaryDeduction"]["deduction"], int)
        assert isinstance(d["salaryIncome"], int)
        assert isinstance(d["taxableIncome"]["incomeTax"], int)


class TestSimulateSalaryRange:
    def test_inclusive_range(self):
        results = simulate_salary_range(1_000_000, 2_000_000, 500_000)
        assert [r.salary for r in results] == [1_000_000, 1_500_000, 2_000_000]

    def test_fixed_inputs_forwarded(self):
        results = simulate_salary_range(4_000_000, 5_000_000, 1_000_000, loan_balance=10_000_000)
        assert all(r.housing_loan.total == 100_000 for r in results)

    def test_invalid_step(self):
        with pytest.raises(ValueError, match="刻み幅"):
            simulate_salary_range(1_000_000, 2_000_000, 0)

    def test_start_after_stop(self):
        with pytest.raises(ValueError):
            simulate_salary_range(3_000_000, 2_000_000, 100_000)
