"""CLI entry point for a single take-home pay calculation."""

import argparse
import json

from takehome_jp.config import build_inputs, parse_args
from takehome_jp.takehome import NetIncomeResult, calculate_net_income
from takehome_jp.tax import calc_marginal_income_tax_rate


def _add_args(parser: argparse.ArgumentParser):
    parser.add_argument("--json", action="store_true", help="結果をJSONで出力")
    parser.add_argument("--formulas", action="store_true", help="各控除の計算式を表示")


def _print_row(label: str, amount: float, negate: bool = False, indent: int = 2):
    sign = "▲" if negate and amount > 0 else " "
    print(f"{' ' * indent}{label:<20}{sign}{amount:>14,.0f}円")


def _print_header(result: NetIncomeResult):
    print("=" * 60)
    print(f"手取り額シミュレーション（額面年収 {result.salary:,.0f}円）")
    print("=" * 60)


def _print_deductions(result: NetIncomeResult):
    print("\n【所得控除】")
    print("-" * 60)
    _print_row("給与所得控除", result.salary_deduction.deduction)
    if result.income_adjustment.deduction > 0:
        _print_row("所得金額調整控除", result.income_adjustment.deduction)
    _print_row("給与所得", result.salary_income)
    if result.medical_expenses > 0:
        _print_row("医療費控除", result.medical_deduction.deduction)
    life = result.life_insurance
    if life.total > 0:
        _print_row("生命保険料控除", life.total)
        for label, amount in (("一般", life.general_deduction), ("介護医療", life.medical_deduction), ("個人年金", life.pension_deduction)):
            if amount > 0:
                _print_row(label, amount, indent=4)
    if result.earthquake_insurance.deduction > 0:
        _print_row("地震保険料控除", result.earthquake_insurance.deduction)
    dep = result.dependent_deduction
    if dep.total > 0:
        _print_row("扶養控除等", dep.total)
        for label, amount in (("配偶者", dep.spouse), ("老人扶養", dep.elderly), ("特定扶養", dep.specific), ("一般扶養", dep.general)):
            if amount > 0:
                _print_row(label, amount, indent=4)


def _print_taxes(result: NetIncomeResult):
    it = result.income_tax_detail
    rt = result.resident_tax_detail
    print("\n【税額】")
    print("-" * 60)
    _print_row("課税所得（所得税）", it.taxable_income)
    _print_row("所得税（復興税込）", it.tax, negate=True)
    if result.loan_balance > 0:
        _print_row("うち住宅ローン控除", it.housing_loan_credit_used, indent=4)
    _print_row("課税所得（住民税）", rt.taxable_income)
    _print_row("住民税", rt.tax, negate=True)
    if result.loan_balance > 0:
        _print_row("うち住宅ローン控除", rt.housing_loan_credit_used, indent=4)
    marginal = calc_marginal_income_tax_rate(it.taxable_income)
    print(f"  限界税率（所得税+住民税）: {marginal:.0%}")


def _print_social_insurance(result: NetIncomeResult):
    ins = result.insurance
    print("\n【社会保険料】")
    print("-" * 60)
    _print_row("標準報酬月額", ins.standard_monthly_remuneration)
    _print_row("健康保険", ins.health, negate=True)
    _print_row("厚生年金", ins.pension, negate=True)
    _print_row("雇用保険", ins.employment, negate=True)
    _print_row("合計", ins.total, negate=True)


def _print_summary(result: NetIncomeResult):
    print("\n" + "=" * 60)
    _print_row("手取り年収", result.net_income, indent=0)
    _print_row("手取り月額（12等分）", result.monthly_net_income, indent=0)
    ratio = result.net_income / result.salary if result.salary else 0.0
    print(f"手取り率: {ratio:.1%}")
    _print_row("ふるさと納税限度額", result.furusato_nozei.limit, indent=0)
    print("=" * 60)


def _print_formulas(result: NetIncomeResult):
    print("\n【計算式】")
    formulas = [
        result.salary_deduction.formula,
        result.income_adjustment.formula,
        result.medical_deduction.formula,
        result.life_insurance.formula,
        result.earthquake_insurance.formula,
        result.dependent_deduction.formula,
        result.housing_loan.formula,
        result.furusato_nozei.formula,
    ]
    for f in formulas:
        print(f"  {f}")


def main(argv: list[str] | None = None):
    r, args = parse_args("給与所得の手取り額計算", _add_args, argv)
    result = calculate_net_income(**build_inputs(r))

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    _print_header(result)
    _print_deductions(result)
    _print_taxes(result)
    _print_social_insurance(result)
    _print_summary(result)
    if args.formulas:
        _print_formulas(result)


if __name__ == "__main__":
    main()
