"""Social insurance premiums (健康保険・厚生年金・雇用保険, employee share)."""

import math
from dataclasses import dataclass

# 標準報酬月額表 (下限以上, 上限未満, 標準報酬月額) 円
_STANDARD_MONTHLY_REMUNERATION_BANDS: tuple[tuple[int, float, int], ...] = (
    (0, 63_000, 58_000),
    (63_000, 73_000, 68_000),
    (73_000, 83_000, 78_000),
    (83_000, 93_000, 88_000),
    (93_000, 101_000, 98_000),
    (101_000, 107_000, 104_000),
    (107_000, 114_000, 110_000),
    (114_000, 122_000, 118_000),
    (122_000, 130_000, 126_000),
    (130_000, 138_000, 134_000),
    (138_000, 146_000, 142_000),
    (146_000, 155_000, 150_000),
    (155_000, 165_000, 160_000),
    (165_000, 175_000, 170_000),
    (175_000, 185_000, 180_000),
    (185_000, 195_000, 190_000),
    (195_000, 210_000, 200_000),
    (210_000, 230_000, 220_000),
    (230_000, 250_000, 240_000),
    (250_000, 270_000, 260_000),
    (270_000, 290_000, 280_000),
    (290_000, 310_000, 300_000),
    (310_000, 330_000, 320_000),
    (330_000, 350_000, 340_000),
    (350_000, 370_000, 360_000),
    (370_000, 395_000, 380_000),
    (395_000, 425_000, 410_000),
    (425_000, 455_000, 440_000),
    (455_000, 485_000, 470_000),
    (485_000, 515_000, 500_000),
    (515_000, 545_000, 530_000),
    (545_000, 575_000, 560_000),
    (575_000, 605_000, 590_000),
    (605_000, 635_000, 620_000),
    (635_000, 665_000, 650_000),
    (665_000, 695_000, 680_000),
    (695_000, 730_000, 710_000),
    (730_000, 770_000, 750_000),
    (770_000, 810_000, 790_000),
    (810_000, 855_000, 830_000),
    (855_000, 905_000, 880_000),
    (905_000, 955_000, 930_000),
    (955_000, 1_005_000, 980_000),
    (1_005_000, 1_055_000, 1_030_000),
    (1_055_000, 1_115_000, 1_090_000),
    (1_115_000, 1_175_000, 1_150_000),
    (1_175_000, float("inf"), 1_210_000),
)

# 労働者負担分（協会けんぽ東京支部の折半）
HEALTH_INSURANCE_RATE = 0.04905
PENSION_INSURANCE_RATE = 0.0915
EMPLOYMENT_INSURANCE_RATE = 0.009  # 一般の事業


def calc_standard_monthly_remuneration(monthly_income: float) -> int:
    """Look up 標準報酬月額 for a monthly income (lower inclusive, upper exclusive).

    Anything outside every band (i.e. negative income) falls back to the top band.
    """
    for lower, upper, standard in _STANDARD_MONTHLY_REMUNERATION_BANDS:
        if lower <= monthly_income < upper:
            return standard
    return _STANDARD_MONTHLY_REMUNERATION_BANDS[-1][2]


@dataclass(frozen=True)
class SocialInsurance:
    health: int
    pension: int
    employment: int
    total: int
    standard_monthly_remuneration: int


def calc_social_insurance(salary: float) -> SocialInsurance:
    """Annual employee-side premiums.

    Health and pension use the banded standard remuneration; employment
    insurance is charged on the raw annual salary. Bonuses are not modelled,
    monthly income is simply salary / 12.
    """
    monthly_income = math.floor(salary / 12)
    standard = calc_standard_monthly_remuneration(monthly_income)
    health = math.floor(standard * HEALTH_INSURANCE_RATE * 12)
    pension = math.floor(standard * PENSION_INSURANCE_RATE * 12)
    employment = math.floor(salary * EMPLOYMENT_INSURANCE_RATE)
    return SocialInsurance(
        health=health,
        pension=pension,
        employment=employment,
        total=health + pension + employment,
        standard_monthly_remuneration=standard,
    )
