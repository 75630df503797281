"""Input records for the take-home pay engine."""

from collections.abc import Mapping
from dataclasses import dataclass, fields

# camelCase keys used by the web form → dataclass field names
_INSURANCE_KEY_ALIASES = {
    "generalLifeInsurance": "general_life",
    "medicalLifeInsurance": "medical_life",
    "pensionInsurance": "pension",
    "earthquakeInsurance": "earthquake",
    "oldLongTermInsurance": "legacy_long_term",
}

_DEPENDENT_KEY_ALIASES = {
    "spouseIncome": "spouse_income",
}


def _normalize_keys(cls, raw: Mapping, aliases: dict[str, str]) -> dict:
    known = {f.name for f in fields(cls)}
    normalized = {}
    for key, value in raw.items():
        name = aliases.get(key, key)
        if name not in known:
            raise TypeError(f"{cls.__name__}: 未知の項目 '{key}'")
        normalized[name] = value
    return normalized


@dataclass(frozen=True)
class InsurancePremiums:
    """Annual premiums paid (円/年)."""

    general_life: int = 0       # 一般生命保険料
    medical_life: int = 0       # 介護医療保険料
    pension: int = 0            # 個人年金保険料
    earthquake: int = 0         # 地震保険料
    legacy_long_term: int = 0   # 旧長期損害保険料

    @classmethod
    def from_mapping(cls, raw: "Mapping | InsurancePremiums | None") -> "InsurancePremiums":
        if raw is None:
            return cls()
        if isinstance(raw, cls):
            return raw
        return cls(**_normalize_keys(cls, raw, _INSURANCE_KEY_ALIASES))


@dataclass(frozen=True)
class Dependents:
    """Spouse and dependent relatives."""

    spouse: bool = False        # 控除対象配偶者あり
    spouse_income: int = 0      # 配偶者の合計所得（円）
    elderly: int = 0            # 老人扶養親族（70歳以上）
    specific: int = 0           # 特定扶養親族（19-22歳）
    general: int = 0            # 一般扶養親族（16-18歳, 23-69歳）

    @classmethod
    def from_mapping(cls, raw: "Mapping | Dependents | None") -> "Dependents":
        if raw is None:
            return cls()
        if isinstance(raw, cls):
            return raw
        return cls(**_normalize_keys(cls, raw, _DEPENDENT_KEY_ALIASES))


@dataclass(frozen=True)
class ItemizedDeductions:
    """Itemized deductions subtracted from salary income to get a taxable base (円)."""

    medical: int = 0
    life_insurance: int = 0
    earthquake: int = 0
    dependents: int = 0

    @property
    def total(self) -> int:
        return self.medical + self.life_insurance + self.earthquake + self.dependents
