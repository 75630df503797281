"""TOML config loader with CLI > config > default resolution."""

import argparse
import sys
import tomllib
from collections.abc import Callable
from pathlib import Path

from takehome_jp.params import Dependents, InsurancePremiums

DEFAULT_CONFIG_PATH = Path("takehome.toml")

DEFAULTS = {
    "salary": 5_000_000,
    "medical_expenses": 0,
    "loan_balance": 0,
    "special_condition": False,
    # [insurances]
    "general_life": 0,
    "medical_life": 0,
    "pension": 0,
    "earthquake": 0,
    "legacy_long_term": 0,
    # [dependents]
    "spouse": False,
    "spouse_income": 0,
    "elderly": 0,
    "specific": 0,
    "general": 0,
}

_INSURANCE_KEYS = ("general_life", "medical_life", "pension", "earthquake", "legacy_long_term")
_DEPENDENT_KEYS = ("spouse", "spouse_income", "elderly", "specific", "general")
_AMOUNT_KEYS = (
    "medical_expenses", "loan_balance",
    "general_life", "medical_life", "pension", "earthquake", "legacy_long_term",
    "spouse_income",
)
_COUNT_KEYS = ("elderly", "specific", "general")
_FLAG_KEYS = ("special_condition", "spouse")

_LABELS = {
    "salary": "年収",
    "special_condition": "所得金額調整控除の対象",
    "spouse": "控除対象配偶者",
    "medical_expenses": "医療費",
    "loan_balance": "住宅ローン残高",
    "general_life": "一般生命保険料",
    "medical_life": "介護医療保険料",
    "pension": "個人年金保険料",
    "earthquake": "地震保険料",
    "legacy_long_term": "旧長期損害保険料",
    "spouse_income": "配偶者の所得",
    "elderly": "老人扶養親族の人数",
    "specific": "特定扶養親族の人数",
    "general": "一般扶養親族の人数",
}


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist.

    [insurances] / [dependents] tables are flattened into the top level.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"設定ファイルの読み込みに失敗: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    for table, keys in (("insurances", _INSURANCE_KEYS), ("dependents", _DEPENDENT_KEYS)):
        section = raw.pop(table, None)
        if not isinstance(section, dict):
            continue
        for key, value in section.items():
            if key not in keys:
                print(f"設定ファイルの未知の項目を無視: [{table}] {key}", file=sys.stderr)
                continue
            raw.setdefault(key, value)
    return raw


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared input flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="設定ファイルパス (default: takehome.toml)")
    parser.add_argument("--salary", type=int, default=None, help=f"額面年収・円 (default: {d['salary']:,})")
    parser.add_argument("--medical-expenses", type=int, default=None, help="年間医療費・円")
    parser.add_argument("--loan-balance", type=int, default=None, help="住宅ローン年末残高・円")
    parser.add_argument("--special-condition", action="store_true", default=None, help="所得金額調整控除の対象（23歳未満の扶養親族・特別障害者等）")
    parser.add_argument("--general-life", type=int, default=None, help="一般生命保険料・円/年")
    parser.add_argument("--medical-life", type=int, default=None, help="介護医療保険料・円/年")
    parser.add_argument("--pension", type=int, default=None, help="個人年金保険料・円/年")
    parser.add_argument("--earthquake", type=int, default=None, help="地震保険料・円/年")
    parser.add_argument("--legacy-long-term", type=int, default=None, help="旧長期損害保険料・円/年")
    parser.add_argument("--spouse", action="store_true", default=None, help="控除対象配偶者あり")
    parser.add_argument("--spouse-income", type=int, default=None, help="配偶者の合計所得・円")
    parser.add_argument("--elderly", type=int, default=None, help="老人扶養親族（70歳以上）の人数")
    parser.add_argument("--specific", type=int, default=None, help="特定扶養親族（19-22歳）の人数")
    parser.add_argument("--general", type=int, default=None, help="一般扶養親族の人数")
    return parser


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config file > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_inputs(r: dict) -> list[str]:
    """Return error messages for inputs the engine should never see."""
    errors = []
    if not _is_number(r["salary"]):
        errors.append(f"{_LABELS['salary']}は数値が必要です: {r['salary']!r}")
    elif r["salary"] <= 0:
        errors.append(f"{_LABELS['salary']}は正の値が必要です: {r['salary']}")
    for key in _AMOUNT_KEYS:
        if not _is_number(r[key]):
            errors.append(f"{_LABELS[key]}は数値が必要です: {r[key]!r}")
        elif r[key] < 0:
            errors.append(f"{_LABELS[key]}は0以上が必要です: {r[key]}")
    for key in _FLAG_KEYS:
        if not isinstance(r[key], bool):
            errors.append(f"{_LABELS[key]}は true / false で指定してください: {r[key]!r}")
    for key in _COUNT_KEYS:
        if not isinstance(r[key], int) or isinstance(r[key], bool):
            errors.append(f"{_LABELS[key]}は整数が必要です: {r[key]}")
        elif r[key] < 0:
            errors.append(f"{_LABELS[key]}は0以上が必要です: {r[key]}")
    return errors


def build_inputs(r: dict) -> dict:
    """Build calculate_net_income() keyword arguments from a resolved config dict."""
    return {
        "salary": r["salary"],
        "medical_expenses": r["medical_expenses"],
        "loan_balance": r["loan_balance"],
        "insurances": InsurancePremiums(**{k: r[k] for k in _INSURANCE_KEYS}),
        "dependents": Dependents(**{k: r[k] for k in _DEPENDENT_KEYS}),
        "has_special_condition": r["special_condition"],
    }


def parse_args(
    description: str,
    add_args_fn: Callable[[argparse.ArgumentParser], None] | None = None,
    argv: list[str] | None = None,
) -> tuple[dict, argparse.Namespace]:
    """Parse CLI args, load config, resolve and validate values.

    Returns (resolved_dict, namespace). Exits with status 1 on invalid input.
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args(argv)
    config = load_config(args.config)
    r = resolve(args, config)
    errors = validate_inputs(r)
    if errors:
        for e in errors:
            print(f"入力エラー: {e}", file=sys.stderr)
        raise SystemExit(1)
    return r, args
