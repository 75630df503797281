"""CLI entry point for chart generation over a salary range."""

import argparse
import sys
from pathlib import Path

from takehome_jp.charts import plot_effective_rates, plot_takehome_breakdown
from takehome_jp.config import build_inputs, parse_args
from takehome_jp.takehome import simulate_salary_range


def _add_args(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--output", type=Path, default=Path("reports/charts"),
        help="出力ディレクトリ (default: reports/charts)",
    )
    parser.add_argument(
        "--min-salary", type=int, default=2_000_000,
        help="横軸の最小年収・円 (default: 2,000,000)",
    )
    parser.add_argument(
        "--max-salary", type=int, default=20_000_000,
        help="横軸の最大年収・円 (default: 20,000,000)",
    )
    parser.add_argument(
        "--step", type=int, default=100_000,
        help="年収の刻み・円 (default: 100,000)",
    )
    parser.add_argument(
        "--name", type=str, default="",
        help="出力ファイル名のサフィックス（例: family → breakdown-family.png）",
    )


def main(argv: list[str] | None = None):
    r, args = parse_args("手取り額 チャート生成", _add_args, argv)
    inputs = build_inputs(r)
    inputs.pop("salary")

    print(
        f"年収 {args.min_salary:,}円 → {args.max_salary:,}円（{args.step:,}円刻み）を計算...",
        file=sys.stderr,
    )
    try:
        results = simulate_salary_range(args.min_salary, args.max_salary, args.step, **inputs)
    except ValueError as e:
        print(f"入力エラー: {e}", file=sys.stderr)
        raise SystemExit(1)

    path = plot_takehome_breakdown(results, args.output, name=args.name)
    print(f"  → {path}", file=sys.stderr)
    path = plot_effective_rates(results, args.output, name=args.name)
    print(f"  → {path}", file=sys.stderr)
    print("完了", file=sys.stderr)


if __name__ == "__main__":
    main()
