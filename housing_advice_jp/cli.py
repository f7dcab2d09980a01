"""CLI entry point: show the input form or run a simulation."""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from housing_advice_jp.charts import plot_payment_comparison, plot_utility_by_family_size
from housing_advice_jp.config import build_input, build_llm_settings, has_input, parse_args
from housing_advice_jp.llm import build_text_generator
from housing_advice_jp.report import render_input_form, render_result
from housing_advice_jp.simulation import SimulationFailure, run_simulation


def _add_output_args(parser: argparse.ArgumentParser):
    parser.add_argument("--output", type=Path, default=None, help="結果Markdownの出力先ファイル")
    parser.add_argument("--chart-dir", type=Path, default=None, help="チャート出力ディレクトリ（指定時のみ生成）")
    parser.add_argument("--name", type=str, default="", help="チャートファイル名のサフィックス")
    parser.add_argument("-v", "--verbose", action="store_true", help="詳細ログを表示")


def main(argv: list[str] | None = None):
    """Execute a single housing purchase simulation"""
    load_dotenv()
    r, args = parse_args("住宅購入シミュレーション（返済額・光熱費・アドバイス）", _add_output_args, argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not has_input(r):
        print(render_input_form())
        return

    sim_input = build_input(r)
    generator = build_text_generator(build_llm_settings(r))
    outcome = run_simulation(sim_input, generator)

    if isinstance(outcome, SimulationFailure):
        print(render_input_form(outcome.input, outcome.message))
        raise SystemExit(1)

    chart_paths = []
    if args.chart_dir is not None:
        print("  チャート生成...", file=sys.stderr)
        chart_paths.append(plot_payment_comparison(outcome, args.chart_dir, name=args.name))
        chart_paths.append(plot_utility_by_family_size(args.chart_dir, name=args.name, highlight=outcome.household))

    md = render_result(outcome, chart_paths)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(md, encoding="utf-8")
        print(f"  → {args.output}", file=sys.stderr)
    else:
        print(md)


if __name__ == "__main__":
    main()
