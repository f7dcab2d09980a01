"""TOML config loader with CLI > config > default resolution."""

import argparse
import sys
import tomllib
from pathlib import Path
from typing import Callable

from housing_advice_jp.family import FAMILY_CHOICES, OTHER_LABEL
from housing_advice_jp.llm import LLMSettings
from housing_advice_jp.simulation import SimulationInput

DEFAULT_CONFIG_PATH = Path("config.toml")

# Input fields have no defaults: a missing field is a validation error.
DEFAULTS = {
    "annual_income": None,
    "budget": None,
    "current_rent": None,
    "family_composition": None,
    "custom_family_size": None,
    "llm_enabled": True,
    "llm_model": "gpt-4o-mini",
    "llm_timeout": 30.0,
    "llm_max_tokens": 800,
    "llm_temperature": 0.7,
}

INPUT_KEYS = ("annual_income", "budget", "current_rent", "family_composition", "custom_family_size")

# Quoted spellings accepted for boolean keys
TRUE_STRINGS = ("true", "yes", "on", "1")
FALSE_STRINGS = ("false", "no", "off", "0")


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
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
    # Flatten [llm] table → llm_* keys (top-level llm_* keys take precedence)
    llm = raw.pop("llm", None)
    if isinstance(llm, dict):
        for key, value in llm.items():
            raw.setdefault(f"llm_{key}", value)
    return split_legacy_family(raw)


def split_legacy_family(values: dict) -> dict:
    """Legacy "その他:6" encoding → family_composition + custom_family_size.

    An explicit custom_family_size wins. A malformed size leaves it unset,
    so validation asks for the household size.
    """
    family = values.get("family_composition")
    if isinstance(family, str) and family.startswith(OTHER_LABEL) and ":" in family:
        size = family.split(":", 1)[1].strip()
        values["family_composition"] = OTHER_LABEL
        if size.isdigit() and values.get("custom_family_size") is None:
            values["custom_family_size"] = int(size)
    return values


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with input form and AI generation flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="設定ファイルパス (default: config.toml)")
    parser.add_argument("--annual-income", type=int, default=None, help="年収（万円）")
    parser.add_argument("--budget", type=int, default=None, help="予算（万円）")
    parser.add_argument("--current-rent", type=int, default=None, help="現在の家賃（円/月）")
    parser.add_argument("--family", dest="family_composition", type=str, default=None,
                        help=f"家族構成: {' / '.join(FAMILY_CHOICES)}")
    parser.add_argument("--family-size", dest="custom_family_size", type=int, default=None,
                        help="家族の人数（家族構成でその他を選択した場合）")
    parser.add_argument("--no-ai", dest="llm_enabled", action="store_const", const=False, default=None,
                        help="AI生成を使わず定型アドバイスを表示")
    parser.add_argument("--model", dest="llm_model", type=str, default=None,
                        help=f"AIモデル名 (default: {d['llm_model']})")
    parser.add_argument("--llm-timeout", type=float, default=None,
                        help=f"AI生成のタイムアウト秒数 (default: {d['llm_timeout']})")
    return parser


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return split_legacy_family(resolved)


def has_input(r: dict) -> bool:
    """True when any form field was supplied (otherwise the empty form is shown)."""
    return any(r[key] not in (None, "") for key in INPUT_KEYS)


def build_input(r: dict) -> SimulationInput:
    """Build SimulationInput from resolved config dict."""
    return SimulationInput(
        annual_income=r["annual_income"],
        budget=r["budget"],
        current_rent=r["current_rent"],
        family_composition=r["family_composition"],
        custom_family_size=r["custom_family_size"],
    )


def parse_bool(key: str, value: object) -> bool:
    """TOML boolean, or a quoted true/false spelling. Anything else exits."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    print(f"設定値が不正です: {key} = {value!r} (true / false を指定してください)", file=sys.stderr)
    raise SystemExit(1)


def build_llm_settings(r: dict) -> LLMSettings:
    """Build LLMSettings from resolved config dict."""
    return LLMSettings(
        enabled=parse_bool("llm_enabled", r["llm_enabled"]),
        model=r["llm_model"],
        timeout=float(r["llm_timeout"]),
        max_tokens=int(r["llm_max_tokens"]),
        temperature=float(r["llm_temperature"]),
    )


def parse_args(
    description: str,
    add_args_fn: Callable[[argparse.ArgumentParser], None] | None = None,
    argv: list[str] | None = None,
) -> tuple[dict, argparse.Namespace]:
    """Parse CLI args, load config, resolve values.

    Returns (resolved_dict, namespace).
    namespace: raw argparse.Namespace (for extra CLI args added via add_args_fn).
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args(argv)
    config = load_config(args.config)
    return resolve(args, config), args
