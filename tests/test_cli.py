"""Tests for the CLI entry point."""

import pytest
from housing_advice_jp.cli import main
from housing_advice_jp.llm import API_KEY_ENV

INPUT_ARGS = [
    "--annual-income", "600", "--budget", "3000",
    "--current-rent", "90000", "--family", "夫婦+子1人",
]


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    """Run in an empty directory without config.toml or an API key."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(API_KEY_ENV, raising=False)


class TestMain:
    def test_no_input_shows_form(self, capsys):
        main([])
        out = capsys.readouterr().out
        assert "# 住宅購入シミュレーション 入力" in out
        assert "⚠" not in out

    def test_simulation_with_fallback(self, capsys):
        main(INPUT_ARGS + ["--no-ai"])
        out = capsys.readouterr().out
        assert "| 毎月の返済額 | 76,217円 |" in out
        assert "## アドバイス（自動生成）" in out

    def test_missing_field_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--annual-income", "600", "--budget", "3000"])
        assert exc.value.code == 1
        out = capsys.readouterr().out
        assert "すべての項目を入力してください。" in out
        assert "600万円" in out

    def test_config_file_input(self, tmp_path, capsys):
        (tmp_path / "config.toml").write_text(
            'annual_income = 600\nbudget = 3000\ncurrent_rent = 90000\nfamily_composition = "その他:6"\n',
            encoding="utf-8",
        )
        main([])
        out = capsys.readouterr().out
        assert "| 家族構成 | その他（6人） |" in out

    def test_output_and_charts(self, tmp_path):
        out_path = tmp_path / "out" / "result.md"
        chart_dir = tmp_path / "charts"
        main(INPUT_ARGS + ["--output", str(out_path), "--chart-dir", str(chart_dir), "--name", "t"])
        md = out_path.read_text(encoding="utf-8")
        assert "76,217円" in md
        assert (chart_dir / "payment-t.png").exists()
        assert (chart_dir / "utility-t.png").exists()
        assert "## チャート" in md

    def test_quoted_config_value_shows_form(self, tmp_path, capsys):
        (tmp_path / "config.toml").write_text(
            'annual_income = "600"\nbudget = 3000\ncurrent_rent = 90000\nfamily_composition = "単身"\n',
            encoding="utf-8",
        )
        with pytest.raises(SystemExit) as exc:
            main(["--no-ai"])
        assert exc.value.code == 1
        out = capsys.readouterr().out
        assert "⚠ 年収と予算は1以上" in out
        assert "| 年収（万円） | `--annual-income` | 600万円 |" in out

    def test_legacy_family_label_same_from_cli_and_config(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main(INPUT_ARGS[:-1] + ["その他:abc", "--no-ai"])
        cli_out = capsys.readouterr().out
        (tmp_path / "config.toml").write_text('family_composition = "その他:abc"\n', encoding="utf-8")
        with pytest.raises(SystemExit):
            main(INPUT_ARGS[:-2] + ["--no-ai"])
        config_out = capsys.readouterr().out
        assert "⚠ その他を選択した場合は" in cli_out
        assert "⚠ その他を選択した場合は" in config_out

    def test_quoted_llm_enabled_false(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv(API_KEY_ENV, "sk-test")
        (tmp_path / "config.toml").write_text('[llm]\nenabled = "false"\n', encoding="utf-8")
        main(INPUT_ARGS)
        assert "## アドバイス（自動生成）" in capsys.readouterr().out
