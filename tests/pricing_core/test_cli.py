import json
import shutil

from pricing_core.scripts.cli import main


def test_quote_margin_percent(capsys) -> None:
    assert main(["quote", "--cost", "2.50", "--markup-pct", "30", "--rounding", "ceilStepUSD"]) == 0
    out = capsys.readouterr().out
    assert "Cost: $2.50 (250 units)" in out
    assert "Price: $3.60 (360 units)" in out


def test_quote_fixed_amount_in_yen(capsys) -> None:
    argv = ["quote", "--cost", "1000", "--currency", "JPY", "--strategy", "fixedAmount", "--markup-amount", "250"]
    assert main(argv) == 0
    assert "Price: ¥1,250 (1250 units)" in capsys.readouterr().out


def test_quote_all_rounders(capsys) -> None:
    assert main(["quote", "--cost-units", "250", "--markup-bps", "3000", "--all-rounders"]) == 0
    out = capsys.readouterr().out
    assert "identity       : $3.58" in out
    assert "charm99        : $3.99" in out


def test_quote_currency_rounding(capsys) -> None:
    assert main(["quote", "--cost-units", "250", "--markup-bps", "3000", "--rounding", "currency"]) == 0
    assert "(360 units)" in capsys.readouterr().out


def test_quote_errors_exit_2(capsys) -> None:
    assert main(["quote", "--cost-units", "250", "--markup-bps", "10000"]) == 2
    assert "error: margin must be between 0 and 9999" in capsys.readouterr().err
    assert main(["quote", "--cost-units", "250", "--strategy", "premium"]) == 2
    assert "Unknown markup strategy: premium" in capsys.readouterr().err
    assert main(["quote", "--cost", "-1.00"]) == 2
    assert "cannot be negative" in capsys.readouterr().err


def test_listings(capsys) -> None:
    assert main(["rounders"]) == 0
    assert "ceilStepINR" in capsys.readouterr().out
    assert main(["strategies"]) == 0
    assert capsys.readouterr().out.split() == [
        "margin",
        "costPlus",
        "keystone",
        "keystonePlus",
        "fixedAmount",
        "targetMargin",
        "markupOnCost",
    ]


def test_currency_commands(capsys) -> None:
    assert main(["currencies", "--decimal-places", "3"]) == 0
    assert "KWD" in capsys.readouterr().out
    assert main(["currencies", "--number", "392"]) == 0
    assert capsys.readouterr().out.startswith("JPY")
    assert main(["currencies", "--country", "atlantis"]) == 1
    assert main(["currency", "eur"]) == 0
    details = json.loads(capsys.readouterr().out)
    assert details["code"] == "EUR"
    assert details["symbol"] == "€"
    assert main(["currency", "XYZ"]) == 1


def test_batch_writes_output_and_errors(tmp_path, fixtures_dir, capsys) -> None:
    output = tmp_path / "out" / "priced.csv"
    errors = tmp_path / "errors.json"
    argv = [
        "batch",
        "--profile",
        str(fixtures_dir / "profile.yaml"),
        "--input",
        str(fixtures_dir / "items.csv"),
        "--output",
        str(output),
        "--errors",
        str(errors),
    ]
    assert main(argv) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["record_count"] == 4
    assert output.read_text(encoding="utf-8") == (fixtures_dir / "expected_priced.csv").read_text(encoding="utf-8")
    rejected = json.loads(errors.read_text(encoding="utf-8"))
    assert [row["row_number"] for row in rejected] == [6, 7, 8]


def test_batch_bad_profile_exit_2(tmp_path, fixtures_dir, capsys) -> None:
    profile = tmp_path / "profile.yaml"
    profile.write_text("schema_version: 3\nprofile_id: x\n")
    shutil.copy(fixtures_dir / "items.csv", tmp_path / "items.csv")
    argv = ["batch", "--profile", str(profile), "--input", str(tmp_path / "items.csv"), "--output", str(tmp_path / "o.csv")]
    assert main(argv) == 2
    assert "Unsupported schema_version 3" in capsys.readouterr().err


def test_quote_rejected_cost_prints_nothing(capsys) -> None:
    assert main(["quote", "--cost", "-0.01"]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "cannot be negative" in captured.err


def test_quote_custom_currency(capsys) -> None:
    argv = ["quote", "--cost", "0.001", "--currency", "BTC", "--symbol", "₿", "--decimal-places", "8", "--markup-pct", "20"]
    assert main(argv) == 0
    out = capsys.readouterr().out
    assert "Currency: BTC (₿), 8 decimal places" in out
    assert "Cost: BTC 0.00100000 (100000 units)" in out
    assert "Price: BTC 0.00125000 (125000 units)" in out


def test_quote_custom_currency_errors(capsys) -> None:
    assert main(["quote", "--cost-units", "1", "--currency", "BTC", "--decimal-places", "21"]) == 2
    assert "decimal_places must be between 0 and 20" in capsys.readouterr().err
    assert main(["quote", "--cost-units", "1", "--symbol", "₿"]) == 2
    assert "--symbol requires --decimal-places" in capsys.readouterr().err


def test_batch_missing_files_exit_2(tmp_path, fixtures_dir, capsys) -> None:
    argv = ["batch", "--profile", str(tmp_path / "missing.yaml"), "--input", str(fixtures_dir / "items.csv"), "--output", str(tmp_path / "o.csv")]
    assert main(argv) == 2
    assert capsys.readouterr().err.startswith("error: ")
    argv = ["batch", "--profile", str(fixtures_dir / "profile.yaml"), "--input", str(tmp_path / "missing.csv"), "--output", str(tmp_path / "o.csv")]
    assert main(argv) == 2
    assert capsys.readouterr().err.startswith("error: ")


def test_batch_malformed_profile_exit_2(tmp_path, fixtures_dir, capsys) -> None:
    profile = tmp_path / "profile.yaml"
    profile.write_text("schema_version: [1\n")
    argv = ["batch", "--profile", str(profile), "--input", str(fixtures_dir / "items.csv"), "--output", str(tmp_path / "o.csv")]
    assert main(argv) == 2
    assert capsys.readouterr().err.startswith("error: ")
