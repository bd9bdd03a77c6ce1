import json

from superstore.cli import main

from conftest import write_orders, write_people, write_returns


def _inputs(tmp_path, lines, people, returns):
    return [
        "--orders", str(write_orders(tmp_path / "orders.csv", lines)),
        "--people", str(write_people(tmp_path / "people.csv", people)),
        "--returns", str(write_returns(tmp_path / "returns.csv", returns)),
    ]


def test_list(capsys):
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "QUERIES (24)" in out
    assert "month_over_month_growth" in out


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_query_json(tmp_path, capsys, sample_lines, sample_people, sample_returns):
    args = ["query", "return_rate", "--format", "json"] + _inputs(tmp_path, sample_lines, sample_people, sample_returns)
    assert main(args) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["rows"][0]["return_rate_pct"] == 50.0


def test_query_table(tmp_path, capsys, sample_lines, sample_people, sample_returns):
    args = ["query", "product_pairs", "--top", "1"] + _inputs(tmp_path, sample_lines, sample_people, sample_returns)
    assert main(args) == 0
    out = capsys.readouterr().out
    assert "Alpha Chair" in out
    assert "Gamma Phone" not in out


def test_all_writes_reports(tmp_path, sample_lines, sample_people, sample_returns):
    out_dir = tmp_path / "out"
    args = ["all", "--output", str(out_dir)] + _inputs(tmp_path, sample_lines, sample_people, sample_returns)
    assert main(args) == 0
    assert (out_dir / "Superstore_Analysis.xlsx").exists()
    data = json.loads((out_dir / "superstore_analysis.json").read_text())
    assert len(data["queries"]) == 24


def test_unknown_query_fails(capsys):
    assert main(["query", "nope"]) == 1
    assert "Unknown query" in capsys.readouterr().err


def test_partial_inputs_fail(tmp_path, capsys, sample_lines):
    orders = write_orders(tmp_path / "orders.csv", sample_lines)
    assert main(["query", "return_rate", "--orders", str(orders)]) == 1
    assert "must be given together" in capsys.readouterr().err


def test_load_error_fails(tmp_path, capsys):
    assert main(["query", "return_rate", "--inbox", str(tmp_path)]) == 1
    assert "No orders CSV" in capsys.readouterr().err


def test_non_utf8_input_fails_cleanly(tmp_path, capsys, sample_lines, sample_returns):
    args = ["query", "return_rate"] + _inputs(tmp_path, sample_lines, [("Anna", "West")], sample_returns)
    (tmp_path / "people.csv").write_bytes('"Person","Region"\r\n"José","West"\r\n'.encode("latin-1"))
    assert main(args) == 1
    assert "not valid UTF-8" in capsys.readouterr().err


def test_incomplete_period_fails(tmp_path, capsys, sample_lines, sample_people, sample_returns):
    args = ["query", "return_rate", "--period", "month", "--year", "2014"]
    assert main(args + _inputs(tmp_path, sample_lines, sample_people, sample_returns)) == 1
    assert "requires month" in capsys.readouterr().err
