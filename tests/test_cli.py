import json

from typer.testing import CliRunner

from capture_analyzer.cli import app

runner = CliRunner()

HEADER = '"No.","Time","Source","Destination","Protocol","Length","Info"\n'


def _capture(path, rows):
    path.write_text(HEADER + "".join(rows), encoding="utf-8")
    return path


def _sample(tmp_path, name="a.csv", end=4.0, length=100):
    return _capture(
        tmp_path / name,
        [
            f'"1","0.0","10.0.0.1","10.0.0.2","TCP","{length}","1025 > 80 [SYN] Seq=0"\n',
            f'"2","1.0","10.0.0.1","8.8.8.8","DNS","{length}","Standard query 0x1 A example.com"\n',
            f'"3","{end}","10.0.0.2","10.0.0.1","UDP","{length}","5353 > 5353 Len=20"\n',
        ],
    )


def test_analyze_writes_reports(tmp_path):
    capture = _sample(tmp_path)
    out_dir = tmp_path / "out"
    result = runner.invoke(app, ["analyze", str(capture), "--out", str(out_dir)])
    assert result.exit_code == 0, result.output
    assert "[a.csv] packets=3" in result.stdout
    assert (out_dir / "00_a.json").exists()
    assert (out_dir / "summary.md").exists()
    assert not (out_dir / "comparison.json").exists()
    payload = json.loads((out_dir / "00_a.json").read_text(encoding="utf-8"))
    assert payload["overview"]["total_packets"] == 3
    assert payload["parse_errors"] == []


def test_analyze_missing_file_fails(tmp_path):
    result = runner.invoke(app, ["analyze", str(tmp_path / "nope.csv"), "--out", str(tmp_path / "out")])
    assert result.exit_code == 1


def test_compare_prints_json(tmp_path):
    first = _sample(tmp_path, "a.csv", length=100)
    second = _sample(tmp_path, "b.csv", length=300)
    result = runner.invoke(app, ["compare", str(first), str(second)])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["total_logs"] == 2
    assert payload["summary"]["total_packets"] == 6
    assert [entry["type"] for entry in payload["inconsistencies"]] == ["packet_size"]


def test_compare_needs_two_files(tmp_path):
    result = runner.invoke(app, ["compare", str(_sample(tmp_path))])
    assert result.exit_code != 0


def test_packets_filters(tmp_path):
    capture = _sample(tmp_path)
    result = runner.invoke(app, ["packets", str(capture), "--protocol", "DNS"])
    assert result.exit_code == 0, result.output
    assert "example.com" in result.stdout
    assert "1 packets matched" in result.stdout

    result = runner.invoke(app, ["packets", str(capture), "--address", "10.0.0.2", "--limit", "1"])
    assert "2 packets matched" in result.stdout


def test_analyze_keeps_reports_for_completed_captures(tmp_path):
    capture = _sample(tmp_path)
    out_dir = tmp_path / "out"
    result = runner.invoke(app, ["analyze", str(capture), str(tmp_path / "nope.csv"), "--out", str(out_dir)])
    assert result.exit_code == 1
    assert (out_dir / "00_a.json").exists()
    assert (out_dir / "summary.md").exists()
    assert not (out_dir / "comparison.json").exists()
