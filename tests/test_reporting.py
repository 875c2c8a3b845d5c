import json

from capture_analyzer.pipeline import AnalysisPipeline, AnalysisSession
from capture_analyzer.reporting import format_summary, report_file_name, write_session_report

HEADER = '"No.","Time","Source","Destination","Protocol","Length","Info"\n'


def _text(length):
    return HEADER + (
        f'"1","0.0","10.0.0.1","10.0.0.2","TCP","{length}","1025 > 443 [SYN] Seq=0"\n'
        f'"2","2.0","10.0.0.2","10.0.0.1","TCP","{length}","443 > 1025 [SYN, ACK] Seq=0 Ack=1"\n'
    )


def test_format_summary_line():
    capture = AnalysisPipeline().analyze_text(_text(100), file_name="x.csv")
    line = format_summary(capture)
    assert line.startswith("[x.csv] packets=2 bytes=200 avg_size=100")
    assert "connections=2" in line


def test_write_session_report(tmp_path):
    pipeline = AnalysisPipeline()
    session = AnalysisSession(
        captures=[
            pipeline.analyze_text(_text(100), file_name="first.csv"),
            pipeline.analyze_text(_text(400), file_name="second.csv"),
        ]
    )

    written = write_session_report(tmp_path, session)
    assert [path.name for path in written] == ["00_first.json", "01_second.json", "summary.md"]
    summary = (tmp_path / "summary.md").read_text(encoding="utf-8")
    assert "## first.csv" in summary
    assert "HTTPS (Well-Known)" in summary
    assert "## Comparison" not in summary
    payload = json.loads((tmp_path / "00_first.json").read_text(encoding="utf-8"))
    assert payload["file_name"] == "first.csv"
    assert payload["parse_errors"] == []


def test_comparison_section_written(tmp_path):
    first = tmp_path / "first.csv"
    second = tmp_path / "second.csv"
    first.write_text(_text(100), encoding="utf-8")
    second.write_text(_text(400), encoding="utf-8")
    session = AnalysisPipeline().analyze_files([first, second])

    written = write_session_report(tmp_path / "out", session)
    assert [path.name for path in written] == ["00_first.json", "01_second.json", "comparison.json", "summary.md"]
    summary = (tmp_path / "out" / "summary.md").read_text(encoding="utf-8")
    assert "### Inconsistencies" in summary
    assert "Significant difference in average packet sizes" in summary


def test_same_named_inputs_get_distinct_reports(tmp_path):
    paths = []
    for folder, length in (("x", 100), ("y", 400)):
        (tmp_path / folder).mkdir()
        path = tmp_path / folder / "cap.csv"
        path.write_text(_text(length), encoding="utf-8")
        paths.append(path)
    session = AnalysisPipeline().analyze_files(paths)

    out_dir = tmp_path / "out"
    written = write_session_report(out_dir, session)
    assert [path.name for path in written] == ["00_cap.json", "01_cap.json", "comparison.json", "summary.md"]
    assert sorted(path.name for path in out_dir.iterdir()) == sorted(path.name for path in written)
    sizes = [
        json.loads((out_dir / name).read_text(encoding="utf-8"))["overview"]["avg_packet_size"]
        for name in ("00_cap.json", "01_cap.json")
    ]
    assert sizes == [100, 400]


def test_report_names_never_collide_with_session_files():
    assert report_file_name(0, "summary.csv") == "00_summary.json"
    assert report_file_name(3, "comparison.csv") == "03_comparison.json"
