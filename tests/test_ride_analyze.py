import shutil

import pytest

import ridelog.analyze.ride_analyze as ra
from ridelog.errors import FzfNotFoundError


def test_report_for_files(sample_gpx_path, sample_tcx_path, capsys):
    rc = ra.main([str(sample_gpx_path), str(sample_tcx_path)])
    out = capsys.readouterr().out

    assert rc == 0
    assert "Morning Ride" in out
    assert "Biking" in out
    assert "elev gain (m)  : 115.0" in out


def test_tsv(sample_gpx_path, capsys):
    rc = ra.main(["--tsv", str(sample_gpx_path)])
    lines = capsys.readouterr().out.strip().splitlines()

    assert rc == 0
    assert lines[0] == ra.TSV_HEADER
    fields = lines[1].split("\t")
    assert fields[1] == "Morning Ride"
    assert fields[2] == "5"
    assert fields[4] == "20.0"


def test_rejected_file_sets_exit_status(tmp_path, sample_gpx_path, capsys):
    bad = tmp_path / "broken.gpx"
    bad.write_text('<gpx xmlns="http://www.topografix.com/GPX/1/1"/>', encoding="utf-8")
    other = tmp_path / "notes.fit"
    other.write_bytes(b"\x00")

    rc = ra.main([str(bad), str(other), str(sample_gpx_path), str(tmp_path / "missing.gpx")])
    captured = capsys.readouterr()

    assert rc == 1
    assert "Morning Ride" in captured.out
    assert "Rejected" in captured.err
    assert "Skipping (not a file)" in captured.err


def test_fzf_selection_from_work_root(tmp_path, sample_gpx_path, monkeypatch, capsys):
    work = tmp_path / "work"
    (work / "2024").mkdir(parents=True)
    shutil.copy(sample_gpx_path, work / "2024" / "ride.GPX")
    (work / "2024" / "readme.txt").write_text("x", encoding="utf-8")

    offered = []

    def fake_select(paths, *, header, multi):
        offered.extend(paths)
        return paths

    monkeypatch.setattr(ra, "fzf_select_paths", fake_select)
    rc = ra.main(["--work-root", str(work)])

    assert rc == 0
    assert offered == [work / "2024" / "ride.GPX"]
    assert "Morning Ride" in capsys.readouterr().out


def test_empty_work_root(tmp_path):
    with pytest.raises(SystemExit, match="No .gpx/.tcx files found"):
        ra.main(["--work-root", str(tmp_path)])


def test_missing_fzf(tmp_path, sample_gpx_path, monkeypatch):
    shutil.copy(sample_gpx_path, tmp_path / "ride.gpx")

    def no_fzf(*args, **kwargs):
        raise FzfNotFoundError("fzf not found on PATH")

    monkeypatch.setattr(ra, "fzf_select_paths", no_fzf)
    with pytest.raises(SystemExit, match="fzf not found"):
        ra.main(["--work-root", str(tmp_path)])
